# packhub/routers/ratings.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.rating import RatingCreate, RatingRead
from ..services.rating_service import create_rating, get_ratings_for_user

router = APIRouter(prefix="/ratings", tags=["ratings"])

@router.post("", response_model=RatingRead, status_code=status.HTTP_201_CREATED)
def create_rating_ep(payload: RatingCreate, db: Session = Depends(get_db)):
    return create_rating(db, **payload.model_dump())

@router.get("/user/{user_id}", response_model=List[RatingRead])
def ratings_for_user(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_ratings_for_user(db, user_id)
