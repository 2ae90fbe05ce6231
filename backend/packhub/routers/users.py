# packhub/routers/users.py
from typing import Optional
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.user import UserCreate, UserUpdate, UserRead, UserProfileRead
from ..services.user_service import create_user, update_user_profile, get_user_profile

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user_ep(payload: UserCreate, db: Session = Depends(get_db)):
    return create_user(
        db,
        email=payload.email,
        password=payload.password,
        company_name=payload.company_name,
        contact_person=payload.contact_person,
        phone=payload.phone,
        role=payload.role,
        location=payload.location,
        description=payload.description,
        website=payload.website,
    )

@router.get(
    "/{user_id}/profile",
    response_model=Optional[UserProfileRead],
    response_model_exclude_unset=True,
)
def get_user_profile_ep(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    """
    User with its supplier profile and rating stats.
    Unknown user -> null. supplier_profile / rating_stats keys appear only when there is data.
    """
    return get_user_profile(db, user_id)

@router.patch("/{user_id}", response_model=UserRead)
def update_user_profile_ep(payload: UserUpdate, user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    # only keys present in the request body are applied
    return update_user_profile(db, user_id=user_id, changes=payload.model_dump(exclude_unset=True))
