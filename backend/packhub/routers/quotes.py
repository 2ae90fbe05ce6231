# packhub/routers/quotes.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.quote import QuoteCreate, QuoteRead, QuoteWithSupplierRead
from ..services.quote_service import create_quote, get_quotes_for_inquiry

router = APIRouter(prefix="/quotes", tags=["quotes"])

@router.post("", response_model=QuoteRead, status_code=status.HTTP_201_CREATED)
def create_quote_ep(payload: QuoteCreate, db: Session = Depends(get_db)):
    return create_quote(db, **payload.model_dump())

@router.get("/inquiry/{inquiry_id}", response_model=List[QuoteWithSupplierRead])
def quotes_for_inquiry(inquiry_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_quotes_for_inquiry(db, inquiry_id)
