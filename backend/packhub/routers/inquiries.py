# packhub/routers/inquiries.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.inquiry import InquiryCreate, InquiryStatusUpdate, InquiryRead, InquiryDetailRead
from ..services.inquiry_service import (
    create_inquiry, get_inquiry, get_inquiries_for_buyer,
    get_inquiries_for_supplier, update_inquiry_status,
)

router = APIRouter(prefix="/inquiries", tags=["inquiries"])

@router.post("", response_model=InquiryRead, status_code=status.HTTP_201_CREATED)
def create_inquiry_ep(payload: InquiryCreate, db: Session = Depends(get_db)):
    return create_inquiry(db, **payload.model_dump())

@router.get("/buyer/{buyer_id}", response_model=List[InquiryRead])
def list_for_buyer(buyer_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_inquiries_for_buyer(db, buyer_id)

@router.get("/supplier/{supplier_id}", response_model=List[InquiryRead])
def list_for_supplier(supplier_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_inquiries_for_supplier(db, supplier_id)

@router.get("/{inquiry_id}", response_model=InquiryDetailRead)
def get_inquiry_ep(inquiry_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_inquiry(db, inquiry_id)

@router.post("/{inquiry_id}/status", response_model=InquiryRead)
def update_status_ep(
    payload: InquiryStatusUpdate,
    inquiry_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    return update_inquiry_status(db, inquiry_id=inquiry_id, new_status=payload.status)
