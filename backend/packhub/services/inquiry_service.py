# backend/packhub/services/inquiry_service.py
from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..domain.status import can_transition
from ..models import User, Inquiry, InquirySupplier
from .common import write_scope, get_or_404, require_user_with_role

logger = logging.getLogger(__name__)


def _check_suppliers(db: Session, supplier_ids: List[int]) -> None:
    if not supplier_ids:
        return
    users = db.query(User).filter(User.id.in_(supplier_ids)).all()
    if len(users) != len(supplier_ids):
        found = {u.id for u in users}
        missing = [sid for sid in supplier_ids if sid not in found]
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"One or more suppliers not found: {missing}",
        )
    not_suppliers = sorted(u.id for u in users if u.role != "supplier")
    if not_suppliers:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"One or more users are not suppliers: {not_suppliers}",
        )


def create_inquiry(
    db: Session, *,
    buyer_id: int,
    packaging_type: str,
    material: str,
    quantity: int,
    personalization_needed: bool,
    description: str,
    budget_min: Optional[Decimal],
    budget_max: Optional[Decimal],
    delivery_deadline: Optional[datetime],
    supplier_ids: List[int],
) -> Inquiry:
    """
    Insert the inquiry and fan it out to every listed supplier.
    All checks run before the first write; inquiry and fan-out rows commit together.
    """
    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="budget_min cannot be greater than budget_max",
        )
    # same supplier listed twice -> one fan-out row
    supplier_ids = list(dict.fromkeys(supplier_ids or []))

    with write_scope(db, "create_inquiry"):
        require_user_with_role(db, buyer_id, "buyer", "Buyer")
        _check_suppliers(db, supplier_ids)

        now = utcnow()
        inquiry = Inquiry(
            buyer_id=buyer_id,
            packaging_type=packaging_type,
            material=material,
            quantity=quantity,
            personalization_needed=personalization_needed,
            description=description,
            budget_min=budget_min,
            budget_max=budget_max,
            delivery_deadline=delivery_deadline,
            status="pending",
            created_at=now,
            updated_at=now,
        )
        db.add(inquiry)
        db.flush()

        for sid in supplier_ids:
            db.add(InquirySupplier(inquiry_id=inquiry.id, supplier_id=sid, sent_at=now))
    db.refresh(inquiry)
    logger.info("inquiry created (id=%s, buyer_id=%s, suppliers=%s)", inquiry.id, buyer_id, supplier_ids)
    return inquiry


def get_inquiry(db: Session, inquiry_id: int) -> Inquiry:
    return get_or_404(db, Inquiry, inquiry_id, f"Inquiry with id {inquiry_id} not found")


def get_inquiries_for_buyer(db: Session, buyer_id: int) -> List[Inquiry]:
    return (
        db.query(Inquiry)
          .filter(Inquiry.buyer_id == buyer_id)
          .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
          .all()
    )


def get_inquiries_for_supplier(db: Session, supplier_id: int) -> List[Inquiry]:
    return (
        db.query(Inquiry)
          .join(InquirySupplier, InquirySupplier.inquiry_id == Inquiry.id)
          .filter(InquirySupplier.supplier_id == supplier_id)
          .order_by(InquirySupplier.sent_at.desc(), Inquiry.id.desc())
          .all()
    )


def update_inquiry_status(db: Session, *, inquiry_id: int, new_status: str) -> Inquiry:
    with write_scope(db, "update_inquiry_status"):
        inquiry = get_or_404(db, Inquiry, inquiry_id, f"Inquiry with id {inquiry_id} not found")

        current = inquiry.status
        if not can_transition(current, new_status):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Invalid status transition: cannot change from '{current}' to '{new_status}'",
            )

        inquiry.status = new_status
        inquiry.updated_at = utcnow()
    db.refresh(inquiry)
    if current != new_status:
        logger.info("inquiry %s status %s -> %s", inquiry_id, current, new_status)
    return inquiry
