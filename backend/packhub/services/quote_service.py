# backend/packhub/services/quote_service.py
from __future__ import annotations
from decimal import Decimal
from typing import List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from ..core.db import utcnow
from ..models import Inquiry, InquirySupplier, Quote
from .common import write_scope, get_or_404, require_user_with_role

logger = logging.getLogger(__name__)


def create_quote(
    db: Session, *,
    inquiry_id: int,
    supplier_id: int,
    price_per_unit: Decimal,
    total_price: Decimal,
    delivery_time_days: int,
    notes: Optional[str],
) -> Quote:
    """
    Only a supplier the inquiry was sent to may quote.
    The first quote moves the inquiry pending -> responded in the same transaction.
    """
    with write_scope(db, "create_quote"):
        require_user_with_role(db, supplier_id, "supplier", "Supplier")
        get_or_404(db, Inquiry, inquiry_id, f"Inquiry with id {inquiry_id} not found")

        invited = (
            db.query(InquirySupplier.id)
              .filter(InquirySupplier.inquiry_id == inquiry_id,
                      InquirySupplier.supplier_id == supplier_id)
              .first()
        )
        if not invited:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Supplier {supplier_id} was not sent this inquiry",
            )

        now = utcnow()
        quote = Quote(
            inquiry_id=inquiry_id,
            supplier_id=supplier_id,
            price_per_unit=price_per_unit,
            total_price=total_price,
            delivery_time_days=delivery_time_days,
            notes=notes,
            created_at=now,
        )
        db.add(quote)

        # conditional: responded/closed inquiries are left alone
        flipped = (
            db.query(Inquiry)
              .filter(Inquiry.id == inquiry_id, Inquiry.status == "pending")
              .update({Inquiry.status: "responded", Inquiry.updated_at: now}, synchronize_session=False)
        )
    db.refresh(quote)
    logger.info("quote created (id=%s, inquiry_id=%s, supplier_id=%s)", quote.id, inquiry_id, supplier_id)
    if flipped:
        logger.info("inquiry %s status pending -> responded", inquiry_id)
    return quote


def get_quotes_for_inquiry(db: Session, inquiry_id: int) -> List[Quote]:
    return (
        db.query(Quote)
          .options(joinedload(Quote.supplier))
          .filter(Quote.inquiry_id == inquiry_id)
          .order_by(Quote.created_at.asc(), Quote.id.asc())
          .all()
    )
