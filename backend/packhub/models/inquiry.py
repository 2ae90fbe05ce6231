from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, DECIMAL, ForeignKey,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.constants import (
    PACKAGING_TYPES, MATERIAL_TYPES, INQUIRY_STATUSES, sql_in_list,
)

class Inquiry(Base):
    __tablename__ = "inquiries"

    id                     = Column(Integer, primary_key=True, autoincrement=True)
    buyer_id               = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    packaging_type         = Column(String(30), nullable=False)
    material               = Column(String(30), nullable=False)
    quantity               = Column(Integer, nullable=False)
    personalization_needed = Column(Boolean, nullable=False, default=False)
    description            = Column(Text, nullable=False)
    budget_min             = Column(DECIMAL(10, 2))
    budget_max             = Column(DECIMAL(10, 2))
    delivery_deadline      = Column(DateTime)
    status                 = Column(String(20), nullable=False, default="pending")
    created_at             = Column(DateTime, nullable=False, default=utcnow)
    updated_at             = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_inquiries_quantity_positive"),
        CheckConstraint(f"status in ({sql_in_list(INQUIRY_STATUSES)})", name="ck_inquiries_status"),
        CheckConstraint(f"packaging_type in ({sql_in_list(PACKAGING_TYPES)})", name="ck_inquiries_packaging_type"),
        CheckConstraint(f"material in ({sql_in_list(MATERIAL_TYPES)})", name="ck_inquiries_material"),
    )

    buyer      = relationship("User", back_populates="inquiries")
    recipients = relationship(
        "InquirySupplier",
        back_populates="inquiry",
        cascade="all, delete-orphan",
        order_by="InquirySupplier.id",
    )
    quotes     = relationship("Quote", back_populates="inquiry", order_by="Quote.id")

    @property
    def supplier_ids(self):
        return [r.supplier_id for r in self.recipients]


class InquirySupplier(Base):
    """Fan-out row: the inquiry was sent to this supplier."""
    __tablename__ = "inquiry_suppliers"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    inquiry_id  = Column(Integer, ForeignKey("inquiries.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    sent_at     = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("inquiry_id", "supplier_id", name="uq_inquiry_suppliers_pair"),
    )

    inquiry  = relationship("Inquiry", back_populates="recipients")
    supplier = relationship("User")
