from sqlalchemy import (
    Column, Integer, Boolean, DateTime, DECIMAL, JSON, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow

class SupplierProfile(Base):
    __tablename__ = "supplier_profiles"

    id                        = Column(Integer, primary_key=True, autoincrement=True)
    user_id                   = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    # ordered lists of enum values
    packaging_types           = Column(JSON, nullable=False, default=list)
    materials                 = Column(JSON, nullable=False, default=list)
    certifications            = Column(JSON, nullable=False, default=list)
    min_order_quantity        = Column(Integer, nullable=False)
    personalization_available = Column(Boolean, nullable=False, default=False)
    price_range_min           = Column(DECIMAL(10, 2))
    price_range_max           = Column(DECIMAL(10, 2))
    delivery_time_days        = Column(Integer, nullable=False)
    created_at                = Column(DateTime, nullable=False, default=utcnow)
    updated_at                = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("min_order_quantity > 0", name="ck_supplier_profiles_moq_positive"),
        CheckConstraint("delivery_time_days > 0", name="ck_supplier_profiles_delivery_positive"),
    )

    user = relationship("User", back_populates="supplier_profile")
