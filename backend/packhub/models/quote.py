from sqlalchemy import Column, Integer, Text, DateTime, DECIMAL, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow

class Quote(Base):
    __tablename__ = "quotes"

    id                 = Column(Integer, primary_key=True, autoincrement=True)
    inquiry_id         = Column(Integer, ForeignKey("inquiries.id"), nullable=False, index=True)
    supplier_id        = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    price_per_unit     = Column(DECIMAL(10, 2), nullable=False)
    total_price        = Column(DECIMAL(10, 2), nullable=False)
    delivery_time_days = Column(Integer, nullable=False)
    notes              = Column(Text)
    created_at         = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("price_per_unit > 0", name="ck_quotes_price_positive"),
        CheckConstraint("total_price > 0", name="ck_quotes_total_positive"),
        CheckConstraint("delivery_time_days > 0", name="ck_quotes_delivery_positive"),
    )

    inquiry  = relationship("Inquiry", back_populates="quotes")
    supplier = relationship("User")
