from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.constants import RATING_MIN, RATING_MAX

class Rating(Base):
    __tablename__ = "ratings"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    rater_id   = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rated_id   = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    inquiry_id = Column(Integer, ForeignKey("inquiries.id"))
    rating     = Column(Integer, nullable=False)
    comment    = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(f"rating BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_ratings_range"),
        # NULL inquiry_id rows never collide, so inquiry-less ratings are unlimited
        UniqueConstraint("rater_id", "rated_id", "inquiry_id", name="uq_ratings_triple"),
    )

    rater   = relationship("User", foreign_keys=[rater_id])
    rated   = relationship("User", foreign_keys=[rated_id])
    inquiry = relationship("Inquiry")
