# backend/packhub/services/rating_service.py
from __future__ import annotations
from typing import Dict, List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..models import User, Inquiry, Rating
from .common import write_scope, get_or_404

logger = logging.getLogger(__name__)


def _duplicate_rating() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Rating already exists for this inquiry between these users",
    )


def create_rating(
    db: Session, *,
    rater_id: int,
    rated_id: int,
    inquiry_id: Optional[int],
    rating: int,
    comment: Optional[str],
) -> Rating:
    """
    Buyer <-> supplier only. With an inquiry, one rating per (rater, rated, inquiry);
    without one, no limit.
    """
    if rater_id == rated_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Users cannot rate themselves",
        )

    with write_scope(db, "create_rating"):
        users = {u.id: u for u in db.query(User).filter(User.id.in_([rater_id, rated_id])).all()}
        if len(users) != 2:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="One or both users do not exist")

        if users[rater_id].role == users[rated_id].role:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Rater and rated users must have different roles (buyer <-> supplier)",
            )

        if inquiry_id is not None:
            get_or_404(db, Inquiry, inquiry_id, "Inquiry does not exist")
            duplicate = (
                db.query(Rating.id)
                  .filter(Rating.rater_id == rater_id,
                          Rating.rated_id == rated_id,
                          Rating.inquiry_id == inquiry_id)
                  .first()
            )
            if duplicate:
                raise _duplicate_rating()

        row = Rating(
            rater_id=rater_id,
            rated_id=rated_id,
            inquiry_id=inquiry_id,
            rating=rating,
            comment=comment,
            created_at=utcnow(),
        )
        db.add(row)
        try:
            db.flush()
        except IntegrityError:
            # a concurrent request stored the same triple first
            raise _duplicate_rating()
    db.refresh(row)
    logger.info("rating created (id=%s, %s -> %s, %s)", row.id, rater_id, rated_id, rating)
    return row


def get_ratings_for_user(db: Session, user_id: int) -> List[Rating]:
    """Ratings the user received, newest first."""
    return (
        db.query(Rating)
          .filter(Rating.rated_id == user_id)
          .order_by(Rating.created_at.desc(), Rating.id.desc())
          .all()
    )


def rating_stats(db: Session, user_id: int) -> Optional[Dict[str, float]]:
    avg_, count_ = (
        db.query(func.avg(Rating.rating), func.count(Rating.id))
          .filter(Rating.rated_id == user_id)
          .one()
    )
    if not count_:
        return None
    return {"average_rating": float(avg_ or 0), "total_ratings": int(count_)}
