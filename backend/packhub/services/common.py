# backend/packhub/services/common.py
from contextlib import contextmanager
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..models import User

logger = logging.getLogger(__name__)


@contextmanager
def write_scope(db: Session, action: str):
    """
    One unit of work: commit on success, roll back on any failure.
    HTTPException passes through; store errors become 400, the rest 500.
    """
    try:
        yield
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        msg = str(getattr(e, "orig", e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"db_error: {msg}")
    except Exception as e:
        db.rollback()
        logger.exception("%s failed", action)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{action}_error: {type(e).__name__}: {e}",
        )


def get_or_404(db: Session, model, pk, detail: str):
    obj = db.get(model, pk)
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj


def require_user_with_role(db: Session, user_id: int, role: str, label: str) -> User:
    """Load a user and check its role. label is used in messages ('Buyer', 'Supplier')."""
    user = get_or_404(db, User, user_id, f"{label} with id {user_id} not found")
    if user.role != role:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"User with id {user_id} is not a {role}",
        )
    return user
