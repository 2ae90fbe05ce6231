# backend/packhub/services/user_service.py
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..core.security import hash_password
from ..models import User
from ..schemas.supplier import SupplierProfileRead
from .common import write_scope, get_or_404
from .rating_service import rating_stats

logger = logging.getLogger(__name__)

# columns a user may patch; role and email are fixed after registration
UPDATABLE_FIELDS = ("company_name", "contact_person", "phone", "location", "description", "website")


def _email_conflict(email: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"User with email '{email}' already exists",
    )


def create_user(
    db: Session, *,
    email: str,
    password: str,
    company_name: str,
    contact_person: str,
    phone: Optional[str],
    role: str,
    location: str,
    description: Optional[str],
    website: Optional[str],
) -> User:
    email = email.strip().lower()
    with write_scope(db, "create_user"):
        if db.query(User).filter(User.email == email).first():
            raise _email_conflict(email)

        now = utcnow()
        user = User(
            email=email,
            password_hash=hash_password(password),
            company_name=company_name.strip(),
            contact_person=contact_person.strip(),
            phone=phone,
            role=role,
            location=location.strip(),
            description=description,
            website=website,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            # lost a race against another registration with the same email
            raise _email_conflict(email)
    db.refresh(user)
    logger.info("user created (id=%s, role=%s)", user.id, user.role)
    return user


def update_user_profile(db: Session, *, user_id: int, changes: Dict[str, Any]) -> User:
    """
    changes holds only the keys the caller sent; a None value clears the column.
    """
    with write_scope(db, "update_user_profile"):
        user = get_or_404(db, User, user_id, f"User with id {user_id} not found")
        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(user, field, changes[field])
        user.updated_at = utcnow()
    db.refresh(user)
    return user


def get_user_profile(db: Session, user_id: int) -> Optional[Dict[str, Any]]:
    user = db.get(User, user_id)
    if user is None:
        return None

    out: Dict[str, Any] = {
        c.name: getattr(user, c.name)
        for c in User.__table__.columns
        if c.name != "password_hash"
    }
    if user.role == "supplier" and user.supplier_profile is not None:
        out["supplier_profile"] = SupplierProfileRead.model_validate(user.supplier_profile)

    stats = rating_stats(db, user_id)
    if stats is not None:
        out["rating_stats"] = stats
    return out
