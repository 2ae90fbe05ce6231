# backend/packhub/services/supplier_service.py
from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from ..core.db import utcnow
from ..models import User, SupplierProfile
from .common import write_scope, get_or_404, require_user_with_role

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "packaging_types", "materials", "min_order_quantity", "personalization_available",
    "price_range_min", "price_range_max", "delivery_time_days", "certifications",
)


def _check_price_range(pmin: Optional[Decimal], pmax: Optional[Decimal]) -> None:
    if pmin is not None and pmax is not None and pmin > pmax:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="price_range_min cannot be greater than price_range_max",
        )


def _profile_conflict(user_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Supplier profile already exists for user ID {user_id}",
    )


def create_supplier_profile(
    db: Session, *,
    user_id: int,
    packaging_types: List[str],
    materials: List[str],
    min_order_quantity: int,
    personalization_available: bool,
    price_range_min: Optional[Decimal],
    price_range_max: Optional[Decimal],
    delivery_time_days: int,
    certifications: List[str],
) -> SupplierProfile:
    _check_price_range(price_range_min, price_range_max)
    with write_scope(db, "create_supplier_profile"):
        require_user_with_role(db, user_id, "supplier", "User")

        if db.query(SupplierProfile).filter(SupplierProfile.user_id == user_id).first():
            raise _profile_conflict(user_id)

        now = utcnow()
        profile = SupplierProfile(
            user_id=user_id,
            packaging_types=list(packaging_types),
            materials=list(materials),
            min_order_quantity=min_order_quantity,
            personalization_available=personalization_available,
            price_range_min=price_range_min,
            price_range_max=price_range_max,
            delivery_time_days=delivery_time_days,
            certifications=list(certifications),
            created_at=now,
            updated_at=now,
        )
        db.add(profile)
        try:
            db.flush()
        except IntegrityError:
            # a concurrent request stored a profile for this user first
            raise _profile_conflict(user_id)
    db.refresh(profile)
    logger.info("supplier profile created (id=%s, user_id=%s)", profile.id, user_id)
    return profile


def update_supplier_profile(db: Session, *, profile_id: int, changes: Dict[str, Any]) -> SupplierProfile:
    with write_scope(db, "update_supplier_profile"):
        profile = get_or_404(
            db, SupplierProfile, profile_id, f"Supplier profile with id {profile_id} not found"
        )
        for field in UPDATABLE_FIELDS:
            if field in changes:
                value = changes[field]
                # JSON columns need a fresh list to register as changed
                setattr(profile, field, list(value) if isinstance(value, list) else value)
        _check_price_range(profile.price_range_min, profile.price_range_max)
        profile.updated_at = utcnow()
    db.refresh(profile)
    return profile


def search_suppliers(
    db: Session, *,
    packaging_types: Optional[List[str]] = None,
    materials: Optional[List[str]] = None,
    location: Optional[str] = None,
    max_min_order_quantity: Optional[int] = None,
    personalization_required: Optional[bool] = None,
    certifications: Optional[List[str]] = None,
    price_range_max: Optional[Decimal] = None,
    delivery_time_max_days: Optional[int] = None,
) -> List[User]:
    """
    All given filters must match. List filters:
      - packaging_types / materials: the supplier offers at least one of them
      - certifications: the supplier holds every one of them
    """
    q = (
        db.query(User)
          .join(SupplierProfile, SupplierProfile.user_id == User.id)
          .options(contains_eager(User.supplier_profile))
          .filter(User.role == "supplier")
    )

    if location and location.strip():
        q = q.filter(User.location.icontains(location.strip(), autoescape=True))
    if max_min_order_quantity is not None:
        q = q.filter(SupplierProfile.min_order_quantity <= max_min_order_quantity)
    if personalization_required:
        q = q.filter(SupplierProfile.personalization_available.is_(True))
    if price_range_max is not None:
        q = q.filter(SupplierProfile.price_range_min.isnot(None))
        q = q.filter(SupplierProfile.price_range_min <= price_range_max)
    if delivery_time_max_days is not None:
        q = q.filter(SupplierProfile.delivery_time_days <= delivery_time_max_days)

    rows = q.order_by(User.id.asc()).all()

    # JSON list columns are matched here to stay portable across dialects
    wanted_types = set(packaging_types or [])
    wanted_materials = set(materials or [])
    wanted_certs = set(certifications or [])

    result = []
    for u in rows:
        p = u.supplier_profile
        if wanted_types and not wanted_types.intersection(p.packaging_types or []):
            continue
        if wanted_materials and not wanted_materials.intersection(p.materials or []):
            continue
        if wanted_certs and not wanted_certs.issubset(p.certifications or []):
            continue
        result.append(u)
    return result
