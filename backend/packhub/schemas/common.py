# packhub/schemas/common.py
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import List, Literal, Optional

from pydantic import TypeAdapter, HttpUrl, ValidationError

from ..domain.constants import (
    USER_ROLES, PACKAGING_TYPES, MATERIAL_TYPES, CERTIFICATION_TYPES, INQUIRY_STATUSES,
)

MONEY_PLACES = Decimal("0.01")  # 2 places
MONEY_MAX = Decimal("99999999.99")  # NUMERIC(10,2)

RoleLiteral = Literal[USER_ROLES]
PackagingLiteral = Literal[PACKAGING_TYPES]
MaterialLiteral = Literal[MATERIAL_TYPES]
CertificationLiteral = Literal[CERTIFICATION_TYPES]
StatusLiteral = Literal[INQUIRY_STATUSES]

_url_adapter = TypeAdapter(HttpUrl)


def to_money(v, field: str = "amount") -> Optional[Decimal]:
    """Quantize to 2 places (ROUND_HALF_UP) and require > 0. None passes through."""
    if v is None:
        return None
    try:
        d = (v if isinstance(v, Decimal) else Decimal(str(v))).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"{field} must be a valid decimal")
    if d <= 0:
        raise ValueError(f"{field} must be > 0")
    if d > MONEY_MAX:
        raise ValueError(f"{field} must be <= {MONEY_MAX}")
    return d


def money_out(v: Optional[Decimal]) -> Optional[float]:
    # clients get plain numbers
    return float(v) if v is not None else None


def check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    try:
        _url_adapter.validate_python(v)
    except ValidationError:
        raise ValueError("must be a valid URL")
    return v


def unique_in_order(values: List[str]) -> List[str]:
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v
