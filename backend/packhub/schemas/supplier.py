# packhub/schemas/supplier.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .common import (
    PackagingLiteral, MaterialLiteral, CertificationLiteral, RoleLiteral,
    to_money, money_out, unique_in_order,
)


class SupplierProfileCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    packaging_types: List[PackagingLiteral]
    materials: List[MaterialLiteral]
    min_order_quantity: int = Field(..., gt=0)
    personalization_available: bool
    price_range_min: Optional[Decimal] = None
    price_range_max: Optional[Decimal] = None
    delivery_time_days: int = Field(..., gt=0)
    certifications: List[CertificationLiteral]

    @field_validator("packaging_types", "materials", "certifications")
    @classmethod
    def _dedupe(cls, v: List[str]) -> List[str]:
        return unique_in_order(v)

    @field_validator("price_range_min", "price_range_max")
    @classmethod
    def _price(cls, v, info):
        return to_money(v, info.field_name)


class SupplierProfileUpdate(BaseModel):
    """Patch body; price_range_min/max accept an explicit null."""
    packaging_types: Optional[List[PackagingLiteral]] = None
    materials: Optional[List[MaterialLiteral]] = None
    min_order_quantity: Optional[int] = Field(default=None, gt=0)
    personalization_available: Optional[bool] = None
    price_range_min: Optional[Decimal] = None
    price_range_max: Optional[Decimal] = None
    delivery_time_days: Optional[int] = Field(default=None, gt=0)
    certifications: Optional[List[CertificationLiteral]] = None

    @field_validator(
        "packaging_types", "materials", "certifications",
        "min_order_quantity", "personalization_available", "delivery_time_days",
    )
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return unique_in_order(v) if isinstance(v, list) else v

    @field_validator("price_range_min", "price_range_max")
    @classmethod
    def _price(cls, v, info):
        return to_money(v, info.field_name)


class SupplierProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    packaging_types: List[str]
    materials: List[str]
    min_order_quantity: int
    personalization_available: bool
    price_range_min: Optional[Decimal] = None
    price_range_max: Optional[Decimal] = None
    delivery_time_days: int
    certifications: List[str]
    created_at: datetime
    updated_at: datetime

    @field_serializer("price_range_min", "price_range_max")
    def _ser_price(self, v: Optional[Decimal]):
        return money_out(v)


class SupplierSearch(BaseModel):
    packaging_types: Optional[List[PackagingLiteral]] = None
    materials: Optional[List[MaterialLiteral]] = None
    location: Optional[str] = None
    max_min_order_quantity: Optional[int] = None
    personalization_required: Optional[bool] = None
    certifications: Optional[List[CertificationLiteral]] = None
    price_range_max: Optional[Decimal] = None
    delivery_time_max_days: Optional[int] = None


class SupplierSearchResult(BaseModel):
    """Supplier user with its capability profile."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    company_name: str
    contact_person: str
    phone: Optional[str]
    role: RoleLiteral
    location: str
    description: Optional[str]
    website: Optional[str]
    created_at: datetime
    updated_at: datetime
    supplier_profile: SupplierProfileRead
