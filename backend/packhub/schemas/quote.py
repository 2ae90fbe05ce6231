# packhub/schemas/quote.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .common import to_money, money_out


class QuoteCreate(BaseModel):
    inquiry_id: int = Field(..., ge=1)
    supplier_id: int = Field(..., ge=1)
    price_per_unit: Decimal
    total_price: Decimal
    delivery_time_days: int = Field(..., gt=0)
    notes: Optional[str] = None

    @field_validator("price_per_unit", "total_price")
    @classmethod
    def _price(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return to_money(v, info.field_name)


class QuoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    inquiry_id: int
    supplier_id: int
    price_per_unit: Decimal
    total_price: Decimal
    delivery_time_days: int
    notes: Optional[str] = None
    created_at: datetime

    @field_serializer("price_per_unit", "total_price")
    def _ser_price(self, v: Decimal):
        return money_out(v)


class QuoteSupplier(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    contact_person: str
    phone: Optional[str] = None
    location: str
    website: Optional[str] = None


class QuoteWithSupplierRead(QuoteRead):
    supplier: QuoteSupplier
