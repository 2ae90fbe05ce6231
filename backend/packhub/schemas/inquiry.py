# packhub/schemas/inquiry.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .common import (
    PackagingLiteral, MaterialLiteral, StatusLiteral,
    to_money, money_out, to_naive_utc,
)


class InquiryCreate(BaseModel):
    buyer_id: int = Field(..., ge=1)
    packaging_type: PackagingLiteral
    material: MaterialLiteral
    quantity: int = Field(..., gt=0)
    personalization_needed: bool
    description: str
    budget_min: Optional[Decimal] = None
    budget_max: Optional[Decimal] = None
    delivery_deadline: Optional[datetime] = None
    # bulk inquiry: one fan-out row per supplier
    supplier_ids: List[int] = Field(default_factory=list)

    @field_validator("budget_min", "budget_max")
    @classmethod
    def _budget(cls, v, info):
        return to_money(v, info.field_name)

    @field_validator("delivery_deadline")
    @classmethod
    def _deadline(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class InquiryStatusUpdate(BaseModel):
    status: StatusLiteral


class InquiryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    buyer_id: int
    packaging_type: PackagingLiteral
    material: MaterialLiteral
    quantity: int
    personalization_needed: bool
    description: str
    budget_min: Optional[Decimal] = None
    budget_max: Optional[Decimal] = None
    delivery_deadline: Optional[datetime] = None
    status: StatusLiteral
    created_at: datetime
    updated_at: datetime

    @field_serializer("budget_min", "budget_max")
    def _ser_budget(self, v: Optional[Decimal]):
        return money_out(v)


class InquiryDetailRead(InquiryRead):
    supplier_ids: List[int]
