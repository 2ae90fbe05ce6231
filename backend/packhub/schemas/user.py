# packhub/schemas/user.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .common import RoleLiteral, check_url
from .supplier import SupplierProfileRead

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    company_name: str = Field(min_length=1, max_length=200)
    contact_person: str = Field(min_length=1, max_length=200)
    phone: Optional[str] = None
    role: RoleLiteral
    location: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = None

    @field_validator("website")
    @classmethod
    def _website(cls, v: Optional[str]) -> Optional[str]:
        return check_url(v)


class UserUpdate(BaseModel):
    """
    Patch body. A key left out of the JSON is not touched; phone,
    description and website may be sent as null to clear them.
    """
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    contact_person: Optional[str] = Field(default=None, min_length=1, max_length=200)
    phone: Optional[str] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = None

    @field_validator("company_name", "contact_person", "location")
    @classmethod
    def _not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("website")
    @classmethod
    def _website(cls, v: Optional[str]) -> Optional[str]:
        return check_url(v)


class UserRead(BaseModel):
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


class RatingStats(BaseModel):
    average_rating: float
    total_ratings: int


class UserProfileRead(UserRead):
    # both keys are left out of the response when there is nothing to show
    supplier_profile: Optional[SupplierProfileRead] = None
    rating_stats: Optional[RatingStats] = None
