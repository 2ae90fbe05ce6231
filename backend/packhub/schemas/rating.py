# packhub/schemas/rating.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class RatingCreate(BaseModel):
    rater_id: int = Field(..., ge=1)
    rated_id: int = Field(..., ge=1)
    inquiry_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None

class RatingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    rater_id: int
    rated_id: int
    inquiry_id: Optional[int] = None
    rating: int
    comment: Optional[str] = None
    created_at: datetime
