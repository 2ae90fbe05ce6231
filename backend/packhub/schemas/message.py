# packhub/schemas/message.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class MessageCreate(BaseModel):
    sender_id: int = Field(..., ge=1)
    recipient_id: int = Field(..., ge=1)
    inquiry_id: Optional[int] = None
    subject: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)

class MarkReadIn(BaseModel):
    user_id: int = Field(..., ge=1)

class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    sender_id: int
    recipient_id: int
    inquiry_id: Optional[int] = None
    subject: str
    content: str
    sent_at: datetime
    read_at: Optional[datetime] = None

class UnreadCount(BaseModel):
    user_id: int
    unread: int
