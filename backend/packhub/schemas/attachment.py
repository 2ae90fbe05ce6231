# packhub/schemas/attachment.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

# Rules (size, MIME, owner) are enforced by the service so the
# caller gets the same message from every entry point.
class FileAttachmentCreate(BaseModel):
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    inquiry_id: Optional[int] = None
    message_id: Optional[int] = None

class FileAttachmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    inquiry_id: Optional[int] = None
    message_id: Optional[int] = None
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    uploaded_at: datetime
