# packhub/routers/attachments.py
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..domain.constants import MAX_FILE_SIZE
from ..schemas.attachment import FileAttachmentCreate, FileAttachmentRead
from ..services.attachment_service import (
    upload_file_attachment, store_upload, list_attachments,
)

router = APIRouter(prefix="/attachments", tags=["attachments"])

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

@router.post("", response_model=FileAttachmentRead, status_code=status.HTTP_201_CREATED)
def register_attachment(payload: FileAttachmentCreate, db: Session = Depends(get_db)):
    """Register a file that already sits at file_path."""
    return upload_file_attachment(db, **payload.model_dump())

@router.post("/upload", response_model=FileAttachmentRead, status_code=status.HTTP_201_CREATED)
def upload_attachment(
    file: UploadFile = File(...),
    inquiry_id: Optional[int] = Form(None),
    message_id: Optional[int] = Form(None),
    db: Session = Depends(get_db),
):
    # one byte past the limit is enough for the size check to fail
    content = file.file.read(MAX_FILE_SIZE + 1)
    return store_upload(
        db,
        upload_dir=UPLOAD_DIR,
        filename=file.filename or "",
        content=content,
        mime_type=(file.content_type or "").split(";")[0].strip(),
        inquiry_id=inquiry_id,
        message_id=message_id,
    )

@router.get("", response_model=List[FileAttachmentRead])
def list_attachments_ep(
    inquiry_id: Optional[int] = Query(None, ge=1),
    message_id: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    return list_attachments(db, inquiry_id=inquiry_id, message_id=message_id)
