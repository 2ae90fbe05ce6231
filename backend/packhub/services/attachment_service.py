# backend/packhub/services/attachment_service.py
from __future__ import annotations
from typing import List, Optional
import logging
import os
import re
import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..domain.constants import ALLOWED_MIME_TYPES, MAX_FILE_SIZE
from ..models import Inquiry, Message, FileAttachment
from .common import write_scope, get_or_404

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def validate_attachment(
    *,
    filename: str,
    file_path: str,
    file_size: int,
    mime_type: str,
    inquiry_id: Optional[int],
    message_id: Optional[int],
) -> None:
    """Input rules only; no database access."""
    if inquiry_id is None and message_id is None:
        raise _bad_request("Either inquiry_id or message_id must be provided")
    if file_size is None or file_size <= 0:
        raise _bad_request("File size must be greater than 0")
    if file_size > MAX_FILE_SIZE:
        raise _bad_request(
            f"File size exceeds maximum allowed size of {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )
    if mime_type not in ALLOWED_MIME_TYPES:
        raise _bad_request(f"File type {mime_type} is not allowed")
    if not filename or not filename.strip():
        raise _bad_request("Filename cannot be empty")
    if not file_path or not file_path.strip():
        raise _bad_request("File path cannot be empty")


def upload_file_attachment(
    db: Session, *,
    filename: str,
    file_path: str,
    file_size: int,
    mime_type: str,
    inquiry_id: Optional[int] = None,
    message_id: Optional[int] = None,
) -> FileAttachment:
    validate_attachment(
        filename=filename, file_path=file_path, file_size=file_size,
        mime_type=mime_type, inquiry_id=inquiry_id, message_id=message_id,
    )
    with write_scope(db, "upload_file_attachment"):
        if inquiry_id is not None:
            get_or_404(db, Inquiry, inquiry_id, f"Inquiry with id {inquiry_id} not found")
        if message_id is not None:
            get_or_404(db, Message, message_id, f"Message with id {message_id} not found")

        att = FileAttachment(
            inquiry_id=inquiry_id,
            message_id=message_id,
            filename=filename.strip(),
            file_path=file_path.strip(),
            file_size=file_size,
            mime_type=mime_type,
            uploaded_at=utcnow(),
        )
        db.add(att)
    db.refresh(att)
    logger.info("attachment stored (id=%s, inquiry_id=%s, message_id=%s)", att.id, inquiry_id, message_id)
    return att


def store_upload(
    db: Session, *,
    upload_dir: str,
    filename: str,
    content: bytes,
    mime_type: str,
    inquiry_id: Optional[int] = None,
    message_id: Optional[int] = None,
) -> FileAttachment:
    """
    Write the bytes under upload_dir and register them. The file is removed
    again when registration fails.
    """
    safe_name = _UNSAFE_CHARS.sub("_", os.path.basename(filename or "").strip()) or "file"
    target = os.path.join(upload_dir, f"{uuid.uuid4().hex}_{safe_name}")

    # reject before touching the disk
    validate_attachment(
        filename=filename, file_path=target, file_size=len(content),
        mime_type=mime_type, inquiry_id=inquiry_id, message_id=message_id,
    )

    os.makedirs(upload_dir, exist_ok=True)
    with open(target, "wb") as fh:
        fh.write(content)
    try:
        return upload_file_attachment(
            db,
            filename=filename,
            file_path=target,
            file_size=len(content),
            mime_type=mime_type,
            inquiry_id=inquiry_id,
            message_id=message_id,
        )
    except HTTPException:
        os.remove(target)
        raise


def list_attachments(
    db: Session, *, inquiry_id: Optional[int] = None, message_id: Optional[int] = None
) -> List[FileAttachment]:
    if inquiry_id is None and message_id is None:
        raise _bad_request("Either inquiry_id or message_id must be provided")
    q = db.query(FileAttachment)
    if inquiry_id is not None:
        q = q.filter(FileAttachment.inquiry_id == inquiry_id)
    if message_id is not None:
        q = q.filter(FileAttachment.message_id == message_id)
    return q.order_by(FileAttachment.uploaded_at.asc(), FileAttachment.id.asc()).all()
