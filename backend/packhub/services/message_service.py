# backend/packhub/services/message_service.py
from __future__ import annotations
from typing import List, Optional
import logging

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..models import User, Inquiry, Message
from .common import write_scope, get_or_404

logger = logging.getLogger(__name__)


def create_message(
    db: Session, *,
    sender_id: int,
    recipient_id: int,
    inquiry_id: Optional[int],
    subject: str,
    content: str,
) -> Message:
    with write_scope(db, "create_message"):
        get_or_404(db, User, sender_id, f"Sender with id {sender_id} does not exist")
        get_or_404(db, User, recipient_id, f"Recipient with id {recipient_id} does not exist")
        if inquiry_id is not None:
            get_or_404(db, Inquiry, inquiry_id, f"Inquiry with id {inquiry_id} does not exist")

        msg = Message(
            sender_id=sender_id,
            recipient_id=recipient_id,
            inquiry_id=inquiry_id,
            subject=subject,
            content=content,
            sent_at=utcnow(),
            read_at=None,
        )
        db.add(msg)
    db.refresh(msg)
    logger.info("message created (id=%s, %s -> %s)", msg.id, sender_id, recipient_id)
    return msg


def get_messages_for_user(db: Session, user_id: int) -> List[Message]:
    """Sent and received messages, newest first."""
    return (
        db.query(Message)
          .filter(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
          .order_by(Message.sent_at.desc(), Message.id.desc())
          .all()
    )


def count_unread_messages(db: Session, user_id: int) -> int:
    return (
        db.query(Message)
          .filter(Message.recipient_id == user_id, Message.read_at.is_(None))
          .count()
    )


def mark_message_as_read(db: Session, *, message_id: int, user_id: int) -> Message:
    """
    Idempotent. read_at is written once; the UPDATE only matches unread rows,
    so concurrent callers all end up seeing the first timestamp.
    """
    msg = get_or_404(db, Message, message_id, "Message not found")

    if msg.recipient_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is not authorized to mark this message as read",
        )

    if msg.read_at is not None:
        return msg

    with write_scope(db, "mark_message_as_read"):
        (
            db.query(Message)
              .filter(Message.id == message_id,
                      Message.recipient_id == user_id,
                      Message.read_at.is_(None))
              .update({Message.read_at: utcnow()}, synchronize_session=False)
        )
    db.refresh(msg)
    return msg
