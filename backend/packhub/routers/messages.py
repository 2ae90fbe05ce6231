# packhub/routers/messages.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.message import MessageCreate, MessageRead, MarkReadIn, UnreadCount
from ..services.message_service import (
    create_message, get_messages_for_user, mark_message_as_read, count_unread_messages,
)

router = APIRouter(prefix="/messages", tags=["messages"])

@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def create_message_ep(payload: MessageCreate, db: Session = Depends(get_db)):
    return create_message(db, **payload.model_dump())

@router.get("/user/{user_id}", response_model=List[MessageRead])
def messages_for_user(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return get_messages_for_user(db, user_id)

@router.get("/user/{user_id}/unread-count", response_model=UnreadCount)
def unread_count(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return {"user_id": user_id, "unread": count_unread_messages(db, user_id)}

@router.post("/{message_id}/read", response_model=MessageRead)
def mark_read_ep(payload: MarkReadIn, message_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return mark_message_as_read(db, message_id=message_id, user_id=payload.user_id)
