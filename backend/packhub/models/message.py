from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow

class Message(Base):
    __tablename__ = "messages"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    sender_id    = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    inquiry_id   = Column(Integer, ForeignKey("inquiries.id"))
    subject      = Column(String(300), nullable=False)
    content      = Column(Text, nullable=False)
    sent_at      = Column(DateTime, nullable=False, default=utcnow)
    # set once by the recipient, never cleared
    read_at      = Column(DateTime)

    sender    = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])
    inquiry   = relationship("Inquiry")
