from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow

class FileAttachment(Base):
    __tablename__ = "file_attachments"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    inquiry_id  = Column(Integer, ForeignKey("inquiries.id"), index=True)
    message_id  = Column(Integer, ForeignKey("messages.id"), index=True)
    filename    = Column(String(255), nullable=False)
    file_path   = Column(String(1000), nullable=False)
    file_size   = Column(Integer, nullable=False)
    mime_type   = Column(String(120), nullable=False)
    uploaded_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "inquiry_id IS NOT NULL OR message_id IS NOT NULL",
            name="ck_file_attachments_owner",
        ),
        CheckConstraint("file_size > 0", name="ck_file_attachments_size_positive"),
    )

    inquiry = relationship("Inquiry")
    message = relationship("Message")
