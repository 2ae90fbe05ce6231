from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.constants import USER_ROLES, sql_in_list

class User(Base):
    __tablename__ = "users"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    email          = Column(String(255), nullable=False, unique=True)
    password_hash  = Column(String(255), nullable=False)
    company_name   = Column(String(200), nullable=False)
    contact_person = Column(String(200), nullable=False)
    phone          = Column(String(50))
    role           = Column(String(20),  nullable=False)
    location       = Column(String(200), nullable=False)
    description    = Column(Text)
    website        = Column(String(500))
    created_at     = Column(DateTime, nullable=False, default=utcnow)
    updated_at     = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(f"role in ({sql_in_list(USER_ROLES)})", name="ck_users_role"),
    )

    # 1-1 (only for suppliers)
    supplier_profile = relationship("SupplierProfile", back_populates="user", uselist=False)
    inquiries        = relationship("Inquiry", back_populates="buyer")
