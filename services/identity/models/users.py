# services/identity/models/users.py
from sqlalchemy import Column, String, DateTime, Uuid, Index
from shared.db import Base, utcnow
import uuid

class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    email_confirmed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_auth_user_email', 'email'),  # login and provisioning lookups
    )
