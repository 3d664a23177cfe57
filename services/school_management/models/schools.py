# services/school_management/models/schools.py

from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, Index
from shared.db import Base, utcnow
import uuid

class School(Base):
    __tablename__ = "schools"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # One school per owner is checked at setup, not by a constraint
    owner_id = Column(Uuid, ForeignKey("auth_users.id"), nullable=False)
    name = Column(String, nullable=False)
    npsn = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    principal_name = Column(String, nullable=False)
    principal_nip = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_school_owner', 'owner_id'),
    )
