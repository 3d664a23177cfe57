# services/school_management/models/teachers.py
from sqlalchemy import Column, String, Enum, ForeignKey, DateTime, Uuid, Index
from sqlalchemy.orm import relationship
from shared.db import Base, utcnow
import enum
import uuid

class TeacherRank(str, enum.Enum):
    NONE = "Tidak Ada"
    III_A = "III.A"
    III_B = "III.B"
    III_C = "III.C"
    III_D = "III.D"
    IV_A = "IV.A"
    IV_B = "IV.B"
    IV_C = "IV.C"
    IV_D = "IV.D"
    IX = "IX"

class EmploymentType(str, enum.Enum):
    PNS = "PNS"
    PPPK = "PPPK"
    HONORER = "Guru Honorer"

class Gender(str, enum.Enum):
    MALE = "Laki-Laki"
    FEMALE = "Perempuan"

class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    nip = Column(String(18), nullable=False)
    gender = Column(Enum(Gender, values_callable=lambda e: [m.value for m in e]), nullable=True)
    rank = Column(Enum(TeacherRank, values_callable=lambda e: [m.value for m in e]), nullable=False)
    employment_type = Column(Enum(EmploymentType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Deleting a teacher removes everything recorded against it
    account = relationship("TeacherAccount", back_populates="teacher", uselist=False, cascade="all, delete-orphan")
    supervisions = relationship("Supervision", cascade="all, delete-orphan")
    administration_records = relationship("TeachingAdministration", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_teacher_school', 'school_id'),
    )

class TeacherAccount(Base):
    __tablename__ = "teacher_accounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), unique=True, nullable=False)
    user_id = Column(Uuid, ForeignKey("auth_users.id", ondelete="CASCADE"), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    teacher = relationship("Teacher", back_populates="account")
    administration_records = relationship("TeachingAdministration", cascade="all, delete-orphan")
