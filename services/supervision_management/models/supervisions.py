# services/supervision_management/models/supervisions.py
from sqlalchemy import Column, ForeignKey, Date, Text, Boolean, DateTime, Uuid, Index
from shared.db import Base, utcnow
import uuid
from datetime import date

class Supervision(Base):
    __tablename__ = "supervisions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False)
    supervision_date = Column(Date, nullable=False, default=date.today)

    # Checklist
    lesson_plan = Column(Boolean, default=False)
    syllabus = Column(Boolean, default=False)
    assessment_tools = Column(Boolean, default=False)
    teaching_materials = Column(Boolean, default=False)
    student_attendance = Column(Boolean, default=False)

    notes = Column(Text)
    created_by = Column(Uuid, ForeignKey("auth_users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_supervision_school_date', 'school_id', 'supervision_date'),
        Index('idx_supervision_teacher', 'teacher_id'),
    )

CHECKLIST_FIELDS = (
    "lesson_plan",
    "syllabus",
    "assessment_tools",
    "teaching_materials",
    "student_attendance",
)
