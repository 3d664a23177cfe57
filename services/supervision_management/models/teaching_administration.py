# services/supervision_management/models/teaching_administration.py
from sqlalchemy import Column, ForeignKey, String, DateTime, Uuid, Index
from shared.db import Base, utcnow
import uuid

class TeachingAdministration(Base):
    """One submission of a teacher's administration documents. Never updated."""
    __tablename__ = "teaching_administration"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    teacher_account_id = Column(Uuid, ForeignKey("teacher_accounts.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False)

    teaching_hours = Column(String)
    semester_class = Column(String)

    calendar_link = Column(String)
    annual_program_link = Column(String)
    assessment_use_link = Column(String)
    learning_flow_link = Column(String)
    teaching_module_link = Column(String)
    teaching_material_link = Column(String)
    schedule_link = Column(String)
    assessment_program_link = Column(String)
    grade_list_link = Column(String)
    daily_agenda_link = Column(String)
    attendance_link = Column(String)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_teaching_admin_account_created', 'teacher_account_id', 'created_at'),
    )

LINK_FIELDS = (
    "calendar_link",
    "annual_program_link",
    "assessment_use_link",
    "learning_flow_link",
    "teaching_module_link",
    "teaching_material_link",
    "schedule_link",
    "assessment_program_link",
    "grade_list_link",
    "daily_agenda_link",
    "attendance_link",
)
