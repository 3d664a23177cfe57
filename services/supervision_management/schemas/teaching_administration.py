from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from uuid import UUID

from services.supervision_management.models.teaching_administration import LINK_FIELDS

LINK_MAX_LENGTH = 2048

class TeachingAdministrationCreate(BaseModel):
    teaching_hours: Optional[str] = Field(None, max_length=50)
    semester_class: Optional[str] = Field(None, max_length=100)
    calendar_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    annual_program_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    assessment_use_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    learning_flow_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    teaching_module_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    teaching_material_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    schedule_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    assessment_program_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    grade_list_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    daily_agenda_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)
    attendance_link: Optional[str] = Field(None, max_length=LINK_MAX_LENGTH)

    @field_validator(*LINK_FIELDS)
    @classmethod
    def check_link(cls, value):
        # Empty means "not submitted"
        if value is None or not value.strip():
            return None
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError("Link harus diawali http:// atau https://")
        return value

class TeachingAdministrationOut(TeachingAdministrationCreate):
    id: UUID
    teacher_account_id: UUID
    teacher_id: UUID
    school_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True

class TeacherProfileOut(BaseModel):
    teacher_id: UUID
    teacher_account_id: UUID
    name: str
    nip: str
    rank: str
    employment_type: str
    email: str
    school_id: UUID
    school_name: str
