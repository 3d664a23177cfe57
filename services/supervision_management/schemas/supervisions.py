from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field
from uuid import UUID

NOTES_MAX_LENGTH = 5000

class SupervisionCreate(BaseModel):
    teacher_id: UUID
    supervision_date: Optional[date] = None
    lesson_plan: bool = False
    syllabus: bool = False
    assessment_tools: bool = False
    teaching_materials: bool = False
    student_attendance: bool = False
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)

class SupervisionUpdate(BaseModel):
    teacher_id: Optional[UUID] = None
    supervision_date: Optional[date] = None
    lesson_plan: Optional[bool] = None
    syllabus: Optional[bool] = None
    assessment_tools: Optional[bool] = None
    teaching_materials: Optional[bool] = None
    student_attendance: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)

class SupervisionOut(BaseModel):
    id: UUID
    school_id: UUID
    teacher_id: UUID
    supervision_date: date
    lesson_plan: bool
    syllabus: bool
    assessment_tools: bool
    teaching_materials: bool
    student_attendance: bool
    notes: Optional[str]
    created_by: UUID
    created_at: datetime
    updated_at: datetime
    teacher_name: Optional[str] = None
    teacher_nip: Optional[str] = None

    class Config:
        from_attributes = True
