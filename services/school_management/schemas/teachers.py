# services/school_management/schemas/teachers.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from services.school_management.models.teachers import TeacherRank, EmploymentType, Gender

NIP_PATTERN = r"^[0-9]{18}$"


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class TeacherCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    nip: str = Field(..., pattern=NIP_PATTERN)
    gender: Optional[Gender] = None
    rank: TeacherRank
    employment_type: EmploymentType

    _strip_text = field_validator("name", "nip", mode="before")(_strip)

class TeacherUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=100)
    nip: Optional[str] = Field(None, pattern=NIP_PATTERN)
    gender: Optional[Gender] = None
    rank: Optional[TeacherRank] = None
    employment_type: Optional[EmploymentType] = None

    _strip_text = field_validator("name", "nip", mode="before")(_strip)

class TeacherOut(BaseModel):
    id: UUID
    school_id: UUID
    name: str
    nip: str
    gender: Optional[Gender]
    rank: TeacherRank
    employment_type: EmploymentType
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
