# services/school_management/schemas/teacher_accounts.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from services.identity.schemas.users import check_email_address

EMAIL_MAX_LENGTH = 255


class TeacherAccountCreate(BaseModel):
    email: str
    password: Optional[str] = None
    teacher_id: Optional[UUID] = Field(None, alias="teacherId")

    class Config:
        populate_by_name = True

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        value = value.strip()
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email maksimal {EMAIL_MAX_LENGTH} karakter")
        return check_email_address(value)

    @field_validator("password")
    @classmethod
    def blank_password_is_none(cls, value):
        # An empty password means "generate one"
        return value or None


class TeacherAccountCreated(BaseModel):
    success: bool = True
    user_id: UUID = Field(..., alias="userId")
    temporary_password: Optional[str] = Field(None, alias="temporaryPassword")

    class Config:
        populate_by_name = True


class TeacherAccountOut(BaseModel):
    id: UUID
    teacher_id: UUID
    user_id: UUID
    email: str
    created_at: datetime
    teacher_name: Optional[str] = None
    teacher_nip: Optional[str] = None

    class Config:
        from_attributes = True
