from pydantic import BaseModel, Field, field_validator
from email_validator import EmailNotValidError, validate_email
from typing import Optional
from datetime import datetime
from enum import Enum
from uuid import UUID


def check_email_address(value: str) -> str:
    """Syntax check only: no DNS lookup, and reserved domains such as .test are accepted."""
    try:
        return validate_email(value, check_deliverability=False, test_environment=True).normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))

class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"

class Destination(str, Enum):
    TEACHER_DASHBOARD = "teacher-dashboard"
    ADMIN_DASHBOARD = "admin-dashboard"
    SETUP_SCHOOL = "setup-school"
    LANDING = "landing"

class SignupRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    _check_email = field_validator("email")(check_email_address)

class SignupResponse(BaseModel):
    id: UUID
    email: str
    created_at: datetime

    class Config:
        from_attributes = True

class LoginRequest(BaseModel):
    email: str
    password: str

    _check_email = field_validator("email")(check_email_address)

class LandingOut(BaseModel):
    role: Optional[UserRole] = None
    destination: Destination
    path: str

class LoginResponse(LandingOut):
    access_token: str
    token_type: str = "bearer"
    user_id: UUID
    email: str

class MeOut(LandingOut):
    user_id: UUID
    email: str
