# services/school_management/schemas/schools.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

class SchoolCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    npsn: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    principal_name: str = Field(..., min_length=1, max_length=100)
    principal_nip: str = Field(..., min_length=1, max_length=18)
    logo_url: Optional[str] = None

class SchoolUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    npsn: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    principal_name: Optional[str] = Field(None, min_length=1, max_length=100)
    principal_nip: Optional[str] = Field(None, min_length=1, max_length=18)
    logo_url: Optional[str] = None

class SchoolOut(BaseModel):
    id: UUID
    owner_id: UUID
    name: str
    npsn: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    principal_name: str
    principal_nip: str
    logo_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class SchoolDashboardOut(BaseModel):
    school_name: str
    total_teachers: int
    total_supervisions: int
    supervisions_this_month: int
