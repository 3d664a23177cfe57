import logging
from datetime import date
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from shared.auth import AuthSession
from shared.db import get_db
from shared.errors import ConflictError, upstream_error
from services.identity.dependencies import get_current_user
from services.school_management.dependencies import get_current_school, get_owned_school
from services.school_management.models.schools import School
from services.school_management.models.teachers import Teacher
from services.school_management.schemas.schools import (
    SchoolCreate,
    SchoolUpdate,
    SchoolOut,
    SchoolDashboardOut
)
from services.supervision_management.models.supervisions import Supervision

router = APIRouter(prefix="/schools", tags=["School"])
logger = logging.getLogger(__name__)


# --- SETUP SCHOOL (ADMIN ONBOARDING) ---
@router.post("/setup", response_model=SchoolOut, status_code=status.HTTP_201_CREATED)
async def setup_school(
    payload: SchoolCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthSession = Depends(get_current_user)
):
    # One school per owner
    if await get_owned_school(db, current_user.user_id):
        raise ConflictError("Sekolah untuk akun ini sudah dibuat")

    school = School(owner_id=current_user.user_id, **payload.model_dump())
    db.add(school)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error creating school")

    await db.refresh(school)
    logger.info("School %s set up by %s", school.id, current_user.user_id)
    return school


# --- GET MY SCHOOL ---
@router.get("/me", response_model=SchoolOut)
async def get_my_school(school: School = Depends(get_current_school)):
    return school


# --- UPDATE MY SCHOOL ---
@router.put("/me", response_model=SchoolOut)
async def update_my_school(
    payload: SchoolUpdate,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    for field, value in payload.model_dump(exclude_unset=True).items():
        # Required columns cannot be cleared
        if value is None and field in ("name", "principal_name", "principal_nip"):
            continue
        setattr(school, field, value)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error updating school")

    await db.refresh(school)
    return school


# --- ADMIN DASHBOARD NUMBERS ---
@router.get("/me/dashboard", response_model=SchoolDashboardOut)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    month_start = date.today().replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)

    try:
        total_teachers = await db.scalar(
            select(func.count(Teacher.id)).where(Teacher.school_id == school.id)
        )
        total_supervisions = await db.scalar(
            select(func.count(Supervision.id)).where(Supervision.school_id == school.id)
        )
        this_month = await db.scalar(
            select(func.count(Supervision.id)).where(
                Supervision.school_id == school.id,
                Supervision.supervision_date >= month_start,
                Supervision.supervision_date < next_month
            )
        )
    except SQLAlchemyError as e:
        raise upstream_error(e, "Error loading dashboard")

    return SchoolDashboardOut(
        school_name=school.name,
        total_teachers=total_teachers or 0,
        total_supervisions=total_supervisions or 0,
        supervisions_this_month=this_month or 0
    )
