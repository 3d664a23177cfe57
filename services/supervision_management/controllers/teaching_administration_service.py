import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from shared.db import get_db
from shared.errors import upstream_error
from services.school_management.dependencies import TeacherContext, get_current_teacher
from services.supervision_management.models.teaching_administration import TeachingAdministration
from services.supervision_management.schemas.teaching_administration import (
    TeachingAdministrationCreate,
    TeachingAdministrationOut,
    TeacherProfileOut
)

router = APIRouter(prefix="/teacher", tags=["Teacher Self Service"])
logger = logging.getLogger(__name__)


# --- MY TEACHER PROFILE ---
@router.get("/profile", response_model=TeacherProfileOut)
async def get_my_profile(context: TeacherContext = Depends(get_current_teacher)):
    account, teacher, school = context
    return TeacherProfileOut(
        teacher_id=teacher.id,
        teacher_account_id=account.id,
        name=teacher.name,
        nip=teacher.nip,
        rank=teacher.rank.value,
        employment_type=teacher.employment_type.value,
        email=account.email,
        school_id=school.id,
        school_name=school.name
    )


# --- MY SUBMITTED ADMINISTRATION (NEWEST FIRST) ---
@router.get("/administration", response_model=List[TeachingAdministrationOut])
async def list_my_administration(
    db: AsyncSession = Depends(get_db),
    context: TeacherContext = Depends(get_current_teacher)
):
    result = await db.execute(
        select(TeachingAdministration)
        .where(TeachingAdministration.teacher_account_id == context.account.id)
        .order_by(TeachingAdministration.created_at.desc())
    )
    return result.scalars().all()


# --- SUBMIT ADMINISTRATION (INSERT ONLY) ---
@router.post("/administration", response_model=TeachingAdministrationOut, status_code=status.HTTP_201_CREATED)
async def submit_administration(
    payload: TeachingAdministrationCreate,
    db: AsyncSession = Depends(get_db),
    context: TeacherContext = Depends(get_current_teacher)
):
    # Ownership comes from the caller's link, never from the body
    record = TeachingAdministration(
        teacher_account_id=context.account.id,
        teacher_id=context.teacher.id,
        school_id=context.school.id,
        **payload.model_dump()
    )
    db.add(record)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error saving teaching administration")

    await db.refresh(record)
    logger.info("Teaching administration %s submitted by account %s", record.id, context.account.id)
    return record
