# services/school_management/dependencies.py
import logging
from typing import NamedTuple, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shared.auth import AuthSession
from shared.db import get_db
from shared.errors import AuthorizationError, upstream_error
from services.identity.dependencies import get_current_user
from services.school_management.models.schools import School
from services.school_management.models.teachers import Teacher, TeacherAccount

logger = logging.getLogger(__name__)


class TeacherContext(NamedTuple):
    account: TeacherAccount
    teacher: Teacher
    school: School


async def get_owned_school(db: AsyncSession, user_id: UUID) -> Optional[School]:
    try:
        result = await db.execute(select(School).where(School.owner_id == user_id))
    except SQLAlchemyError as e:
        raise upstream_error(e, "School lookup failed")
    return result.scalars().first()


async def get_teacher_context(db: AsyncSession, user_id: UUID) -> Optional[TeacherContext]:
    try:
        result = await db.execute(
            select(TeacherAccount, Teacher, School)
            .join(Teacher, TeacherAccount.teacher_id == Teacher.id)
            .join(School, Teacher.school_id == School.id)
            .where(TeacherAccount.user_id == user_id)
        )
    except SQLAlchemyError as e:
        raise upstream_error(e, "Teacher account lookup failed")

    row = result.first()
    if not row:
        return None
    return TeacherContext(*row)


# --- CALLER MUST OWN A SCHOOL ---
async def get_current_school(
    db: AsyncSession = Depends(get_db),
    current_user: AuthSession = Depends(get_current_user)
) -> School:
    school = await get_owned_school(db, current_user.user_id)
    if not school:
        raise AuthorizationError("No school found for this user")
    return school


# --- CALLER MUST BE LINKED TO A TEACHER ---
async def get_current_teacher(
    db: AsyncSession = Depends(get_db),
    current_user: AuthSession = Depends(get_current_user)
) -> TeacherContext:
    context = await get_teacher_context(db, current_user.user_id)
    if not context:
        raise AuthorizationError("Akun guru tidak ditemukan. Silakan hubungi administrator")
    return context
