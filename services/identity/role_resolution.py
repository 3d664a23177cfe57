# services/identity/role_resolution.py
"""
Decide where an authenticated identity lands after login.

A linked teacher account wins over school ownership, so an identity that is
somehow both is treated as a teacher. Nothing is cached: the role is
recomputed from the two lookups on every call.
"""
import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from services.identity.schemas.users import Destination, LandingOut, UserRole
from services.school_management.models.schools import School
from services.school_management.models.teachers import TeacherAccount

logger = logging.getLogger(__name__)

DESTINATION_PATHS = {
    Destination.TEACHER_DASHBOARD: "/teacher/dashboard",
    Destination.ADMIN_DASHBOARD: "/dashboard",
    Destination.SETUP_SCHOOL: "/setup-school",
    Destination.LANDING: "/",
}


def landing(destination: Destination, role: UserRole = None) -> LandingOut:
    return LandingOut(role=role, destination=destination, path=DESTINATION_PATHS[destination])


async def resolve_landing(db: AsyncSession, user_id: UUID) -> LandingOut:
    try:
        account = await db.execute(
            select(TeacherAccount.id).where(TeacherAccount.user_id == user_id)
        )
        if account.scalars().first():
            return landing(Destination.TEACHER_DASHBOARD, UserRole.TEACHER)

        school = await db.execute(
            select(School.id).where(School.owner_id == user_id)
        )
        if school.scalars().first():
            return landing(Destination.ADMIN_DASHBOARD, UserRole.ADMIN)

        # Admin who has not finished onboarding
        return landing(Destination.SETUP_SCHOOL, UserRole.ADMIN)

    except SQLAlchemyError:
        logger.exception("Role lookup failed for %s, using default landing", user_id)
        return landing(Destination.LANDING)
