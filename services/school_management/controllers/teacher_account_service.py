from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from shared.auth import AuthSession
from shared.db import get_db
from shared.errors import NotFoundError, upstream_error
from services.identity.dependencies import get_current_user
from services.identity.store import IdentityStore, get_identity_store
from services.school_management.dependencies import get_current_school
from services.school_management.models.schools import School
from services.school_management.models.teachers import Teacher, TeacherAccount
from services.school_management.provisioning import provision_teacher_account
from services.school_management.schemas.teacher_accounts import (
    TeacherAccountCreated,
    TeacherAccountOut
)
from services.school_management.schemas.teachers import TeacherOut

router = APIRouter(prefix="/teacher-accounts", tags=["Teacher Accounts"])
function_router = APIRouter(prefix="/functions", tags=["Functions"])


# --- LIST TEACHER ACCOUNTS OF MY SCHOOL ---
@router.get("", response_model=List[TeacherAccountOut])
async def list_teacher_accounts(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    result = await db.execute(
        select(TeacherAccount, Teacher.name, Teacher.nip)
        .join(Teacher, TeacherAccount.teacher_id == Teacher.id)
        .where(Teacher.school_id == school.id)
        .order_by(TeacherAccount.created_at.desc())
    )

    return [
        TeacherAccountOut(
            id=account.id,
            teacher_id=account.teacher_id,
            user_id=account.user_id,
            email=account.email,
            created_at=account.created_at,
            teacher_name=name,
            teacher_nip=nip
        )
        for account, name, nip in result.all()
    ]


# --- TEACHERS THAT HAVE NO ACCOUNT YET ---
@router.get("/available-teachers", response_model=List[TeacherOut])
async def list_available_teachers(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    result = await db.execute(
        select(Teacher)
        .outerjoin(TeacherAccount, TeacherAccount.teacher_id == Teacher.id)
        .where(
            Teacher.school_id == school.id,
            TeacherAccount.id.is_(None)
        )
        .order_by(Teacher.name)
    )
    return result.scalars().all()


# --- CREATE OR LINK A TEACHER LOGIN ---
@router.post("", response_model=TeacherAccountCreated)
@function_router.post("/create-teacher-account", response_model=TeacherAccountCreated)
async def create_teacher_account(
    request: Request,
    db: AsyncSession = Depends(get_db),
    store: IdentityStore = Depends(get_identity_store),
    current_user: AuthSession = Depends(get_current_user)
):
    """
    Make sure a login exists for the email and link it to the teacher.
    The generated password is returned once, as temporaryPassword.
    """
    return await provision_teacher_account(db, store, current_user, request)


# --- REMOVE A TEACHER ACCOUNT LINK ---
@router.delete("/{account_id}")
async def delete_teacher_account(
    account_id: UUID,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    result = await db.execute(
        select(TeacherAccount)
        .join(Teacher, TeacherAccount.teacher_id == Teacher.id)
        .where(
            TeacherAccount.id == account_id,
            Teacher.school_id == school.id
        )
    )
    account = result.scalars().first()
    if not account:
        raise NotFoundError("Akun guru tidak ditemukan")

    # Only the link goes; the identity stays in the identity store
    await db.delete(account)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error deleting teacher account")

    return {"message": "Akun guru berhasil dihapus"}
