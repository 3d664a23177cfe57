from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from shared.db import get_db
from shared.errors import NotFoundError, upstream_error
from services.school_management.dependencies import get_current_school
from services.school_management.models.schools import School
from services.school_management.models.teachers import Teacher
from services.school_management.schemas.teachers import (
    TeacherCreate,
    TeacherUpdate,
    TeacherOut
)

router = APIRouter(prefix="/teachers", tags=["Teachers"])


async def _get_school_teacher(db: AsyncSession, school: School, teacher_id: UUID) -> Teacher:
    result = await db.execute(
        select(Teacher).where(
            Teacher.id == teacher_id,
            Teacher.school_id == school.id
        )
    )
    teacher = result.scalars().first()
    if not teacher:
        raise NotFoundError("Guru tidak ditemukan")
    return teacher


# --- LIST TEACHERS OF MY SCHOOL ---
@router.get("", response_model=List[TeacherOut])
async def list_teachers(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    result = await db.execute(
        select(Teacher)
        .where(Teacher.school_id == school.id)
        .order_by(Teacher.created_at.desc())
    )
    return result.scalars().all()


# --- ADD TEACHER ---
@router.post("", response_model=TeacherOut, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    payload: TeacherCreate,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    teacher = Teacher(school_id=school.id, **payload.model_dump())
    db.add(teacher)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error creating teacher")

    await db.refresh(teacher)
    return teacher


# --- UPDATE TEACHER ---
@router.put("/{teacher_id}", response_model=TeacherOut)
async def update_teacher(
    teacher_id: UUID,
    payload: TeacherUpdate,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    teacher = await _get_school_teacher(db, school, teacher_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        # gender is the only nullable column
        if value is None and field != "gender":
            continue
        setattr(teacher, field, value)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error updating teacher")

    await db.refresh(teacher)
    return teacher


# --- DELETE TEACHER ---
@router.delete("/{teacher_id}")
async def delete_teacher(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    teacher = await _get_school_teacher(db, school, teacher_id)

    await db.delete(teacher)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error deleting teacher")

    return {"message": "Guru berhasil dihapus"}
