import logging
import os
import tempfile
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from starlette.background import BackgroundTask
import openpyxl
from openpyxl.styles import Font, Alignment

from shared.auth import AuthSession
from shared.db import get_db
from shared.errors import NotFoundError, ValidationError, upstream_error
from services.identity.dependencies import get_current_user
from services.school_management.dependencies import get_current_school
from services.school_management.models.schools import School
from services.school_management.models.teachers import Teacher
from services.supervision_management.models.supervisions import Supervision, CHECKLIST_FIELDS
from services.supervision_management.schemas.supervisions import (
    SupervisionCreate,
    SupervisionUpdate,
    SupervisionOut
)

router = APIRouter(prefix="/supervisions", tags=["Supervisions"])
logger = logging.getLogger(__name__)

CHECKLIST_LABELS = {
    "lesson_plan": "RPP",
    "syllabus": "Silabus",
    "assessment_tools": "Alat Penilaian",
    "teaching_materials": "Bahan Ajar",
    "student_attendance": "Daftar Hadir Siswa",
}


async def _ensure_school_teacher(db: AsyncSession, school: School, teacher_id: UUID) -> Teacher:
    teacher = await db.get(Teacher, teacher_id)
    if not teacher or teacher.school_id != school.id:
        raise ValidationError(
            "Invalid input",
            [{"field": "teacher_id", "message": "Guru tidak ditemukan di sekolah Anda"}]
        )
    return teacher


async def _get_school_supervision(db: AsyncSession, school: School, supervision_id: UUID) -> Supervision:
    result = await db.execute(
        select(Supervision).where(
            Supervision.id == supervision_id,
            Supervision.school_id == school.id
        )
    )
    supervision = result.scalars().first()
    if not supervision:
        raise NotFoundError("Supervisi tidak ditemukan")
    return supervision


def _to_out(supervision: Supervision, teacher: Optional[Teacher]) -> SupervisionOut:
    out = SupervisionOut.model_validate(supervision)
    if teacher:
        out.teacher_name = teacher.name
        out.teacher_nip = teacher.nip
    return out


async def list_school_supervisions(db: AsyncSession, school: School):
    result = await db.execute(
        select(Supervision, Teacher)
        .join(Teacher, Supervision.teacher_id == Teacher.id)
        .where(Supervision.school_id == school.id)
        .order_by(Supervision.supervision_date.desc(), Supervision.created_at.desc())
    )
    return result.all()


# --- LIST SUPERVISIONS OF MY SCHOOL ---
@router.get("", response_model=List[SupervisionOut])
async def list_supervisions(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    rows = await list_school_supervisions(db, school)
    return [_to_out(supervision, teacher) for supervision, teacher in rows]


# --- RECORD A SUPERVISION ---
@router.post("", response_model=SupervisionOut, status_code=status.HTTP_201_CREATED)
async def create_supervision(
    payload: SupervisionCreate,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school),
    current_user: AuthSession = Depends(get_current_user)
):
    teacher = await _ensure_school_teacher(db, school, payload.teacher_id)

    data = payload.model_dump()
    data["supervision_date"] = data["supervision_date"] or date.today()

    supervision = Supervision(
        school_id=school.id,
        created_by=current_user.user_id,
        **data
    )
    db.add(supervision)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error creating supervision")

    await db.refresh(supervision)
    logger.info("Supervision %s recorded for teacher %s", supervision.id, teacher.id)
    return _to_out(supervision, teacher)


# --- EXPORT SUPERVISIONS TO EXCEL ---
@router.get("/export-excel")
async def export_supervisions_excel(
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    rows = await list_school_supervisions(db, school)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Rekap Supervisi"

    headers = ["No.", "Tanggal", "Nama Guru", "NIP"] + list(CHECKLIST_LABELS.values()) + ["Kelengkapan", "Catatan"]
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")

    checked_totals = {field: 0 for field in CHECKLIST_FIELDS}

    for index, (supervision, teacher) in enumerate(rows, start=1):
        checks = [bool(getattr(supervision, field)) for field in CHECKLIST_FIELDS]
        for field, checked in zip(CHECKLIST_FIELDS, checks):
            checked_totals[field] += int(checked)

        completeness = sum(checks) / len(checks) * 100
        ws.append(
            [index, supervision.supervision_date.strftime("%d-%m-%Y"), teacher.name, teacher.nip]
            + ["Ada" if checked else "Tidak" for checked in checks]
            + [f"{completeness:.0f}%", supervision.notes or ""]
        )

    # Summary row
    summary_row = len(rows) + 3
    ws.cell(row=summary_row, column=1, value="Jumlah Lengkap").font = Font(bold=True)
    for offset, field in enumerate(CHECKLIST_FIELDS):
        ws.cell(row=summary_row, column=5 + offset, value=checked_totals[field])

    ws.cell(row=summary_row + 1, column=1, value="Sekolah")
    ws.cell(row=summary_row + 1, column=2, value=school.name)
    ws.cell(row=summary_row + 2, column=1, value="Dicetak")
    ws.cell(row=summary_row + 2, column=2, value=datetime.now().strftime("%d-%m-%Y %H:%M"))

    with tempfile.NamedTemporaryFile(delete=False, suffix=".xlsx") as tmp:
        wb.save(tmp.name)
        tmp_path = tmp.name

    return FileResponse(
        tmp_path,
        filename="rekap_supervisi.xlsx",
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        background=BackgroundTask(os.remove, tmp_path)
    )


# --- UPDATE SUPERVISION ---
@router.put("/{supervision_id}", response_model=SupervisionOut)
async def update_supervision(
    supervision_id: UUID,
    payload: SupervisionUpdate,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    supervision = await _get_school_supervision(db, school, supervision_id)

    updates = payload.model_dump(exclude_unset=True)
    if updates.get("teacher_id"):
        await _ensure_school_teacher(db, school, updates["teacher_id"])

    for field, value in updates.items():
        # notes may be cleared, the rest are required columns
        if value is None and field != "notes":
            continue
        setattr(supervision, field, value)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error updating supervision")

    await db.refresh(supervision)
    teacher = await db.get(Teacher, supervision.teacher_id)
    return _to_out(supervision, teacher)


# --- DELETE SUPERVISION ---
@router.delete("/{supervision_id}")
async def delete_supervision(
    supervision_id: UUID,
    db: AsyncSession = Depends(get_db),
    school: School = Depends(get_current_school)
):
    supervision = await _get_school_supervision(db, school, supervision_id)

    await db.delete(supervision)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise upstream_error(e, "Error deleting supervision")

    return {"message": "Supervisi berhasil dihapus"}
