# services/school_management/provisioning.py
"""
Teacher account provisioning.

Given an email and a teacher of the caller's school, make sure exactly one
identity exists for the email and exactly one teacher_accounts row links it
to the teacher. An identity that already exists is reused as long as no
other teacher account points at it.

Two known gaps are left open pending a product decision:

* The email lookup and the identity creation are not serialized. Two
  concurrent requests for the same email can both pass the lookup; the loser
  gets an UpstreamError from the identity store.
* The identity is committed before the link row. If the link insert fails the
  identity stays behind without an account.
"""
import logging
import secrets
from typing import Any, Optional

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from starlette.requests import Request

from shared.auth import AuthSession
from shared.errors import (
    AuthError,
    AuthorizationError,
    ConflictError,
    ValidationError,
    upstream_error,
    validation_details,
)
from services.identity.store import IdentityStore, normalize_email
from services.school_management.dependencies import get_owned_school
from services.school_management.models.teachers import Teacher, TeacherAccount
from services.school_management.schemas.teacher_accounts import (
    TeacherAccountCreate,
    TeacherAccountCreated,
)

logger = logging.getLogger(__name__)

TEMPORARY_PASSWORD_BYTES = 8  # 16 hex characters


def generate_temporary_password() -> str:
    return secrets.token_hex(TEMPORARY_PASSWORD_BYTES)


async def read_json_body(request: Request) -> Any:
    """Decode the request body. An empty body reads as None."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return await request.json()
    except ValueError:
        raise ValidationError(
            "Invalid input",
            [{"field": "body", "message": "Body harus berupa JSON yang valid"}],
        )


async def _find_account(db: AsyncSession, *criteria) -> Optional[TeacherAccount]:
    try:
        result = await db.execute(select(TeacherAccount).where(*criteria))
    except SQLAlchemyError as e:
        raise upstream_error(e, "Teacher account lookup failed")
    return result.scalars().first()


async def provision_teacher_account(
    db: AsyncSession,
    store: IdentityStore,
    caller: Optional[AuthSession],
    body: Any,
) -> TeacherAccountCreated:
    """`body` is the decoded payload, or the request itself so that it is only
    read once the caller has been checked."""
    if caller is None:
        raise AuthError("Unauthorized - No auth header")

    school = await get_owned_school(db, caller.user_id)
    if not school:
        logger.warning("Provisioning refused: %s owns no school", caller.user_id)
        raise AuthorizationError("No school found for this user")

    if isinstance(body, Request):
        body = await read_json_body(body)

    try:
        payload = TeacherAccountCreate.model_validate(body if body is not None else {})
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid input", validation_details(e.errors()))

    logger.info("Provisioning account for %s by %s (school %s)", payload.email, caller.user_id, school.id)

    if payload.teacher_id:
        try:
            result = await db.execute(
                select(Teacher).where(
                    Teacher.id == payload.teacher_id,
                    Teacher.school_id == school.id
                )
            )
        except SQLAlchemyError as e:
            raise upstream_error(e, "Teacher lookup failed")
        if not result.scalars().first():
            raise ValidationError(
                "Invalid input",
                [{"field": "teacherId", "message": "Guru tidak ditemukan di sekolah Anda"}],
            )

        if await _find_account(db, TeacherAccount.teacher_id == payload.teacher_id):
            raise ConflictError("Guru ini sudah memiliki akun")

    temporary_password = None
    existing_user = await store.get_identity_by_email(payload.email)

    if existing_user:
        if await _find_account(db, TeacherAccount.user_id == existing_user.id):
            raise ConflictError("Email ini sudah digunakan untuk akun guru lain")
        user_id = existing_user.id
        logger.info("Reusing identity %s for %s", user_id, payload.email)
    else:
        password = payload.password or generate_temporary_password()
        user = await store.create_identity(payload.email, password, preconfirmed=True)
        user_id = user.id
        temporary_password = password

    if payload.teacher_id:
        account = TeacherAccount(
            teacher_id=payload.teacher_id,
            user_id=user_id,
            email=normalize_email(payload.email),
        )
        db.add(account)
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            if temporary_password is not None:
                logger.error("Identity %s left without a teacher account", user_id)
            raise upstream_error(e, "Linking teacher account failed")

        logger.info("Teacher %s linked to identity %s", payload.teacher_id, user_id)

    return TeacherAccountCreated(user_id=user_id, temporary_password=temporary_password)
