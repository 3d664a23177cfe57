# shared/errors.py
"""
Domain errors and the mapping of upstream failures to user-facing messages.

Domain errors (validation, authorization, conflict) reach the caller
verbatim. Upstream failures from the database or the identity store are
logged in full and shown only through USER_FRIENDLY_MESSAGES.
"""
import logging
from typing import Any, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Terjadi kesalahan. Silakan coba lagi"

# PostgreSQL SQLSTATE codes
ERROR_CODE_MESSAGES = {
    "23505": "Data sudah ada dalam sistem",
    "23503": "Data terkait tidak ditemukan",
    "23514": "Data tidak valid",
    "42501": "Anda tidak memiliki akses",
}

# Checked in order against the raw error text
ERROR_SUBSTRING_MESSAGES = [
    ("UNIQUE constraint failed", "Data sudah ada dalam sistem"),
    ("FOREIGN KEY constraint failed", "Data terkait tidak ditemukan"),
    ("CHECK constraint failed", "Data tidak valid"),
    ("JWT", "Sesi Anda telah berakhir. Silakan login kembali"),
    ("Invalid login", "Email atau password salah"),
    ("Email not confirmed", "Email belum dikonfirmasi"),
    ("User already registered", "Email sudah terdaftar"),
]


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class UpstreamError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_code(error: BaseException) -> Optional[str]:
    # SQLAlchemy wraps the driver error in .orig
    for candidate in (error, getattr(error, "orig", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode", "code"):
            code = getattr(candidate, attr, None)
            if isinstance(code, str) and code in ERROR_CODE_MESSAGES:
                return code
    return None


def user_friendly_error(error: BaseException) -> str:
    """Translate an internal error into a message that is safe to display."""
    code = _error_code(error)
    if code:
        return ERROR_CODE_MESSAGES[code]

    raw = str(error)
    for needle, message in ERROR_SUBSTRING_MESSAGES:
        if needle in raw:
            return message

    logger.error("Internal error: %r", error)
    return GENERIC_ERROR_MESSAGE


def upstream_error(error: BaseException, context: str) -> UpstreamError:
    logger.exception("%s: %s", context, error)
    return UpstreamError(user_friendly_error(error))


def validation_details(errors) -> List[dict]:
    """Flatten pydantic error entries into {field, message} pairs."""
    details = []
    for err in errors:
        loc = [part for part in err.get("loc", ()) if part != "body"]
        # A bare position (JSON decode errors) or no location at all is the body itself
        if not loc or not isinstance(loc[0], str):
            field = "body"
        else:
            field = ".".join(str(part) for part in loc)
        details.append({
            "field": field,
            "message": err.get("msg", ""),
        })
    return details


def _error_body(message: str, details: Optional[List[Any]] = None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError):
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Invalid input", validation_details(exc.errors())),
    )
