# services/identity/store.py
"""
Identity store: credentials keyed by email, and the tokens issued for them.

Only this module touches the auth_users table. Failures of the underlying
database are raised as UpstreamError with a sanitized message.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shared.auth import create_access_token, decode_token, get_password_hash, verify_password
from shared.db import get_db, utcnow
from shared.errors import UpstreamError, upstream_error
from services.identity.models.users import AuthUser

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_identity_by_email(self, email: str) -> Optional[AuthUser]:
        try:
            result = await self.db.execute(
                select(AuthUser).where(AuthUser.email == normalize_email(email))
            )
        except SQLAlchemyError as e:
            raise upstream_error(e, "Identity lookup failed")
        return result.scalars().first()

    async def get_identity(self, user_id: UUID) -> Optional[AuthUser]:
        try:
            return await self.db.get(AuthUser, user_id)
        except SQLAlchemyError as e:
            raise upstream_error(e, "Identity lookup failed")

    async def create_identity(self, email: str, password: str, preconfirmed: bool = False) -> AuthUser:
        """Create and commit a new identity. Duplicate emails raise UpstreamError."""
        email = normalize_email(email)
        user = AuthUser(
            email=email,
            hashed_password=get_password_hash(password),
            email_confirmed_at=utcnow() if preconfirmed else None,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("Identity for %s already exists: %s", email, e)
            raise UpstreamError("Email sudah terdaftar")
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise upstream_error(e, "Identity creation failed")

        await self.db.refresh(user)
        logger.info("Identity %s created (preconfirmed=%s)", user.id, preconfirmed)
        return user

    async def authenticate(self, email: str, password: str) -> Optional[AuthUser]:
        user = await self.get_identity_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            return None
        return user

    def issue_token(self, user: AuthUser) -> str:
        return create_access_token({"sub": str(user.id), "email": user.email})

    async def verify_token(self, token: str) -> Optional[UUID]:
        """Return the identity id a token belongs to, or None if it is not valid."""
        payload = decode_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            return None

        user = await self.get_identity(user_id)
        if not user:
            logger.warning("Token for unknown identity %s", user_id)
            return None
        return user.id


def get_identity_store(db: AsyncSession = Depends(get_db)) -> IdentityStore:
    return IdentityStore(db)
