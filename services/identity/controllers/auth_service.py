# services/identity/controllers/auth_service.py

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import AuthSession
from shared.db import get_db
from shared.errors import AuthError, ConflictError
from services.identity.dependencies import get_current_user
from services.identity.role_resolution import resolve_landing
from services.identity.schemas.users import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    LandingOut,
    MeOut
)
from services.identity.store import IdentityStore, get_identity_store

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


# --- ADMIN SELF REGISTRATION ---
@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    store: IdentityStore = Depends(get_identity_store)
):
    if await store.get_identity_by_email(payload.email):
        raise ConflictError("Email sudah terdaftar")

    user = await store.create_identity(payload.email, payload.password, preconfirmed=True)
    return user


# --- UNIVERSAL LOGIN ---
@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    store: IdentityStore = Depends(get_identity_store)
):
    user = await store.authenticate(payload.email, payload.password)
    if not user:
        raise AuthError("Email atau password salah")

    if user.email_confirmed_at is None:
        raise AuthError("Email belum dikonfirmasi")

    landing = await resolve_landing(db, user.id)
    logger.info("Identity %s signed in, landing on %s", user.id, landing.destination.value)

    return LoginResponse(
        access_token=store.issue_token(user),
        user_id=user.id,
        email=user.email,
        **landing.model_dump()
    )


# --- CURRENT IDENTITY ---
@router.get("/me", response_model=MeOut)
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: AuthSession = Depends(get_current_user)
):
    landing = await resolve_landing(db, current_user.user_id)
    return MeOut(user_id=current_user.user_id, email=current_user.email, **landing.model_dump())


# --- WHERE TO GO AFTER LOGIN ---
@router.get("/landing", response_model=LandingOut)
async def get_landing(
    db: AsyncSession = Depends(get_db),
    current_user: AuthSession = Depends(get_current_user)
):
    return await resolve_landing(db, current_user.user_id)
