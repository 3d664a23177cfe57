# services/identity/dependencies.py
from typing import Optional

from fastapi import Depends

from shared.auth import AuthSession, oauth2_scheme
from shared.errors import AuthError
from services.identity.store import IdentityStore, get_identity_store


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    store: IdentityStore = Depends(get_identity_store),
) -> AuthSession:
    if not token:
        raise AuthError("Unauthorized - No auth header")

    user_id = await store.verify_token(token)
    if not user_id:
        raise AuthError("Unauthorized - Invalid token")

    user = await store.get_identity(user_id)
    return AuthSession(user_id=user.id, email=user.email, token=token)
