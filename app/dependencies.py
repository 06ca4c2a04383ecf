"""FastAPI dependency injection utilities."""
import uuid as _uuid
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory
from app.integrations.storage.client import StorageClient
from app.models.user import User
from app.services.auth_service import decode_access_token
from app.utils import query_cache

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            query_cache.discard_pending(session)
            await session.rollback()
            raise
        await query_cache.flush_pending(session)


async def _load_user(db: AsyncSession, token: str) -> User:
    try:
        payload = decode_access_token(token)
    except JWTError as e:
        detail = "Token expired" if "expired" in str(e).lower() else "Invalid token"
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    try:
        user = await db.get(User, _uuid.UUID(user_id))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or inactive user")
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extract current user from JWT access token."""
    return await _load_user(db, credentials.credentials)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_security),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Like ``get_current_user`` but anonymous or invalid credentials yield ``None``."""
    if credentials is None:
        return None
    try:
        return await _load_user(db, credentials.credentials)
    except HTTPException:
        return None


async def _admin_user(current_user: User = Depends(get_current_user)) -> User:
    # the profile row is loaded with the user, so the flag is read once per request
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def require_admin():
    """Admin capability dependency (``Profile.is_admin``)."""
    return Depends(_admin_user)


async def get_storage_client() -> AsyncGenerator[StorageClient, None]:
    async with StorageClient() as client:
        yield client
