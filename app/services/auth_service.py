"""Authentication service - passwords, JWT tokens, signup and password reset."""
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.audit_log import AuditAction, AuditLog
from app.models.user import Profile, User
from app.repositories import user_repository
from app.schemas.auth import ProfileUpdate, SignUpRequest
from app.services import token_store

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, is_admin: bool = False) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "adm": is_admin,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_refresh_token() -> str:
    return str(uuid.uuid4())


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await user_repository.get_by_email(db, email)
    if user and verify_password(password, user.password_hash):
        return user
    return None


async def issue_tokens(user: User) -> dict:
    """Create an access/refresh pair and register the refresh token."""
    refresh_token = create_refresh_token()
    await token_store.store_refresh_token(refresh_token, str(user.id))
    return {
        "access_token": create_access_token(str(user.id), user.is_admin),
        "refresh_token": refresh_token,
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


async def sign_up(db: AsyncSession, data: SignUpRequest) -> User:
    email = data.email.lower()
    if await user_repository.get_by_email(db, email):
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    user = User(email=email, password_hash=hash_password(data.password), is_active=True)
    profile = Profile(
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
        phone_number=data.phone_number,
        professional_type=data.professional_type,
        is_admin=False,
    )
    user = await user_repository.create(db, user, profile)

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.CREATE,
        entity_type="user",
        entity_id=user.id,
        changes={"email": email},
    ))
    return user


async def update_own_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> Profile:
    profile = user.profile
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    return await user_repository.update_profile(db, profile)


async def request_password_reset(db: AsyncSession, email: str) -> str | None:
    """Issue a single-use reset token when ``email`` belongs to an active user.

    The caller always reports success so account existence is not revealed.
    """
    user = await user_repository.get_by_email(db, email)
    if not user or not user.is_active:
        logger.info("Password reset requested for unknown email")
        return None
    token = secrets.token_urlsafe(32)
    await token_store.store_reset_token(token, str(user.id))
    logger.info("Password reset token issued for user %s", user.id)
    return token


async def reset_password(db: AsyncSession, token: str, new_password: str) -> User:
    user_id = await token_store.consume_reset_token(token)
    if not user_id:
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")

    user = await user_repository.get_by_id(db, uuid.UUID(user_id))
    if not user or not user.is_active:
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")

    user.password_hash = hash_password(new_password)
    await user_repository.update(db, user)
    await token_store.revoke_all_user_tokens(str(user.id))

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.UPDATE,
        entity_type="user",
        entity_id=user.id,
        changes={"password": "reset"},
    ))
    return user
