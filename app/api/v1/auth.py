"""Auth API endpoints."""
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db
from app.models.audit_log import AuditAction, AuditLog
from app.models.user import User
from app.repositories import user_repository
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    RefreshRequest,
    ResetPasswordRequest,
    SignUpRequest,
    TokenResponse,
    UserInfo,
)
from app.schemas.common import APIResponse
from app.services import auth_service, token_store

router = APIRouter()


# POST /auth/signup
@router.post("/signup", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: SignUpRequest, db: AsyncSession = Depends(get_db)):
    user = await auth_service.sign_up(db, body)
    tokens = await auth_service.issue_tokens(user)
    return APIResponse(
        status="success",
        data={
            "user": UserInfo.model_validate(user).model_dump(),
            "tokens": TokenResponse(**tokens).model_dump(),
        },
        message="Account created",
    )


# POST /auth/login
@router.post("/login", response_model=APIResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await auth_service.authenticate_user(db, body.email, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is disabled")

    tokens = await auth_service.issue_tokens(user)

    # Update last login
    user.last_login_at = datetime.now(timezone.utc)
    db.add(AuditLog(user_id=user.id, action=AuditAction.LOGIN, entity_type="user", entity_id=user.id))

    return APIResponse(status="success", data=TokenResponse(**tokens).model_dump())


# POST /auth/refresh
@router.post("/refresh", response_model=APIResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    user_id = await token_store.consume_refresh_token(body.refresh_token)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await user_repository.get_by_id(db, uuid.UUID(user_id))
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    tokens = await auth_service.issue_tokens(user)
    return APIResponse(status="success", data=TokenResponse(**tokens).model_dump())


# POST /auth/logout
@router.post("/logout", response_model=APIResponse)
async def logout(current_user: User = Depends(get_current_user)):
    # Invalidate all refresh tokens for this user
    await token_store.revoke_all_user_tokens(str(current_user.id))
    return APIResponse(status="success", message="Logged out successfully")


# GET /auth/me
@router.get("/me", response_model=APIResponse)
async def me(current_user: User = Depends(get_current_user)):
    return APIResponse(
        status="success",
        data=UserInfo.model_validate(current_user).model_dump(),
    )


# PUT /auth/me/profile
@router.put("/me/profile", response_model=APIResponse)
async def update_my_profile(
    body: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await auth_service.update_own_profile(db, current_user, body)
    return APIResponse(
        status="success",
        data=ProfileResponse.model_validate(profile).model_dump(),
    )


# POST /auth/forgot-password
@router.post("/forgot-password", response_model=APIResponse)
async def forgot_password(body: ForgotPasswordRequest, db: AsyncSession = Depends(get_db)):
    await auth_service.request_password_reset(db, body.email)
    return APIResponse(
        status="success",
        message="If an account exists for this email, a reset link has been issued",
    )


# POST /auth/reset-password
@router.post("/reset-password", response_model=APIResponse)
async def reset_password(body: ResetPasswordRequest, db: AsyncSession = Depends(get_db)):
    await auth_service.reset_password(db, body.token, body.new_password)
    return APIResponse(status="success", message="Password has been reset")
