"""Auth routes for the admin dashboard.

Route overview:
  POST /register  create an admin account (only if ALLOW_REGISTRATION)
  POST /login     username + password login
  POST /logout    revoke the presented token
  GET  /me        return the current user profile
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import get_current_user, oauth2_scheme
from fastcfs.auth.jwt import create_access_token
from fastcfs.auth.password import hash_password, verify_password
from fastcfs.auth.revocation import TokenRevocation
from fastcfs.config import settings
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ConflictError
from fastcfs.models.user import User, UserRole
from fastcfs.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user_id=user.id, role=user.role),
        user=UserOut.model_validate(user),
    )


# ── POST /register ──────────────────────────────────────────

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an admin account.  Disabled unless ALLOW_REGISTRATION is set."""
    if not settings.allow_registration:
        raise HTTPException(status_code=403, detail="Registration is disabled")

    existing = await db.execute(select(User).where(User.username == body.username))
    if existing.scalar_one_or_none():
        raise ConflictError("Username already exists")

    user = User(
        username=body.username,
        hashed_password=hash_password(body.password),
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    await db.flush()

    logger.info("Registered user %s", user.username)
    return _build_token_response(user)


# ── POST /login ──────────────────────────────────────────────

@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.username == body.username))
    user = result.scalar_one_or_none()

    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return _build_token_response(user)


# ── POST /logout ─────────────────────────────────────────────

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(oauth2_scheme),
    user: User = Depends(get_current_user),
):
    """Blacklist the current token until it would have expired anyway."""
    payload: dict = getattr(user, "_token_payload", {})
    await TokenRevocation.revoke_token(token, float(payload.get("exp", 0)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── GET /me ──────────────────────────────────────────────────

@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)
