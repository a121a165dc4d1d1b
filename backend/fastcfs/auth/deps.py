"""FastAPI dependencies for authentication and authorization.

Dependencies:
  get_current_user   → decode JWT, check revocation, load user from DB
  require_role(...)  → restrict to specific roles
  require_admin      → require_role(UserRole.ADMIN), used by every
                       /api/admin/* router
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.jwt import decode_token
from fastcfs.auth.revocation import TokenRevocation
from fastcfs.database import get_db
from fastcfs.models.user import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ── Core user dependency ────────────────────────────────────

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Decode the JWT, reject revoked tokens, and return the active user.

    The decoded payload is stashed on the user as `_token_payload` so the
    logout route can read `exp` without decoding again.
    """
    payload = decode_token(token)
    user_id = payload.get("sub")
    if not user_id or payload.get("type") != "access":
        raise _unauthorized("Invalid or expired token")

    if await TokenRevocation.is_revoked(token):
        raise _unauthorized("Token has been revoked")
    if await TokenRevocation.is_user_revoked(user_id):
        raise _unauthorized("Session expired. Please log in again.")

    try:
        user = await db.get(User, int(user_id))
    except ValueError:
        user = None
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    user._token_payload = payload  # type: ignore[attr-defined]
    return user


# ── Role-based access control ───────────────────────────────

def require_role(*roles: UserRole):
    """Dependency factory: restrict to one or more roles.

    Usage:
        @router.get("/admin-only")
        async def admin_view(user: User = Depends(require_role(UserRole.ADMIN))):
            ...
    """
    allowed = {r.value for r in roles}

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(sorted(allowed))}",
            )
        return user

    return _check


require_admin = require_role(UserRole.ADMIN)
