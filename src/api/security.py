"""JWT session tokens and authentication dependencies."""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from api.dependencies import get_user_repo
from domain.model.errors import StoreError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

security = HTTPBearer(auto_error=False)


def create_access_token(user: User, issued_at: Optional[datetime] = None) -> str:
    """Create a session token carrying the user's id, email and name."""
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str, now: Optional[datetime] = None) -> Optional[str]:
    """Verify signature and expiry, returning the user id or None.

    `now` overrides the clock used for the expiry check.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"verify_exp": now is None},
        )
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None

    if now is not None:
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or now.timestamp() >= exp:
            logger.debug("JWT verification failed: token expired")
            return None

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None
    return user_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """User id from a valid bearer token. Raises 401 without touching the store."""
    if not credentials:
        raise _unauthorized("No token provided")

    user_id = verify_token(credentials.credentials)
    if not user_id:
        raise _unauthorized("Invalid token")
    return user_id


def get_current_user_required(
    user_id: str = Depends(get_token_user_id),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated.

    Sub-dependencies resolve in declaration order, so a missing or invalid
    token is rejected before the user store is needed.
    """
    try:
        user = user_repo.get_by_id(user_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    if not user:
        raise _unauthorized("User not found")

    return user
