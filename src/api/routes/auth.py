"""Authentication routes (Google sign-in, token verification)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_identity_provider, get_user_repo
from api.models import AuthResponse, GoogleTokenRequest, UserResponse, VerifyResponse
from api.security import create_access_token, get_current_user_required
from domain.model.errors import AuthenticationError, StoreError, ValidationError
from domain.model.user import User
from port.identity_provider import IdentityProvider
from port.user_repository import UserRepository
from services.auth_service import sign_in_with_google


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/google/token", response_model=AuthResponse)
async def google_token(
    request: GoogleTokenRequest,
    repo: UserRepository = Depends(get_user_repo),
    identity_provider: IdentityProvider | None = Depends(get_identity_provider),
):
    """Sign in with a Google access token and profile claims.

    Creates the user on first sign-in and returns a 24-hour session token.

    Raises:
        HTTPException: 400 if token or user info is missing,
            401 if the identity cannot be accepted, 500 on store failure
    """
    user_info = request.user_info.model_dump() if request.user_info else None
    try:
        user = await sign_in_with_google(
            repo, request.access_token, user_info, identity_provider,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    token = create_access_token(user)
    return AuthResponse(token=token, user=UserResponse(**user.to_public_dict()))


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: User = Depends(get_current_user_required)):
    """Return the identity behind a valid bearer token."""
    return VerifyResponse(id=current_user.id, name=current_user.name, email=current_user.email)
