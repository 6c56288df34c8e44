"""Auth service — Google sign-in business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

from domain.model.errors import AuthenticationError, DuplicateError, ValidationError
from domain.model.user import User
from port.identity_provider import IdentityProvider
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "email", "name")


def _validate_user_info(access_token: str | None, user_info: dict | None) -> None:
    if not access_token or not user_info:
        raise ValidationError("Missing token or user info")
    if any(not user_info.get(claim) for claim in REQUIRED_CLAIMS):
        raise ValidationError("Missing token or user info")


async def _confirm_with_provider(
    identity_provider: IdentityProvider, access_token: str, subject: str,
) -> None:
    claims = await identity_provider.fetch_userinfo(access_token)
    if claims is None:
        raise AuthenticationError("Invalid access token")
    if str(claims.get("sub")) != str(subject):
        logger.warning("Access token subject mismatch", extra={"googleId": subject})
        raise AuthenticationError("Access token does not match user info")


async def sign_in_with_google(
    repo: UserRepository,
    access_token: str | None,
    user_info: dict | None,
    identity_provider: IdentityProvider | None = None,
) -> User:
    """Find or create the user for a Google identity.

    When an identity provider is given, the access token is confirmed
    against it before any record is touched.

    Raises:
        ValidationError: token or profile claims missing
        AuthenticationError: token rejected, or email bound to another account
        StoreError: user store failure
    """
    _validate_user_info(access_token, user_info)

    if identity_provider is not None:
        await _confirm_with_provider(identity_provider, access_token, user_info["sub"])

    try:
        user = repo.upsert_google_user(
            google_id=str(user_info["sub"]),
            email=user_info["email"],
            name=user_info["name"],
        )
    except DuplicateError as e:
        raise AuthenticationError("User already exists with this email") from e

    logger.info("User signed in", extra={"userId": user.id, "email": user.email})
    return user
