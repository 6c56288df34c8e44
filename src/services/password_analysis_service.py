"""Password analysis service: scores a password and records it in history.

Pure business logic with no HTTP dependencies.
"""

import logging
from datetime import datetime, timezone

from domain.model.errors import AuthenticationError, ValidationError
from domain.model.password import StrengthResult
from port.user_repository import UserRepository
from services.password_strength import score_password

logger = logging.getLogger(__name__)


def analyze_password(
    repo: UserRepository,
    user_id: str,
    password: str | None,
    now: datetime | None = None,
) -> StrengthResult:
    """Score a password and append it to the user's password history.

    Raises:
        ValidationError: password missing or empty
        AuthenticationError: user no longer exists
        StoreError: history append failed
    """
    if not password:
        raise ValidationError("Password is required")

    result = score_password(password)

    entry = repo.append_password_history(
        user_id, password, now or datetime.now(timezone.utc),
    )
    if entry is None:
        raise AuthenticationError("User not found")

    logger.info(
        "Password analyzed",
        extra={"userId": user_id, "score": result.score},
    )
    return result
