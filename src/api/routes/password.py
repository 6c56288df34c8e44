"""Password analysis route."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AnalyzePasswordRequest, AnalyzePasswordResponse
from api.security import get_current_user_required
from domain.model.errors import AuthenticationError, StoreError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services.password_analysis_service import analyze_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["password"])


@router.post("/analyze-password", response_model=AnalyzePasswordResponse)
async def analyze(
    request: AnalyzePasswordRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Score a password and record it in the caller's password history."""
    try:
        result = analyze_password(repo, current_user.id, request.password)
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

    return AnalyzePasswordResponse(
        score=result.score,
        feedback=result.feedback.to_dict(),
        criteria=result.criteria.to_dict(),
    )
