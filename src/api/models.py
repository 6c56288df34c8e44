"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class GoogleUserInfo(BaseModel):
    """Profile claims sent by the client alongside the Google access token."""
    sub: Optional[str] = Field(None, description="Google subject identifier")
    email: Optional[str] = None
    name: Optional[str] = None


class GoogleTokenRequest(BaseModel):
    """Request model for Google sign-in.

    Fields are optional so that a missing value surfaces as our own
    "Missing token or user info" error.
    """
    access_token: Optional[str] = None
    user_info: Optional[GoogleUserInfo] = None


class UserResponse(BaseModel):
    """Response model for a user profile."""
    id: str
    google_id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    user: UserResponse


class VerifyResponse(BaseModel):
    id: str
    name: str
    email: str


class AnalyzePasswordRequest(BaseModel):
    password: Optional[str] = None


class PasswordFeedback(BaseModel):
    warning: str = Field("", description="First warning raised, empty if none")
    warnings: list[str] = Field(default_factory=list, description="Every warning, in check order")
    suggestions: list[str] = Field(default_factory=list)


class PasswordCriteria(BaseModel):
    length: bool
    hasUpperCase: bool
    hasLowerCase: bool
    hasNumbers: bool
    hasSpecialChar: bool


class AnalyzePasswordResponse(BaseModel):
    score: int = Field(..., ge=0, le=4, description="Strength score, 0 (weak) to 4 (strong)")
    feedback: PasswordFeedback
    criteria: PasswordCriteria


class ErrorResponse(BaseModel):
    error: str
