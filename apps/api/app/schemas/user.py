from __future__ import annotations

from typing import Optional

from .base import ApiModel, LenientApiModel


class GitConfigUpdateRequest(LenientApiModel):
    git_name: Optional[str] = None
    git_email: Optional[str] = None


class GitConfigResponse(ApiModel):
    success: bool = True
    git_name: Optional[str] = None
    git_email: Optional[str] = None


class OnboardingCompleteResponse(ApiModel):
    success: bool = True
    message: str


class OnboardingStatusResponse(ApiModel):
    success: bool = True
    has_completed_onboarding: bool
