from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.deps import auth_disabled, require_user_identity
from app.schemas.errors import ErrorResponse
from app.schemas.user import (
    GitConfigResponse,
    GitConfigUpdateRequest,
    OnboardingCompleteResponse,
    OnboardingStatusResponse,
)
from services import identity as identity_service
from services.authn import UserIdentity
from services.identity import IdentityError, IdentityRecord, ValidationError
from services.identity.validation import INVALID_EMAIL

router = APIRouter(prefix="/api/user", tags=["user"])
logger = logging.getLogger(__name__)

_UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Unauthorized"}}
_FAILED = {500: {"model": ErrorResponse, "description": "Store or git failure"}}

_VALIDATION_MESSAGES = {
    INVALID_EMAIL: "Invalid email format",
}


@router.get(
    "/git-config",
    response_model=GitConfigResponse,
    responses={**_UNAUTHORIZED, **_FAILED},
)
def get_git_config(
    user: UserIdentity = Depends(require_user_identity),
) -> GitConfigResponse:
    resolver = identity_service.get_identity_resolver()
    try:
        record = resolver.resolve(user.user_id)
    except IdentityError as exc:
        logger.error("Error getting git config", exc_info=exc)
        raise HTTPException(
            status_code=500, detail="Failed to get git configuration"
        ) from exc
    return GitConfigResponse(git_name=record.name, git_email=record.email)


@router.post(
    "/git-config",
    response_model=GitConfigResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        **_UNAUTHORIZED,
        **_FAILED,
    },
)
def update_git_config(
    request: Optional[GitConfigUpdateRequest] = None,
    user: UserIdentity = Depends(require_user_identity),
) -> GitConfigResponse:
    publisher = identity_service.get_identity_publisher()
    body = request or GitConfigUpdateRequest()
    candidate = IdentityRecord(name=body.git_name, email=body.git_email)
    try:
        record = publisher.publish(user.user_id, candidate)
    except ValidationError as exc:
        detail = _VALIDATION_MESSAGES.get(
            exc.reason, "Git name and email are required"
        )
        raise HTTPException(status_code=400, detail=detail) from exc
    except IdentityError as exc:
        logger.error("Error updating git config", exc_info=exc)
        raise HTTPException(
            status_code=500, detail="Failed to update git configuration"
        ) from exc
    return GitConfigResponse(git_name=record.name, git_email=record.email)


@router.post(
    "/complete-onboarding",
    response_model=OnboardingCompleteResponse,
    responses={**_UNAUTHORIZED, **_FAILED},
)
def complete_onboarding(
    user: UserIdentity = Depends(require_user_identity),
) -> OnboardingCompleteResponse:
    if auth_disabled():
        return OnboardingCompleteResponse(
            message="Onboarding completed successfully (no-auth mode)"
        )
    store = identity_service.get_profile_store()
    try:
        store.complete_onboarding(user.user_id)
    except IdentityError as exc:
        logger.error("Error completing onboarding", exc_info=exc)
        raise HTTPException(
            status_code=500, detail="Failed to complete onboarding"
        ) from exc
    return OnboardingCompleteResponse(message="Onboarding completed successfully")


@router.get(
    "/onboarding-status",
    response_model=OnboardingStatusResponse,
    responses={**_UNAUTHORIZED, **_FAILED},
)
def onboarding_status(
    user: UserIdentity = Depends(require_user_identity),
) -> OnboardingStatusResponse:
    if auth_disabled():
        return OnboardingStatusResponse(has_completed_onboarding=True)
    store = identity_service.get_profile_store()
    try:
        completed = store.has_completed_onboarding(user.user_id)
    except IdentityError as exc:
        logger.error("Error checking onboarding status", exc_info=exc)
        raise HTTPException(
            status_code=500, detail="Failed to check onboarding status"
        ) from exc
    return OnboardingStatusResponse(has_completed_onboarding=completed)
