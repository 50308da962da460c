from __future__ import annotations

from fastapi import APIRouter, Response, status

from app.schemas.health import HealthCheck, HealthResponse
from services import identity as identity_service

router = APIRouter(prefix="/api", tags=["health"])


def _redis_check() -> HealthCheck:
    if identity_service.get_profile_store().ping():
        return HealthCheck(status="ok")
    return HealthCheck(status="failed", detail="user store unreachable")


def _git_check() -> HealthCheck:
    accessor = identity_service.get_git_config_accessor()
    if accessor.available():
        return HealthCheck(status="ok")
    return HealthCheck(
        status="failed",
        detail=f"git executable unavailable: {accessor.git_binary}",
    )


def _collect_checks() -> dict[str, HealthCheck]:
    return {"redis": _redis_check(), "git": _git_check()}


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
)
def health() -> HealthResponse:
    checks = _collect_checks()
    overall = "ok" if all(c.status == "ok" for c in checks.values()) else "degraded"
    return HealthResponse(status=overall, checks=checks)


@router.get(
    "/ready",
    response_model=HealthResponse,
    response_model_exclude_none=True,
)
def ready(response: Response) -> HealthResponse:
    # readiness depends on the store only
    checks = _collect_checks()
    is_ready = checks["redis"].status == "ok"
    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    overall = "ok" if all(c.status == "ok" for c in checks.values()) else "degraded"
    return HealthResponse(status=overall, checks=checks)
