from __future__ import annotations

from typing import Dict, Literal, Optional

from .base import ApiModel

CheckStatus = Literal["ok", "failed"]


class HealthCheck(ApiModel):
    status: CheckStatus
    detail: Optional[str] = None


class HealthResponse(ApiModel):
    status: Literal["ok", "degraded"]
    checks: Dict[str, HealthCheck]
