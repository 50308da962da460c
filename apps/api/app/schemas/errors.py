from __future__ import annotations

from typing import Any, Optional

from .base import ApiModel


class ErrorResponse(ApiModel):
    error: str
    details: Optional[Any] = None
