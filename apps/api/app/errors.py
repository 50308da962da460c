from __future__ import annotations

import logging
from typing import Any, Optional, cast

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from app.middleware import get_request_id
from app.schemas.errors import ErrorResponse
from services.structured_log import log_event


logger = logging.getLogger(__name__)


def _as_any_list(value: list[object]) -> list[Any]:
    return [item for item in value]


def _as_any_dict(value: dict[object, object]) -> dict[Any, Any]:
    return {key: item for key, item in value.items()}


def error_payload(message: str, details: Optional[Any] = None) -> dict[str, Any]:
    payload = ErrorResponse(error=message, details=details)
    return payload.model_dump(by_alias=True, exclude_none=True)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(message))


def _sanitize_error_details(details: Any) -> Any:
    if isinstance(details, BaseException):
        return str(details)
    if isinstance(details, dict):
        sanitized: dict[Any, Any] = {}
        for key, value in _as_any_dict(
            cast(dict[object, object], details)
        ).items():
            sanitized[key] = _sanitize_error_details(value)
        return sanitized
    if isinstance(details, list):
        sanitized_list: list[Any] = []
        for value in _as_any_list(
            cast(list[object], details)
        ):
            sanitized_list.append(_sanitize_error_details(value))
        return sanitized_list
    return details


def http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(HTTPException, exc)
    detail: Any = http_exc.detail
    message = detail if isinstance(detail, str) else "request failed"
    details: Any = (
        None
        if isinstance(detail, str)
        else jsonable_encoder(_sanitize_error_details(detail))
    )
    return JSONResponse(
        status_code=http_exc.status_code,
        content=error_payload(message, details),
        headers=http_exc.headers,
    )


def validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    details = jsonable_encoder(_sanitize_error_details(validation_exc.errors()))
    return JSONResponse(
        status_code=422,
        content=error_payload("validation error", details),
    )


def value_error_handler(_: Request, exc: Exception) -> JSONResponse:
    value_exc = cast(ValueError, exc)
    return error_response(400, str(value_exc))


def redis_error_handler(request: Request, exc: Exception) -> JSONResponse:
    redis_exc = cast(RedisError, exc)
    logger.error("Redis error", exc_info=redis_exc)
    log_event(
        logger,
        event="identity_redis_error",
        level=logging.ERROR,
        request_id=get_request_id(request),
        error_message=str(redis_exc),
    )
    return error_response(503, "redis unavailable")
