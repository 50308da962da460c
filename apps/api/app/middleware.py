from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request
from starlette.responses import Response

from services.structured_log import log_event, new_request_id

logger = logging.getLogger(__name__)


def get_request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    return request_id or new_request_id()


async def add_request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """リクエストの相関IDとユーザー設定API向けアクセスログを付与する．

    Parameters:
        request: 受信したHTTPリクエスト．
        call_next: 次のミドルウェアまたはエンドポイントを呼ぶコールバック．

    Returns:
        後続処理のレスポンス．
    """
    request_id = request.headers.get("x-request-id") or new_request_id()
    request.state.request_id = request_id
    start = time.monotonic()
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    path = request.url.path
    if path.startswith("/api/user/"):
        duration_ms = int((time.monotonic() - start) * 1000)
        log_event(
            logger,
            event="identity_http_request",
            request_id=request_id,
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
    return response
