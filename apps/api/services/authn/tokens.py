from __future__ import annotations

from typing import Any

import jwt
from jwt import InvalidTokenError

from .settings import get_authn_settings
from .types import UserIdentity


def _claim_user_id(claims: dict[str, Any]) -> str | None:
    for claim in ("userId", "sub"):
        value = claims.get(claim)
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and value:
            return value
    return None


def verify_access_token(token: str) -> UserIdentity:
    settings = get_authn_settings()
    secret = settings.token_secret
    if not secret:
        raise PermissionError("token secret not configured")

    try:
        claims = jwt.decode(token, secret, algorithms=[settings.token_algorithm])
    except InvalidTokenError as exc:
        raise PermissionError("unauthorized") from exc

    user_id = _claim_user_id(claims)
    if user_id is None:
        raise PermissionError("unauthorized")

    username = claims.get("username")
    return UserIdentity(
        user_id=user_id,
        username=username if isinstance(username, str) else None,
    )


def issue_access_token(user_id: str, *, username: str | None = None) -> str:
    settings = get_authn_settings()
    if not settings.token_secret:
        raise PermissionError("token secret not configured")
    claims: dict[str, Any] = {"userId": user_id}
    if username:
        claims["username"] = username
    return jwt.encode(claims, settings.token_secret, algorithm=settings.token_algorithm)
