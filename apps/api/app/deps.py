from __future__ import annotations

from fastapi import HTTPException, Request

from services.authn import UserIdentity, get_authn_settings, verify_access_token


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return None


def _require_dev_bypass_identity(request: Request) -> UserIdentity:
    settings = get_authn_settings()
    user_id = request.headers.get(settings.dev_bypass_user_id_header)
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="unauthorized")
    return UserIdentity(user_id=user_id.strip())


def auth_disabled() -> bool:
    return get_authn_settings().mode == "disabled"


def require_user_identity(request: Request) -> UserIdentity:
    settings = get_authn_settings()
    if settings.mode == "disabled":
        return UserIdentity(user_id=settings.disabled_user_id)
    if settings.mode == "dev-bypass":
        return _require_dev_bypass_identity(request)
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="unauthorized")
    try:
        return verify_access_token(token)
    except PermissionError as exc:
        raise HTTPException(status_code=401, detail="unauthorized") from exc