from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from services.identity.settings import resolve_env_file


class AuthnSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=resolve_env_file(),
        extra="ignore",
    )

    mode: Literal["token", "dev-bypass", "disabled"] = "token"
    token_secret: str | None = None
    token_algorithm: str = "HS256"
    dev_bypass_user_id_header: str = "X-Dev-User-Id"
    disabled_user_id: str = "default"


@lru_cache(maxsize=1)
def get_authn_settings() -> AuthnSettings:
    return AuthnSettings()
