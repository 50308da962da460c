from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def resolve_env_file() -> str:
    override = os.getenv("GIT_IDENTITY_ENV_FILE")
    if override:
        return override
    cwd = Path.cwd()
    for base in (cwd, *cwd.parents):
        candidate = base / ".env"
        if candidate.is_file():
            return str(candidate)
    return ".env"


class IdentitySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GIT_IDENTITY_",
        extra="ignore",
    )

    redis_url: str = "redis://localhost:6379/0"
    git_binary: str = "git"
    command_timeout_seconds: float = 5.0
    global_config_path: Optional[str] = None
    log_identity_values: bool = False
    audit_db_path: Optional[str] = None


def load_identity_settings_uncached() -> IdentitySettings:
    return IdentitySettings(_env_file=resolve_env_file())  # pyright: ignore[reportCallIssue]


@lru_cache
def get_identity_settings() -> IdentitySettings:
    """アイデンティティ設定を環境変数から読み込み，キャッシュして返す．

    Returns:
        解決済みの設定オブジェクト．
    """
    return load_identity_settings_uncached()
