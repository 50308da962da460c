from __future__ import annotations

from typing import Any, Optional, cast

from redis import Redis
from redis.exceptions import RedisError

from .errors import PersistenceFailure
from .settings import get_identity_settings
from .types import IdentityRecord


_PROFILE_PREFIX = "user:profile:"
_GIT_NAME = "git_name"
_GIT_EMAIL = "git_email"
_ONBOARDED = "has_completed_onboarding"


def _decode(raw: Optional[bytes]) -> str | None:
    if raw is None:
        return None
    value = raw.decode("utf-8")
    return value or None


class UserProfileStore:
    """Per-user profile fields kept in one Redis hash per user id."""

    def __init__(self, redis: Optional[Redis] = None) -> None:
        if redis is not None:
            self.redis = redis
            return
        settings = get_identity_settings()
        redis_cls = cast(Any, Redis)
        self.redis = cast(Redis, redis_cls.from_url(settings.redis_url))

    def _key(self, user_id: str) -> str:
        if not user_id:
            raise ValueError("user_id required")
        return f"{_PROFILE_PREFIX}{user_id}"

    def get_git_config(self, user_id: str) -> Optional[IdentityRecord]:
        key = self._key(user_id)
        try:
            raw = cast(
                list[Optional[bytes]],
                self.redis.hmget(key, [_GIT_NAME, _GIT_EMAIL]),
            )
        except RedisError as exc:
            raise PersistenceFailure("failed to read git config") from exc
        if raw[0] is None and raw[1] is None:
            return None
        return IdentityRecord(name=_decode(raw[0]), email=_decode(raw[1]))

    def update_git_config(
        self, user_id: str, name: str | None, email: str | None
    ) -> None:
        key = self._key(user_id)
        # single HSET keeps the name/email pair atomic per user
        try:
            self.redis.hset(
                key, mapping={_GIT_NAME: name or "", _GIT_EMAIL: email or ""}
            )
        except RedisError as exc:
            raise PersistenceFailure("failed to write git config") from exc

    def complete_onboarding(self, user_id: str) -> None:
        try:
            self.redis.hset(self._key(user_id), _ONBOARDED, "1")
        except RedisError as exc:
            raise PersistenceFailure("failed to write onboarding flag") from exc

    def has_completed_onboarding(self, user_id: str) -> bool:
        try:
            raw = cast(Optional[bytes], self.redis.hget(self._key(user_id), _ONBOARDED))
        except RedisError as exc:
            raise PersistenceFailure("failed to read onboarding flag") from exc
        return raw == b"1"

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError:
            return False


def get_profile_store() -> UserProfileStore:
    return UserProfileStore()
