from __future__ import annotations

import logging
from typing import Protocol, cast

from services.structured_log import log_event

from .ambient import GIT_EMAIL_KEY, GIT_NAME_KEY
from .audit import record_identity_event
from .errors import MirrorFailure
from .types import IdentityRecord
from .validation import validate_identity

logger = logging.getLogger(__name__)


class IdentityStoreWriter(Protocol):
    def update_git_config(
        self, user_id: str, name: str | None, email: str | None
    ) -> None: ...


class AmbientIdentityWriter(Protocol):
    def write_global_identity(self, key: str, value: str) -> None: ...


class IdentityPublisher:
    def __init__(
        self, store: IdentityStoreWriter, ambient: AmbientIdentityWriter
    ) -> None:
        self.store = store
        self.ambient = ambient

    def publish(self, user_id: str, candidate: IdentityRecord) -> IdentityRecord:
        """検証・保存の後，グローバルなgit設定へアイデンティティを反映する．

        Parameters:
            user_id: 呼び出し元のユーザーID．
            candidate: 公開するname/emailの組．

        Returns:
            検証済みの組．反映の失敗はログに記録し，例外にはしない．

        Raises:
            ValidationError: 候補が不完全または不正な場合．
            PersistenceFailure: ストアへの書き込みに失敗した場合．反映は行わない．
        """
        record = validate_identity(candidate)
        name = cast(str, record.name)
        email = cast(str, record.email)
        self.store.update_git_config(user_id, name, email)

        mirrored: list[str] = []
        for key, value in ((GIT_NAME_KEY, name), (GIT_EMAIL_KEY, email)):
            try:
                self.ambient.write_global_identity(key, value)
            except MirrorFailure as exc:
                log_event(
                    logger,
                    event="identity_mirror_failed",
                    level=logging.WARNING,
                    user_id=user_id,
                    key=key,
                    error_message=str(exc),
                )
                continue
            mirrored.append(key)

        record_identity_event(
            logger,
            event="identity_published",
            user_id=user_id,
            record=record,
            mirrored=mirrored,
        )
        return record
