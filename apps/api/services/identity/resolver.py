from __future__ import annotations

import logging
from typing import Optional, Protocol

from .audit import record_identity_event
from .types import IdentityRecord, ResolvedIdentity

logger = logging.getLogger(__name__)


class StoredIdentitySource(Protocol):
    def get_git_config(self, user_id: str) -> Optional[IdentityRecord]: ...

    def update_git_config(
        self, user_id: str, name: str | None, email: str | None
    ) -> None: ...


class AmbientIdentitySource(Protocol):
    def probe_system_identity(self) -> IdentityRecord: ...


class IdentityResolver:
    """Two-tier read-through lookup: stored record, then the ambient git config.

    A non-empty ambient value is written back to the store before it is
    returned, so the next lookup for the same user is served from the store.
    """

    def __init__(
        self, store: StoredIdentitySource, ambient: AmbientIdentitySource
    ) -> None:
        self.store = store
        self.ambient = ambient

    def lookup(self, user_id: str) -> ResolvedIdentity:
        stored = self.store.get_git_config(user_id)
        if stored is not None and not stored.is_empty():
            return ResolvedIdentity(source="stored", record=stored)

        probed = self.ambient.probe_system_identity()
        if probed.is_empty():
            return ResolvedIdentity(source="empty", record=IdentityRecord())

        # cache-fill must land before the ambient value is reported
        self.store.update_git_config(user_id, probed.name, probed.email)
        record_identity_event(
            logger,
            event="identity_cache_fill",
            user_id=user_id,
            record=probed,
        )
        return ResolvedIdentity(source="ambient", record=probed)

    def resolve(self, user_id: str) -> IdentityRecord:
        return self.lookup(user_id).record
