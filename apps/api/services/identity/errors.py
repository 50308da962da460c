from __future__ import annotations


class IdentityError(Exception):
    """Base class for identity resolution and publishing failures."""


class ValidationError(IdentityError):
    """Candidate identity rejected before any side effect."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class PersistenceFailure(IdentityError):
    """The per-user store could not be read or written."""


class MirrorFailure(IdentityError):
    """The ambient git configuration could not be probed or written."""
