from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

IdentitySource = Literal["stored", "ambient", "empty"]


@dataclass(frozen=True)
class IdentityRecord:
    """A version-control identity; either field may be unset."""

    name: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        return not self.name and not self.email

    def as_dict(self) -> dict[str, str | None]:
        return {"git_name": self.name, "git_email": self.email}


@dataclass(frozen=True)
class ResolvedIdentity:
    source: IdentitySource
    record: IdentityRecord = field(default_factory=IdentityRecord)
