from __future__ import annotations

from pathlib import Path
import subprocess
import sys
from typing import Any

import fakeredis
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import app.deps as deps  # noqa: E402
from services import identity as identity_service  # noqa: E402
import services.identity.ambient as ambient_module  # noqa: E402
import services.identity.audit as audit_module  # noqa: E402
from services.authn.settings import AuthnSettings  # noqa: E402
from services.identity import GitConfigAccessor, UserProfileStore  # noqa: E402
from services.identity.settings import IdentitySettings  # noqa: E402


class FakeGit:
    """Stands in for ``subprocess.run`` and records every git invocation."""

    def __init__(self) -> None:
        self.config: dict[str, str] = {}
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self.fail_keys: set[str] = set()
        self.fail_reads = False

    def reads(self) -> list[list[str]]:
        return [call for call in self.calls if "--get" in call]

    def writes(self) -> list[list[str]]:
        return [call for call in self.calls if "--get" not in call]

    def __call__(self, command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(command))
        self.kwargs.append(kwargs)
        if command[1:] == ["--version"]:
            return subprocess.CompletedProcess(command, 0, "git version 2.43.0\n", "")
        args = command[3:]
        if args and args[0] == "--get":
            if self.fail_reads:
                raise subprocess.TimeoutExpired(command, kwargs.get("timeout", 0))
            value = self.config.get(args[1])
            if value is None:
                return subprocess.CompletedProcess(command, 1, "", "")
            return subprocess.CompletedProcess(command, 0, f"{value}\n", "")
        key, value = args
        if key in self.fail_keys:
            return subprocess.CompletedProcess(
                command, 255, "", "error: could not lock config file"
            )
        self.config[key] = value
        return subprocess.CompletedProcess(command, 0, "", "")


@pytest.fixture(autouse=True)
def _default_identity_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = IdentitySettings(redis_url="redis://unused:6379/0")
    monkeypatch.setattr(ambient_module, "get_identity_settings", lambda: settings)
    monkeypatch.setattr(audit_module, "get_identity_settings", lambda: settings)
    monkeypatch.setattr(audit_module, "get_audit_sink", lambda: None)


@pytest.fixture(autouse=True)
def _default_auth_mode_dev_bypass(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        deps,
        "get_authn_settings",
        lambda: AuthnSettings(mode="dev-bypass"),
    )


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr(ambient_module.subprocess, "run", fake)
    return fake


@pytest.fixture
def profile_store(
    monkeypatch: pytest.MonkeyPatch, fake_git: FakeGit
) -> UserProfileStore:
    store = UserProfileStore(fakeredis.FakeRedis())
    monkeypatch.setattr(identity_service, "get_profile_store", lambda: store)
    monkeypatch.setattr(
        identity_service, "get_git_config_accessor", lambda: GitConfigAccessor()
    )
    return store
