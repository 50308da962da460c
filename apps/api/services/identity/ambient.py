from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Mapping

from .errors import MirrorFailure
from .settings import get_identity_settings
from .types import IdentityRecord

logger = logging.getLogger(__name__)

GIT_NAME_KEY = "user.name"
GIT_EMAIL_KEY = "user.email"
_WRITABLE_KEYS = frozenset({GIT_NAME_KEY, GIT_EMAIL_KEY})

# `git config --get` exits with 1 when the key is not set
_EXIT_KEY_UNSET = 1


def format_command(command: list[str]) -> str:
    """Render an argument vector as a shell-quoted line for log output."""
    return shlex.join(command)


class GitConfigAccessor:
    """Reads and writes the machine-global git identity.

    The git executable is always invoked with an argument vector and no
    shell, so values reach git as single literal arguments.
    """

    def __init__(
        self,
        *,
        git_binary: str | None = None,
        timeout_seconds: float | None = None,
        global_config_path: str | None = None,
    ) -> None:
        settings = get_identity_settings()
        self.git_binary = git_binary or settings.git_binary
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.command_timeout_seconds
        )
        self.global_config_path = global_config_path or settings.global_config_path

    def _env(self) -> Mapping[str, str] | None:
        if not self.global_config_path:
            return None
        return {**os.environ, "GIT_CONFIG_GLOBAL": self.global_config_path}

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        command = [self.git_binary, "config", "--global", *args]
        logger.debug("running %s", format_command(command))
        try:
            return subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                shell=False,
                timeout=self.timeout_seconds,
                env=self._env(),
            )
        except subprocess.TimeoutExpired as exc:
            raise MirrorFailure(
                f"git config timed out after {self.timeout_seconds}s"
            ) from exc
        except (OSError, ValueError) as exc:
            raise MirrorFailure(f"git config failed to launch: {exc}") from exc

    def _get(self, key: str) -> str | None:
        completed = self._run(["--get", key])
        if completed.returncode == _EXIT_KEY_UNSET:
            return None
        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise MirrorFailure(
                f"git config --get {key} exited with {completed.returncode}: {detail}"
            )
        value = completed.stdout.rstrip("\n")
        return value or None

    def probe_system_identity(self) -> IdentityRecord:
        try:
            name = self._get(GIT_NAME_KEY)
            email = self._get(GIT_EMAIL_KEY)
        except MirrorFailure as exc:
            if isinstance(exc.__cause__, FileNotFoundError):
                logger.warning("git executable not found: %s", self.git_binary)
                return IdentityRecord()
            raise
        return IdentityRecord(name=name, email=email)

    def write_global_identity(self, key: str, value: str) -> None:
        if key not in _WRITABLE_KEYS:
            raise ValueError(f"unsupported git config key: {key}")
        completed = self._run([key, value])
        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise MirrorFailure(
                f"git config {key} exited with {completed.returncode}: {detail}"
            )

    def available(self) -> bool:
        try:
            completed = subprocess.run(
                [self.git_binary, "--version"],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return completed.returncode == 0


def get_git_config_accessor() -> GitConfigAccessor:
    return GitConfigAccessor()
