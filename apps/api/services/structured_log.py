from __future__ import annotations

import json
import logging
from pathlib import Path
import sqlite3
from threading import Lock
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_request_id() -> str:
    return uuid4().hex


class IdentityAuditSink:
    """Durable record of identity values that stay out of the regular logs."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._lock = Lock()
        self._ready = False

    def _ensure_schema(self) -> None:
        if self._ready:
            return
        with self._lock:
            if self._ready:
                return
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            with sqlite3.connect(self.db_path, timeout=5.0) as conn:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS identity_audit_events (
                        event_id TEXT PRIMARY KEY,
                        occurred_at TEXT NOT NULL,
                        user_id TEXT NOT NULL,
                        operation TEXT NOT NULL,
                        payload_json TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
            self._ready = True

    def write_event(
        self,
        *,
        user_id: str,
        operation: str,
        metadata: dict[str, Any] | None = None,
        event_id: str | None = None,
    ) -> str:
        for name, value in (("user_id", user_id), ("operation", operation)):
            if not value or not value.strip():
                raise ValueError(f"{name} is required")
        self._ensure_schema()
        event_id = event_id or uuid4().hex
        occurred_at = _now_iso()
        payload = {
            "event_id": event_id,
            "user_id": user_id,
            "operation": operation,
            "occurred_at": occurred_at,
            "metadata": metadata or {},
        }
        payload_json = json.dumps(payload, ensure_ascii=True, separators=(",", ":"))
        with sqlite3.connect(self.db_path, timeout=5.0) as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO identity_audit_events (
                    event_id, occurred_at, user_id, operation, payload_json
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (event_id, occurred_at, user_id, operation, payload_json),
            )
            conn.commit()
        return event_id


def log_event(
    logger: logging.Logger,
    *,
    event: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    payload = {"ts": _now_iso(), "event": event, **fields}
    logger.log(
        level,
        json.dumps(payload, ensure_ascii=True, separators=(",", ":")),
    )
