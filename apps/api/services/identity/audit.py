from __future__ import annotations

from functools import lru_cache
import logging
import sqlite3
from typing import Any

from services.structured_log import IdentityAuditSink, log_event

from .settings import get_identity_settings
from .types import IdentityRecord
from .validation import redact_email


@lru_cache(maxsize=1)
def get_audit_sink() -> IdentityAuditSink | None:
    db_path = get_identity_settings().audit_db_path
    if not db_path:
        return None
    return IdentityAuditSink(db_path=db_path)


def record_identity_event(
    logger: logging.Logger,
    *,
    event: str,
    user_id: str,
    record: IdentityRecord,
    **fields: Any,
) -> None:
    """アイデンティティの変更を記録し，通常ログではメールアドレスを伏せる．

    監査シンクが設定されていれば完全な値をそちらへ書き込む．書き込みの失敗は
    警告ログに留め，呼び出し元の処理は継続する．

    Parameters:
        logger: 構造化イベントを出力するロガー．
        event: イベント名．
        user_id: 対象ユーザーのID．
        record: 記録するname/emailの組．
        fields: ログに付加する追加フィールド．
    """
    settings = get_identity_settings()
    sink = get_audit_sink()
    if sink is not None:
        try:
            sink.write_event(
                user_id=user_id,
                operation=event,
                metadata={"git_name": record.name, "git_email": record.email, **fields},
            )
        except (sqlite3.Error, OSError):
            logger.warning("identity audit write failed: %s", event, exc_info=True)
    email = record.email if settings.log_identity_values else redact_email(record.email)
    log_event(
        logger,
        event=event,
        user_id=user_id,
        git_name=record.name,
        git_email=email,
        **fields,
    )
