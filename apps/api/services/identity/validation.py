from __future__ import annotations

import re

from .errors import ValidationError
from .types import IdentityRecord

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MISSING_FIELDS = "missing fields"
INVALID_EMAIL = "invalid email"


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def validate_identity(candidate: IdentityRecord) -> IdentityRecord:
    """保存・反映の前に候補のアイデンティティを検証する．

    Parameters:
        candidate: 呼び出し元が指定したname/emailの組．

    Returns:
        両フィールドが空でないことを保証した同じ組．

    Raises:
        ValidationError: フィールドの欠落，またはメール形式が不正な場合．
    """
    if not candidate.name or not candidate.email:
        raise ValidationError(MISSING_FIELDS)
    if not is_valid_email(candidate.email):
        raise ValidationError(INVALID_EMAIL)
    return IdentityRecord(name=candidate.name, email=candidate.email)


def redact_email(value: str | None) -> str | None:
    if not value:
        return value
    local, sep, domain = value.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"
