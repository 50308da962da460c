from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
import pytest

from services.identity import IdentityRecord, ValidationError, is_valid_email, validate_identity
from services.identity.validation import INVALID_EMAIL, MISSING_FIELDS, redact_email

_PART_RE = r"[A-Za-z0-9._%+\"-]{1,12}"


@pytest.mark.parametrize(
    "candidate",
    [
        IdentityRecord(name="", email="x@y.com"),
        IdentityRecord(name="A", email=""),
        IdentityRecord(name=None, email="x@y.com"),
        IdentityRecord(name="A", email=None),
        IdentityRecord(),
    ],
)
def test_validate_identity_rejects_missing_fields(candidate: IdentityRecord) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_identity(candidate)
    assert excinfo.value.reason == MISSING_FIELDS


@pytest.mark.parametrize(
    "email",
    [
        "not-an-email",
        "jane@example",
        "@example.com",
        "jane@.com",
        "jane doe@example.com",
        "jane@exa mple.com",
        "jane@@example.com",
        "jane@example.",
        "jane@example.com\n",
        "jane@example.com\n\n",
    ],
)
def test_validate_identity_rejects_malformed_email(email: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_identity(IdentityRecord(name="A", email=email))
    assert excinfo.value.reason == INVALID_EMAIL


def test_validate_identity_returns_pair_unchanged() -> None:
    record = validate_identity(
        IdentityRecord(name='Jane "JD" Doe', email="jane@example.com")
    )
    assert record == IdentityRecord(name='Jane "JD" Doe', email="jane@example.com")


def test_email_domain_may_have_several_dots() -> None:
    assert is_valid_email("dev+git@mail.corp.example.co.uk")


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    local=st.from_regex(_PART_RE, fullmatch=True),
    host=st.from_regex(_PART_RE, fullmatch=True),
    tld=st.from_regex(r"[A-Za-z0-9-]{1,6}", fullmatch=True),
)
def test_well_formed_addresses_are_accepted(local: str, host: str, tld: str) -> None:
    assert is_valid_email(f"{local}@{host}.{tld}")


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(value=st.text(alphabet=st.characters(exclude_characters="@"), max_size=40))
def test_addresses_without_at_sign_are_rejected(value: str) -> None:
    assert not is_valid_email(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("jane@example.com", "j***@example.com"),
        ("x@y.com", "x***@y.com"),
        ("no-at-sign", "***"),
        (None, None),
        ("", ""),
    ],
)
def test_redact_email(value: str | None, expected: str | None) -> None:
    assert redact_email(value) == expected


def test_identity_record_emptiness() -> None:
    assert IdentityRecord().is_empty()
    assert IdentityRecord(name="", email="").is_empty()
    assert not IdentityRecord(name="Jane").is_empty()
    assert not IdentityRecord(email="jane@example.com").is_empty()
