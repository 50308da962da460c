from .settings import AuthnSettings, get_authn_settings
from .tokens import issue_access_token, verify_access_token
from .types import UserIdentity

__all__ = [
    "AuthnSettings",
    "UserIdentity",
    "get_authn_settings",
    "issue_access_token",
    "verify_access_token",
]
