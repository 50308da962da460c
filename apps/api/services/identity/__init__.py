from .ambient import GitConfigAccessor, get_git_config_accessor
from .errors import IdentityError, MirrorFailure, PersistenceFailure, ValidationError
from .publisher import IdentityPublisher
from .resolver import IdentityResolver
from .settings import IdentitySettings, get_identity_settings
from .store import UserProfileStore, get_profile_store
from .types import IdentityRecord, IdentitySource, ResolvedIdentity
from .validation import is_valid_email, validate_identity


def get_identity_resolver() -> IdentityResolver:
    return IdentityResolver(get_profile_store(), get_git_config_accessor())


def get_identity_publisher() -> IdentityPublisher:
    return IdentityPublisher(get_profile_store(), get_git_config_accessor())


__all__ = [
    "GitConfigAccessor",
    "IdentityError",
    "IdentityPublisher",
    "IdentityRecord",
    "IdentityResolver",
    "IdentitySettings",
    "IdentitySource",
    "MirrorFailure",
    "PersistenceFailure",
    "ResolvedIdentity",
    "UserProfileStore",
    "ValidationError",
    "get_git_config_accessor",
    "get_identity_publisher",
    "get_identity_resolver",
    "get_identity_settings",
    "get_profile_store",
    "is_valid_email",
    "validate_identity",
]
