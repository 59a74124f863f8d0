"""Identity resolver package."""
from .default import NEEDS_PROMPT, IdentityResolution, IdentityResolver
from .._constants import EXT_IDENTITY_RESOLVER

from scitrera_app_framework import Variables, get_extension


def get_identity_resolver(v: Variables = None) -> IdentityResolver:
    """Get the identity resolver instance."""
    return get_extension(EXT_IDENTITY_RESOLVER, v)


__all__ = (
    'NEEDS_PROMPT',
    'IdentityResolution',
    'IdentityResolver',
    'get_identity_resolver',
    'EXT_IDENTITY_RESOLVER',
)
