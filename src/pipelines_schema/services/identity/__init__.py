"""Identity provider package."""
from .base import (
    AccessToken,
    AuthSession,
    IdentityProvider,
    IdentityProviderPluginBase,
    EXT_IDENTITY_PROVIDER,
)

from scitrera_app_framework import Variables, get_extension


def get_identity_provider(v: Variables = None) -> IdentityProvider:
    """Get the identity provider instance."""
    return get_extension(EXT_IDENTITY_PROVIDER, v)


__all__ = (
    'AccessToken',
    'AuthSession',
    'IdentityProvider',
    'IdentityProviderPluginBase',
    'get_identity_provider',
    'EXT_IDENTITY_PROVIDER',
)
