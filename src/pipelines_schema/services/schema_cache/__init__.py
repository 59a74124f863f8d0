"""Session cache package."""
from .default import SessionCache
from .._constants import EXT_SESSION_CACHE

from scitrera_app_framework import Variables, get_extension


def get_session_cache(v: Variables = None) -> SessionCache:
    """Get the session cache instance."""
    return get_extension(EXT_SESSION_CACHE, v)


__all__ = (
    'SessionCache',
    'get_session_cache',
    'EXT_SESSION_CACHE',
)
