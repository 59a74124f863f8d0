"""Session matcher package."""
from .default import SessionMatcher
from .._constants import EXT_SESSION_MATCHER

from scitrera_app_framework import Variables, get_extension


def get_session_matcher(v: Variables = None) -> SessionMatcher:
    """Get the session matcher instance."""
    return get_extension(EXT_SESSION_MATCHER, v)


__all__ = (
    'SessionMatcher',
    'get_session_matcher',
    'EXT_SESSION_MATCHER',
)
