"""Resolution orchestrator package."""
from .default import ResolutionService
from .._constants import EXT_RESOLUTION_SERVICE

from scitrera_app_framework import Variables, get_extension


def get_resolution_service(v: Variables = None) -> ResolutionService:
    """Get the resolution orchestrator instance."""
    return get_extension(EXT_RESOLUTION_SERVICE, v)


__all__ = (
    'ResolutionService',
    'get_resolution_service',
    'EXT_RESOLUTION_SERVICE',
)
