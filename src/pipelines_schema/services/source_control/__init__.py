"""Source control service package."""
from .base import (
    Head,
    Remote,
    Repository,
    RepositoryState,
    SourceControlService,
    SourceControlServicePluginBase,
    UpstreamRef,
    EXT_SOURCE_CONTROL_SERVICE,
)

from scitrera_app_framework import Variables, get_extension


def get_source_control_service(v: Variables = None) -> SourceControlService:
    """Get the source control service instance."""
    return get_extension(EXT_SOURCE_CONTROL_SERVICE, v)


__all__ = (
    'Head',
    'Remote',
    'Repository',
    'RepositoryState',
    'SourceControlService',
    'SourceControlServicePluginBase',
    'UpstreamRef',
    'get_source_control_service',
    'EXT_SOURCE_CONTROL_SERVICE',
)
