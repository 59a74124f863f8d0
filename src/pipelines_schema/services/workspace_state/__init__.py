"""Workspace state service package."""
from .base import WorkspaceStateService, WorkspaceStatePluginBase, EXT_WORKSPACE_STATE_SERVICE

from scitrera_app_framework import Variables, get_extension


def get_workspace_state_service(v: Variables = None) -> WorkspaceStateService:
    """Get the workspace state service instance."""
    return get_extension(EXT_WORKSPACE_STATE_SERVICE, v)


__all__ = (
    'WorkspaceStateService',
    'WorkspaceStatePluginBase',
    'get_workspace_state_service',
    'EXT_WORKSPACE_STATE_SERVICE',
)
