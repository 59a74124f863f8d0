"""Azure DevOps client factory package."""
from ...clients.devops import DevOpsClientFactory
from .._constants import EXT_DEVOPS_CLIENT_FACTORY

from scitrera_app_framework import Variables, get_extension


def get_devops_client_factory(v: Variables = None) -> DevOpsClientFactory:
    """Get the Azure DevOps client factory."""
    return get_extension(EXT_DEVOPS_CLIENT_FACTORY, v)


__all__ = (
    'DevOpsClientFactory',
    'get_devops_client_factory',
    'EXT_DEVOPS_CLIENT_FACTORY',
)
