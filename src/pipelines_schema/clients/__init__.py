"""Azure DevOps REST clients."""

from .devops import DevOpsClient, DevOpsClientFactory, OrganizationsClient, TaskAgentClient
from .exceptions import (
    error_for_status,
    AuthenticationError,
    AuthorizationError,
    DevOpsError,
    NotFoundError,
    RateLimitError,
    ServerError,
)

__all__ = [
    "DevOpsClient",
    "DevOpsClientFactory",
    "OrganizationsClient",
    "TaskAgentClient",
    "DevOpsError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "error_for_status",
]
