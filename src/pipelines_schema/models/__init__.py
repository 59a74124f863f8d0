"""
Domain models for pipelines-schema.
"""
from .organization import (
    Organization,
    OrganizationCandidate,
    OrganizationDetails,
    RepositoryDetails,
)
from .schema import (
    SCHEMA_ASSOCIATION_NOTIFICATION,
    SCHEMA_ASSOCIATION_PATTERN,
    SchemaAssociations,
    SchemaLocation,
    SchemaSource,
    get_schema_association,
    is_http_url,
)
from .workspace import WorkspaceFolder

__all__ = [
    "Organization",
    "OrganizationCandidate",
    "OrganizationDetails",
    "RepositoryDetails",
    "SCHEMA_ASSOCIATION_NOTIFICATION",
    "SCHEMA_ASSOCIATION_PATTERN",
    "SchemaAssociations",
    "SchemaLocation",
    "SchemaSource",
    "get_schema_association",
    "is_http_url",
    "WorkspaceFolder",
]
