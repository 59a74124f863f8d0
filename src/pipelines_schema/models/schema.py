"""
Schema location and association models.

The association map is what gets pushed to the YAML language server:
glob pattern -> ordered list of schema locations.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

SCHEMA_ASSOCIATION_PATTERN = '*'
SCHEMA_ASSOCIATION_NOTIFICATION = 'json/schemaAssociations'

SchemaAssociations = dict[str, list[str]]


class SchemaSource(str, Enum):
    """Where a schema location came from."""
    FETCHED = "fetched"  # organization-specific schema saved under global storage
    CUSTOM = "custom"  # configured custom schema file or URL
    BUNDLED = "bundled"  # schema shipped with the installation


class SchemaLocation(BaseModel):
    """A resolved schema document location (file path or URL)."""

    model_config = {"frozen": True}

    path: str = Field(..., description="Filesystem path or http(s) URL of the schema")
    source: SchemaSource = Field(..., description="How the location was resolved")
    organization: Optional[str] = Field(None, description="Organization for fetched schemas")


def is_http_url(value: str) -> bool:
    """Whether a configured schema value is an http(s) URL rather than a path."""
    lowered = value.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


def get_schema_association(schema_file_path: str) -> SchemaAssociations:
    """Associate every file with the given schema."""
    return {SCHEMA_ASSOCIATION_PATTERN: [schema_file_path]}
