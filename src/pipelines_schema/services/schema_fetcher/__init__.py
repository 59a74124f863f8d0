"""Schema fetcher package."""
from .base import SchemaFetcher, SCHEMA_FILE_SUFFIX, EXT_SCHEMA_FETCHER

from scitrera_app_framework import Variables, get_extension


def get_schema_fetcher(v: Variables = None) -> SchemaFetcher:
    """Get the schema fetcher instance."""
    return get_extension(EXT_SCHEMA_FETCHER, v)


__all__ = (
    'SchemaFetcher',
    'SCHEMA_FILE_SUFFIX',
    'get_schema_fetcher',
    'EXT_SCHEMA_FETCHER',
)
