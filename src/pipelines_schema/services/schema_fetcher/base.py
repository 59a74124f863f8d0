"""
Schema Fetcher - Organization-specific schema retrieval.

Operations:
- schema_path_for: Deterministic location of an organization's saved schema
- fetch_schema: Return the organization's schema location, fetching it at most
  once per process
"""
from abc import ABC, abstractmethod
from pathlib import Path

from ...models.schema import SchemaLocation
from ..identity.base import AuthSession
from .._constants import EXT_SCHEMA_FETCHER

SCHEMA_FILE_SUFFIX = '-schema.json'


class SchemaFetcher(ABC):
    """Interface for schema fetcher."""

    storage_root: Path

    def schema_path_for(self, organization: str) -> Path:
        """Saved schema location; a pure function of the organization name."""
        return self.storage_root / f"{organization}{SCHEMA_FILE_SUFFIX}"

    @abstractmethod
    async def fetch_schema(self, organization: str, session: AuthSession, force: bool = False) -> SchemaLocation:
        """
        Return the schema location for ``organization``.

        Args:
            organization: Organization name
            session: Session with access to the organization
            force: Fetch even if the organization was already seen this process

        Raises:
            SchemaFetchError: token retrieval, the API call or the write failed
        """
        pass

