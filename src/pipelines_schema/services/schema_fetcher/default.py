"""Default schema fetcher: Azure DevOps YAML schema saved under global storage."""
import asyncio
import json
from logging import Logger
from pathlib import Path
from typing import Optional

from scitrera_app_framework import Plugin, Variables, get_logger

from ...clients.devops import DevOpsClientFactory
from ...config import PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR, DEFAULT_PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR
from ...exceptions import SchemaFetchError
from ...models.schema import SchemaLocation, SchemaSource
from ..identity.base import AuthSession
from ..schema_cache import SessionCache
from .._constants import EXT_SCHEMA_FETCHER, EXT_SESSION_CACHE, EXT_DEVOPS_CLIENT_FACTORY
from .base import SchemaFetcher


class DefaultSchemaFetcher(SchemaFetcher):
    """
    Fetches the organization schema and saves it as ``<organization>-schema.json``.

    The saved file is a side effect for the language server to read, not a
    cache: whether to hit the network is decided by the session cache alone,
    without checking that a previously written file still exists.
    """

    def __init__(
            self,
            storage_root: Path,
            cache: SessionCache,
            client_factory: DevOpsClientFactory,
            v: Variables = None,
    ):
        self.storage_root = Path(storage_root)
        self._cache = cache
        self._client_factory = client_factory
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def fetch_schema(self, organization: str, session: AuthSession, force: bool = False) -> SchemaLocation:
        schema_path = self.schema_path_for(organization)
        location = SchemaLocation(path=str(schema_path), source=SchemaSource.FETCHED, organization=organization)

        if organization in self._cache and not force:
            self.logger.debug("Returning cached schema for %s", organization)
            return location

        self.logger.info("Retrieving schema for %s", organization)
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, lambda: self.storage_root.mkdir(parents=True, exist_ok=True))

            token = await session.get_token()
            async with self._client_factory.task_agent(token.token, organization) as client:
                schema = await client.get_yaml_schema()

            payload = json.dumps(schema).encode('utf-8')
            await loop.run_in_executor(None, schema_path.write_bytes, payload)
        except Exception as e:
            raise SchemaFetchError(organization, e) from e

        self._cache.add(organization)
        self.logger.info("Saved schema for %s to %s", organization, schema_path)
        return location


class DefaultSchemaFetcherPlugin(Plugin):
    """Plugin to register the default schema fetcher."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_SCHEMA_FETCHER

    def get_dependencies(self, v: Variables):
        return (EXT_SESSION_CACHE, EXT_DEVOPS_CLIENT_FACTORY,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[DefaultSchemaFetcher]:
        storage_root = v.environ(PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR, default=DEFAULT_PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR)
        return DefaultSchemaFetcher(
            storage_root=Path(storage_root).expanduser().absolute(),
            cache=self.get_extension(EXT_SESSION_CACHE, v),
            client_factory=self.get_extension(EXT_DEVOPS_CLIENT_FACTORY, v),
            v=v,
        )
