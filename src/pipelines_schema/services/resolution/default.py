"""
Resolution orchestrator: the schema location for a workspace folder.

``resolve`` never raises. Anything that prevents detecting the organization
schema is logged and the static fallback is returned instead. Prompts are
spawned as detached tasks and never awaited by ``resolve``.
"""
import asyncio
from logging import Logger
from pathlib import Path
from typing import Coroutine, Optional

from scitrera_app_framework import Plugin, Variables, get_logger

from ... import messages
from ...config import (
    BUNDLED_SCHEMA_FILE_NAME,
    PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE, DEFAULT_PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE,
    PIPELINES_SCHEMA_INSTALL_DIR, DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR,
)
from ...models.schema import SchemaAssociations, SchemaLocation, SchemaSource, get_schema_association, is_http_url
from ...models.workspace import WorkspaceFolder
from ..disambiguator import Disambiguator
from ..identity.base import IdentityProvider
from ..identity_resolver import NEEDS_PROMPT, IdentityResolver
from ..prompt.base import PromptService
from ..schema_fetcher import SchemaFetcher
from .._constants import (
    EXT_RESOLUTION_SERVICE,
    EXT_DISAMBIGUATOR,
    EXT_IDENTITY_PROVIDER,
    EXT_IDENTITY_RESOLVER,
    EXT_PROMPT_SERVICE,
    EXT_SCHEMA_FETCHER,
)


class ResolutionService:
    """Decides which schema governs pipeline files in a workspace folder."""

    def __init__(
            self,
            identity_provider: IdentityProvider,
            identity_resolver: IdentityResolver,
            disambiguator: Disambiguator,
            schema_fetcher: SchemaFetcher,
            prompt: PromptService,
            custom_schema_file: str = DEFAULT_PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE,
            install_dir: Path = Path(DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR),
            v: Variables = None,
            logger: Logger = None,
    ):
        self._identity_provider = identity_provider
        self._identity_resolver = identity_resolver
        self._disambiguator = disambiguator
        self._schema_fetcher = schema_fetcher
        self._prompt = prompt
        self.custom_schema_file = custom_schema_file or ''
        self.install_dir = Path(install_dir)
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

        self._background_tasks: set[asyncio.Task] = set()

    async def resolve(self, workspace: Optional[WorkspaceFolder] = None) -> SchemaLocation:
        """
        Resolve the schema location for ``workspace``.

        Without a workspace, detection is skipped and the static fallback is
        returned without any network access.
        """
        if workspace is not None:
            self.logger.info("Detecting schema for workspace folder %s", workspace.name)
            try:
                location = await self.auto_detect_schema(workspace)
                if location is not None:
                    self.logger.info("Detected schema for workspace folder %s: %s", workspace.name, location.path)
                    return location
            except Exception as e:
                self.logger.warning("Error auto-detecting schema for workspace folder %s: %s",
                                    workspace.name, e, exc_info=True)

        location = self.get_fallback_location(workspace)
        self.logger.info("Using static schema for %s: %s",
                         workspace.name if workspace else "files outside a workspace", location.path)
        return location

    async def locate_schema_file(self, workspace: Optional[WorkspaceFolder] = None) -> str:
        return (await self.resolve(workspace)).path

    @staticmethod
    def get_schema_association(schema_file_path: str) -> SchemaAssociations:
        return get_schema_association(schema_file_path)

    async def auto_detect_schema(self, workspace: WorkspaceFolder) -> Optional[SchemaLocation]:
        """
        Run detection for one workspace folder.

        Returns:
            The organization schema location, or None when the fallback should be used

        Raises:
            SchemaFetchError: the organization schema could not be retrieved
        """
        if not await self._identity_provider.wait_for_login():
            self.logger.info("Not signed in; waiting for login")
            self._spawn(self._disambiguator.prompt_for_login(workspace), f"sign-in prompt for {workspace.name}")
            return None

        resolution = await self._identity_resolver.derive_identity(workspace)
        if resolution is NEEDS_PROMPT:
            self.logger.info("Prompting for organization for %s", workspace.name)
            self._spawn(self._disambiguator.prompt_for_organization(workspace),
                        f"organization prompt for {workspace.name}")
            return None

        if resolution.session is None:
            self.logger.info("No session can access organization %s for %s", resolution.organization, workspace.name)
            self._spawn(
                self._prompt.show_error_message(
                    messages.UNABLE_TO_ACCESS_ORGANIZATION.format(organization=resolution.organization)),
                f"inaccessible organization message for {workspace.name}",
            )
            return None

        return await self._schema_fetcher.fetch_schema(resolution.organization, resolution.session)

    def get_fallback_location(self, workspace: Optional[WorkspaceFolder] = None) -> SchemaLocation:
        """The configured custom schema, or the bundled one when none is configured."""
        custom = self.custom_schema_file.strip()
        if not custom:
            return SchemaLocation(path=str(self.install_dir / BUNDLED_SCHEMA_FILE_NAME), source=SchemaSource.BUNDLED)

        if is_http_url(custom):
            return SchemaLocation(path=custom, source=SchemaSource.CUSTOM)

        custom_path = Path(custom).expanduser()
        if not custom_path.is_absolute():
            root = workspace.path if workspace is not None else self.install_dir
            custom_path = root / custom_path
        return SchemaLocation(path=str(custom_path), source=SchemaSource.CUSTOM)

    # Detached tasks
    def _spawn(self, coro: Coroutine, description: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=description)
        self._background_tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("Background task '%s' failed: %s", task.get_name(), exc, exc_info=exc)

    async def wait_for_background_tasks(self) -> None:
        """Wait until every spawned prompt has finished."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    async def cancel_background_tasks(self) -> None:
        for task in list(self._background_tasks):
            task.cancel()
        await self.wait_for_background_tasks()


class ResolutionServicePlugin(Plugin):
    """Plugin to register the resolution orchestrator."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_RESOLUTION_SERVICE

    def get_dependencies(self, v: Variables):
        return (EXT_IDENTITY_PROVIDER, EXT_IDENTITY_RESOLVER, EXT_DISAMBIGUATOR, EXT_SCHEMA_FETCHER, EXT_PROMPT_SERVICE,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[ResolutionService]:
        return ResolutionService(
            identity_provider=self.get_extension(EXT_IDENTITY_PROVIDER, v),
            identity_resolver=self.get_extension(EXT_IDENTITY_RESOLVER, v),
            disambiguator=self.get_extension(EXT_DISAMBIGUATOR, v),
            schema_fetcher=self.get_extension(EXT_SCHEMA_FETCHER, v),
            prompt=self.get_extension(EXT_PROMPT_SERVICE, v),
            custom_schema_file=v.environ(PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE,
                                         default=DEFAULT_PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE),
            install_dir=Path(v.environ(PIPELINES_SCHEMA_INSTALL_DIR, default=DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR)),
            v=v,
            logger=logger,
        )

    async def async_stopping(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, ResolutionService):
            await value.cancel_background_tasks()
