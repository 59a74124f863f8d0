"""
Workspace State Service - Durable key/value state.

Values are JSON-serializable. The persisted organization choices live under
a single key as a mapping of workspace folder name -> OrganizationDetails.

Operations:
- get: Read a value
- update: Write a value (None removes the key)
- get_organization_details / save_organization_details / forget_organization_details
"""
from abc import ABC, abstractmethod
from logging import Logger
from typing import Any, Optional

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import (
    PIPELINES_SCHEMA_WORKSPACE_STATE,
    DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE,
    ORGANIZATION_DETAILS_STATE_KEY,
)
from ...models.organization import OrganizationDetails
from .._constants import EXT_WORKSPACE_STATE_SERVICE


class WorkspaceStateService(ABC):
    """Abstract durable key/value state."""

    def __init__(self, v: Variables = None):
        self.logger = get_logger(v, name=self.__class__.__name__)

    # Lifecycle
    async def connect(self) -> None:
        """Open the underlying store."""
        pass

    async def disconnect(self) -> None:
        """Close the underlying store."""
        pass

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Get a value, or ``default`` if the key is unset."""
        pass

    @abstractmethod
    async def update(self, key: str, value: Any) -> None:
        """Set a value; ``None`` removes the key."""
        pass

    async def get_organization_details(self) -> dict[str, OrganizationDetails]:
        """All persisted organization choices keyed by workspace folder name."""
        raw = await self.get(ORGANIZATION_DETAILS_STATE_KEY) or {}
        return {name: OrganizationDetails.model_validate(details) for name, details in raw.items()}

    async def get_workspace_organization(self, workspace_name: str) -> Optional[OrganizationDetails]:
        return (await self.get_organization_details()).get(workspace_name)

    async def save_organization_details(self, workspace_name: str, details: OrganizationDetails) -> None:
        """Persist the choice for one workspace folder, keeping every other folder's entry."""
        raw = dict(await self.get(ORGANIZATION_DETAILS_STATE_KEY) or {})
        raw[workspace_name] = details.model_dump()
        await self.update(ORGANIZATION_DETAILS_STATE_KEY, raw)
        self.logger.debug("Saved organization %s for %s", details.organization, workspace_name)

    async def forget_organization_details(self, workspace_name: str) -> bool:
        """
        Remove the choice for one workspace folder.

        Returns:
            True if an entry was removed
        """
        raw = dict(await self.get(ORGANIZATION_DETAILS_STATE_KEY) or {})
        if raw.pop(workspace_name, None) is None:
            return False
        await self.update(ORGANIZATION_DETAILS_STATE_KEY, raw or None)
        return True


# noinspection PyAbstractClass
class WorkspaceStatePluginBase(Plugin):
    """Base plugin for workspace state - connects on ready, disconnects on stop."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_WORKSPACE_STATE_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_WORKSPACE_STATE_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, PIPELINES_SCHEMA_WORKSPACE_STATE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(PIPELINES_SCHEMA_WORKSPACE_STATE, DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE)

    async def async_ready(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, WorkspaceStateService):
            try:
                await value.connect()
                logger.info("Workspace state '%s' connected successfully.", self.PROVIDER_NAME)
            except Exception as e:
                logger.error("Error connecting workspace state '%s': %s", self.PROVIDER_NAME, e)
                raise
        return

    async def async_stopping(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, WorkspaceStateService):
            try:
                await value.disconnect()
                logger.info("Workspace state '%s' disconnected successfully.", self.PROVIDER_NAME)
            except Exception as e:
                logger.error("Error disconnecting workspace state '%s': %s", self.PROVIDER_NAME, e)
        return
