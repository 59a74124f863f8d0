"""Association publisher: pushes schema associations to the language server."""
from logging import Logger
from typing import Optional

from scitrera_app_framework import Plugin, Variables, get_logger

from ...models.schema import SCHEMA_ASSOCIATION_NOTIFICATION, SchemaAssociations
from ...models.workspace import WorkspaceFolder
from ..channel.base import NotificationChannel
from ..notifier import AssociationNotifier
from ..resolution import ResolutionService
from .._constants import (
    EXT_ASSOCIATION_PUBLISHER,
    EXT_ASSOCIATION_NOTIFIER,
    EXT_NOTIFICATION_CHANNEL,
    EXT_RESOLUTION_SERVICE,
)


class AssociationPublisher:
    """
    Re-resolves a workspace folder whenever the association notifier fires
    and sends the resulting association map over the notification channel.
    """

    def __init__(
            self,
            resolution: ResolutionService,
            channel: NotificationChannel,
            notifier: AssociationNotifier,
            v: Variables = None,
            logger: Logger = None,
    ):
        self._resolution = resolution
        self._channel = channel
        self.logger = logger or get_logger(v, name=self.__class__.__name__)
        self._unsubscribe = notifier.on_did_select_organization(self.publish)

    async def publish(self, workspace: Optional[WorkspaceFolder] = None) -> SchemaAssociations:
        """Resolve ``workspace`` and notify the language server of the new association."""
        schema_file_path = await self._resolution.locate_schema_file(workspace)
        associations = self._resolution.get_schema_association(schema_file_path)
        await self._channel.send_notification(SCHEMA_ASSOCIATION_NOTIFICATION, associations)
        self.logger.debug("Published schema association for %s: %s",
                          workspace.name if workspace else None, schema_file_path)
        return associations

    def close(self) -> None:
        """Stop reacting to association changes."""
        self._unsubscribe()


class AssociationPublisherPlugin(Plugin):
    """Plugin to register the association publisher."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_ASSOCIATION_PUBLISHER

    def get_dependencies(self, v: Variables):
        return (EXT_RESOLUTION_SERVICE, EXT_NOTIFICATION_CHANNEL, EXT_ASSOCIATION_NOTIFIER,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[AssociationPublisher]:
        return AssociationPublisher(
            resolution=self.get_extension(EXT_RESOLUTION_SERVICE, v),
            channel=self.get_extension(EXT_NOTIFICATION_CHANNEL, v),
            notifier=self.get_extension(EXT_ASSOCIATION_NOTIFIER, v),
            v=v,
            logger=logger,
        )

    async def async_stopping(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, AssociationPublisher):
            value.close()
