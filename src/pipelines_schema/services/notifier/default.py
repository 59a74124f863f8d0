"""Association notifier: the "organization selected / signed in" event."""
import asyncio
import inspect
from logging import Logger
from typing import Awaitable, Callable, Optional, Union

from scitrera_app_framework import Plugin, Variables, get_logger

from ...models.workspace import WorkspaceFolder
from .._constants import EXT_ASSOCIATION_NOTIFIER

AssociationListener = Callable[[WorkspaceFolder], Union[None, Awaitable[None]]]


class AssociationNotifier:
    """
    Single-event channel signalling that a workspace folder should be re-resolved.

    The payload is the workspace folder only; the notifier performs no
    resolution and keeps no queue. Coroutine listeners are scheduled as tasks.
    """

    def __init__(self, v: Variables = None, logger: Logger = None):
        self._listeners: list[AssociationListener] = []
        self._pending: set[asyncio.Task] = set()
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    def on_did_select_organization(self, listener: AssociationListener) -> Callable[[], None]:
        """
        Subscribe to the event.

        Returns:
            Callable that removes the subscription
        """
        self._listeners.append(listener)

        def dispose() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def fire(self, workspace: WorkspaceFolder) -> None:
        """Notify every listener that ``workspace`` needs re-resolution."""
        self.logger.debug("Firing association change for %s", workspace.name)
        for listener in list(self._listeners):
            try:
                result = listener(workspace)
            except Exception as e:
                self.logger.error("Association listener failed for %s: %s", workspace.name, e, exc_info=True)
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._pending.add(task)
                task.add_done_callback(self._listener_done)

    def _listener_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Association listener failed: %s", task.exception(), exc_info=task.exception())

    async def drain(self) -> None:
        """Wait for scheduled coroutine listeners to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class AssociationNotifierPlugin(Plugin):
    """Plugin to register the association notifier."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_ASSOCIATION_NOTIFIER

    def initialize(self, v: Variables, logger: Logger) -> Optional[AssociationNotifier]:
        return AssociationNotifier(v=v, logger=logger)
