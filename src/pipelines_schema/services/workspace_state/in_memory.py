"""In-memory workspace state, lost on restart."""
import copy
from logging import Logger
from typing import Any, Optional

from scitrera_app_framework import Variables

from .base import WorkspaceStateService, WorkspaceStatePluginBase


class InMemoryWorkspaceStateService(WorkspaceStateService):
    """Workspace state held in a dict; values are copied on the way in and out."""

    def __init__(self, v: Variables = None):
        super().__init__(v)
        self._values: dict[str, Any] = {}

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._values:
            return default
        return copy.deepcopy(self._values[key])

    async def update(self, key: str, value: Any) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = copy.deepcopy(value)


class InMemoryWorkspaceStatePlugin(WorkspaceStatePluginBase):
    PROVIDER_NAME = 'in-memory'

    def initialize(self, v: Variables, logger: Logger) -> Optional[InMemoryWorkspaceStateService]:
        return InMemoryWorkspaceStateService(v=v)
