"""
Source Control Service - Repository and remote metadata.

Operations:
- open_repository: Open the repository containing a workspace folder, if any
- Repository.status: Refresh HEAD, upstream and remote information
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import PIPELINES_SCHEMA_SOURCE_CONTROL, DEFAULT_PIPELINES_SCHEMA_SOURCE_CONTROL
from .._constants import EXT_SOURCE_CONTROL_SERVICE


@dataclass
class Remote:
    """A configured remote."""
    name: str
    fetch_url: Optional[str] = None


@dataclass
class UpstreamRef:
    """The upstream branch tracked by HEAD."""
    remote: str
    name: str


@dataclass
class Head:
    """The checked-out branch."""
    name: Optional[str] = None
    upstream: Optional[UpstreamRef] = None


@dataclass
class RepositoryState:
    """Snapshot of the repository refreshed by ``Repository.status()``."""
    head: Optional[Head] = None
    remotes: list[Remote] = field(default_factory=list)


class Repository(ABC):
    """An opened repository."""

    def __init__(self, root: Path):
        self.root = root
        self.state = RepositoryState()

    @abstractmethod
    async def status(self) -> None:
        """Refresh ``state`` from the working copy."""
        pass

    def get_upstream_remote_url(self) -> Optional[str]:
        """Fetch URL of the remote HEAD's upstream lives on, from the last ``status()``."""
        head = self.state.head
        if head is None or head.upstream is None:
            return None
        remote_name = head.upstream.remote
        remote = next((r for r in self.state.remotes if r.name == remote_name), None)
        return remote.fetch_url if remote else None


class SourceControlService(ABC):
    """Interface for source control integration."""

    @abstractmethod
    async def open_repository(self, root: Path) -> Optional[Repository]:
        """
        Open the repository containing ``root``.

        Returns:
            Repository if ``root`` is inside a working copy, None otherwise
        """
        pass


# noinspection PyAbstractClass
class SourceControlServicePluginBase(Plugin):
    """Base plugin for source control service."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_SOURCE_CONTROL_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_SOURCE_CONTROL_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, PIPELINES_SCHEMA_SOURCE_CONTROL, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(PIPELINES_SCHEMA_SOURCE_CONTROL, DEFAULT_PIPELINES_SCHEMA_SOURCE_CONTROL)
