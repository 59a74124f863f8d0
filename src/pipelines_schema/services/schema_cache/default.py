"""
Session cache of organizations whose schema has been saved this process.

The saved schema files cannot serve as a persistent cache: Azure DevOps
exposes no schema version to compare against, and organizations add or
remove tasks at any time. Membership therefore only grows for the lifetime
of the process and is never expired.
"""
from logging import Logger
from typing import Optional

from scitrera_app_framework import Plugin, Variables

from .._constants import EXT_SESSION_CACHE


class SessionCache:
    """Set of organization names already fetched during this process."""

    def __init__(self):
        self._seen: set[str] = set()

    def __contains__(self, organization: str) -> bool:
        return organization in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def add(self, organization: str) -> None:
        self._seen.add(organization)


class SessionCachePlugin(Plugin):
    """Plugin providing the process-lifetime session cache."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_SESSION_CACHE

    def initialize(self, v: Variables, logger: Logger) -> Optional[SessionCache]:
        return SessionCache()
