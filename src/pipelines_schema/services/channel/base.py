"""
Notification Channel - Pushes messages to the downstream language server.

Operations:
- send_notification: One-shot notification (no response expected)
"""
from abc import ABC, abstractmethod
from typing import Any

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import PIPELINES_SCHEMA_NOTIFICATION_CHANNEL, DEFAULT_PIPELINES_SCHEMA_NOTIFICATION_CHANNEL
from .._constants import EXT_NOTIFICATION_CHANNEL


class NotificationChannel(ABC):
    """Interface for the notification channel."""

    @abstractmethod
    async def send_notification(self, method: str, params: Any) -> None:
        """Send a notification named ``method`` carrying ``params``."""
        pass


# noinspection PyAbstractClass
class NotificationChannelPluginBase(Plugin):
    """Base plugin for notification channel."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_NOTIFICATION_CHANNEL}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_NOTIFICATION_CHANNEL

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, PIPELINES_SCHEMA_NOTIFICATION_CHANNEL, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(PIPELINES_SCHEMA_NOTIFICATION_CHANNEL, DEFAULT_PIPELINES_SCHEMA_NOTIFICATION_CHANNEL)
