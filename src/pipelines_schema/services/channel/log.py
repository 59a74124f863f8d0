"""Notification channel that only logs what would be sent."""
import json
from logging import Logger
from typing import Any, Optional

from scitrera_app_framework import Variables, get_logger

from .base import NotificationChannel, NotificationChannelPluginBase


class LoggingNotificationChannel(NotificationChannel):

    def __init__(self, v: Variables = None, logger: Logger = None):
        self.logger = logger or get_logger(v, name=self.__class__.__name__)
        self.sent: list[tuple[str, Any]] = []

    async def send_notification(self, method: str, params: Any) -> None:
        self.sent.append((method, params))
        self.logger.info("Notification %s: %s", method, json.dumps(params))


class LoggingNotificationChannelPlugin(NotificationChannelPluginBase):
    PROVIDER_NAME = 'log'

    def initialize(self, v: Variables, logger: Logger) -> Optional[LoggingNotificationChannel]:
        return LoggingNotificationChannel(v=v, logger=logger)
