"""JSON-RPC notifications over stdout, framed the way language servers expect."""
import json
import sys
from logging import Logger
from typing import Any, BinaryIO, Optional

from scitrera_app_framework import Variables, get_logger

from .base import NotificationChannel, NotificationChannelPluginBase


def encode_notification(method: str, params: Any) -> bytes:
    """Encode a JSON-RPC 2.0 notification with a Content-Length header."""
    body = json.dumps({"jsonrpc": "2.0", "method": method, "params": params}, separators=(",", ":")).encode("utf-8")
    return f"Content-Length: {len(body)}\r\n\r\n".encode("ascii") + body


class StdioNotificationChannel(NotificationChannel):
    """Writes framed notifications to a binary stream (stdout by default)."""

    def __init__(self, stream: BinaryIO = None, v: Variables = None, logger: Logger = None):
        self._stream = stream
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    @property
    def stream(self) -> BinaryIO:
        return self._stream if self._stream is not None else sys.stdout.buffer

    async def send_notification(self, method: str, params: Any) -> None:
        self.stream.write(encode_notification(method, params))
        self.stream.flush()
        self.logger.debug("Sent %s notification", method)


class StdioNotificationChannelPlugin(NotificationChannelPluginBase):
    PROVIDER_NAME = 'stdio'

    def initialize(self, v: Variables, logger: Logger) -> Optional[StdioNotificationChannel]:
        return StdioNotificationChannel(v=v, logger=logger)
