"""Headless prompt service: messages are logged and every prompt is declined."""
from logging import Logger
from typing import AsyncIterator, Callable, Optional, TypeVar

from scitrera_app_framework import Variables, get_logger

from .base import PromptService, PromptServicePluginBase, default_label

T = TypeVar("T")


class HeadlessPromptService(PromptService):
    """For non-interactive runs (CI, language server hosts without UI)."""

    def __init__(self, v: Variables = None, logger: Logger = None):
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        self.logger.info("%s", message)
        return None

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        self.logger.error("%s", message)
        return None

    async def show_quick_pick(
            self,
            items: AsyncIterator[T],
            placeholder: str,
            label: Callable[[T], str] = default_label,
    ) -> Optional[T]:
        self.logger.info("Selection skipped (no interactive prompt): %s", placeholder)
        return None


class HeadlessPromptServicePlugin(PromptServicePluginBase):
    PROVIDER_NAME = 'headless'

    def initialize(self, v: Variables, logger: Logger) -> Optional[HeadlessPromptService]:
        return HeadlessPromptService(v=v, logger=logger)
