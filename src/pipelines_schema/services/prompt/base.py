"""
Prompt Service - User-facing messages and selection.

Every method is awaitable; callers that must not block on a human response
spawn them as detached tasks instead of awaiting them inline.

Operations:
- show_information_message: Message with optional actions; returns the chosen action
- show_error_message: Error message with optional actions
- show_quick_pick: Pick one item from an incrementally produced sequence
- with_progress: Run work while a progress message is displayed
"""
from abc import ABC, abstractmethod
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import PIPELINES_SCHEMA_PROMPT, DEFAULT_PIPELINES_SCHEMA_PROMPT
from .._constants import EXT_PROMPT_SERVICE

T = TypeVar("T")


def default_label(item) -> str:
    return getattr(item, "label", str(item))


class PromptService(ABC):
    """Interface for interactive prompts."""

    @abstractmethod
    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        """
        Show an information message.

        Returns:
            The selected action, or None if dismissed
        """
        pass

    @abstractmethod
    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        """Show an error message; returns the selected action, or None."""
        pass

    @abstractmethod
    async def show_quick_pick(
            self,
            items: AsyncIterator[T],
            placeholder: str,
            label: Callable[[T], str] = default_label,
    ) -> Optional[T]:
        """
        Let the user pick one item.

        ``items`` is consumed while the picker is visible so choices appear as
        they are produced.

        Returns:
            The selected item, or None if cancelled
        """
        pass

    async def with_progress(self, title: str, work: Callable[[], Awaitable[T]]) -> T:
        """Run ``work`` while ``title`` is shown as in progress."""
        return await work()


# noinspection PyAbstractClass
class PromptServicePluginBase(Plugin):
    """Base plugin for prompt service."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_PROMPT_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_PROMPT_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, PIPELINES_SCHEMA_PROMPT, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(PIPELINES_SCHEMA_PROMPT, DEFAULT_PIPELINES_SCHEMA_PROMPT)
