"""Console prompt service using click on the controlling terminal."""
import asyncio
from logging import Logger
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

import click

from scitrera_app_framework import Variables, get_logger

from .base import PromptService, PromptServicePluginBase, default_label

T = TypeVar("T")


class ConsolePromptService(PromptService):
    """
    Prompts on stdin/stdout.

    click's prompts block, so they run in the default executor to keep the
    event loop free for resolution work.
    """

    def __init__(self, v: Variables = None, logger: Logger = None):
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def _run_blocking(self, fn, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))

    async def _choose_action(self, actions: tuple[str, ...]) -> Optional[str]:
        if not actions:
            return None
        for index, action in enumerate(actions, start=1):
            click.echo(f"  [{index}] {action}")
        click.echo("  [0] Dismiss")
        choice = await self._run_blocking(
            click.prompt, "Choose", type=click.IntRange(0, len(actions)), default=0, show_default=False,
        )
        return actions[choice - 1] if choice else None

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        click.echo(message)
        return await self._choose_action(actions)

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        click.secho(message, fg="red", err=True)
        return await self._choose_action(actions)

    async def show_quick_pick(
            self,
            items: AsyncIterator[T],
            placeholder: str,
            label: Callable[[T], str] = default_label,
    ) -> Optional[T]:
        click.echo(placeholder)
        choices: list[T] = []
        async for item in items:
            choices.append(item)
            click.echo(f"  [{len(choices)}] {label(item)}")

        if not choices:
            click.echo("  (nothing to choose from)")
            return None

        click.echo("  [0] Cancel")
        choice = await self._run_blocking(
            click.prompt, "Choose", type=click.IntRange(0, len(choices)), default=0, show_default=False,
        )
        return choices[choice - 1] if choice else None

    async def with_progress(self, title: str, work: Callable[[], Awaitable[T]]) -> T:
        click.echo(f"{title}...")
        return await work()


class ConsolePromptServicePlugin(PromptServicePluginBase):
    PROVIDER_NAME = 'console'

    def initialize(self, v: Variables, logger: Logger) -> Optional[ConsolePromptService]:
        return ConsolePromptService(v=v, logger=logger)
