"""Git source control service backed by the git executable."""
import asyncio
from logging import Logger
from pathlib import Path
from typing import Optional

from scitrera_app_framework import Variables, get_logger

from ...config import PIPELINES_SCHEMA_GIT_EXECUTABLE, DEFAULT_PIPELINES_SCHEMA_GIT_EXECUTABLE
from ...exceptions import GitCommandError
from .base import (
    Head,
    Remote,
    Repository,
    SourceControlService,
    SourceControlServicePluginBase,
    UpstreamRef,
)


class GitRunner:
    """Runs git commands as asyncio subprocesses."""

    def __init__(self, executable: str = DEFAULT_PIPELINES_SCHEMA_GIT_EXECUTABLE):
        self.executable = executable

    async def run(self, cwd: Path, *args: str) -> str:
        """
        Run ``git <args>`` in ``cwd``.

        Returns:
            Stripped stdout

        Raises:
            GitCommandError: git exited with a non-zero status
            OSError: the executable or working directory is missing
        """
        process = await asyncio.create_subprocess_exec(
            self.executable, *args,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise GitCommandError(args, process.returncode, stderr.decode(errors='replace'))
        return stdout.decode(errors='replace').strip()

    async def run_optional(self, cwd: Path, *args: str) -> Optional[str]:
        """Like ``run`` but returns None when git reports failure (e.g. unset config key)."""
        try:
            output = await self.run(cwd, *args)
        except GitCommandError:
            return None
        return output or None


def parse_remotes(output: str) -> list[Remote]:
    """Parse ``git remote -v`` output into remotes, preserving first-seen order."""
    remotes: dict[str, Remote] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name, url = parts[0], parts[1]
        kind = parts[2] if len(parts) > 2 else '(fetch)'
        remote = remotes.setdefault(name, Remote(name=name))
        if kind != '(push)':
            remote.fetch_url = url
    return list(remotes.values())


class GitRepository(Repository):
    """Repository state read through the git CLI."""

    def __init__(self, root: Path, runner: GitRunner):
        super().__init__(root)
        self._runner = runner

    async def status(self) -> None:
        branch = await self._runner.run_optional(self.root, 'symbolic-ref', '--short', '-q', 'HEAD')
        upstream = None
        if branch:
            remote = await self._runner.run_optional(self.root, 'config', '--get', f'branch.{branch}.remote')
            merge = await self._runner.run_optional(self.root, 'config', '--get', f'branch.{branch}.merge')
            if remote and merge:
                upstream = UpstreamRef(remote=remote, name=merge.removeprefix('refs/heads/'))

        self.state.head = Head(name=branch, upstream=upstream)
        self.state.remotes = parse_remotes(await self._runner.run(self.root, 'remote', '-v'))


class GitSourceControlService(SourceControlService):
    """Source control service using the local git executable."""

    def __init__(self, runner: GitRunner = None, v: Variables = None, logger: Logger = None):
        self._runner = runner or GitRunner()
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def open_repository(self, root: Path) -> Optional[Repository]:
        try:
            toplevel = await self._runner.run(Path(root), 'rev-parse', '--show-toplevel')
        except GitCommandError as e:
            self.logger.debug("%s is not inside a git repository: %s", root, e)
            return None
        except OSError as e:
            self.logger.debug("Unable to run git in %s: %s", root, e)
            return None
        return GitRepository(Path(toplevel), self._runner)


class GitSourceControlServicePlugin(SourceControlServicePluginBase):
    """Plugin for git source control service."""
    PROVIDER_NAME = 'git'

    def initialize(self, v: Variables, logger: Logger) -> Optional[GitSourceControlService]:
        executable = v.environ(PIPELINES_SCHEMA_GIT_EXECUTABLE, default=DEFAULT_PIPELINES_SCHEMA_GIT_EXECUTABLE)
        return GitSourceControlService(runner=GitRunner(executable), v=v, logger=logger)
