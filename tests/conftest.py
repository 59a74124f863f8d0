"""
Pytest configuration and fixtures for pipelines-schema tests.

Collaborators (sessions, source control, DevOps clients, prompts) are replaced
by small in-process fakes so every resolution path can be driven
deterministically and network calls can be counted.

Usage in tests:
    async def test_something(resolution_service, identity_provider):
        identity_provider.set_sessions(...)
        location = await resolution_service.resolve(workspace)
"""
import logging
from pathlib import Path
from typing import AsyncIterator, Callable, Optional

import pytest
from scitrera_app_framework import Variables

from pipelines_schema.clients.exceptions import AuthenticationError
from pipelines_schema.models import Organization, WorkspaceFolder
from pipelines_schema.services.disambiguator import Disambiguator
from pipelines_schema.services.identity.base import AccessToken, AuthSession, IdentityProvider
from pipelines_schema.services.identity_resolver import IdentityResolver
from pipelines_schema.services.notifier import AssociationNotifier
from pipelines_schema.services.prompt.base import PromptService, default_label
from pipelines_schema.services.resolution import ResolutionService
from pipelines_schema.services.schema_cache import SessionCache
from pipelines_schema.services.schema_fetcher.default import DefaultSchemaFetcher
from pipelines_schema.services.session_matcher import SessionMatcher
from pipelines_schema.services.source_control.base import (
    Head,
    Remote,
    Repository,
    SourceControlService,
    UpstreamRef,
)
from pipelines_schema.services.workspace_state.in_memory import InMemoryWorkspaceStateService


# -----------------------------------------------------------------------------
# Logging Configuration (initialized by test harness, not framework)
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def test_logger() -> logging.Logger:
    """
    Create a root logger for tests.

    The test harness owns logging configuration, not the framework.
    """
    logger = logging.getLogger("pipelines-schema-test")
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(funcName)s() > %(message)s',
            datefmt='%Y/%m/%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


@pytest.fixture
def v() -> Variables:
    """Provide a Variables instance for service construction."""
    return Variables()


# -----------------------------------------------------------------------------
# Fakes
# -----------------------------------------------------------------------------

class FakeSession(AuthSession):
    """Session with a fixed token; ``token_error`` makes get_token fail."""

    def __init__(self, tenant_id: str, token: Optional[str] = None, token_error: Exception = None):
        self._tenant_id = tenant_id
        self.token = token or f"token-{tenant_id}"
        self.token_error = token_error
        self.token_calls = 0

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    async def get_token(self) -> AccessToken:
        self.token_calls += 1
        if self.token_error is not None:
            raise self.token_error
        return AccessToken(token=self.token)

    def __repr__(self) -> str:
        return f"FakeSession({self._tenant_id!r})"


class FakeIdentityProvider(IdentityProvider):

    def __init__(self, sessions: list[AuthSession] = None, login_sessions: list[AuthSession] = None):
        self._sessions = list(sessions or [])
        self.login_sessions = login_sessions
        self.wait_calls = 0
        self.login_calls = 0

    @property
    def sessions(self) -> list[AuthSession]:
        return list(self._sessions)

    def set_sessions(self, *sessions: AuthSession) -> None:
        self._sessions = list(sessions)

    async def wait_for_login(self) -> bool:
        self.wait_calls += 1
        return bool(self._sessions)

    async def login(self) -> bool:
        self.login_calls += 1
        if self.login_sessions is not None:
            self._sessions = list(self.login_sessions)
        return bool(self._sessions)


class FakeRepository(Repository):

    def __init__(self, root: Path, remote_url: Optional[str], upstream_remote: str = 'origin'):
        super().__init__(root)
        self._remote_url = remote_url
        self._upstream_remote = upstream_remote
        self.status_calls = 0

    async def status(self) -> None:
        self.status_calls += 1
        upstream = UpstreamRef(remote=self._upstream_remote, name='main') if self._upstream_remote else None
        self.state.head = Head(name='main', upstream=upstream)
        self.state.remotes = [Remote(name='origin', fetch_url=self._remote_url)] if self._remote_url else []


class FakeSourceControl(SourceControlService):
    """Maps workspace roots to upstream remote URLs; unknown roots are not repositories."""

    def __init__(self, remotes: dict[Path, Optional[str]] = None, error: Exception = None):
        self.remotes = dict(remotes or {})
        self.error = error

    def add(self, workspace: WorkspaceFolder, remote_url: Optional[str]) -> None:
        self.remotes[workspace.path] = remote_url

    async def open_repository(self, root: Path) -> Optional[Repository]:
        if self.error is not None:
            raise self.error
        if root not in self.remotes:
            return None
        return FakeRepository(root, self.remotes[root])


class FakeOrganizationsClient:

    def __init__(self, factory: "FakeClientFactory", access_token: str):
        self._factory = factory
        self._access_token = access_token

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        pass

    async def list_organizations(self) -> list[Organization]:
        self._factory.calls.append(('list_organizations', self._access_token))
        if self._access_token in self._factory.failing_tokens:
            raise AuthenticationError()
        names = self._factory.organizations_by_token.get(self._access_token, [])
        return [Organization(account_name=name) for name in names]


class FakeTaskAgentClient:

    def __init__(self, factory: "FakeClientFactory", access_token: str, organization: str):
        self._factory = factory
        self._access_token = access_token
        self.organization = organization

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        pass

    async def get_yaml_schema(self) -> dict:
        self._factory.calls.append(('get_yaml_schema', self.organization))
        if self._factory.schema_error is not None:
            raise self._factory.schema_error
        return self._factory.schemas.get(self.organization, {"organization": self.organization})


class FakeClientFactory:
    """Stands in for DevOpsClientFactory and records every network call."""

    def __init__(self):
        self.organizations_by_token: dict[str, list[str]] = {}
        self.schemas: dict[str, dict] = {}
        self.failing_tokens: set[str] = set()
        self.schema_error: Optional[Exception] = None
        self.calls: list[tuple[str, str]] = []

    def grant(self, session: FakeSession, *organizations: str) -> None:
        self.organizations_by_token[session.token] = list(organizations)

    def organizations(self, access_token: str) -> FakeOrganizationsClient:
        return FakeOrganizationsClient(self, access_token)

    def task_agent(self, access_token: str, organization: str) -> FakeTaskAgentClient:
        return FakeTaskAgentClient(self, access_token, organization)

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)


class RecordingPrompt(PromptService):
    """
    Scripted prompt service.

    ``action`` answers information messages; ``pick`` chooses from the
    quick-pick items by label (None cancels).
    """

    def __init__(self, action: Optional[str] = None, pick: Optional[str] = None):
        self.action = action
        self.pick = pick
        self.information: list[tuple[str, tuple[str, ...]]] = []
        self.errors: list[str] = []
        self.quick_picks: list[tuple[str, list[str]]] = []
        self.progress: list[str] = []

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        self.information.append((message, actions))
        return self.action if self.action in actions else None

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        self.errors.append(message)
        return None

    async def show_quick_pick(self, items: AsyncIterator, placeholder: str,
                              label: Callable = default_label):
        offered = [item async for item in items]
        self.quick_picks.append((placeholder, [label(item) for item in offered]))
        return next((item for item in offered if label(item) == self.pick), None)

    async def with_progress(self, title: str, work):
        self.progress.append(title)
        return await work()


# -----------------------------------------------------------------------------
# Service Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def client_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def source_control() -> FakeSourceControl:
    return FakeSourceControl()


@pytest.fixture
def prompt() -> RecordingPrompt:
    return RecordingPrompt()


@pytest.fixture
def workspace_state(v) -> InMemoryWorkspaceStateService:
    return InMemoryWorkspaceStateService(v=v)


@pytest.fixture
def session_cache() -> SessionCache:
    return SessionCache()


@pytest.fixture
def notifier(v, test_logger) -> AssociationNotifier:
    return AssociationNotifier(v=v, logger=test_logger)


@pytest.fixture
def storage_root(tmp_path) -> Path:
    return tmp_path / "global-storage"


@pytest.fixture
def install_dir(tmp_path) -> Path:
    path = tmp_path / "install"
    path.mkdir()
    (path / "service-schema.json").write_text('{"bundled": true}')
    return path


@pytest.fixture
def session_matcher(client_factory, v, test_logger) -> SessionMatcher:
    return SessionMatcher(client_factory, v=v, logger=test_logger)


@pytest.fixture
def schema_fetcher(storage_root, session_cache, client_factory, v) -> DefaultSchemaFetcher:
    return DefaultSchemaFetcher(storage_root, session_cache, client_factory, v=v)


@pytest.fixture
def identity_resolver(identity_provider, session_matcher, workspace_state, source_control, v, test_logger):
    return IdentityResolver(
        identity_provider=identity_provider,
        session_matcher=session_matcher,
        workspace_state=workspace_state,
        source_control=source_control,
        v=v,
        logger=test_logger,
    )


@pytest.fixture
def disambiguator(identity_provider, session_matcher, workspace_state, prompt, notifier, v, test_logger):
    return Disambiguator(
        identity_provider=identity_provider,
        session_matcher=session_matcher,
        workspace_state=workspace_state,
        prompt=prompt,
        notifier=notifier,
        v=v,
        logger=test_logger,
    )


@pytest.fixture
def resolution_service(identity_provider, identity_resolver, disambiguator, schema_fetcher, prompt,
                       install_dir, v, test_logger) -> ResolutionService:
    return ResolutionService(
        identity_provider=identity_provider,
        identity_resolver=identity_resolver,
        disambiguator=disambiguator,
        schema_fetcher=schema_fetcher,
        prompt=prompt,
        install_dir=install_dir,
        v=v,
        logger=test_logger,
    )


# -----------------------------------------------------------------------------
# Test Data Factories
# -----------------------------------------------------------------------------

@pytest.fixture
def make_workspace(tmp_path) -> Callable[[str], WorkspaceFolder]:
    def factory(name: str) -> WorkspaceFolder:
        path = tmp_path / "workspaces" / name
        path.mkdir(parents=True, exist_ok=True)
        return WorkspaceFolder(name=name, path=path)

    return factory
