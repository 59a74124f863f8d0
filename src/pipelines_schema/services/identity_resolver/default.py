"""
Identity resolver: which organization a workspace folder belongs to.

Resolution order, stopping at the first that applies:
1. the upstream remote URL, when it points at Azure Repos (silent);
2. the organization previously chosen for the folder;
3. otherwise the user has to be asked (``NEEDS_PROMPT``).
"""
from dataclasses import dataclass
from logging import Logger
from typing import Optional, Union

from scitrera_app_framework import Plugin, Variables, get_logger

from ...models.workspace import WorkspaceFolder
from ...utils.remote_url import get_repository_details_from_remote_url, is_azure_repos_url
from ..identity.base import AuthSession, IdentityProvider
from ..session_matcher import SessionMatcher
from ..source_control.base import SourceControlService
from ..workspace_state.base import WorkspaceStateService
from .._constants import (
    EXT_IDENTITY_RESOLVER,
    EXT_IDENTITY_PROVIDER,
    EXT_SESSION_MATCHER,
    EXT_SOURCE_CONTROL_SERVICE,
    EXT_WORKSPACE_STATE_SERVICE,
)


class _NeedsPrompt:
    def __repr__(self) -> str:
        return 'NEEDS_PROMPT'


NEEDS_PROMPT = _NeedsPrompt()


@dataclass
class IdentityResolution:
    """
    A resolved organization.

    ``session`` is None when no available session can access the organization.
    """
    organization: str
    session: Optional[AuthSession] = None


class IdentityResolver:
    """Derives the organization for a workspace folder."""

    def __init__(
            self,
            identity_provider: IdentityProvider,
            session_matcher: SessionMatcher,
            workspace_state: WorkspaceStateService,
            source_control: Optional[SourceControlService] = None,
            v: Variables = None,
            logger: Logger = None,
    ):
        self._identity_provider = identity_provider
        self._session_matcher = session_matcher
        self._workspace_state = workspace_state
        self._source_control = source_control
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def get_upstream_remote_url(self, workspace: WorkspaceFolder) -> Optional[str]:
        """Fetch URL of the workspace's upstream remote; None whenever it cannot be determined."""
        if self._source_control is None:
            return None
        try:
            repository = await self._source_control.open_repository(workspace.path)
            if repository is None:
                return None
            await repository.status()
            return repository.get_upstream_remote_url()
        except Exception as e:
            self.logger.debug("No remote for %s: %s", workspace.name, e)
            return None

    async def derive_identity(self, workspace: WorkspaceFolder) -> Union[IdentityResolution, _NeedsPrompt]:
        remote_url = await self.get_upstream_remote_url(workspace)
        if is_azure_repos_url(remote_url):
            organization = get_repository_details_from_remote_url(remote_url).organization_name
            self.logger.debug("Derived organization %s for %s from %s", organization, workspace.name, remote_url)
            session = await self._session_matcher.find_session(organization, self._identity_provider.sessions)
            return IdentityResolution(organization, session)

        details = await self._workspace_state.get_workspace_organization(workspace.name)
        if details is not None:
            self.logger.debug("Using saved organization %s for %s", details.organization, workspace.name)
            session = self._identity_provider.find_session_by_tenant(details.tenant)
            return IdentityResolution(details.organization, session)

        return NEEDS_PROMPT


class IdentityResolverPlugin(Plugin):
    """Plugin to register the identity resolver."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_IDENTITY_RESOLVER

    def get_dependencies(self, v: Variables):
        return (EXT_IDENTITY_PROVIDER, EXT_SESSION_MATCHER, EXT_WORKSPACE_STATE_SERVICE, EXT_SOURCE_CONTROL_SERVICE,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[IdentityResolver]:
        return IdentityResolver(
            identity_provider=self.get_extension(EXT_IDENTITY_PROVIDER, v),
            session_matcher=self.get_extension(EXT_SESSION_MATCHER, v),
            workspace_state=self.get_extension(EXT_WORKSPACE_STATE_SERVICE, v),
            source_control=self.get_extension(EXT_SOURCE_CONTROL_SERVICE, v),
            v=v,
            logger=logger,
        )
