"""Session matcher: which authenticated session can reach an organization."""
from logging import Logger
from typing import AsyncIterator, Optional, Sequence

from scitrera_app_framework import Plugin, Variables, get_logger

from ...clients.devops import DevOpsClientFactory
from ...clients.exceptions import AuthenticationError
from ...models.organization import Organization, OrganizationCandidate
from ..identity.base import AuthSession
from .._constants import EXT_SESSION_MATCHER, EXT_DEVOPS_CLIENT_FACTORY


class SessionMatcher:
    """Matches organizations against the organization lists of each session."""

    def __init__(self, client_factory: DevOpsClientFactory, v: Variables = None, logger: Logger = None):
        self._client_factory = client_factory
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def list_organizations(self, session: AuthSession) -> list[Organization]:
        """Organizations visible to ``session`` (one network call)."""
        token = await session.get_token()
        async with self._client_factory.organizations(token.token) as client:
            return await client.list_organizations()

    async def _try_list_organizations(self, session: AuthSession) -> Optional[list[Organization]]:
        try:
            return await self.list_organizations(session)
        except AuthenticationError as e:
            self.logger.warning("Token rejected for tenant %s: %s", session.tenant_id, e)
        except Exception as e:
            self.logger.warning("Unable to list organizations for tenant %s: %s", session.tenant_id, e, exc_info=True)
        return None

    async def find_session(self, organization: str, sessions: Sequence[AuthSession]) -> Optional[AuthSession]:
        """
        Find the first session, in provider order, whose organizations include ``organization``.

        Returns:
            The matching session, or None if no session can access the organization
        """
        for session in sessions:
            organizations = await self._try_list_organizations(session)
            if organizations and any(org.matches(organization) for org in organizations):
                self.logger.debug("Organization %s is accessible from tenant %s", organization, session.tenant_id)
                return session
        self.logger.debug("No session can access organization %s", organization)
        return None

    async def list_candidates(self, sessions: Sequence[AuthSession]) -> AsyncIterator[OrganizationCandidate]:
        """Yield an (organization, session) candidate per organization as each session's list arrives."""
        for session in sessions:
            organizations = await self._try_list_organizations(session) or []
            for org in organizations:
                yield OrganizationCandidate(label=org.account_name, session=session)


class SessionMatcherPlugin(Plugin):
    """Plugin to register the session matcher."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_SESSION_MATCHER

    def get_dependencies(self, v: Variables):
        return (EXT_DEVOPS_CLIENT_FACTORY,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[SessionMatcher]:
        return SessionMatcher(self.get_extension(EXT_DEVOPS_CLIENT_FACTORY, v), v=v, logger=logger)
