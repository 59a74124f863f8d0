"""Identity provider configured with static bearer tokens."""
from logging import Logger
from typing import Callable, Optional

from scitrera_app_framework import Variables, get_logger

from ...config import PIPELINES_SCHEMA_SESSIONS, DEFAULT_PIPELINES_SCHEMA_SESSIONS
from .base import AccessToken, AuthSession, IdentityProvider, IdentityProviderPluginBase


class StaticTokenSession(AuthSession):
    """Session backed by a pre-issued token (PAT or OAuth token)."""

    def __init__(self, tenant_id: str, token: str):
        self._tenant_id = tenant_id
        self._token = token

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    async def get_token(self) -> AccessToken:
        return AccessToken(token=self._token)

    def __repr__(self) -> str:
        return f"StaticTokenSession(tenant_id={self._tenant_id!r})"


def parse_sessions(value: Optional[str]) -> list[StaticTokenSession]:
    """
    Parse ``tenant:token`` pairs separated by commas.

    Entries without a tenant or token are ignored.
    """
    sessions = []
    for entry in (value or '').split(','):
        tenant, sep, token = entry.strip().partition(':')
        if sep and tenant.strip() and token.strip():
            sessions.append(StaticTokenSession(tenant.strip(), token.strip()))
    return sessions


class EnvironmentIdentityProvider(IdentityProvider):
    """
    Identity provider reading sessions from configuration.

    ``login()`` re-reads the configured value, so tokens exported after startup
    are picked up on the next sign-in.
    """

    def __init__(self, load_sessions: Callable[[], list[AuthSession]], v: Variables = None, logger: Logger = None):
        self._load_sessions = load_sessions
        self._sessions: Optional[list[AuthSession]] = None
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    @property
    def sessions(self) -> list[AuthSession]:
        return list(self._sessions or [])

    async def wait_for_login(self) -> bool:
        if self._sessions is None:
            self._sessions = self._load_sessions()
            self.logger.debug("Loaded %d configured sessions", len(self._sessions))
        return len(self._sessions) > 0

    async def login(self) -> bool:
        self._sessions = self._load_sessions()
        if not self._sessions:
            self.logger.warning("No sessions configured; set %s to tenant:token pairs", PIPELINES_SCHEMA_SESSIONS)
            return False
        self.logger.info("Signed in with %d sessions", len(self._sessions))
        return True


class EnvironmentIdentityProviderPlugin(IdentityProviderPluginBase):
    """Plugin for the environment identity provider."""
    PROVIDER_NAME = 'environment'

    def initialize(self, v: Variables, logger: Logger) -> Optional[EnvironmentIdentityProvider]:
        def load_sessions() -> list[AuthSession]:
            return parse_sessions(v.environ(PIPELINES_SCHEMA_SESSIONS, default=DEFAULT_PIPELINES_SCHEMA_SESSIONS))

        return EnvironmentIdentityProvider(load_sessions, v=v, logger=logger)
