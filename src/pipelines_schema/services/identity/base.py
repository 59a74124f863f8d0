"""
Identity Provider - Authenticated sessions.

A session is a credential for one account. Each session belongs to a tenant
and can access zero or more organizations.

Operations:
- wait_for_login: Wait until sessions are loaded; False means not signed in
- sessions: Currently available sessions, in provider order
- login: Interactive or configured sign-in
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import PIPELINES_SCHEMA_IDENTITY_PROVIDER, DEFAULT_PIPELINES_SCHEMA_IDENTITY_PROVIDER
from .._constants import EXT_IDENTITY_PROVIDER


@dataclass
class AccessToken:
    """A bearer token issued for a session."""
    token: str


class AuthSession(ABC):
    """An authenticated credential scoped to one tenant."""

    @property
    @abstractmethod
    def tenant_id(self) -> str:
        """Stable tenant identifier of the session."""
        pass

    @abstractmethod
    async def get_token(self) -> AccessToken:
        """Return a fresh access token."""
        pass


class IdentityProvider(ABC):
    """Interface for the identity/session provider."""

    @abstractmethod
    async def wait_for_login(self) -> bool:
        """
        Wait for account information to finish loading.

        Returns:
            False if nobody is signed in
        """
        pass

    @property
    @abstractmethod
    def sessions(self) -> list[AuthSession]:
        """Available sessions in provider order."""
        pass

    @abstractmethod
    async def login(self) -> bool:
        """
        Sign in.

        Returns:
            True if at least one session is available afterwards
        """
        pass

    def find_session_by_tenant(self, tenant_id: str) -> Optional[AuthSession]:
        return next((s for s in self.sessions if s.tenant_id == tenant_id), None)


# noinspection PyAbstractClass
class IdentityProviderPluginBase(Plugin):
    """Base plugin for identity provider."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_IDENTITY_PROVIDER}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_IDENTITY_PROVIDER

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, PIPELINES_SCHEMA_IDENTITY_PROVIDER, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(PIPELINES_SCHEMA_IDENTITY_PROVIDER, DEFAULT_PIPELINES_SCHEMA_IDENTITY_PROVIDER)
