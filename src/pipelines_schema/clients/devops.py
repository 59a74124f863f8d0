"""Async clients for the Azure DevOps REST API."""

import logging
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter

from ..config import (
    DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL,
    DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
    DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL,
    DEVOPS_API_VERSION,
)
from ..models.organization import Organization
from .exceptions import DevOpsError, error_for_status

logger = logging.getLogger(__name__)

_organizations_adapter = TypeAdapter(list[Organization])


def _error_message(response: httpx.Response) -> Optional[str]:
    """Pull the error message out of an Azure DevOps error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message") or body.get("detail")
    return None


class DevOpsClient:
    """
    Base client for Azure DevOps REST endpoints authenticated with a bearer token.

    Usage:
        async with TaskAgentClient(access_token, "contoso") as client:
            schema = await client.get_yaml_schema()
    """

    def __init__(
        self,
        access_token: str,
        base_url: str,
        timeout: float = DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
        api_version: str = DEVOPS_API_VERSION,
    ):
        """
        Initialize the client.

        Args:
            access_token: OAuth bearer token for the session
            base_url: Base address all request paths are relative to
            timeout: Request timeout in seconds
            api_version: api-version query parameter sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.api_version = api_version
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "DevOpsClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.access_token}",
                "Accept": "application/json",
            },
            timeout=self.timeout,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure client is initialized."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async with context manager.")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Make HTTP request with error handling.

        Raises:
            AuthenticationError: Authentication failed (401)
            AuthorizationError: Authorization denied (403)
            NotFoundError: Resource not found (404)
            RateLimitError: Rate limit exceeded (429)
            ServerError: Server error (5xx)
            DevOpsError: Other errors
        """
        client = self._ensure_client()
        query = {"api-version": self.api_version, **(params or {})}

        try:
            response = await client.request(method, path, params=query)

            if response.status_code >= 400:
                raise error_for_status(response.status_code, _error_message(response))

            if response.status_code == 204:
                return {}

            return response.json()

        except httpx.TimeoutException as e:
            raise DevOpsError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise DevOpsError(f"HTTP error: {e}") from e


class OrganizationsClient(DevOpsClient):
    """Lists the organizations the signed-in member belongs to."""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL,
        timeout: float = DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
    ):
        super().__init__(access_token, base_url, timeout=timeout)

    async def get_member_id(self) -> str:
        """Return the profile id of the token's owner."""
        profile = await self._request("GET", "/_apis/profile/profiles/me")
        member_id = profile.get("id") if isinstance(profile, dict) else None
        if not member_id:
            raise DevOpsError("Profile response did not include a member id")
        return member_id

    async def list_organizations(self) -> list[Organization]:
        """
        List organizations visible to the token's owner.

        Returns:
            Organizations sorted by name
        """
        member_id = await self.get_member_id()
        body = await self._request("GET", "/_apis/accounts", params={"memberId": member_id})
        organizations = _organizations_adapter.validate_python(body.get("value", []))
        logger.debug("Member %s has access to %d organizations", member_id, len(organizations))
        return sorted(organizations, key=lambda org: org.account_name.lower())


class TaskAgentClient(DevOpsClient):
    """Organization-scoped access to the distributed task (pipelines) API."""

    def __init__(
        self,
        access_token: str,
        organization: str,
        base_url: str = DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL,
        timeout: float = DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
    ):
        super().__init__(access_token, f"{base_url.rstrip('/')}/{organization}", timeout=timeout)
        self.organization = organization

    async def get_yaml_schema(self) -> dict[str, Any]:
        """Retrieve the organization's YAML schema, including its installed tasks."""
        return await self._request("GET", "/_apis/distributedtask/yamlschema")


class DevOpsClientFactory:
    """Builds clients for a session's access token with the configured endpoints."""

    def __init__(
        self,
        devops_base_url: str = DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL,
        vssps_base_url: str = DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL,
        timeout: float = DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
    ):
        self.devops_base_url = devops_base_url
        self.vssps_base_url = vssps_base_url
        self.timeout = timeout

    def organizations(self, access_token: str) -> OrganizationsClient:
        return OrganizationsClient(access_token, base_url=self.vssps_base_url, timeout=self.timeout)

    def task_agent(self, access_token: str, organization: str) -> TaskAgentClient:
        return TaskAgentClient(access_token, organization, base_url=self.devops_base_url, timeout=self.timeout)
