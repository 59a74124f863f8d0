"""Unit tests for the Azure DevOps REST clients (HTTP mocked with respx)."""
import pytest
import respx
from httpx import Response, ConnectError

from pipelines_schema.clients import (
    AuthenticationError,
    AuthorizationError,
    DevOpsClientFactory,
    DevOpsError,
    NotFoundError,
    OrganizationsClient,
    RateLimitError,
    ServerError,
    TaskAgentClient,
    error_for_status,
)

VSSPS = "https://app.vssps.visualstudio.com"
DEVOPS = "https://dev.azure.com"


class TestOrganizationsClient:

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_organizations_sorted(self):
        profile = respx.get(f"{VSSPS}/_apis/profile/profiles/me").mock(
            return_value=Response(200, json={"id": "member-1"}))
        accounts = respx.get(f"{VSSPS}/_apis/accounts").mock(return_value=Response(200, json={
            "count": 2,
            "value": [
                {"accountId": "2", "accountName": "zeta", "accountUri": "https://zeta.example"},
                {"accountId": "1", "accountName": "Alpha"},
            ],
        }))

        async with OrganizationsClient("secret") as client:
            organizations = await client.list_organizations()

        assert [org.account_name for org in organizations] == ["Alpha", "zeta"]
        assert profile.called
        request = accounts.calls.last.request
        assert request.url.params["memberId"] == "member-1"
        assert request.url.params["api-version"] == "7.1"
        assert request.headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_member_id(self):
        respx.get(f"{VSSPS}/_apis/profile/profiles/me").mock(return_value=Response(200, json={}))
        async with OrganizationsClient("secret") as client:
            with pytest.raises(DevOpsError):
                await client.list_organizations()


class TestTaskAgentClient:

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_yaml_schema_is_organization_scoped(self):
        route = respx.get(f"{DEVOPS}/contoso/_apis/distributedtask/yamlschema").mock(
            return_value=Response(200, json={"$schema": "http://json-schema.org/draft-07/schema#"}))

        async with TaskAgentClient("secret", "contoso") as client:
            schema = await client.get_yaml_schema()

        assert route.called
        assert schema["$schema"].startswith("http://json-schema.org")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error", [
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (503, ServerError),
        (400, DevOpsError),
    ])
    @respx.mock
    async def test_status_codes_map_to_errors(self, status, error):
        respx.get(f"{DEVOPS}/contoso/_apis/distributedtask/yamlschema").mock(
            return_value=Response(status, json={"message": "nope"}))

        async with TaskAgentClient("secret", "contoso") as client:
            with pytest.raises(error) as exc_info:
                await client.get_yaml_schema()

        assert exc_info.value.status_code == status
        assert exc_info.value.message == "nope"

    @pytest.mark.asyncio
    @respx.mock
    async def test_rejected_token_without_body(self):
        respx.get(f"{DEVOPS}/contoso/_apis/distributedtask/yamlschema").mock(return_value=Response(401))

        async with TaskAgentClient("secret", "contoso") as client:
            with pytest.raises(AuthenticationError) as exc_info:
                await client.get_yaml_schema()

        assert exc_info.value.message == "Authentication failed"
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_errors_are_wrapped(self):
        respx.get(f"{DEVOPS}/contoso/_apis/distributedtask/yamlschema").mock(side_effect=ConnectError("down"))

        async with TaskAgentClient("secret", "contoso") as client:
            with pytest.raises(DevOpsError):
                await client.get_yaml_schema()

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        client = TaskAgentClient("secret", "contoso")
        with pytest.raises(RuntimeError):
            await client.get_yaml_schema()


class TestDevOpsClientFactory:

    def test_clients_use_configured_endpoints(self):
        factory = DevOpsClientFactory(devops_base_url="https://devops.local/",
                                      vssps_base_url="https://vssps.local", timeout=5.0)

        task_agent = factory.task_agent("secret", "contoso")
        organizations = factory.organizations("secret")

        assert task_agent.base_url == "https://devops.local/contoso"
        assert organizations.base_url == "https://vssps.local"
        assert task_agent.timeout == organizations.timeout == 5.0


class TestErrorForStatus:

    @pytest.mark.parametrize("status,error,message", [
        (401, AuthenticationError, "Authentication failed"),
        (404, NotFoundError, "Resource not found"),
        (502, ServerError, "Server error"),
        (418, DevOpsError, "Request failed"),
    ])
    def test_default_messages(self, status, error, message):
        exc = error_for_status(status)

        assert type(exc) is error
        assert exc.status_code == status
        assert str(exc) == message
