"""Unit tests for workspace state services (in-memory and SQLite)."""
import pytest
import pytest_asyncio

from pipelines_schema.config import ORGANIZATION_DETAILS_STATE_KEY
from pipelines_schema.exceptions import WorkspaceStateError
from pipelines_schema.models import OrganizationDetails
from pipelines_schema.services.workspace_state.in_memory import InMemoryWorkspaceStateService
from pipelines_schema.services.workspace_state.sqlite import SQLiteWorkspaceStateService


@pytest_asyncio.fixture(params=["in-memory", "sqlite"])
async def state(request, tmp_path, v):
    if request.param == "sqlite":
        service = SQLiteWorkspaceStateService(db_path=str(tmp_path / "state" / "workspace-state.db"), v=v)
    else:
        service = InMemoryWorkspaceStateService(v=v)
    await service.connect()
    yield service
    await service.disconnect()


class TestKeyValue:

    @pytest.mark.asyncio
    async def test_get_default(self, state):
        assert await state.get("missing") is None
        assert await state.get("missing", {}) == {}

    @pytest.mark.asyncio
    async def test_update_and_remove(self, state):
        await state.update("key", {"a": [1, 2]})
        assert await state.get("key") == {"a": [1, 2]}

        await state.update("key", {"b": True})
        assert await state.get("key") == {"b": True}

        await state.update("key", None)
        assert await state.get("key") is None

    @pytest.mark.asyncio
    async def test_returned_values_are_copies(self, state):
        await state.update("key", {"a": 1})
        value = await state.get("key")
        value["a"] = 2
        assert await state.get("key") == {"a": 1}


class TestOrganizationDetails:

    @pytest.mark.asyncio
    async def test_save_merges_per_workspace(self, state):
        await state.save_organization_details("repo-a", OrganizationDetails(organization="contoso", tenant="t1"))
        await state.save_organization_details("repo-b", OrganizationDetails(organization="fabrikam", tenant="t2"))
        await state.save_organization_details("repo-a", OrganizationDetails(organization="tailspin", tenant="t3"))

        assert await state.get(ORGANIZATION_DETAILS_STATE_KEY) == {
            "repo-a": {"organization": "tailspin", "tenant": "t3"},
            "repo-b": {"organization": "fabrikam", "tenant": "t2"},
        }
        assert await state.get_workspace_organization("repo-b") == OrganizationDetails(
            organization="fabrikam", tenant="t2")
        assert await state.get_workspace_organization("repo-z") is None

    @pytest.mark.asyncio
    async def test_forget(self, state):
        await state.save_organization_details("repo-a", OrganizationDetails(organization="contoso", tenant="t1"))
        await state.save_organization_details("repo-b", OrganizationDetails(organization="fabrikam", tenant="t2"))

        assert await state.forget_organization_details("repo-a") is True
        assert await state.forget_organization_details("repo-a") is False
        assert list((await state.get_organization_details()).keys()) == ["repo-b"]

        assert await state.forget_organization_details("repo-b") is True
        assert await state.get(ORGANIZATION_DETAILS_STATE_KEY) is None


class TestSQLitePersistence:

    @pytest.mark.asyncio
    async def test_survives_reconnect(self, tmp_path, v):
        db_path = str(tmp_path / "workspace-state.db")
        first = SQLiteWorkspaceStateService(db_path=db_path, v=v)
        await first.connect()
        await first.save_organization_details("repo-a", OrganizationDetails(organization="contoso", tenant="t1"))
        await first.disconnect()

        second = SQLiteWorkspaceStateService(db_path=db_path, v=v)
        await second.connect()
        try:
            assert await second.get_workspace_organization("repo-a") == OrganizationDetails(
                organization="contoso", tenant="t1")
        finally:
            await second.disconnect()

    @pytest.mark.asyncio
    async def test_requires_connection(self, tmp_path, v):
        service = SQLiteWorkspaceStateService(db_path=str(tmp_path / "state.db"), v=v)
        with pytest.raises(WorkspaceStateError):
            await service.get("key")
