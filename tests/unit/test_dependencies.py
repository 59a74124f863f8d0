"""
Wiring test: every service is registered as a plugin and resolves through
scitrera-app-framework with the default providers.
"""
from pathlib import Path

import pytest
from scitrera_app_framework import Variables

from pipelines_schema.config import (
    DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR,
    PIPELINES_SCHEMA_DATA_DIR,
    PIPELINES_SCHEMA_SESSIONS,
)
from pipelines_schema.models import SchemaSource, WorkspaceFolder


@pytest.mark.asyncio
async def test_services_lifecycle(tmp_path, monkeypatch, test_logger):
    from pipelines_schema.dependencies import preconfigure, initialize_services, shutdown_services
    from pipelines_schema.services.channel.log import LoggingNotificationChannel
    from pipelines_schema.services.channel import get_notification_channel
    from pipelines_schema.services.identity.environment import EnvironmentIdentityProvider
    from pipelines_schema.services.identity import get_identity_provider
    from pipelines_schema.services.prompt.headless import HeadlessPromptService
    from pipelines_schema.services.prompt import get_prompt_service
    from pipelines_schema.services.publisher import get_association_publisher
    from pipelines_schema.services.resolution import get_resolution_service
    from pipelines_schema.services.workspace_state.sqlite import SQLiteWorkspaceStateService
    from pipelines_schema.services.workspace_state import get_workspace_state_service

    monkeypatch.chdir(tmp_path)  # framework changes into the data directory
    workspace_dir = tmp_path / "repo-b"
    workspace_dir.mkdir()
    workspace = WorkspaceFolder(name="repo-b", path=workspace_dir)

    v = Variables()
    v.set(PIPELINES_SCHEMA_DATA_DIR, str(tmp_path / "data"))
    v.set(PIPELINES_SCHEMA_SESSIONS, "")

    v, _ = preconfigure(v=v, test_mode=True, test_logger=test_logger)
    v = await initialize_services(v)
    try:
        assert isinstance(get_identity_provider(v), EnvironmentIdentityProvider)
        assert isinstance(get_prompt_service(v), HeadlessPromptService)
        assert isinstance(get_workspace_state_service(v), SQLiteWorkspaceStateService)
        channel = get_notification_channel(v)
        assert isinstance(channel, LoggingNotificationChannel)

        resolution = get_resolution_service(v)
        bundled = Path(DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR) / "service-schema.json"
        assert bundled.is_file()

        location = await resolution.resolve(workspace)
        await resolution.wait_for_background_tasks()
        assert location.source == SchemaSource.BUNDLED
        assert location.path == str(bundled)

        associations = await get_association_publisher(v).publish(workspace)
        await resolution.wait_for_background_tasks()
        assert associations == {"*": [str(bundled)]}
        assert channel.sent[-1] == ("json/schemaAssociations", {"*": [str(bundled)]})
    finally:
        await shutdown_services(v)
