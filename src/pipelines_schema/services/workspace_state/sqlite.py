"""SQLite-backed workspace state."""
import json
from logging import Logger
from pathlib import Path
from typing import Any, Optional

import aiosqlite

from scitrera_app_framework import Variables

from ...config import PIPELINES_SCHEMA_WORKSPACE_STATE_PATH, DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE_PATH
from ...exceptions import WorkspaceStateError
from .base import WorkspaceStateService, WorkspaceStatePluginBase


class SQLiteWorkspaceStateService(WorkspaceStateService):
    """Workspace state stored as JSON values in a SQLite table."""

    def __init__(self, db_path: str = DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE_PATH, v: Variables = None):
        """
        Initialize SQLite workspace state.

        Args:
            db_path: Path to SQLite database file
            v: Variables for logging context
        """
        super().__init__(v)
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        await self._connection.execute("PRAGMA journal_mode=WAL")
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS workspace_state
            (
                key        TEXT PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at TEXT DEFAULT (datetime('now'))
            )
        """)
        await self._connection.commit()
        self.logger.info("Connected to workspace state at %s", Path(self.db_path).absolute())

    async def disconnect(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None
            self.logger.info("Disconnected from workspace state")

    def _ensure_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise WorkspaceStateError("Workspace state is not connected")
        return self._connection

    async def get(self, key: str, default: Any = None) -> Any:
        connection = self._ensure_connection()
        async with connection.execute("SELECT value FROM workspace_state WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    async def update(self, key: str, value: Any) -> None:
        connection = self._ensure_connection()
        if value is None:
            await connection.execute("DELETE FROM workspace_state WHERE key = ?", (key,))
        else:
            await connection.execute(
                """
                INSERT INTO workspace_state (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, json.dumps(value)),
            )
        await connection.commit()


class SQLiteWorkspaceStatePlugin(WorkspaceStatePluginBase):
    PROVIDER_NAME = 'sqlite'

    def initialize(self, v: Variables, logger: Logger) -> Optional[SQLiteWorkspaceStateService]:
        return SQLiteWorkspaceStateService(
            db_path=v.environ(PIPELINES_SCHEMA_WORKSPACE_STATE_PATH, default=DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE_PATH),
            v=v,
        )
