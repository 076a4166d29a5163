"""
Shared fixtures: a SQLite-backed document/relational store, in-memory ODBC
sources and an HTTP client wired through the dependency container.
"""
from __future__ import annotations

from typing import Any, AsyncGenerator

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from core.database import SQLDatabase
from core.environment import SourceMode, SQLConfig
from core.exceptions import SourceException
from model.dao.sync_record import SyncRecordDAO  # noqa: F401  registers the table
from model.dao.users import CustomerDAO, UserDAO  # noqa: F401  registers the tables
from service.sync import SyncService


class FakeSource:
    """Stands in for an ODBCSource; keeps tables and inserted statements in memory."""

    def __init__(self, name: str, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.name = name
        self.tables = tables or {}
        self.statements: list[tuple[str, list[Any]]] = []
        self.fetch_calls = 0
        self.error: str | None = None

    async def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        self.fetch_calls += 1
        if self.error:
            raise SourceException(self.name, self.error)
        return [dict(row) for row in self.tables.get(table, [])]

    async def insert_rows(self, table: str, statements) -> int:
        if self.error:
            raise SourceException(self.name, self.error)
        statements = list(statements)
        self.statements.extend(statements)
        return len(statements)

    async def check_connection(self) -> bool:
        return self.error is None


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[SQLDatabase, None]:
    config = SQLConfig(driver="sqlite+aiosqlite", database=str(tmp_path / "syncbridge.db"))
    db = await SQLDatabase().init(config, create_tables=True)
    yield db
    await db.shutdown(None)


@pytest.fixture
def sources() -> dict[SourceMode, FakeSource]:
    return {
        SourceMode.OFFLINE: FakeSource(SourceMode.OFFLINE),
        SourceMode.ONLINE: FakeSource(SourceMode.ONLINE),
    }


@pytest.fixture
def sync_service(database: SQLDatabase, sources) -> SyncService:
    # Small batches so multi-statement upserts are exercised
    return SyncService(database, sources, key_column="id", batch_size=2)


@pytest.fixture
async def client(database: SQLDatabase, sources) -> AsyncGenerator[AsyncClient, None]:
    from core.di_container import DependencyContainer
    from main import app

    container = DependencyContainer()
    container.pg_database.override(providers.Object(database))
    container.sources.override(providers.Object(sources))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    container.reset_override()
    container.unwire()
