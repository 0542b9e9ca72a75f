"""Tests for schema migrations and application startup."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from warplink.core.context import build_context
from warplink.core.exceptions import DuplicateShortCodeError, ServerStartupError
from warplink.core.setting import Settings
from warplink.db.link_store import LinkStore
from warplink.db.session import Database
from warplink.main import create_app


def table_layout(connection):
    inspector = inspect(connection)
    columns = {column["name"] for column in inspector.get_columns("warp_link")}
    unique = [constraint["column_names"] for constraint in inspector.get_unique_constraints("warp_link")]
    return columns, unique


@pytest.mark.asyncio
async def test_migrations_create_warp_link(tmp_path):
    """Test that migrations build warp_link and can be rerun."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'warplink.db'}")
    try:
        await database.run_migrations()
        await database.run_migrations()

        async with database.engine.connect() as connection:
            columns, unique = await connection.run_sync(table_layout)

        assert columns == {"id", "short_code", "long_url", "created_at"}
        assert ["short_code"] in unique

        store = LinkStore(database.session_maker)
        link = await store.insert("abcDEF1", "https://example.com")
        assert link.created_at is not None
        with pytest.raises(DuplicateShortCodeError):
            await store.insert("abcDEF1", "https://example.org")
    finally:
        await database.close()


@pytest.mark.asyncio
async def test_unreachable_database_aborts_startup(tmp_path):
    """Test that startup fails when the database cannot be reached."""
    settings = Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'warplink.db'}",
    )

    with pytest.raises(ServerStartupError):
        await build_context(settings)


@pytest.mark.asyncio
async def test_unsupported_dialect_aborts_startup():
    """Test that startup fails for an unsupported dialect."""
    settings = Settings(_env_file=None, DATABASE_URL="mysql+aiomysql://u:p@localhost/warplink")

    with pytest.raises(ServerStartupError, match="Invalid database configuration"):
        await build_context(settings)


def test_app_closes_pool_on_shutdown(settings):
    """Test that the lifespan closes the pool on shutdown."""
    app = create_app(settings)
    with TestClient(app):
        database = app.state.context.database
        assert not database.closed

    assert database.closed


@pytest.mark.asyncio
async def test_code_length_ignores_environment(monkeypatch):
    """Test that links get 7-character codes whatever the environment says."""
    monkeypatch.setenv("SHORT_CODE_LENGTH", "3")
    context = await build_context(Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///:memory:"))
    try:
        link = await context.link_service.create_link("https://example.com")
    finally:
        await context.close()

    assert len(link.short_code) == 7
