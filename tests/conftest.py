"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from warplink.core.exceptions import DuplicateShortCodeError, StoreError
from warplink.core.setting import Settings
from warplink.db.link_store import LinkStore
from warplink.db.models import Link
from warplink.db.session import Database
from warplink.main import create_app
from warplink.services.short_code import ALPHABET, DEFAULT_CODE_LENGTH

MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeLinkStore:
    """
    In-memory LinkStore double that records every call.

    `collide_with` codes are reported as existing by `find_by_code`;
    `race_on_insert` codes make `insert` raise DuplicateShortCodeError once
    each, as if a concurrent creator had just taken them.
    """

    def __init__(self):
        self.links: dict[str, Link] = {}
        self.calls: list[tuple[str, str]] = []
        self.collide_with: set[str] = set()
        self.race_on_insert: set[str] = set()
        self.fail_with: Optional[StoreError] = None
        self._next_id = 1

    async def find_by_code(self, short_code: str) -> Optional[Link]:
        self.calls.append(("find_by_code", short_code))
        if self.fail_with is not None:
            raise self.fail_with
        if short_code in self.collide_with:
            return Link(id=0, short_code=short_code, long_url="https://taken.example.com")
        return self.links.get(short_code)

    async def insert(self, short_code: str, long_url: str) -> Link:
        self.calls.append(("insert", short_code))
        if short_code in self.race_on_insert:
            self.race_on_insert.discard(short_code)
            raise DuplicateShortCodeError(short_code)
        if short_code in self.links:
            raise DuplicateShortCodeError(short_code)
        link = Link(
            id=self._next_id,
            short_code=short_code,
            long_url=long_url,
            created_at=datetime.now(timezone.utc),
        )
        self._next_id += 1
        self.links[short_code] = link
        return link


def is_short_code(value: str) -> bool:
    return len(value) == DEFAULT_CODE_LENGTH and all(char in ALPHABET for char in value)


class ScriptedCodes:
    """Code factory returning a fixed sequence of codes."""

    def __init__(self, *codes: str):
        self.codes = list(codes)
        self.issued: list[str] = []

    def __call__(self, length: int) -> str:
        code = self.codes.pop(0)
        self.issued.append(code)
        return code


@pytest.fixture
def fake_store() -> FakeLinkStore:
    return FakeLinkStore()


@pytest.fixture
def scripted_codes() -> type[ScriptedCodes]:
    return ScriptedCodes


@pytest.fixture(name="is_short_code")
def is_short_code_fixture():
    return is_short_code


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=MEMORY_DATABASE_URL,
        LOG_LEVEL="DEBUG",
    )


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(MEMORY_DATABASE_URL)
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def store(database) -> LinkStore:
    return LinkStore(database.session_maker)


@pytest.fixture
def client(settings):
    """HTTP client against an app whose lifespan migrates a fresh database."""
    with TestClient(create_app(settings)) as client:
        yield client
