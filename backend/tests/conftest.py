from datetime import datetime, timezone

import aiosqlite
import pytest
import pytest_asyncio

from langy.models.card import Card

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
OWNER = "ana"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_card():
    """Build an in-memory Card with fresh defaults, overridable per field."""
    counter = iter(range(1, 10_000))

    def _make(**fields) -> Card:
        n = next(counter)
        data = {
            "id": f"card-{n}",
            "owner_id": OWNER,
            "front": f"palavra {n}",
            "back": f"word {n}",
            "created_at": NOW.isoformat(),
            "updated_at": NOW.isoformat(),
        }
        data.update(fields)
        return Card(**data)

    return _make


@pytest_asyncio.fixture
async def db(tmp_path):
    from langy.config import settings
    from langy.db.sqlite import init_sqlite

    await init_sqlite(tmp_path)
    async with aiosqlite.connect(tmp_path / settings.sqlite_filename) as conn:
        conn.row_factory = aiosqlite.Row
        yield conn


@pytest.fixture
def client(tmp_path, monkeypatch):
    from fastapi.testclient import TestClient

    from langy import app
    from langy.config import settings

    monkeypatch.setattr(settings, "data_dir", tmp_path)
    with TestClient(app, headers={settings.owner_header: OWNER}) as c:
        yield c
