import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from langy.config import settings
from langy.errors import CardNotFound, RevisionConflict
from langy.models.card import Card, CardCreate

_db_path: Path | None = None

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS cards (
    id              TEXT PRIMARY KEY,
    owner_id        TEXT NOT NULL,
    front           TEXT NOT NULL,
    back            TEXT NOT NULL,
    review_count    INTEGER NOT NULL DEFAULT 0,
    correct_count   INTEGER NOT NULL DEFAULT 0,
    ease_factor     REAL NOT NULL DEFAULT 2.5,
    interval        INTEGER NOT NULL DEFAULT 0,
    repetitions     INTEGER NOT NULL DEFAULT 0,
    last_reviewed   TEXT,
    next_review_due TEXT,
    revision        INTEGER NOT NULL DEFAULT 0,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_cards_owner ON cards(owner_id);
CREATE INDEX IF NOT EXISTS idx_cards_due ON cards(owner_id, next_review_due);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
INSERT OR IGNORE INTO schema_version(version) VALUES (1);
"""


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        yield db


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _row_to_card(row: aiosqlite.Row) -> Card:
    return Card(**dict(row))


async def create_card(db: aiosqlite.Connection, owner_id: str, card: CardCreate) -> Card:
    card_id = str(uuid.uuid4())
    now = _now()
    await db.execute(
        """INSERT INTO cards (id, owner_id, front, back, created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (card_id, owner_id, card.front, card.back, now, now),
    )
    await db.commit()
    return await get_card(db, owner_id, card_id)  # type: ignore[return-value]


async def get_card(db: aiosqlite.Connection, owner_id: str, card_id: str) -> Card | None:
    cursor = await db.execute(
        "SELECT * FROM cards WHERE id = ? AND owner_id = ?", (card_id, owner_id)
    )
    row = await cursor.fetchone()
    return _row_to_card(row) if row else None


async def list_cards(db: aiosqlite.Connection, owner_id: str) -> list[Card]:
    cursor = await db.execute(
        "SELECT * FROM cards WHERE owner_id = ? ORDER BY created_at ASC, rowid ASC",
        (owner_id,),
    )
    rows = await cursor.fetchall()
    return [_row_to_card(r) for r in rows]


async def list_learned_cards(db: aiosqlite.Connection, owner_id: str) -> list[Card]:
    """Cards past their first two consecutive correct recalls."""
    cursor = await db.execute(
        """SELECT * FROM cards
           WHERE owner_id = ? AND review_count > 0 AND repetitions > 1
           ORDER BY created_at ASC, rowid ASC""",
        (owner_id,),
    )
    rows = await cursor.fetchall()
    return [_row_to_card(r) for r in rows]


async def replace_card(db: aiosqlite.Connection, card: Card) -> Card:
    """
    Write back the scheduling state of a card read at `card.revision`.

    The update only applies while the stored revision still matches, so two
    concurrent reviews cannot silently overwrite each other.
    Raises CardNotFound if the card is gone, RevisionConflict if it moved on.
    """
    cursor = await db.execute(
        """UPDATE cards
           SET review_count = ?, correct_count = ?, ease_factor = ?, interval = ?,
               repetitions = ?, last_reviewed = ?, next_review_due = ?,
               revision = revision + 1, updated_at = ?
           WHERE id = ? AND owner_id = ? AND revision = ?""",
        (
            card.review_count,
            card.correct_count,
            card.ease_factor,
            card.interval,
            card.repetitions,
            _ts(card.last_reviewed),
            _ts(card.next_review_due),
            _now(),
            card.id,
            card.owner_id,
            card.revision,
        ),
    )
    await db.commit()
    if (cursor.rowcount or 0) == 0:
        if await get_card(db, card.owner_id, card.id) is None:
            raise CardNotFound(card.id)
        raise RevisionConflict(card.id, card.revision)
    return await get_card(db, card.owner_id, card.id)  # type: ignore[return-value]


async def delete_card(db: aiosqlite.Connection, owner_id: str, card_id: str) -> bool:
    cursor = await db.execute(
        "DELETE FROM cards WHERE id = ? AND owner_id = ?", (card_id, owner_id)
    )
    await db.commit()
    return (cursor.rowcount or 0) > 0
