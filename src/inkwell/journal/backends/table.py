"""Remote entry table: SQLModel schema and async row access.

One row per entry, keyed by entry id. ``user_id`` scopes rows to an owner
in the authenticated variant and stays NULL otherwise; every query made
through an owner-bound table filters on it.
"""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace

from loguru import logger
from sqlalchemy import JSON, BigInteger, Column, delete
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import Field, SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import JournalEntry, generate_id, parse_mood

TABLE_NAME = "journal_entries"


class JournalEntryRow(SQLModel, table=True):
    """journal_entries table"""

    __tablename__ = TABLE_NAME

    id: str = Field(primary_key=True)
    user_id: str | None = Field(default=None, index=True)
    title: str = ""
    body: str = ""
    mood: str | None = None
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    word_count: int = 0
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False, index=True))
    updated_at: int = Field(sa_column=Column(BigInteger, nullable=False))


class EntryDatabase:
    """Engine and session management for the remote table.

    The engine is created lazily from an async SQLAlchemy URL such as
    ``sqlite+aiosqlite:///journal.db`` or ``postgresql+asyncpg://...``.
    """

    def __init__(self, url: str):
        self._url = url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._tables_ready = False

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self._url)
            self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)
        return self._engine

    async def create_tables(self) -> None:
        """Create the table if it doesn't exist yet. Runs once per engine."""
        if self._tables_ready:
            return
        async with self.get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        self._tables_ready = True

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        self.get_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            yield session

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._tables_ready = False


class RemoteEntryTable:
    """Row-per-entry access to ``journal_entries``.

    Args:
        database: Where the table lives.
        owner_id: When set, every read and write is scoped to this owner.
    """

    def __init__(self, database: EntryDatabase, owner_id: str | None = None):
        self._database = database
        self.owner_id = owner_id

    def for_owner(self, owner_id: str | None) -> "RemoteEntryTable":
        """Same database, rows scoped to *owner_id*."""
        return RemoteEntryTable(self._database, owner_id)

    async def close(self) -> None:
        await self._database.dispose()

    async def _ensure_tables(self) -> None:
        await self._database.create_tables()

    def _scoped(self, stmt):
        if self.owner_id is not None:
            stmt = stmt.where(JournalEntryRow.user_id == self.owner_id)
        return stmt

    async def fetch_all(self) -> list[JournalEntry]:
        """All visible rows, newest ``created_at`` first."""
        await self._ensure_tables()
        async with self._database.get_session() as session:
            stmt = self._scoped(select(JournalEntryRow)).order_by(
                JournalEntryRow.created_at.desc()  # type: ignore[union-attr]
            )
            result = await session.exec(stmt)
            return [self._to_entity(row) for row in result.all()]

    async def insert(self, entry: JournalEntry) -> None:
        await self._ensure_tables()
        async with self._database.get_session() as session:
            session.add(self._to_row(entry))
            await session.commit()

    async def update(self, entry: JournalEntry) -> bool:
        """Overwrite the row for ``entry.id``. Returns False if none matched."""
        await self._ensure_tables()
        async with self._database.get_session() as session:
            stmt = self._scoped(select(JournalEntryRow).where(JournalEntryRow.id == entry.id))
            row = (await session.exec(stmt)).first()
            if row is None:
                return False
            row.title = entry.title
            row.body = entry.body
            row.mood = entry.mood.value if entry.mood else None
            row.tags = list(entry.tags)
            row.word_count = entry.word_count
            row.updated_at = entry.updated_at
            session.add(row)
            await session.commit()
            return True

    async def delete(self, entry_id: str) -> bool:
        await self._ensure_tables()
        async with self._database.get_session() as session:
            stmt = delete(JournalEntryRow).where(JournalEntryRow.id == entry_id)  # type: ignore[arg-type]
            if self.owner_id is not None:
                stmt = stmt.where(JournalEntryRow.user_id == self.owner_id)  # type: ignore[arg-type]
            result = await session.exec(stmt)  # type: ignore[call-overload]
            await session.commit()
            return result.rowcount > 0  # type: ignore[union-attr]

    async def upsert_many(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        """Insert or overwrite rows by id, in one transaction."""
        await self._ensure_tables()
        async with self._database.get_session() as session:
            for entry in entries:
                await session.merge(self._to_row(entry))
            await session.commit()
        logger.debug(f"Upserted {len(entries)} rows into {TABLE_NAME}")
        return list(entries)

    async def insert_fresh(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        """Insert every entry under a newly assigned id; returns the stored copies."""
        await self._ensure_tables()
        stored = [replace(entry, id=generate_id()) for entry in entries]
        async with self._database.get_session() as session:
            session.add_all([self._to_row(entry) for entry in stored])
            await session.commit()
        logger.debug(f"Inserted {len(stored)} rows with fresh ids into {TABLE_NAME}")
        return stored

    def _to_row(self, entry: JournalEntry) -> JournalEntryRow:
        return JournalEntryRow(
            id=entry.id,
            user_id=self.owner_id,
            title=entry.title,
            body=entry.body,
            mood=entry.mood.value if entry.mood else None,
            tags=list(entry.tags),
            word_count=entry.word_count,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )

    @staticmethod
    def _to_entity(row: JournalEntryRow) -> JournalEntry:
        return JournalEntry(
            id=row.id,
            title=row.title or "",
            body=row.body or "",
            mood=parse_mood(row.mood),
            tags=tuple(row.tags or ()),
            created_at=row.created_at,
            updated_at=row.updated_at,
            word_count=row.word_count,
        )
