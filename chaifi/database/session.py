"""
Asynchronous database lifecycle and session management

The Store owns the engine for the lifetime of the process: the FastAPI
lifespan connects it at startup and disconnects it at shutdown. Request
handlers get their session through the get_db dependency.
"""
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)

from chaifi.config import DATABASE_URL, LANG
from chaifi.core.exceptions import StorageError
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.database.base import Base
from chaifi.database import models  # noqa: F401  registers every table on Base.metadata

logger = get_i18n_logger(__name__)


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """WAL journal and foreign key enforcement on every SQLite connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")     # Enables write-ahead logging (better concurrency)
    cursor.execute("PRAGMA synchronous = NORMAL;")  # Faster commits, still durable
    cursor.execute("PRAGMA foreign_keys = ON;")     # Enforce FK constraints
    cursor.close()


class Store:
    """
    Connection state for one database.

    connect() is idempotent: the first call creates the engine, the tables and
    their indexes, then seeds default users and menu items (or migrates
    existing items). disconnect() disposes of the engine.

    Example:
        store = Store("sqlite+aiosqlite:///./chaifi.db")
        await store.connect()
        async with store.session() as db:
            ...
        await store.disconnect()
    """

    def __init__(self, database_url: str = DATABASE_URL, seed: bool = True):
        self.database_url = database_url
        self.seed = seed
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        if self.is_connected:
            return

        engine = create_async_engine(self.database_url, echo=False, future=True)
        if self.database_url.startswith("sqlite"):
            event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)

        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            await engine.dispose()
            logger.error("database.connect_failed", language=LANG, error=str(e))
            raise StorageError("Could not connect to the database") from e

        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("database.connected", language=LANG, url=engine.url.render_as_string(hide_password=True))

        if self.seed:
            # Imported here: seed pulls in the service layer, which imports this module
            from chaifi.database.seed import initialize_default_data

            async with self.session() as db:
                await initialize_default_data(db)

    async def disconnect(self) -> None:
        if not self.is_connected:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("database.disconnected", language=LANG)

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise StorageError("Database is not connected")
        return self.session_factory()

    async def ping(self) -> bool:
        """Round-trip a trivial query; used by the health endpoint"""
        if not self.is_connected:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True


# --- Dependency for FastAPI endpoints ---
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Provides a new async database session per request from the app's Store.
    Closes it automatically when the request is done.
    """
    store: Store = request.app.state.store
    async with store.session() as session:
        yield session
