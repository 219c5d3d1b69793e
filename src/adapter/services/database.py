"""Database handle

Owns the async engine and session factory. Created by the application
factory, opened on startup and disposed on shutdown.
"""

import logging
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers table models on SQLModel.metadata

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Async database handle

    Usage:
        database = Database(ApplicationConfig.DB_URI)
        await database.connect()
        async with database.session() as session:
            ...
        await database.disconnect()
    """

    def __init__(self, db_uri: str, echo: bool = False):
        self.db_uri = db_uri
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_factory = None

    async def connect(self, create_tables: bool = False) -> None:
        self.engine = create_async_engine(self.db_uri, echo=self.echo, future=True)

        # ON DELETE CASCADE on payment_allocations needs FK enforcement in SQLite
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        if create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        logger.info(f"Database connected ({self.engine.dialect.name})")

    async def disconnect(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
            logger.info("Database connection closed")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()
