from __future__ import annotations

from datetime import date
from typing import Any, Callable

from sqlalchemy import select, text
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from birthday_greeter.core.db import Base, create_engine, create_session_factory
from birthday_greeter.core.errors import DatabaseUnavailableError, StorageError, UserNotFoundError
from birthday_greeter.core.logging import get_logger
from birthday_greeter.db.models import User

_DRIVER_ERRORS = (SQLAlchemyError, OSError)

_INSERT_BY_DIALECT: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class UserStore:
    """Persistence for user birthdates on top of a pooled async engine.

    The engine's pool is safe for concurrent use by in-flight requests; writes
    to the same username are serialised by the database's conflict handling.
    """

    def __init__(self, engine: AsyncEngine):
        self.logger = get_logger(component="user_store")
        insert = _INSERT_BY_DIALECT.get(engine.dialect.name)
        if insert is None:
            self.logger.error("unsupported_dialect", dialect=engine.dialect.name)
            raise DatabaseUnavailableError()
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self._insert = insert

    @classmethod
    async def open(cls, database_url: str) -> "UserStore":
        """Connect, verify the connection and create the users table when missing."""
        try:
            engine = create_engine(database_url)
        except SQLAlchemyError as exc:
            get_logger(component="user_store").error("database_url_invalid", error=str(exc))
            raise DatabaseUnavailableError() from exc

        try:
            store = cls(engine)
            await store.ping()
            await store.ensure_schema()
        except Exception:
            await engine.dispose()
            raise
        store.logger.info("database_ready", dialect=engine.dialect.name)
        return store

    async def ensure_schema(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except _DRIVER_ERRORS as exc:
            self.logger.error("schema_create_failed", error=str(exc))
            raise DatabaseUnavailableError() from exc

    async def upsert(self, username: str, birthdate: date) -> None:
        statement = self._insert(User).values(username=username, birthdate=birthdate)
        statement = statement.on_conflict_do_update(
            index_elements=[User.username],
            set_={"birthdate": statement.excluded.birthdate},
        )
        try:
            async with self.session_factory() as session:
                await session.execute(statement)
                await session.commit()
        except _DRIVER_ERRORS as exc:
            self.logger.error("storage_error", operation="upsert", username=username, error=str(exc))
            raise StorageError() from exc

    async def lookup(self, username: str) -> date:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(User.birthdate).where(User.username == username))
                birthdate = result.scalar_one_or_none()
        except _DRIVER_ERRORS as exc:
            self.logger.error("storage_error", operation="lookup", username=username, error=str(exc))
            raise StorageError() from exc
        if birthdate is None:
            raise UserNotFoundError()
        return birthdate

    async def ping(self) -> None:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _DRIVER_ERRORS as exc:
            self.logger.warning("database_unreachable", error=str(exc))
            raise DatabaseUnavailableError() from exc

    async def close(self) -> None:
        await self.engine.dispose()


__all__ = ["UserStore"]
