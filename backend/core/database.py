from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy import text, event, Column, DateTime, func, TypeDecorator, CHAR
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.exc import SQLAlchemyError, DisconnectionError, OperationalError
import asyncio
import time
import uuid
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from core.config import settings
from core.utils.logging import structured_logger
from core.exceptions.api_exceptions import DatabaseException

Base = declarative_base()
CHAR_LENGTH = 255


class GUID(TypeDecorator):
    """Platform-independent GUID type.

    Uses PostgreSQL's UUID type, otherwise uses
    CHAR(36), storing as stringified UUID values with hyphens.
    """
    impl = CHAR

    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID())
        else:
            return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            return uuid.UUID(value)
        return value


class BaseModel(Base):
    """Base model with UUID primary key and timestamps"""
    __abstract__ = True

    id = Column(GUID(), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE clauses unless each connection turns them on."""
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Database manager with connection resilience and monitoring."""

    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self._connection_failures = 0
        self._last_health_check = 0

    def initialize(self, database_uri: str, env_is_local: bool):
        """Initializes the database engine and session factory."""
        if self.engine and self.session_factory:  # Prevent re-initialization
            return

        engine_kwargs = {"echo": env_is_local and settings.SQL_ECHO, "pool_pre_ping": True}
        if database_uri.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_recycle=3600,
                pool_size=10,
                max_overflow=20,
                pool_timeout=30,
            )

        engine = create_async_engine(database_uri, **engine_kwargs)
        if database_uri.startswith("sqlite"):
            enable_sqlite_foreign_keys(engine)
        session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        self.set_engine_and_session_factory(engine, session_factory)

    def set_engine_and_session_factory(self, engine, session_factory):
        self.engine = engine
        self.session_factory = session_factory

    async def create_tables(self):
        """Create all tables registered on the declarative Base."""
        if not self.engine:
            raise DatabaseException(message="Database not initialized.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    async def health_check(self) -> dict:
        """Perform database health check."""
        if not self.engine or not self.session_factory:
            return {"status": "uninitialized", "message": "Database not initialized."}

        start_time = time.time()

        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))

            response_time = (time.time() - start_time) * 1000
            self._connection_failures = 0
            self._last_health_check = time.time()

            return {
                "status": "healthy",
                "response_time_ms": response_time,
                "last_check": self._last_health_check,
            }

        except SQLAlchemyError as e:
            self._connection_failures += 1
            structured_logger.error(
                message="Database health check failed",
                metadata={"connection_failures": self._connection_failures},
                exception=e,
            )
            return {
                "status": "unhealthy",
                "connection_failures": self._connection_failures,
                "error": str(e),
                "last_check": time.time(),
            }

    @asynccontextmanager
    async def get_session_with_retry(
        self,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        backoff_factor: float = 2.0,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, retrying connection failures with exponential backoff."""
        if not self.session_factory:
            raise DatabaseException(message="Database session factory not initialized.")

        for attempt in range(max_retries + 1):
            session = self.session_factory()
            try:
                # Acquire a connection up front so connection failures are retried here
                # rather than surfacing from the first query in a handler.
                await session.connection()
            except (DisconnectionError, OperationalError) as e:
                await session.close()
                self._connection_failures += 1

                if attempt == max_retries:
                    structured_logger.error(
                        message=f"Database connection failed after {max_retries + 1} attempts",
                        metadata={"attempts": max_retries + 1},
                        exception=e,
                    )
                    raise DatabaseException(
                        message=f"Database connection failed after {max_retries + 1} attempts"
                    )

                delay = retry_delay * (backoff_factor ** attempt)
                structured_logger.warning(
                    message=f"Database connection failed on attempt {attempt + 1}, retrying in {delay}s",
                    metadata={"attempt": attempt + 1, "max_retries": max_retries},
                    exception=e,
                )
                await asyncio.sleep(delay)
                continue

            try:
                yield session
            finally:
                await session.close()
            return


# Global database manager instance
db_manager = DatabaseManager()


def initialize_db(database_uri: str, env_is_local: bool):
    """Initializes the database manager with engine and session factory."""
    db_manager.initialize(database_uri, env_is_local)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    async with db_manager.get_session_with_retry() as session:
        yield session


async def get_db_health() -> dict:
    """Get database health status."""
    return await db_manager.health_check()
