import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tinylink.core.config import Settings
from tinylink.db.Models.models import Base

logger = logging.getLogger(__name__)


def _connect_args(url, timeout: int) -> dict:
    if url.get_backend_name() == "sqlite":
        # busy timeout, in seconds
        return {"check_same_thread": False, "timeout": timeout}
    return {
        "connect_timeout": timeout,
        "options": f"-c statement_timeout={timeout * 1000}",
    }


def _enable_sqlite_wal(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine and session factory for one application.

    Built once by the application factory and handed to the services that
    need storage. Each unit of work borrows a pooled connection through
    ``session()`` and gives it back when the block exits.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10, timeout: int = 5):
        self.url = url
        parsed = make_url(url)
        engine_kwargs = {
            "pool_pre_ping": True,
            "future": True,
            "connect_args": _connect_args(parsed, timeout),
        }
        # in-memory SQLite lives in one connection, shared by every thread
        if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow, pool_timeout=timeout)

        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_wal)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine, future=True
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            timeout=settings.DB_TIMEOUT_SECONDS,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database models initialized/checked.")

    def verify_connection(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self):
        self.engine.dispose()
