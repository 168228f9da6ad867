import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.errors import translate_store_error

logger = logging.getLogger(__name__)


class Database:
    """
    Store handle: owns the engine (connection pool) and the session factory.

    Built once by the application factory and torn down with ``dispose()``
    at shutdown.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        connect_timeout: int = 10,
        echo: bool = False,
    ):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        if self.is_sqlite:
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            # A single shared connection keeps an in-memory DB alive across sessions
            if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": pool_timeout,
                "pool_pre_ping": True,
                "pool_recycle": 1800,
                "connect_args": {"connect_timeout": connect_timeout},
            }

        self.engine: Engine = create_engine(url, echo=echo, **engine_kwargs)

        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            connect_timeout=settings.db_connect_timeout,
            echo=settings.debug,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        # Imported here so every model is registered on Base.metadata
        from app.db.init_db import init_db

        init_db(self.engine)

    def ping(self):
        """Return the database server's current time."""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()

    def dispose(self) -> None:
        logger.info("Disposing database connection pool")
        self.engine.dispose()


def commit(db: Session) -> None:
    """Commit, or roll back and raise the matching API error."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_store_error(exc) from exc


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
