# infra/db/base.py
from __future__ import annotations

import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def database_url() -> str:
    """PM_DB_URL if set, else the SQLite file under the per-user data dir."""
    url = os.getenv("PM_DB_URL", "").strip()
    if url:
        return url
    db_path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str | None = None) -> Engine:
    url = db_url or database_url()
    logger.info("Using database at: %s", url)
    engine = create_engine(url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        # ON DELETE CASCADE / SET NULL need this on every SQLite connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


__all__ = ["Base", "database_url", "create_db_engine", "create_session_factory"]
