import logging
from typing import Generator
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

_database_options = {
    "pool_pre_ping": True,
    "pool_size": 10,
    "max_overflow": 5,
    "pool_timeout": 30,
    "pool_recycle": 300
}

def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            options["poolclass"] = StaticPool
        return options
    return dict(_database_options)

class Database:
    """Storage handle owned by the process bootstrap and passed to consumers."""

    def __init__(self, url: str, engine: Engine | None = None):
        self.url = url
        self.engine = engine or create_engine(url, **_engine_options(url))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self):
        from leads_backend.model import Base
        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()

def init_database(url: str | None = None) -> Database:
    if url is None:
        from leads_backend.settings import settings
        url = settings.database_url
    database = Database(url)
    logger.info(f"Database initialized for dialect {database.engine.dialect.name}")
    return database

def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized. Call init_database() during startup.")
    return database

def get_db(request: Request) -> Generator[Session, None, None]:

    db = get_database(request).session()

    try:
        yield db
    except OperationalError:
        logger.error("Database connection failed")
        db.rollback()
        raise
    finally:
        db.close()
