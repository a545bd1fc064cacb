from datetime import datetime, timezone
from uuid import uuid4
from sqlalchemy import Index, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


def generate_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def active_unique_index(name: str, *columns: str) -> Index:
    """Unique index over ``columns`` that only covers rows with is_active = true."""
    return Index(
        name,
        *columns,
        unique=True,
        postgresql_where=text("is_active"),
        sqlite_where=text("is_active = 1"),
    )
