"""Database session. SQLite compatible with connection pooling."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from clinicdesk.core.config import settings


def build_engine(database_url: str):
    connect_args = (
        {"check_same_thread": False}
        if database_url.startswith("sqlite")
        else {}
    )

    if database_url.startswith("sqlite"):
        # SQLite: Use NullPool for thread-safety; in-memory needs one shared connection
        if ":memory:" in database_url or database_url == "sqlite://":
            from sqlalchemy.pool import StaticPool
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        from sqlalchemy.pool import NullPool
        return create_engine(database_url, connect_args=connect_args, poolclass=NullPool)

    # PostgreSQL/MySQL: Use QueuePool with sensible defaults
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=3600,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
