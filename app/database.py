# app/database.py
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()


def _with_sslmode(url: str) -> str:
    if "sslmode=" in url:
        return url
    return url + ("&" if "?" in url else "?") + "sslmode=require"


def build_engine(url: str):
    """
    Engine for DATABASE_URL.

    SQLite (local runs, tests): one shared connection across threads.
    Postgres: SSL enforced and a single pooled connection per process,
    since the Supabase pooler caps its clients.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        _with_sslmode(url),
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """Create missing tables on startup."""
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
