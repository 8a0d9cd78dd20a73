import secrets

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()

OBJECT_ID_LENGTH = 24


def new_object_id() -> str:
    """Return a fresh 24-char hex identifier for a stored record."""
    return secrets.token_hex(OBJECT_ID_LENGTH // 2)


def create_session_factory(database_url: str):
    """Build the engine and session factory for ``database_url`` and create the tables."""
    # Only apply sqlite-specific connect_args when using sqlite
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

    # Enable pool_pre_ping to avoid stale connections (useful for cloud DBs)
    engine = create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
    )

    # models must be registered on Base before create_all
    from taskmate.models import task, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
