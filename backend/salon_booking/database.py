from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings


def create_db_engine(settings: Settings) -> Engine:
    """
    Build the engine and its bounded connection pool.

    The pool is the only shared mutable resource: pool_size + max_overflow
    connections at most, pool_timeout seconds to wait for a free one.
    """
    url = settings.resolved_database_url

    if url.startswith("sqlite"):
        # check_same_thread=False: FastAPI runs sync handlers in a threadpool
        engine = create_engine(url, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def enable_sqlite_fk(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


# FastAPI dependency
def get_db(request: Request):
    """One session per request, always closed (connection back to the pool)."""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
