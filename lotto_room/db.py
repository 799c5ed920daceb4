"""SQLAlchemy engine, session-per-request, and GameStore selection.

STORE_BACKEND=sql binds a SqlGameStore to the request's session;
STORE_BACKEND=memory serves one process-wide InMemoryGameStore.
"""

from __future__ import annotations

from flask import Flask, current_app, g
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lotto_room.models.base import Base
from lotto_room.repositories.game_store import GameStore
from lotto_room.repositories.memory_game_store import InMemoryGameStore
from lotto_room.repositories.sql_game_store import SqlGameStore


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, future=True, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(database_url, pool_pre_ping=True, future=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(app: Flask) -> None:
    """Initialize the configured store and per-request sessions."""

    backend = str(app.config.get("STORE_BACKEND", "sql")).lower()
    app.extensions["store_backend"] = backend

    if backend == "memory":
        app.extensions["memory_store"] = InMemoryGameStore()
        return

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = create_session_factory(engine)

    # Create tables on startup (production would use migrations).
    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory

    @app.before_request
    def _open_session() -> None:
        g.db = session_factory()  # type: ignore[attr-defined]

    @app.teardown_request
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = getattr(g, "db", None)
        if session is None:
            return

        try:
            if exc is None:
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def get_session() -> Session:
    """Get the current request's SQLAlchemy session."""

    session: Session | None = getattr(g, "db", None)
    if session is None:
        raise RuntimeError("Database session not initialized")
    return session


def get_store() -> GameStore:
    """Return the GameStore for the current request."""

    if current_app.extensions.get("store_backend") == "memory":
        return current_app.extensions["memory_store"]

    store: GameStore | None = getattr(g, "store", None)
    if store is None:
        store = SqlGameStore(get_session())
        g.store = store
    return store
