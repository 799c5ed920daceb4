"""Shared fixtures for the lotto room test-suite."""

from collections.abc import Sequence

import pytest
from sqlalchemy.orm import Session

from lotto_room import create_app
from lotto_room.config import TestingConfig
from lotto_room.db import create_app_engine, create_session_factory
from lotto_room.models.base import Base
from lotto_room.repositories.memory_game_store import InMemoryGameStore
from lotto_room.repositories.sql_game_store import SqlGameStore
from lotto_room.services.game_service import GameService
from lotto_room.services.locks import GameLockRegistry
from lotto_room.services.random_source import RandomSource

TICKET_A = [1, 2, 3, 4, 5]
TICKET_B = [6, 7, 8, 9, 10]


class ScriptedRandomSource(RandomSource):
    """Returns queued numbers in order, then the lowest available number."""

    def __init__(self, numbers: Sequence[int] = ()) -> None:
        self._queue = list(numbers)

    def queue(self, *numbers: int) -> None:
        self._queue.extend(numbers)

    def choice(self, pool: Sequence[int]) -> int:
        if self._queue:
            return self._queue.pop(0)
        return pool[0]


@pytest.fixture
def store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def scripted_random() -> ScriptedRandomSource:
    return ScriptedRandomSource()


@pytest.fixture
def locks() -> GameLockRegistry:
    return GameLockRegistry()


@pytest.fixture
def service(store, scripted_random, locks) -> GameService:
    return GameService(store, random_source=scripted_random, locks=locks)


@pytest.fixture
def open_room(service):
    """Factory: create a room, seat players, optionally start it."""

    def _open(room_code="ROOM01", tickets=None, max_players=10, start=False):
        tickets = tickets if tickets is not None else {"A": TICKET_A, "B": TICKET_B}
        game = service.create_game(room_code, max_players)
        players = [service.join_game(room_code, name, numbers) for name, numbers in tickets.items()]
        if start:
            game = service.start_game(room_code)
        else:
            game = service.rooms.find_by_id(game.id)
        return game, players

    return _open


@pytest.fixture
def app(scripted_random):
    app = create_app(TestingConfig)
    app.extensions["random_source"] = scripted_random
    app.extensions["game_locks"] = GameLockRegistry()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_session():
    engine = create_app_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session: Session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_store(sql_session) -> SqlGameStore:
    return SqlGameStore(sql_session)


@pytest.fixture
def sql_service(sql_store, scripted_random, locks) -> GameService:
    return GameService(sql_store, random_source=scripted_random, locks=locks)
