"""Game use-cases exposed to controllers and scripts.

One GameService wraps one store and wires the lifecycle components to the same
lock registry, random source and event publisher.
"""

from __future__ import annotations

from collections.abc import Sequence

from lotto_room.domain import DEFAULT_MAX_PLAYERS, DrawEvent, Game, GameState, Player
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.draw_engine import DrawEngine
from lotto_room.services.events import EventPublisher
from lotto_room.services.game_state_reader import HISTORY_LIMIT, GameStateReader
from lotto_room.services.locks import GameLockRegistry, default_registry
from lotto_room.services.membership_service import MembershipService
from lotto_room.services.random_source import RandomSource
from lotto_room.services.room_registry import RoomRegistry
from lotto_room.services.winner_evaluator import WinnerEvaluator


class GameService:
    """Lotto room operations."""

    def __init__(
        self,
        store: GameStore,
        *,
        random_source: RandomSource | None = None,
        locks: GameLockRegistry | None = None,
        publisher: EventPublisher | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        locks = locks or default_registry()
        publisher = publisher or EventPublisher()

        self.rooms = RoomRegistry(store, locks)
        self.membership = MembershipService(store, locks, publisher)
        self.evaluator = WinnerEvaluator(store, locks, publisher)
        self.engine = DrawEngine(store, random_source, locks, publisher, self.evaluator)
        self.reader = GameStateReader(store, locks, history_limit)

    def create_game(self, room_code: str, max_players: int = DEFAULT_MAX_PLAYERS) -> Game:
        return self.rooms.create_game(room_code, max_players)

    def join_game(self, room_code: str, player_name: str, selected_numbers: Sequence[int]) -> Player:
        return self.membership.join(room_code, player_name, selected_numbers)

    def start_game(self, room_code: str) -> Game:
        return self.membership.start(room_code)

    def draw_number(self, game_id: int) -> DrawEvent:
        return self.engine.draw_number(game_id)

    def check_winners(self, game_id: int) -> list[Player]:
        return self.evaluator.evaluate(game_id)

    def leave_game(self, game_id: int, player_id: int) -> bool:
        return self.membership.leave(game_id, player_id)

    def get_game(self, room_code: str) -> GameState:
        return self.reader.get_state(room_code)

    def get_game_history(self) -> Sequence[Game]:
        return self.reader.get_history()
