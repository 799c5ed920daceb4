"""Read-only views: one room's state and the completed games history."""

from __future__ import annotations

from collections.abc import Sequence

from lotto_room.domain import Game, GameState, GameStatus
from lotto_room.errors import NotFoundError
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.locks import GameLockRegistry, default_registry

HISTORY_LIMIT = 100


class GameStateReader:
    def __init__(
        self,
        store: GameStore,
        locks: GameLockRegistry | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self._store = store
        self._locks = locks or default_registry()
        self._history_limit = history_limit

    def get_state(self, room_code: str) -> GameState:
        """Snapshot of a game, its players in join order and its latest draw.

        The latest draw is looked up by the game's own draw_order, so the
        snapshot never shows fewer draws than the game claims.
        """

        game = self._store.get_game_by_room_code(room_code)
        if game is None:
            raise NotFoundError(message=f"Game {room_code} not found", details={"room_code": room_code})

        if game.status == GameStatus.COMPLETED:
            # Final; no writer left to exclude.
            return self._snapshot(game)

        # Holding the lock keeps writers out while the three reads happen.
        with self._locks.hold(game.id):
            game = self._store.get_game(game.id)
            if game is None:
                raise NotFoundError(message=f"Game {room_code} not found", details={"room_code": room_code})
            return self._snapshot(game)

    def _snapshot(self, game: Game) -> GameState:
        players = tuple(self._store.list_players(game.id))
        latest = self._store.get_draw_event(game.id, game.draw_order) if game.draw_order else None
        return GameState(game=game, players=players, latest_draw=latest)

    def get_history(self) -> Sequence[Game]:
        """Completed games, most recently completed first."""

        return list(self._store.list_completed_games(self._history_limit))
