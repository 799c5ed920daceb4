"""Room registry: creates games and resolves them by room code or id."""

from __future__ import annotations

import logging

from lotto_room.domain import DEFAULT_MAX_PLAYERS, Game, utcnow
from lotto_room.errors import DuplicateRoomCodeError, NotFoundError
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.locks import GameLockRegistry, default_registry

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Game creation and lookup."""

    def __init__(self, store: GameStore, locks: GameLockRegistry | None = None) -> None:
        self._store = store
        self._locks = locks or default_registry()

    def create_game(self, room_code: str, max_players: int = DEFAULT_MAX_PLAYERS) -> Game:
        """Create a waiting game with no players and no draws.

        Raises:
            DuplicateRoomCodeError: If a live game already uses room_code.
        """

        with self._locks.room_codes(), self._store.atomic():
            if self._store.get_game_by_room_code(room_code) is not None:
                raise DuplicateRoomCodeError(room_code)
            game = self._store.create_game(
                room_code=room_code,
                max_players=int(max_players),
                created_at=utcnow(),
            )

        logger.info("Created game %s with room code %s (max_players=%s)", game.id, room_code, max_players)
        return game

    def find_by_room_code(self, room_code: str) -> Game:
        game = self._store.get_game_by_room_code(room_code)
        if game is None:
            raise NotFoundError(message=f"Game {room_code} not found", details={"room_code": room_code})
        return game

    def find_by_id(self, game_id: int) -> Game:
        game = self._store.get_game(game_id)
        if game is None:
            raise NotFoundError(message=f"Game {game_id} not found", details={"game_id": game_id})
        return game
