"""Membership: players joining and leaving a waiting game, and game start.

All three operations hold the game's lock and run as one unit of work, so the
player rows and the game's current_players counter always move together.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lotto_room.domain import MIN_PLAYERS_TO_START, Game, GameStatus, Player, utcnow
from lotto_room.errors import (
    GameFullError,
    InsufficientPlayersError,
    InvalidStateError,
    NotFoundError,
)
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.events import EventPublisher, GameEventType
from lotto_room.services.locks import GameLockRegistry, default_registry
from lotto_room.services.room_registry import RoomRegistry

logger = logging.getLogger(__name__)


class MembershipService:
    """Admit and remove players; move a full enough room to in_progress."""

    def __init__(
        self,
        store: GameStore,
        locks: GameLockRegistry | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self._store = store
        self._locks = locks or default_registry()
        self._publisher = publisher or EventPublisher()
        self._rooms = RoomRegistry(store, self._locks)

    def _locked_game(self, game_id: int) -> Game:
        # Re-read under the lock: the game may have changed or vanished since lookup.
        game = self._store.get_game(game_id, for_update=True)
        if game is None:
            raise NotFoundError(message=f"Game {game_id} not found", details={"game_id": game_id})
        return game

    def join(self, room_code: str, player_name: str, selected_numbers: Sequence[int]) -> Player:
        """Add a player holding selected_numbers to a waiting game.

        Raises:
            NotFoundError: No game uses room_code.
            InvalidStateError: The game is no longer waiting.
            GameFullError: current_players already reached max_players.
        """

        game = self._rooms.find_by_room_code(room_code)

        with self._locks.hold(game.id), self._store.atomic():
            game = self._locked_game(game.id)
            if game.status != GameStatus.WAITING:
                raise InvalidStateError(
                    f"Game {room_code} is not accepting new players",
                    details={"status": game.status.value},
                )
            if game.is_full:
                raise GameFullError(room_code, game.max_players)

            player = self._store.create_player(
                game_id=game.id,
                player_name=player_name,
                selected_numbers=list(selected_numbers),
                joined_at=utcnow(),
            )
            game = self._store.update_game(game.id, current_players=game.current_players + 1)

        logger.info(
            "Player %s (%s) joined game %s (%s/%s)",
            player.id,
            player_name,
            game.id,
            game.current_players,
            game.max_players,
        )
        self._publisher.publish(
            GameEventType.PLAYER_JOINED,
            game,
            player_id=player.id,
            player_name=player.player_name,
            current_players=game.current_players,
        )
        return player

    def leave(self, game_id: int, player_id: int) -> bool:
        """Remove a player from a waiting game; delete the game once it is empty.

        Raises:
            NotFoundError: Unknown game, unknown player, or player of another game.
            InvalidStateError: The game is no longer waiting.
        """

        with self._locks.hold(game_id), self._store.atomic():
            game = self._locked_game(game_id)

            player = self._store.get_player(player_id)
            if player is None or player.game_id != game.id:
                raise NotFoundError(
                    message="Player not found in this game",
                    details={"game_id": game_id, "player_id": player_id},
                )

            if game.status != GameStatus.WAITING:
                raise InvalidStateError(
                    "Cannot leave game that is not waiting",
                    details={"status": game.status.value},
                )

            self._store.delete_player(player.id)
            remaining = max(0, game.current_players - 1)
            self._store.update_game(game.id, current_players=remaining)

            game_deleted = remaining == 0
            if game_deleted:
                self._store.delete_game(game.id)

        logger.info("Player %s left game %s (%s remaining)", player_id, game_id, remaining)
        if game_deleted:
            self._locks.discard(game_id)
            logger.info("Deleted empty game %s (%s)", game_id, game.room_code)
        return True

    def start(self, room_code: str) -> Game:
        """Move a waiting game with enough players to in_progress.

        current_players is re-derived from the live player rows, repairing any
        drift between the counter and the table.

        Raises:
            NotFoundError: No game uses room_code.
            InvalidStateError: The game already started or completed.
            InsufficientPlayersError: Fewer than 2 players joined.
        """

        game = self._rooms.find_by_room_code(room_code)

        with self._locks.hold(game.id), self._store.atomic():
            game = self._locked_game(game.id)
            if game.status != GameStatus.WAITING:
                raise InvalidStateError(
                    f"Game {room_code} has already started or is completed",
                    details={"status": game.status.value},
                )

            live_players = self._store.count_players(game.id)
            if live_players < MIN_PLAYERS_TO_START:
                raise InsufficientPlayersError(live_players, MIN_PLAYERS_TO_START)

            if live_players != game.current_players:
                logger.warning(
                    "Game %s current_players drifted (%s recorded, %s live); repairing",
                    game.id,
                    game.current_players,
                    live_players,
                )

            game = self._store.update_game(
                game.id,
                status=GameStatus.IN_PROGRESS,
                started_at=utcnow(),
                current_players=live_players,
                draw_order=0,
                drawn_numbers=(),
            )

        logger.info("Started game %s with %s players", game.id, game.current_players)
        self._publisher.publish(
            GameEventType.GAME_STARTED,
            game,
            current_players=game.current_players,
            started_at=game.started_at.isoformat() if game.started_at else None,
        )
        return game
