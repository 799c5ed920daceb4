"""Store interface (repository pattern).

Stores must be swappable and return domain records from lotto_room.domain.
The game state machine only talks to this interface, so the same services run
against InMemoryGameStore in tests and SqlGameStore in production.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any

from lotto_room.domain import DrawEvent, Game, Player


class GameStore(ABC):
    """Interface for game, player and draw event persistence."""

    # ---------- units of work ----------

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into one all-or-nothing unit.

        Any exception raised inside the block discards every write made in it.
        Nested units join the outermost one.
        """
        ...

    # ---------- games ----------

    @abstractmethod
    def create_game(self, *, room_code: str, max_players: int, created_at: datetime) -> Game:
        """Insert a waiting game.

        Raises:
            DuplicateRoomCodeError: If room_code is already taken.
        """
        ...

    @abstractmethod
    def get_game(self, game_id: int, *, for_update: bool = False) -> Game | None:
        """Return a game by id, or None. for_update locks the row where supported."""
        ...

    @abstractmethod
    def get_game_by_room_code(self, room_code: str) -> Game | None:
        """Return a game by room code, or None."""
        ...

    @abstractmethod
    def update_game(self, game_id: int, **changes: Any) -> Game:
        """Apply field changes to a game and return the updated record."""
        ...

    @abstractmethod
    def delete_game(self, game_id: int) -> None:
        """Delete a game together with its players and draw events."""
        ...

    @abstractmethod
    def list_completed_games(self, limit: int) -> Sequence[Game]:
        """Return completed games ordered by completed_at descending."""
        ...

    # ---------- players ----------

    @abstractmethod
    def create_player(
        self,
        *,
        game_id: int,
        player_name: str,
        selected_numbers: Sequence[int],
        joined_at: datetime,
    ) -> Player:
        ...

    @abstractmethod
    def get_player(self, player_id: int) -> Player | None:
        ...

    @abstractmethod
    def list_players(self, game_id: int) -> Sequence[Player]:
        """Return the players of a game in join order."""
        ...

    @abstractmethod
    def count_players(self, game_id: int) -> int:
        """Return the live number of player records of a game."""
        ...

    @abstractmethod
    def update_player(self, player_id: int, **changes: Any) -> Player:
        ...

    @abstractmethod
    def delete_player(self, player_id: int) -> None:
        ...

    # ---------- draw events ----------

    @abstractmethod
    def create_draw_event(
        self,
        *,
        game_id: int,
        drawn_number: int,
        draw_position: int,
        drawn_at: datetime,
    ) -> DrawEvent:
        ...

    @abstractmethod
    def list_draw_events(self, game_id: int) -> Sequence[DrawEvent]:
        """Return the draw events of a game ordered by draw_position."""
        ...

    @abstractmethod
    def get_draw_event(self, game_id: int, draw_position: int) -> DrawEvent | None:
        ...
