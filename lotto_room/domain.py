"""Domain records for the lotto room game.

These are storage-agnostic value objects returned by every GameStore backend.
ORM models live in lotto_room/models (persistence layer).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

MIN_NUMBER = 1
MAX_NUMBER = 50
NUMBERS_PER_TICKET = 5
DRAWS_PER_GAME = 5
MIN_PLAYERS_TO_START = 2
DEFAULT_MAX_PLAYERS = 10

NUMBER_POOL: tuple[int, ...] = tuple(range(MIN_NUMBER, MAX_NUMBER + 1))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameStatus(str, Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Game:
    """A lotto room and its draw progress."""

    id: int
    room_code: str
    status: GameStatus
    max_players: int
    current_players: int
    drawn_numbers: tuple[int, ...]
    draw_order: int
    created_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def is_full(self) -> bool:
        return self.current_players >= self.max_players

    @property
    def all_drawn(self) -> bool:
        return self.draw_order >= DRAWS_PER_GAME

    def available_numbers(self) -> list[int]:
        """Numbers in 1..50 that have not been drawn yet, ascending."""

        drawn = set(self.drawn_numbers)
        return [n for n in NUMBER_POOL if n not in drawn]


@dataclass(frozen=True)
class Player:
    """A ticket holder inside one game."""

    id: int
    game_id: int
    player_name: str
    selected_numbers: tuple[int, ...]
    is_winner: bool
    joined_at: datetime

    def matches(self, drawn_numbers: tuple[int, ...] | list[int]) -> bool:
        # Exact 5-of-5: every selected number must have been drawn.
        drawn = set(drawn_numbers)
        return all(n in drawn for n in self.selected_numbers)


@dataclass(frozen=True)
class DrawEvent:
    """One revealed number. Immutable, append-only per game."""

    id: int
    game_id: int
    drawn_number: int
    draw_position: int
    drawn_at: datetime


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot served to clients."""

    game: Game
    players: tuple[Player, ...] = field(default_factory=tuple)
    latest_draw: DrawEvent | None = None
