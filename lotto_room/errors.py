"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class NotFoundError(AppError):
    """Game or player lookup miss."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class DuplicateRoomCodeError(AppError):
    """Room code already used by an existing game."""

    def __init__(self, room_code: str) -> None:
        super().__init__(
            code="duplicate_room_code",
            message=f"Room code {room_code} already exists",
            status_code=409,
            details={"room_code": room_code},
        )


class InvalidStateError(AppError):
    """Operation not legal for the game's current status."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(code="invalid_state", message=message, status_code=409, details=details)


class GameFullError(AppError):
    def __init__(self, room_code: str, max_players: int) -> None:
        super().__init__(
            code="game_full",
            message=f"Game {room_code} is full",
            status_code=409,
            details={"max_players": max_players},
        )


class InsufficientPlayersError(AppError):
    def __init__(self, player_count: int, required: int) -> None:
        super().__init__(
            code="insufficient_players",
            message=f"Need at least {required} players to start the game",
            status_code=409,
            details={"player_count": player_count, "required": required},
        )


class AllNumbersDrawnError(AppError):
    def __init__(self, game_id: int) -> None:
        super().__init__(
            code="all_numbers_drawn",
            message="All numbers have already been drawn",
            status_code=409,
            details={"game_id": game_id},
        )


class NoAvailableNumbersError(AppError):
    def __init__(self, game_id: int) -> None:
        super().__init__(
            code="no_available_numbers",
            message="No numbers left to draw",
            status_code=409,
            details={"game_id": game_id},
        )


class PreconditionFailedError(AppError):
    """Winner evaluation requested before the draw is complete."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(code="precondition_failed", message=message, status_code=412, details=details)
