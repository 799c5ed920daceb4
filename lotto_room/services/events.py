"""Real-time game events.

Each event type is a blinker signal in the ``lotto_room`` namespace. The room
code is the signal sender, so a subscriber can listen to one room::

    signal_for(GameEventType.NUMBER_DRAWN).connect(push_to_clients, sender="ROOM01")

or to every room by connecting without a sender. Delivery to clients
(websocket, SSE, push service) is left to the subscriber.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from blinker import Namespace, Signal

from lotto_room.domain import Game, utcnow

logger = logging.getLogger(__name__)

game_signals = Namespace()


class GameEventType(str, Enum):
    PLAYER_JOINED = "player_joined"
    GAME_STARTED = "game_started"
    NUMBER_DRAWN = "number_drawn"
    GAME_COMPLETED = "game_completed"
    WINNERS_ANNOUNCED = "winners_announced"


@dataclass(frozen=True)
class GameEvent:
    type: GameEventType
    game_id: int
    room_code: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "game_id": self.game_id,
            "room_code": self.room_code,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


_SIGNALS: dict[GameEventType, Signal] = {
    event_type: game_signals.signal(event_type.value) for event_type in GameEventType
}


def signal_for(event_type: GameEventType) -> Signal:
    return _SIGNALS[GameEventType(event_type)]


class EventPublisher:
    """Sends GameEvents through the namespace signals.

    Publishing happens after the originating unit of work has committed, so a
    failing subscriber is logged and skipped; the remaining subscribers still
    receive the event and the caller never sees the error.
    """

    def publish(self, event_type: GameEventType, game: Game, **data: Any) -> GameEvent:
        event = GameEvent(type=event_type, game_id=game.id, room_code=game.room_code, data=data)
        signal = signal_for(event_type)
        for receiver in signal.receivers_for(game.room_code):
            try:
                receiver(game.room_code, event=event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on %s for room %s",
                    receiver,
                    event_type.value,
                    game.room_code,
                )
        return event


def log_event(sender: str, event: GameEvent, **_: Any) -> None:
    logger.debug("Event %s for room %s: %s", event.type.value, sender, event.data)


def connect_event_logging() -> None:
    """Log every event of every room at DEBUG level."""

    for signal in _SIGNALS.values():
        signal.connect(log_event)
