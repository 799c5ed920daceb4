"""ORM models."""

from lotto_room.models.draw_event import DrawEventRow
from lotto_room.models.game import GameRow
from lotto_room.models.player import PlayerRow

__all__ = ["DrawEventRow", "GameRow", "PlayerRow"]
