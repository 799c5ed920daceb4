"""Business logic for revealing a game's numbers one draw at a time.

Callers (a timer, an orchestrator, scripts/run_draws.py) invoke draw_number
repeatedly; the engine never schedules anything itself. The fifth draw
finalizes the game in the same unit of work.
"""

from __future__ import annotations

import logging

from lotto_room.domain import DRAWS_PER_GAME, DrawEvent, GameStatus, utcnow
from lotto_room.errors import (
    AllNumbersDrawnError,
    InvalidStateError,
    NoAvailableNumbersError,
    NotFoundError,
)
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.events import EventPublisher, GameEventType
from lotto_room.services.locks import GameLockRegistry, default_registry
from lotto_room.services.random_source import RandomSource, SystemRandomSource
from lotto_room.services.winner_evaluator import Evaluation, WinnerEvaluator

logger = logging.getLogger(__name__)


class DrawEngine:
    """Draw unique random numbers for an in-progress game."""

    def __init__(
        self,
        store: GameStore,
        random_source: RandomSource | None = None,
        locks: GameLockRegistry | None = None,
        publisher: EventPublisher | None = None,
        evaluator: WinnerEvaluator | None = None,
    ) -> None:
        self._store = store
        self._random = random_source or SystemRandomSource()
        self._locks = locks or default_registry()
        self._publisher = publisher or EventPublisher()
        self._evaluator = evaluator or WinnerEvaluator(store, self._locks, self._publisher)

    def draw_number(self, game_id: int) -> DrawEvent:
        """Draw the next number of a game.

        Returns the recorded DrawEvent. When it is the fifth draw the game is
        evaluated and completed before this returns.

        Raises:
            NotFoundError: The game does not exist.
            InvalidStateError: The game is not in progress.
            AllNumbersDrawnError: Five numbers were already drawn.
            NoAvailableNumbersError: Every number in 1..50 was already drawn.
        """

        evaluation: Evaluation | None = None

        with self._locks.hold(game_id), self._store.atomic():
            game = self._store.get_game(game_id, for_update=True)
            if game is None:
                raise NotFoundError(message=f"Game {game_id} not found", details={"game_id": game_id})

            if game.status != GameStatus.IN_PROGRESS:
                raise InvalidStateError(
                    f"Game {game.room_code} is not in progress",
                    details={"status": game.status.value},
                )
            if game.all_drawn:
                raise AllNumbersDrawnError(game.id)

            pool = game.available_numbers()
            if not pool:
                raise NoAvailableNumbersError(game.id)

            number = int(self._random.choice(pool))
            if number not in pool:
                raise ValueError(f"Random source returned {number}, which is not in the available pool")

            position = game.draw_order + 1
            event = self._store.create_draw_event(
                game_id=game.id,
                drawn_number=number,
                draw_position=position,
                drawn_at=utcnow(),
            )
            game = self._store.update_game(
                game.id,
                drawn_numbers=(*game.drawn_numbers, number),
                draw_order=position,
            )

            if game.draw_order == DRAWS_PER_GAME:
                evaluation = self._evaluator.finalize(game)

        logger.info("Game %s drew %s at position %s", game.id, number, position)
        self._publisher.publish(
            GameEventType.NUMBER_DRAWN,
            game,
            drawn_number=event.drawn_number,
            draw_position=event.draw_position,
            drawn_numbers=list(game.drawn_numbers),
        )
        if evaluation is not None:
            self._evaluator.announce(evaluation)
        return event
