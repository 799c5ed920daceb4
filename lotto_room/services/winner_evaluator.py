"""Winner determination and game finalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lotto_room.domain import DRAWS_PER_GAME, Game, GameStatus, Player, utcnow
from lotto_room.errors import NotFoundError, PreconditionFailedError
from lotto_room.repositories.game_store import GameStore
from lotto_room.services.events import EventPublisher, GameEventType
from lotto_room.services.locks import GameLockRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    game: Game
    winners: tuple[Player, ...]
    newly_completed: bool


class WinnerEvaluator:
    """Marks exact 5-of-5 matches as winners and completes the game.

    Safe to run more than once: winners stay winners, losers were never
    touched, and completed_at is only set on the first run.
    """

    def __init__(
        self,
        store: GameStore,
        locks: GameLockRegistry | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self._store = store
        self._locks = locks or default_registry()
        self._publisher = publisher or EventPublisher()

    def evaluate(self, game_id: int) -> list[Player]:
        """Evaluate a fully drawn game and return its winners.

        Raises:
            NotFoundError: The game does not exist.
            PreconditionFailedError: Fewer than 5 distinct numbers were drawn.
        """

        with self._locks.hold(game_id), self._store.atomic():
            game = self._store.get_game(game_id, for_update=True)
            if game is None:
                raise NotFoundError(message=f"Game {game_id} not found", details={"game_id": game_id})
            evaluation = self.finalize(game)

        self.announce(evaluation)
        return list(evaluation.winners)

    def finalize(self, game: Game) -> Evaluation:
        """Evaluate inside the caller's lock and unit of work; publishes nothing."""

        drawn = tuple(game.drawn_numbers)
        if len(drawn) != DRAWS_PER_GAME or len(set(drawn)) != DRAWS_PER_GAME:
            raise PreconditionFailedError(
                f"Winners can only be checked after {DRAWS_PER_GAME} numbers are drawn",
                details={"game_id": game.id, "drawn_numbers": list(drawn)},
            )

        winners: list[Player] = []
        for player in self._store.list_players(game.id):
            if not player.matches(drawn):
                continue
            if not player.is_winner:
                player = self._store.update_player(player.id, is_winner=True)
            winners.append(player)

        newly_completed = game.status != GameStatus.COMPLETED
        if newly_completed:
            game = self._store.update_game(game.id, status=GameStatus.COMPLETED, completed_at=utcnow())
            logger.info(
                "Game %s completed with numbers %s; %d winner(s)",
                game.id,
                list(drawn),
                len(winners),
            )

        return Evaluation(game=game, winners=tuple(winners), newly_completed=newly_completed)

    def announce(self, evaluation: Evaluation) -> None:
        game = evaluation.game
        # Completed games take no further mutations.
        self._locks.discard(game.id)
        if evaluation.newly_completed:
            self._publisher.publish(
                GameEventType.GAME_COMPLETED,
                game,
                drawn_numbers=list(game.drawn_numbers),
                completed_at=game.completed_at.isoformat() if game.completed_at else None,
            )
        self._publisher.publish(
            GameEventType.WINNERS_ANNOUNCED,
            game,
            winners=[{"id": p.id, "player_name": p.player_name} for p in evaluation.winners],
        )
