"""In-memory GameStore used by the test-suite and by STORE_BACKEND=memory.

Records are immutable dataclasses, so readers never see a half-applied change:
every write swaps a whole record under the store lock. Atomic units keep an
undo journal per thread and replay it backwards when the unit fails.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Any

from lotto_room.domain import DrawEvent, Game, GameStatus, Player
from lotto_room.errors import DuplicateRoomCodeError, NotFoundError
from lotto_room.repositories.game_store import GameStore

logger = logging.getLogger(__name__)

_Undo = Callable[[], None]


class InMemoryGameStore(GameStore):
    """Dict-backed store with journaled rollback."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._local = threading.local()

        self._games: dict[int, Game] = {}
        self._players: dict[int, Player] = {}
        self._draws: dict[int, DrawEvent] = {}

        self._game_ids = itertools.count(1)
        self._player_ids = itertools.count(1)
        self._draw_ids = itertools.count(1)

    # ---------- units of work ----------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        journal: list[_Undo] | None = getattr(self._local, "journal", None)
        if journal is not None:
            yield
            return

        journal = []
        self._local.journal = journal
        try:
            yield
        except BaseException:
            with self._lock:
                for undo in reversed(journal):
                    undo()
            if journal:
                logger.debug("Rolled back %d in-memory writes", len(journal))
            raise
        finally:
            self._local.journal = None

    def _remember(self, undo: _Undo) -> None:
        journal: list[_Undo] | None = getattr(self._local, "journal", None)
        if journal is not None:
            journal.append(undo)

    # ---------- games ----------

    def create_game(self, *, room_code: str, max_players: int, created_at: datetime) -> Game:
        with self._lock:
            if any(g.room_code == room_code for g in self._games.values()):
                raise DuplicateRoomCodeError(room_code)

            game = Game(
                id=next(self._game_ids),
                room_code=room_code,
                status=GameStatus.WAITING,
                max_players=int(max_players),
                current_players=0,
                drawn_numbers=(),
                draw_order=0,
                created_at=created_at,
            )
            self._games[game.id] = game
            self._remember(lambda: self._games.pop(game.id, None))
            return game

    def get_game(self, game_id: int, *, for_update: bool = False) -> Game | None:
        with self._lock:
            return self._games.get(game_id)

    def get_game_by_room_code(self, room_code: str) -> Game | None:
        with self._lock:
            for game in self._games.values():
                if game.room_code == room_code:
                    return game
            return None

    def update_game(self, game_id: int, **changes: Any) -> Game:
        if "drawn_numbers" in changes:
            changes["drawn_numbers"] = tuple(int(n) for n in changes["drawn_numbers"])
        if "status" in changes:
            changes["status"] = GameStatus(changes["status"])

        with self._lock:
            old = self._games.get(game_id)
            if old is None:
                raise NotFoundError(message=f"Game {game_id} not found")
            new = replace(old, **changes)
            self._games[game_id] = new
            self._remember(lambda: self._games.__setitem__(game_id, old))
            return new

    def delete_game(self, game_id: int) -> None:
        with self._lock:
            game = self._games.pop(game_id, None)
            if game is None:
                return
            players = {pid: p for pid, p in self._players.items() if p.game_id == game_id}
            draws = {did: d for did, d in self._draws.items() if d.game_id == game_id}
            for pid in players:
                del self._players[pid]
            for did in draws:
                del self._draws[did]

            def _restore() -> None:
                self._games[game_id] = game
                self._players.update(players)
                self._draws.update(draws)

            self._remember(_restore)

    def list_completed_games(self, limit: int) -> Sequence[Game]:
        with self._lock:
            completed = [g for g in self._games.values() if g.status == GameStatus.COMPLETED]
        completed.sort(key=lambda g: (g.completed_at or g.created_at, g.id), reverse=True)
        return completed[: max(0, int(limit))]

    # ---------- players ----------

    def create_player(
        self,
        *,
        game_id: int,
        player_name: str,
        selected_numbers: Sequence[int],
        joined_at: datetime,
    ) -> Player:
        with self._lock:
            if game_id not in self._games:
                raise NotFoundError(message=f"Game {game_id} not found")
            player = Player(
                id=next(self._player_ids),
                game_id=game_id,
                player_name=player_name,
                selected_numbers=tuple(int(n) for n in selected_numbers),
                is_winner=False,
                joined_at=joined_at,
            )
            self._players[player.id] = player
            self._remember(lambda: self._players.pop(player.id, None))
            return player

    def get_player(self, player_id: int) -> Player | None:
        with self._lock:
            return self._players.get(player_id)

    def list_players(self, game_id: int) -> Sequence[Player]:
        with self._lock:
            players = [p for p in self._players.values() if p.game_id == game_id]
        # ids are handed out in join order
        return sorted(players, key=lambda p: p.id)

    def count_players(self, game_id: int) -> int:
        with self._lock:
            return sum(1 for p in self._players.values() if p.game_id == game_id)

    def update_player(self, player_id: int, **changes: Any) -> Player:
        with self._lock:
            old = self._players.get(player_id)
            if old is None:
                raise NotFoundError(message=f"Player {player_id} not found")
            new = replace(old, **changes)
            self._players[player_id] = new
            self._remember(lambda: self._players.__setitem__(player_id, old))
            return new

    def delete_player(self, player_id: int) -> None:
        with self._lock:
            player = self._players.pop(player_id, None)
            if player is not None:
                self._remember(lambda: self._players.__setitem__(player_id, player))

    # ---------- draw events ----------

    def create_draw_event(
        self,
        *,
        game_id: int,
        drawn_number: int,
        draw_position: int,
        drawn_at: datetime,
    ) -> DrawEvent:
        with self._lock:
            if any(d.game_id == game_id and d.draw_position == draw_position for d in self._draws.values()):
                raise ValueError(f"Draw position {draw_position} already recorded for game {game_id}")
            event = DrawEvent(
                id=next(self._draw_ids),
                game_id=game_id,
                drawn_number=int(drawn_number),
                draw_position=int(draw_position),
                drawn_at=drawn_at,
            )
            self._draws[event.id] = event
            self._remember(lambda: self._draws.pop(event.id, None))
            return event

    def list_draw_events(self, game_id: int) -> Sequence[DrawEvent]:
        with self._lock:
            events = [d for d in self._draws.values() if d.game_id == game_id]
        return sorted(events, key=lambda d: d.draw_position)

    def get_draw_event(self, game_id: int, draw_position: int) -> DrawEvent | None:
        with self._lock:
            for event in self._draws.values():
                if event.game_id == game_id and event.draw_position == draw_position:
                    return event
            return None
