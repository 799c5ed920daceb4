"""SQLAlchemy implementation of the GameStore.

Converts ORM rows (lotto_room/models) to domain records on the way out, so no
live ORM object ever leaves the repository layer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lotto_room.domain import DrawEvent, Game, GameStatus, Player
from lotto_room.errors import AppError, DuplicateRoomCodeError, NotFoundError
from lotto_room.models.draw_event import DrawEventRow
from lotto_room.models.game import GameRow
from lotto_room.models.player import PlayerRow
from lotto_room.repositories.game_store import GameStore

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_game(row: GameRow) -> Game:
    return Game(
        id=int(row.id),
        room_code=str(row.room_code),
        status=GameStatus(row.status),
        max_players=int(row.max_players),
        current_players=int(row.current_players),
        drawn_numbers=tuple(int(n) for n in (row.drawn_numbers or [])),
        draw_order=int(row.draw_order),
        created_at=_aware(row.created_at),  # type: ignore[arg-type]
        started_at=_aware(row.started_at),
        completed_at=_aware(row.completed_at),
    )


def _to_player(row: PlayerRow) -> Player:
    return Player(
        id=int(row.id),
        game_id=int(row.game_id),
        player_name=str(row.player_name),
        selected_numbers=tuple(int(n) for n in (row.selected_numbers or [])),
        is_winner=bool(row.is_winner),
        joined_at=_aware(row.joined_at),  # type: ignore[arg-type]
    )


def _to_draw_event(row: DrawEventRow) -> DrawEvent:
    return DrawEvent(
        id=int(row.id),
        game_id=int(row.game_id),
        drawn_number=int(row.drawn_number),
        draw_position=int(row.draw_position),
        drawn_at=_aware(row.drawn_at),  # type: ignore[arg-type]
    )


class SqlGameStore(GameStore):
    """Relational store bound to one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._depth = 0

    @property
    def session(self) -> Session:
        return self._session

    # ---------- units of work ----------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Commit on success, roll back on any exception.

        Inner units join the outer one; only the outermost unit commits.
        """

        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield
            self._session.commit()
        except AppError:
            self._session.rollback()
            raise
        except Exception as e:
            logger.error(f"Transaction failed: {e}", exc_info=True)
            self._session.rollback()
            raise
        finally:
            self._depth = 0

    # ---------- games ----------

    def _game_row(self, game_id: int) -> GameRow:
        row = self._session.get(GameRow, game_id)
        if row is None:
            raise NotFoundError(message=f"Game {game_id} not found")
        return row

    def create_game(self, *, room_code: str, max_players: int, created_at: datetime) -> Game:
        if self.get_game_by_room_code(room_code) is not None:
            raise DuplicateRoomCodeError(room_code)

        row = GameRow(
            room_code=room_code,
            status=GameStatus.WAITING.value,
            max_players=int(max_players),
            current_players=0,
            drawn_numbers=[],
            draw_order=0,
            created_at=created_at,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # Lost a race on the unique index; the unit of work rolls back.
            raise DuplicateRoomCodeError(room_code) from exc
        return _to_game(row)

    def get_game(self, game_id: int, *, for_update: bool = False) -> Game | None:
        stmt = select(GameRow).where(GameRow.id == game_id)
        if for_update:
            # Row lock for cross-process serialization; refresh any cached state.
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        row = self._session.scalars(stmt).first()
        return _to_game(row) if row is not None else None

    def get_game_by_room_code(self, room_code: str) -> Game | None:
        row = self._session.scalars(select(GameRow).where(GameRow.room_code == room_code)).first()
        return _to_game(row) if row is not None else None

    def update_game(self, game_id: int, **changes: Any) -> Game:
        row = self._game_row(game_id)
        for key, value in changes.items():
            if key == "drawn_numbers":
                value = [int(n) for n in value]
            elif key == "status":
                value = GameStatus(value).value
            setattr(row, key, value)
        self._session.flush()
        return _to_game(row)

    def delete_game(self, game_id: int) -> None:
        row = self._session.get(GameRow, game_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.flush()

    def list_completed_games(self, limit: int) -> Sequence[Game]:
        stmt = (
            select(GameRow)
            .where(GameRow.status == GameStatus.COMPLETED.value)
            .order_by(GameRow.completed_at.desc(), GameRow.id.desc())
            .limit(max(0, int(limit)))
        )
        return [_to_game(row) for row in self._session.scalars(stmt).all()]

    # ---------- players ----------

    def create_player(
        self,
        *,
        game_id: int,
        player_name: str,
        selected_numbers: Sequence[int],
        joined_at: datetime,
    ) -> Player:
        row = PlayerRow(
            game_id=game_id,
            player_name=player_name,
            selected_numbers=[int(n) for n in selected_numbers],
            is_winner=False,
            joined_at=joined_at,
        )
        self._session.add(row)
        self._session.flush()  # assign PK
        return _to_player(row)

    def get_player(self, player_id: int) -> Player | None:
        row = self._session.get(PlayerRow, player_id)
        return _to_player(row) if row is not None else None

    def list_players(self, game_id: int) -> Sequence[Player]:
        stmt = select(PlayerRow).where(PlayerRow.game_id == game_id).order_by(PlayerRow.id.asc())
        return [_to_player(row) for row in self._session.scalars(stmt).all()]

    def count_players(self, game_id: int) -> int:
        stmt = select(func.count()).select_from(PlayerRow).where(PlayerRow.game_id == game_id)
        return int(self._session.scalar(stmt) or 0)

    def update_player(self, player_id: int, **changes: Any) -> Player:
        row = self._session.get(PlayerRow, player_id)
        if row is None:
            raise NotFoundError(message=f"Player {player_id} not found")
        for key, value in changes.items():
            if key == "selected_numbers":
                value = [int(n) for n in value]
            setattr(row, key, value)
        self._session.flush()
        return _to_player(row)

    def delete_player(self, player_id: int) -> None:
        row = self._session.get(PlayerRow, player_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.flush()

    # ---------- draw events ----------

    def create_draw_event(
        self,
        *,
        game_id: int,
        drawn_number: int,
        draw_position: int,
        drawn_at: datetime,
    ) -> DrawEvent:
        row = DrawEventRow(
            game_id=game_id,
            drawn_number=int(drawn_number),
            draw_position=int(draw_position),
            drawn_at=drawn_at,
        )
        self._session.add(row)
        self._session.flush()
        return _to_draw_event(row)

    def list_draw_events(self, game_id: int) -> Sequence[DrawEvent]:
        stmt = (
            select(DrawEventRow)
            .where(DrawEventRow.game_id == game_id)
            .order_by(DrawEventRow.draw_position.asc())
        )
        return [_to_draw_event(row) for row in self._session.scalars(stmt).all()]

    def get_draw_event(self, game_id: int, draw_position: int) -> DrawEvent | None:
        stmt = select(DrawEventRow).where(
            DrawEventRow.game_id == game_id,
            DrawEventRow.draw_position == draw_position,
        )
        row = self._session.scalars(stmt).first()
        return _to_draw_event(row) if row is not None else None
