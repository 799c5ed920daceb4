"""Game ORM model.

One row per lotto room. Drawn numbers are kept in draw order as a JSON list;
the draw_events table holds the same numbers as individual, immutable rows.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lotto_room.models.base import Base


class GameRow(Base):
    """A lotto room."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    room_code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="waiting", index=True)
    max_players: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=10)
    current_players: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    drawn_numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    draw_order: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    players = relationship(
        "PlayerRow",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="PlayerRow.id",
    )
    draw_events = relationship(
        "DrawEventRow",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DrawEventRow.draw_position",
    )
