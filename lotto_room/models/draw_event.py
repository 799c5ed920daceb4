"""Draw event ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, SmallInteger, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lotto_room.models.base import Base


class DrawEventRow(Base):
    """One revealed number of a game."""

    __tablename__ = "draw_events"
    __table_args__ = (UniqueConstraint("game_id", "draw_position", name="uq_draw_events_game_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(Integer, ForeignKey("games.id", ondelete="CASCADE"), index=True)
    drawn_number: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1..50
    draw_position: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1..5
    drawn_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    game = relationship("GameRow", back_populates="draw_events")
