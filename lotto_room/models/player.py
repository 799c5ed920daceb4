"""Player ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lotto_room.models.base import Base


class PlayerRow(Base):
    """A ticket (5 selected numbers) held by one player in one game."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(Integer, ForeignKey("games.id", ondelete="CASCADE"), index=True)
    player_name: Mapped[str] = mapped_column(String(50), nullable=False)
    selected_numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    game = relationship("GameRow", back_populates="players")
