"""
SQLAlchemy ORM models for MySQL storage.

Tables:
- games: one row per shared game (the secret answer lives here only)
- players: one row per player registered for a game
- guesses: one row per submitted guess (history)

Why JSON?
- A guess is 5 letters and 5 correctness labels; JSON arrays keep them readable.
- MySQL (5.7+/8.0+) supports JSON type natively, SQLite stores it as text.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    String, Integer, DateTime, Boolean, ForeignKey, JSON, UniqueConstraint,
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db import Base


class Game(Base):
    __tablename__ = "games"

    # UUIDs generated in code; stored as strings
    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Secret answer, uppercase
    answer: Mapped[str] = mapped_column(String(5), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    players: Mapped[list["Player"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Player.id.asc()",
    )


class Player(Base):
    __tablename__ = "players"
    __table_args__ = (UniqueConstraint("game_id", "name", name="uq_player_per_game"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    game_id: Mapped[str] = mapped_column(String(36), ForeignKey("games.id", ondelete="CASCADE"), index=True)
    game: Mapped[Game] = relationship(back_populates="players")

    name: Mapped[str] = mapped_column(String(64), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    # Round state for this player
    round_over: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    guesses: Mapped[list["Guess"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="Guess.id.asc()",
    )


class Guess(Base):
    __tablename__ = "guesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id", ondelete="CASCADE"), index=True)
    player: Mapped[Player] = relationship(back_populates="guesses")

    # The player's guess (list[str]) and engine output (list of correctness values)
    letters: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    result: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    submitted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
