"""Drive a started game through its draws on a fixed interval.

The service never schedules draws on its own; this script is the external
timer. It draws one number every --interval seconds until the game completes,
then prints the winners.

Usage:
  python scripts/run_draws.py --room-code ROOM01 --interval 3
  python scripts/run_draws.py --game-id 42 --interval 0
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import time
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lotto_room.config import resolve_database_url
from lotto_room.db import create_app_engine, create_session_factory
from lotto_room.domain import DRAWS_PER_GAME
from lotto_room.errors import AppError
from lotto_room.logging_config import LOG_FORMAT
from lotto_room.repositories.sql_game_store import SqlGameStore
from lotto_room.services.game_service import GameService


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Draw numbers for an in-progress lotto game")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--game-id", dest="game_id", type=int, default=None)
    target.add_argument("--room-code", dest="room_code", type=str, default=None)
    parser.add_argument("--interval", dest="interval", type=float, default=3.0, help="Seconds between draws")
    parser.add_argument("--database-url", dest="database_url", type=str, default=None)
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    engine = create_app_engine(args.database_url or resolve_database_url())
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        service = GameService(SqlGameStore(session))
        try:
            if args.room_code:
                game = service.rooms.find_by_room_code(args.room_code)
            else:
                game = service.rooms.find_by_id(args.game_id)
        except AppError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        game_id, room_code = game.id, game.room_code

    while True:
        # Fresh session per draw so each draw is its own transaction.
        with session_factory() as session:
            service = GameService(SqlGameStore(session))
            try:
                event = service.draw_number(game_id)
            except AppError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 1

        print(f"[{room_code}] draw {event.draw_position}/{DRAWS_PER_GAME}: {event.drawn_number}")
        if event.draw_position >= DRAWS_PER_GAME:
            break
        if args.interval > 0:
            time.sleep(args.interval)

    with session_factory() as session:
        state = GameService(SqlGameStore(session)).get_game(room_code)

    winners = [p.player_name for p in state.players if p.is_winner]
    print(f"[{room_code}] drawn numbers: {', '.join(str(n) for n in state.game.drawn_numbers)}")
    print(f"[{room_code}] winners: {', '.join(winners) if winners else 'none'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
