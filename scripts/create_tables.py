"""Create the lotto room tables (games, players, draw_events).

Reads DATABASE_URL (or PG* variables) from .env, .env.local and the
environment. --reset drops the three tables first, which deletes every game.

Usage:
  python scripts/create_tables.py
  python scripts/create_tables.py --database-url sqlite:///./dev.db --reset
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lotto_room.config import resolve_database_url
from lotto_room.db import create_app_engine
from lotto_room.models.base import Base

# Registers the ORM tables on Base.metadata
from lotto_room import models  # noqa: F401


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create lotto room tables")
    parser.add_argument("--database-url", dest="database_url", type=str, default=None)
    parser.add_argument("--reset", action="store_true", help="Drop existing tables first")
    args = parser.parse_args(argv)

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    engine = create_app_engine(args.database_url or resolve_database_url())
    try:
        if args.reset:
            Base.metadata.drop_all(bind=engine)
            print("Dropped existing tables.")
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()

    print(f"Tables ready on {engine.url.render_as_string(hide_password=True)}: {', '.join(sorted(Base.metadata.tables))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
