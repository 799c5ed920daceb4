"""Per-game mutual exclusion.

Every mutation of one game (join, leave, start, draw, evaluate) runs while
holding that game's lock, so concurrent requests on the same game never
interleave. Different games never contend. Room-code creation shares a single
namespace lock. SqlGameStore additionally takes a row lock (SELECT ... FOR
UPDATE) for processes that do not share this registry.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class GameLockRegistry:
    """Lazily created re-entrant lock per game id."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}
        self._namespace = threading.RLock()

    def _lock_for(self, game_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def hold(self, game_id: int) -> Iterator[None]:
        lock = self._lock_for(int(game_id))
        with lock:
            yield

    @contextmanager
    def room_codes(self) -> Iterator[None]:
        with self._namespace:
            yield

    def discard(self, game_id: int) -> None:
        """Forget the lock of a deleted or completed game.

        A thread already waiting on the old lock keeps it; later callers get a
        fresh one. Only read paths and rejected mutations can follow, since
        neither state accepts writes.
        """

        with self._guard:
            self._locks.pop(int(game_id), None)

    def __contains__(self, game_id: object) -> bool:
        with self._guard:
            return game_id in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_REGISTRY = GameLockRegistry()


def default_registry() -> GameLockRegistry:
    return _REGISTRY
