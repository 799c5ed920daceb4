"""Tests for per-game locking.

Run with: pytest tests/test_locks.py -v
"""

import threading

from lotto_room.services.locks import GameLockRegistry


class TestGameLockRegistry:
    """Tests for GameLockRegistry."""

    def test_hold_is_reentrant(self, locks):
        """The same thread can nest holds on one game."""
        with locks.hold(1):
            with locks.hold(1):
                assert 1 in locks

    def test_games_do_not_contend(self, locks):
        """Holding one game never blocks another game."""
        acquired = threading.Event()

        def _other_game():
            with locks.hold(2):
                acquired.set()

        with locks.hold(1):
            worker = threading.Thread(target=_other_game)
            worker.start()
            assert acquired.wait(timeout=2)
            worker.join(timeout=2)

    def test_same_game_is_exclusive(self, locks):
        """A second thread waits while one thread holds the game."""
        entered = threading.Event()
        release = threading.Event()
        order: list[str] = []

        def _first():
            with locks.hold(1):
                entered.set()
                release.wait(timeout=2)
                order.append("first")

        def _second():
            with locks.hold(1):
                order.append("second")

        first = threading.Thread(target=_first)
        first.start()
        assert entered.wait(timeout=2)
        second = threading.Thread(target=_second)
        second.start()
        second.join(timeout=0.2)
        assert order == []

        release.set()
        first.join(timeout=2)
        second.join(timeout=2)
        assert order == ["first", "second"]

    def test_discard_forgets_lock(self):
        """discard drops the entry of a game."""
        registry = GameLockRegistry()
        with registry.hold(7):
            pass

        registry.discard(7)

        assert 7 not in registry
        assert len(registry) == 0


class TestLockLifetime:
    """Locks are released with the games that no longer change."""

    def test_completed_game_drops_its_lock(self, service, open_room, locks):
        """Finishing the draw removes the game's lock, and reading it back does not recreate it."""
        game, _ = open_room(start=True)
        for _ in range(5):
            service.draw_number(game.id)

        service.get_game("ROOM01")

        assert game.id not in locks

    def test_deleted_game_drops_its_lock(self, service, locks):
        """The last player leaving removes the game's lock."""
        game = service.create_game("ROOM01")
        player = service.join_game("ROOM01", "A", [1, 2, 3, 4, 5])

        service.leave_game(game.id, player.id)

        assert game.id not in locks
