"""Tests for game snapshots and history.

Run with: pytest tests/test_game_state_reader.py -v
"""

import pytest

from lotto_room.errors import NotFoundError
from lotto_room.services.game_service import GameService


def _play(service, room_code, scripted_random):
    game = service.create_game(room_code)
    service.join_game(room_code, "A", [1, 2, 3, 4, 5])
    service.join_game(room_code, "B", [6, 7, 8, 9, 10])
    service.start_game(room_code)
    scripted_random.queue(1, 2, 3, 4, 5)
    for _ in range(5):
        service.draw_number(game.id)
    return game


class TestGetState:
    """Tests for GameStateReader.get_state."""

    def test_fresh_game_has_no_latest_draw(self, service):
        """A game without draws reports latest_draw as None."""
        service.create_game("ROOM01")

        state = service.get_game("ROOM01")

        assert state.game.room_code == "ROOM01"
        assert state.players == ()
        assert state.latest_draw is None

    def test_players_in_join_order(self, service, open_room):
        """Players are listed in the order they joined."""
        _, players = open_room(tickets={"Z": [1, 2, 3, 4, 5], "A": [6, 7, 8, 9, 10], "M": [11, 12, 13, 14, 15]})

        state = service.get_game("ROOM01")

        assert [p.player_name for p in state.players] == ["Z", "A", "M"]
        assert [p.id for p in state.players] == [p.id for p in players]

    def test_latest_draw_matches_draw_order(self, service, open_room, scripted_random):
        """The latest draw is the event at the game's draw_order."""
        game, _ = open_room(start=True)
        scripted_random.queue(17, 33, 2)
        for _ in range(3):
            service.draw_number(game.id)

        state = service.get_game("ROOM01")

        assert state.game.draw_order == 3
        assert state.latest_draw.draw_position == 3
        assert state.latest_draw.drawn_number == 2

    def test_unknown_room(self, service):
        """An unknown room code raises NotFoundError."""
        with pytest.raises(NotFoundError):
            service.get_game("NOPE")


class TestHistory:
    """Tests for GameStateReader.get_history."""

    def test_only_completed_games(self, service, open_room, scripted_random):
        """Waiting and running games are not part of the history."""
        _play(service, "DONE01", scripted_random)
        open_room("WAIT01")
        open_room("RUN001", start=True)

        assert [g.room_code for g in service.get_game_history()] == ["DONE01"]

    def test_newest_completed_first(self, service, scripted_random):
        """History lists the most recently completed game first."""
        for code in ("GAME01", "GAME02", "GAME03"):
            _play(service, code, scripted_random)

        assert [g.room_code for g in service.get_game_history()] == ["GAME03", "GAME02", "GAME01"]

    def test_history_limit(self, store, locks, scripted_random):
        """History is capped at the configured limit."""
        service = GameService(store, random_source=scripted_random, locks=locks, history_limit=2)
        for code in ("GAME01", "GAME02", "GAME03"):
            _play(service, code, scripted_random)

        assert [g.room_code for g in service.get_game_history()] == ["GAME03", "GAME02"]
