"""Tests for the in-memory store's units of work.

Run with: pytest tests/test_memory_store.py -v
"""

import pytest

from lotto_room.domain import utcnow
from lotto_room.errors import DuplicateRoomCodeError


class Boom(Exception):
    pass


class TestAtomic:
    """Tests for InMemoryGameStore.atomic."""

    def test_failed_unit_discards_writes(self, store):
        """Every write of a failed unit is undone."""
        with pytest.raises(Boom):
            with store.atomic():
                game = store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())
                store.create_player(game_id=game.id, player_name="A", selected_numbers=[1, 2, 3, 4, 5], joined_at=utcnow())
                raise Boom()

        assert store.get_game_by_room_code("ROOM01") is None
        assert store.get_player(1) is None

    def test_failed_unit_restores_updates(self, store):
        """Updates of a failed unit are reverted to the previous record."""
        game = store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())

        with pytest.raises(Boom):
            with store.atomic():
                store.update_game(game.id, current_players=2)
                raise Boom()

        assert store.get_game(game.id) == game

    def test_failed_unit_restores_deleted_game(self, store):
        """A rolled back delete brings back the game and its players."""
        game = store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())
        player = store.create_player(game_id=game.id, player_name="A", selected_numbers=[1, 2, 3, 4, 5], joined_at=utcnow())

        with pytest.raises(Boom):
            with store.atomic():
                store.delete_game(game.id)
                raise Boom()

        assert store.get_game(game.id) == game
        assert store.list_players(game.id) == [player]

    def test_nested_unit_joins_outer(self, store):
        """An inner unit is rolled back together with the outer one."""
        with pytest.raises(Boom):
            with store.atomic():
                with store.atomic():
                    store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())
                raise Boom()

        assert store.get_game_by_room_code("ROOM01") is None

    def test_successful_unit_keeps_writes(self, store):
        """Writes of a completed unit stay."""
        with store.atomic():
            game = store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())

        assert store.get_game(game.id) == game


class TestConstraints:
    """Tests for store-level uniqueness rules."""

    def test_duplicate_room_code(self, store):
        """Room codes are unique."""
        store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())
        with pytest.raises(DuplicateRoomCodeError):
            store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())

    def test_duplicate_draw_position(self, store):
        """A draw position is recorded at most once per game."""
        game = store.create_game(room_code="ROOM01", max_players=2, created_at=utcnow())
        store.create_draw_event(game_id=game.id, drawn_number=7, draw_position=1, drawn_at=utcnow())

        with pytest.raises(ValueError):
            store.create_draw_event(game_id=game.id, drawn_number=8, draw_position=1, drawn_at=utcnow())
