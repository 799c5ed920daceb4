"""Unit tests for domain records.

Run with: pytest tests/test_domain.py -v
"""

from lotto_room.domain import NUMBER_POOL, Game, GameStatus, Player, utcnow


def _game(**overrides) -> Game:
    values = dict(
        id=1,
        room_code="ROOM01",
        status=GameStatus.IN_PROGRESS,
        max_players=2,
        current_players=2,
        drawn_numbers=(),
        draw_order=0,
        created_at=utcnow(),
    )
    values.update(overrides)
    return Game(**values)


def _player(numbers) -> Player:
    return Player(
        id=1,
        game_id=1,
        player_name="A",
        selected_numbers=tuple(numbers),
        is_winner=False,
        joined_at=utcnow(),
    )


class TestGame:
    """Tests for Game derived values."""

    def test_number_pool_is_one_to_fifty(self):
        """The pool holds every number from 1 to 50 once."""
        assert NUMBER_POOL == tuple(range(1, 51))

    def test_available_numbers_excludes_drawn(self):
        """Drawn numbers are removed from the available pool."""
        game = _game(drawn_numbers=(7, 1, 50), draw_order=3)
        available = game.available_numbers()
        assert len(available) == 47
        assert {1, 7, 50}.isdisjoint(available)

    def test_is_full_at_max_players(self):
        """A room is full once current_players reaches max_players."""
        assert _game(current_players=2, max_players=2).is_full
        assert not _game(current_players=1, max_players=2).is_full

    def test_all_drawn_after_five_draws(self):
        """all_drawn flips once draw_order reaches five."""
        assert not _game(drawn_numbers=(1, 2, 3, 4), draw_order=4).all_drawn
        assert _game(drawn_numbers=(1, 2, 3, 4, 5), draw_order=5).all_drawn

    def test_status_values(self):
        """Statuses serialize to their lowercase wire names."""
        assert [s.value for s in GameStatus] == ["waiting", "in_progress", "completed"]


class TestPlayerMatches:
    """Tests for the 5-of-5 winning check."""

    def test_match_ignores_draw_order(self):
        """Selection {5,10,15,20,25} matches draws [25,5,20,10,15]."""
        assert _player([5, 10, 15, 20, 25]).matches([25, 5, 20, 10, 15])

    def test_four_of_five_is_not_a_match(self):
        """There is no partial prize tier."""
        assert not _player([1, 2, 3, 4, 5]).matches([1, 2, 3, 4, 6])

    def test_no_overlap_is_not_a_match(self):
        """Disjoint numbers never match."""
        assert not _player([6, 7, 8, 9, 10]).matches((1, 2, 3, 4, 5))
