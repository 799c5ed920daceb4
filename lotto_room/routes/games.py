"""Game routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lotto_room.db import get_store
from lotto_room.schemas.game import (
    CreateGameRequestSchema,
    DrawEventSchema,
    GameSchema,
    GameStateSchema,
    JoinGameRequestSchema,
    PlayerSchema,
)
from lotto_room.services.game_service import GameService
from lotto_room.utils.responses import created, ok

games_bp = Blueprint("games", __name__)

_create_schema = CreateGameRequestSchema()
_join_schema = JoinGameRequestSchema()
_game_schema = GameSchema()
_games_schema = GameSchema(many=True)
_player_schema = PlayerSchema()
_players_schema = PlayerSchema(many=True)
_draw_schema = DrawEventSchema()
_state_schema = GameStateSchema()


def _service() -> GameService:
    return GameService(
        get_store(),
        random_source=current_app.extensions.get("random_source"),
        locks=current_app.extensions["game_locks"],
        history_limit=int(current_app.config.get("HISTORY_LIMIT", 100)),
    )


@games_bp.post("/games")
def create_game():
    """Create a waiting game under a new room code."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    max_players = data.get("max_players") or int(current_app.config.get("DEFAULT_MAX_PLAYERS", 10))
    game = _service().create_game(str(data["room_code"]), int(max_players))
    return created(_game_schema.dump(game))


@games_bp.get("/games/history")
def game_history():
    """Completed games, most recent first."""

    return ok(_games_schema.dump(_service().get_game_history()))


@games_bp.get("/games/<string:room_code>")
def get_game(room_code: str):
    """Game state for client synchronization."""

    return ok(_state_schema.dump(_service().get_game(room_code)))


@games_bp.post("/games/<string:room_code>/join")
def join_game(room_code: str):
    payload = request.get_json(silent=True) or {}
    data = _join_schema.load(payload)

    player = _service().join_game(
        room_code,
        player_name=str(data["player_name"]),
        selected_numbers=[int(n) for n in data["selected_numbers"]],
    )
    return created(_player_schema.dump(player))


@games_bp.post("/games/<string:room_code>/start")
def start_game(room_code: str):
    return ok(_game_schema.dump(_service().start_game(room_code)))


@games_bp.post("/games/<int:game_id>/draw")
def draw_number(game_id: int):
    """Draw the next number. Meant to be driven by a timer or orchestrator."""

    event = _service().draw_number(game_id)
    return created(_draw_schema.dump(event))


@games_bp.post("/games/<int:game_id>/winners")
def check_winners(game_id: int):
    winners = _service().check_winners(game_id)
    return ok(_players_schema.dump(winners))


@games_bp.delete("/games/<int:game_id>/players/<int:player_id>")
def leave_game(game_id: int, player_id: int):
    left = _service().leave_game(game_id, player_id)
    return ok({"left": left})
