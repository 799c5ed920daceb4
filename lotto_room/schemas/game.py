"""Schemas for the lotto room API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from lotto_room.domain import MAX_NUMBER, MIN_NUMBER, NUMBERS_PER_TICKET, GameStatus

ROOM_CODE_PATTERN = r"^[A-Z0-9]+$"


class CreateGameRequestSchema(Schema):
    room_code = fields.String(
        required=True,
        validate=[
            validate.Length(min=4, max=10),
            validate.Regexp(
                ROOM_CODE_PATTERN,
                error="Room code must contain only uppercase letters and numbers",
            ),
        ],
    )

    # Missing -> DEFAULT_MAX_PLAYERS from config.
    max_players = fields.Integer(
        required=False,
        load_default=None,
        validate=validate.Range(min=2, max=50),
    )


class JoinGameRequestSchema(Schema):
    player_name = fields.String(required=True, validate=validate.Length(min=1, max=50))

    selected_numbers = fields.List(
        fields.Integer(validate=validate.Range(min=MIN_NUMBER, max=MAX_NUMBER)),
        required=True,
        validate=validate.Length(equal=NUMBERS_PER_TICKET),
    )

    @validates_schema
    def _validate_unique_numbers(self, data, **kwargs):  # type: ignore[no-untyped-def]
        nums = data.get("selected_numbers")
        if nums is not None and len(nums) != len(set(nums)):
            raise ValidationError({"selected_numbers": ["Numbers must be unique"]})


class GameSchema(Schema):
    id = fields.Integer()
    room_code = fields.String()
    status = fields.Enum(GameStatus, by_value=True)
    max_players = fields.Integer()
    current_players = fields.Integer()
    drawn_numbers = fields.List(fields.Integer())
    draw_order = fields.Integer()
    created_at = fields.DateTime()
    started_at = fields.DateTime(allow_none=True)
    completed_at = fields.DateTime(allow_none=True)


class PlayerSchema(Schema):
    id = fields.Integer()
    game_id = fields.Integer()
    player_name = fields.String()
    selected_numbers = fields.List(fields.Integer())
    is_winner = fields.Boolean()
    joined_at = fields.DateTime()


class DrawEventSchema(Schema):
    id = fields.Integer()
    game_id = fields.Integer()
    drawn_number = fields.Integer()
    draw_position = fields.Integer()
    drawn_at = fields.DateTime()


class GameStateSchema(Schema):
    game = fields.Nested(GameSchema)
    players = fields.List(fields.Nested(PlayerSchema))
    latest_draw = fields.Nested(DrawEventSchema, allow_none=True)
