"""Centralized error handlers.

Every failure leaves the API in the same envelope as a success, with
``error.code`` taken from the AppError taxonomy in lotto_room.errors.
"""

from __future__ import annotations

import logging

from flask import Flask, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from lotto_room.errors import AppError, ConflictError, DuplicateRoomCodeError, NotFoundError, ValidationError
from lotto_room.utils.responses import fail

logger = logging.getLogger(__name__)


def _respond(exc: AppError):
    return fail(exc.code, exc.message, exc.status_code, exc.details)


def _from_integrity_error(exc: IntegrityError) -> AppError:
    # The room code index is the only unique constraint a client can hit.
    reason = str(exc.orig) if exc.orig is not None else str(exc)
    if "room_code" in reason:
        params = exc.params if isinstance(exc.params, dict) else {}
        return DuplicateRoomCodeError(str(params.get("room_code", "")))
    return ConflictError(details=reason)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.info("%s %s rejected: %s", request.method, request.path, exc)
        return _respond(exc)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        # exc.messages maps field -> list[str]
        return _respond(ValidationError(details=exc.messages))

    @app.errorhandler(IntegrityError)
    def _handle_integrity_error(exc: IntegrityError):
        logger.warning("Integrity error on %s %s", request.method, request.path, exc_info=exc)
        return _respond(_from_integrity_error(exc))

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        status = int(exc.code or 500)
        if status == 404:
            return _respond(NotFoundError(details={"path": request.path}))

        return fail(
            "http_error",
            exc.description or "HTTP error",
            status,
            details={"name": exc.name},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.path)
        return fail("internal_error", "Internal server error", 500)
