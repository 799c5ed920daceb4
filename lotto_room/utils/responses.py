"""Helpers for the JSON response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def created(data: Any) -> tuple[Response, int]:
    return ok(data, status_code=201)


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    """Error response."""

    body = {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
    }
    return jsonify(body), status_code
