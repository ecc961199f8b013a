"""``{code, message, data}`` reply helpers for the e-sign mock server."""

from __future__ import annotations

from typing import Any

CODE_OK = 0
CODE_AUTH_FAILED = 401
CODE_BAD_REQUEST = 1435002
CODE_NOT_FOUND = 1437001


class EnvelopeError(Exception):
    """Rendered by the app as a ``{code, message, data: null}`` reply."""

    def __init__(self, code: int, message: str, status_code: int = 200):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def ok(data: Any) -> dict[str, Any]:
    return {"code": CODE_OK, "message": "success", "data": data}


def failure(code: int, message: str) -> dict[str, Any]:
    return {"code": code, "message": message, "data": None}
