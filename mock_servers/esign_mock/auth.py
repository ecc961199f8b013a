"""Request signature verification for the e-sign mock server.

Mirrors what the real platform does: recompute the HMAC-SHA256 over

    METHOD \\n Accept \\n Content-MD5 \\n Content-Type \\n Date \\n path

with the app secret and compare it with ``X-Tsign-Open-Ca-Signature``.
Credentials default to ``mock-app-id`` / ``mock-app-secret`` and can be
overridden with ESIGN_MOCK_APP_ID / ESIGN_MOCK_APP_SECRET.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os

from fastapi import Request

from mock_servers.esign_mock.envelope import CODE_AUTH_FAILED, EnvelopeError

MOCK_APP_ID = os.getenv("ESIGN_MOCK_APP_ID", "mock-app-id")
MOCK_APP_SECRET = os.getenv("ESIGN_MOCK_APP_SECRET", "mock-app-secret")


def _md5_b64(body: bytes) -> str:
    return base64.b64encode(hashlib.md5(body).digest()).decode("ascii")


def expected_signature(
    secret: str,
    method: str,
    accept: str,
    content_md5: str,
    content_type: str,
    path: str,
) -> str:
    string_to_sign = f"{method}\n{accept}\n{content_md5}\n{content_type}\n\n{path}"
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


async def verify_signature(request: Request) -> str:
    """FastAPI dependency; returns the app id on success."""
    app_id = request.headers.get("X-Tsign-Open-App-Id", "")
    if app_id != MOCK_APP_ID:
        raise EnvelopeError(CODE_AUTH_FAILED, f"Unknown app id: {app_id!r}", 401)

    if request.headers.get("X-Tsign-Open-Auth-Mode") != "Signature":
        raise EnvelopeError(CODE_AUTH_FAILED, "Unsupported auth mode", 401)

    if not request.headers.get("X-Tsign-Open-Ca-Timestamp", "").isdigit():
        raise EnvelopeError(CODE_AUTH_FAILED, "Missing or invalid timestamp", 401)

    body = await request.body()
    content_md5 = request.headers.get("Content-MD5", "")
    if body and content_md5 != _md5_b64(body):
        raise EnvelopeError(CODE_AUTH_FAILED, "Content-MD5 does not match body", 401)

    expected = expected_signature(
        MOCK_APP_SECRET,
        request.method,
        request.headers.get("Accept", ""),
        content_md5,
        request.headers.get("Content-Type", ""),
        request.url.path,
    )
    provided = request.headers.get("X-Tsign-Open-Ca-Signature", "")
    if not hmac.compare_digest(expected, provided):
        raise EnvelopeError(CODE_AUTH_FAILED, "INVALID_SIGNATURE", 401)
    return app_id
