"""Request signing for the e-sign open platform.

The vendor recomputes an HMAC-SHA256 over a newline-joined canonical string::

    METHOD
    */*
    Content-MD5
    Content-Type
    <date, always empty>
    /request/path

and compares it with ``X-Tsign-Open-Ca-Signature``. Any byte of difference
(case, trailing newline, query string) fails authentication.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import time
from typing import Optional, Union

from esign_agents.config.constants import (
    ACCEPT,
    AUTH_MODE,
    HEADER_APP_ID,
    HEADER_AUTH_MODE,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)

logger = logging.getLogger(__name__)

Body = Union[bytes, str, None]


def content_md5(body: Body) -> str:
    """Base64 MD5 of the request body; empty string when there is no body at all."""
    if body is None:
        return ""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return base64.b64encode(hashlib.md5(body).digest()).decode("ascii")


def normalize_path(path: str) -> str:
    path = str(path).split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    return path


def canonical_string(
    method: str,
    path: str,
    content_md5: str = "",
    content_type: str = "",
    headers: str = "",
) -> str:
    """Builds the string the vendor signs. ``headers`` is always empty today."""
    components = [
        str(method).upper().strip(),
        ACCEPT,
        content_md5,
        content_type,
        "",  # date
    ]
    canonical = "\n".join(components) + "\n"
    if headers:
        canonical += headers + "\n"
    return canonical + normalize_path(path)


def sign(
    secret: str,
    method: str,
    path: str,
    content_md5: str = "",
    content_type: str = "",
) -> str:
    """Base64 HMAC-SHA256 of the canonical string under the app secret."""
    canonical = canonical_string(method, path, content_md5, content_type)
    signature = base64.b64encode(
        hmac.new(
            secret.encode("utf-8"),
            canonical.encode("utf-8"),
            hashlib.sha256,
        ).digest()
    ).decode("ascii")
    logger.debug("Signed canonical string %r -> %s", canonical, signature)
    return signature


class RequestSigner:
    """Builds the signed header set for one vendor request."""

    def __init__(self, app_id: str, app_secret: str, user_agent: str):
        self._app_id = app_id
        self._app_secret = app_secret
        self._user_agent = user_agent

    def get_headers(
        self,
        method: str,
        path: str,
        body: Body = None,
        content_type: str = "",
        timestamp_ms: Optional[int] = None,
    ) -> dict[str, str]:
        md5 = content_md5(body) if body else ""
        # Content-Type is only sent, and therefore only signed, with a body.
        signed_type = content_type if body else ""

        headers = {
            HEADER_APP_ID: self._app_id,
            HEADER_AUTH_MODE: AUTH_MODE,
            "Accept": ACCEPT,
            "User-Agent": self._user_agent,
            HEADER_TIMESTAMP: str(
                timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
            ),
        }
        if body:
            headers["Content-Type"] = signed_type
            headers["Content-MD5"] = md5
        headers[HEADER_SIGNATURE] = sign(
            self._app_secret, method, path, md5, signed_type
        )
        return headers
