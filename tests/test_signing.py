"""Tests for request signing and Content-MD5."""

from __future__ import annotations

import base64
import hashlib
import hmac

import pytest

from esign_agents.signing import (
    RequestSigner,
    canonical_string,
    content_md5,
    normalize_path,
    sign,
)


def _reference_signature(secret: str, string_to_sign: str) -> str:
    return base64.b64encode(
        hmac.new(
            secret.encode("utf-8"),
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).digest()
    ).decode("ascii")


# --- Content-MD5 ---


class TestContentMd5:
    def test_no_body_is_empty_string(self):
        assert content_md5(None) == ""

    def test_zero_length_body_constant(self):
        assert content_md5(b"") == "1B2M2Y8AsgTpgAmY7PhCfg=="

    def test_known_vector(self):
        assert content_md5(b"hello") == "XUFAKrxLKna5cZ2REBfFkg=="

    def test_str_is_utf8_encoded(self):
        assert content_md5("hello") == content_md5(b"hello")
        assert content_md5("合同") == content_md5("合同".encode("utf-8"))


# --- Canonical string ---


class TestCanonicalString:
    def test_layout(self):
        result = canonical_string(
            "post", "/v3/files/file-upload-url", "abc==", "application/json"
        )
        assert result == "POST\n*/*\nabc==\napplication/json\n\n/v3/files/file-upload-url"

    def test_no_trailing_newline(self):
        assert not canonical_string("GET", "/v3/files/1").endswith("\n")

    def test_method_trimmed_and_upper_cased(self):
        assert canonical_string("  get ", "/a").startswith("GET\n")

    def test_query_string_stripped(self):
        assert canonical_string("GET", "/v3/files/1?x=1&y=2").endswith("\n/v3/files/1")

    def test_leading_slash_added(self):
        assert normalize_path("v3/sign-flow/abc/detail") == "/v3/sign-flow/abc/detail"

    def test_empty_md5_and_type_for_get(self):
        assert canonical_string("GET", "/v3/files/1") == "GET\n*/*\n\n\n\n/v3/files/1"

    def test_headers_inserted_before_path(self):
        result = canonical_string("GET", "/p", headers="x-custom:1")
        assert result == "GET\n*/*\n\n\n\nx-custom:1\n/p"


# --- Signature ---


class TestSign:
    def test_matches_reference_hmac(self):
        expected = _reference_signature(
            "secret", "POST\n*/*\nmd5==\napplication/json\n\n/v3/sign-flow/create-by-file"
        )
        assert (
            sign("secret", "POST", "/v3/sign-flow/create-by-file", "md5==", "application/json")
            == expected
        )

    def test_deterministic(self):
        args = ("secret", "POST", "/v3/files/file-upload-url", "md5==", "application/json")
        assert sign(*args) == sign(*args)

    @pytest.mark.parametrize(
        "changed",
        [
            ("other-secret", "POST", "/p", "md5==", "application/json"),
            ("secret", "PUT", "/p", "md5==", "application/json"),
            ("secret", "POST", "/q", "md5==", "application/json"),
            ("secret", "POST", "/p", "other==", "application/json"),
            ("secret", "POST", "/p", "md5==", "application/pdf"),
        ],
    )
    def test_any_input_change_changes_signature(self, changed):
        base = sign("secret", "POST", "/p", "md5==", "application/json")
        assert sign(*changed) != base

    def test_query_string_does_not_change_signature(self):
        assert sign("s", "GET", "/v3/files/1?a=b") == sign("s", "GET", "/v3/files/1")


# --- RequestSigner headers ---


class TestRequestSigner:
    @pytest.fixture
    def signer(self):
        return RequestSigner(app_id="app-1", app_secret="secret", user_agent="ua/1.0")

    def test_headers_with_body(self, signer):
        body = b'{"a":1}'
        headers = signer.get_headers(
            "POST", "/v3/files/file-upload-url", body,
            "application/json; charset=UTF-8", timestamp_ms=1700000000000,
        )
        assert headers["X-Tsign-Open-App-Id"] == "app-1"
        assert headers["X-Tsign-Open-Auth-Mode"] == "Signature"
        assert headers["Accept"] == "*/*"
        assert headers["User-Agent"] == "ua/1.0"
        assert headers["X-Tsign-Open-Ca-Timestamp"] == "1700000000000"
        assert headers["Content-Type"] == "application/json; charset=UTF-8"
        assert headers["Content-MD5"] == content_md5(body)
        assert headers["X-Tsign-Open-Ca-Signature"] == _reference_signature(
            "secret",
            f"POST\n*/*\n{content_md5(body)}\napplication/json; charset=UTF-8\n\n"
            "/v3/files/file-upload-url",
        )

    def test_headers_without_body(self, signer):
        headers = signer.get_headers("GET", "/v3/files/1", None, "application/json")
        assert "Content-Type" not in headers
        assert "Content-MD5" not in headers
        assert headers["X-Tsign-Open-Ca-Signature"] == _reference_signature(
            "secret", "GET\n*/*\n\n\n\n/v3/files/1"
        )

    def test_timestamp_defaults_to_now_in_ms(self, signer):
        headers = signer.get_headers("GET", "/v3/files/1")
        assert len(headers["X-Tsign-Open-Ca-Timestamp"]) == 13
