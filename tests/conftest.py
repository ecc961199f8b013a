"""Shared fixtures: settings isolation and a client wired to the e-sign mock."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from esign_agents.config.settings import get_settings
from esign_agents.esign_client import EsignClient
from esign_agents.signing import RequestSigner
from mock_servers.esign_mock import db as mock_db
from mock_servers.esign_mock.app import app as mock_app
from mock_servers.esign_mock.auth import MOCK_APP_ID, MOCK_APP_SECRET

_ENV_NAMES = (
    "HOST",
    "APP_ID",
    "APP_SECRET",
    "ESIGN_POLL_MAX_ATTEMPTS",
    "ESIGN_POLL_INTERVAL_SECONDS",
    "ESIGN_SCRATCH_DIR",
    "ESIGN_LOG_FILE",
    "ESIGN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from an empty environment and a fresh settings cache."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _detach_esign_handlers() -> None:
    package_logger = logging.getLogger("esign_agents")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_esign_handler", False):
            package_logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def clean_logging():
    """Detach the package log handler that configure_logging installs."""
    _detach_esign_handlers()
    yield
    _detach_esign_handlers()


@pytest.fixture
def configured_env(monkeypatch, tmp_path):
    """Valid settings pointing at the mock, no polling delay, scratch in tmp."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    monkeypatch.setenv("HOST", "http://testserver")
    monkeypatch.setenv("APP_ID", MOCK_APP_ID)
    monkeypatch.setenv("APP_SECRET", MOCK_APP_SECRET)
    monkeypatch.setenv("ESIGN_POLL_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("ESIGN_SCRATCH_DIR", str(scratch))
    monkeypatch.setenv("ESIGN_LOG_FILE", str(tmp_path / "esign.log"))
    get_settings.cache_clear()
    return scratch


@pytest.fixture
def mock_http():
    """TestClient for the e-sign mock server with an empty store."""
    mock_db.reset()
    yield TestClient(mock_app)
    mock_db.reset()


@pytest.fixture
def mock_client(mock_http) -> EsignClient:
    """EsignClient whose HTTP calls go to the in-process mock."""
    return EsignClient(
        base_url="http://testserver",
        signer=RequestSigner(MOCK_APP_ID, MOCK_APP_SECRET, "esign-tests"),
        http_client=mock_http,
    )
