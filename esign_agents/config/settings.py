"""Settings model for the e-sign tools and the vendor API connector."""

from __future__ import annotations

import json
import tempfile
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from .constants import PRODUCTION_HOST

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Field name -> environment variable, in the order they are reported.
REQUIRED_SETTINGS: tuple[tuple[str, str], ...] = (
  ("host", "HOST"),
  ("app_id", "APP_ID"),
  ("app_secret", "APP_SECRET"),
)


class EsignSettings(BaseSettings):
  """Runtime settings loaded from environment variables."""

  host: str = ""
  app_id: str = ""
  app_secret: str = ""

  esign_user_agent: str = "esign-mcp-server-python-V1.1.2"
  esign_http_timeout_seconds: float = 30.0
  esign_poll_max_attempts: int = 30
  esign_poll_interval_seconds: float = 2.0
  esign_scratch_dir: str = tempfile.gettempdir()
  esign_log_file: str = "/tmp/app.log"
  esign_log_level: str = "INFO"

  model_config = SettingsConfigDict(
    env_file=".env",
    extra="ignore",
  )

  @field_validator("host", "app_id", "app_secret", mode="before")
  @classmethod
  def _strip(cls, value: str | None) -> str:
    return (value or "").strip()

  @field_validator("host")
  @classmethod
  def _strip_trailing_slash(cls, host: str) -> str:
    return host.rstrip("/")

  @field_validator("esign_log_level", mode="before")
  @classmethod
  def _validate_log_level(cls, level: str) -> str:
    normalized_level = str(level).upper()
    if normalized_level not in _VALID_LOG_LEVELS:
      raise ValueError(
        f"Invalid log level {level!r}. Expected one of {sorted(_VALID_LOG_LEVELS)}."
      )
    return normalized_level

  def missing_settings(self) -> list[str]:
    """Returns the environment names of required settings that are blank."""

    return [env for field, env in REQUIRED_SETTINGS if not getattr(self, field)]


# Example value and explanation shown for each missing setting.
_SETTING_HELP: dict[str, tuple[str, str]] = {
  "HOST": (
    f"vendor API base URL, e.g. {PRODUCTION_HOST}",
    f"base URL of the e-sign open platform. Production is {PRODUCTION_HOST};"
    " use the sandbox host for testing.",
  ),
  "APP_ID": (
    "your application id",
    "the application id issued by the e-sign open platform console.",
  ),
  "APP_SECRET": (
    "your application secret",
    "the application secret issued together with the application id.",
  ),
}


def configuration_guidance(missing: list[str], command: str = "esign-tools") -> str:
  """Builds the message shown instead of running a tool when settings are missing.

  Only the missing settings are named, in the example and in the notes.
  """

  example_env = {name: _SETTING_HELP[name][0] for name in missing}
  example = json.dumps(
    {"esign-tools": {"command": command, "args": [], "env": example_env}},
    indent=2,
    ensure_ascii=False,
  )
  notes = "\n".join(
    f"{i}. {name}: {_SETTING_HELP[name][1]}" for i, name in enumerate(missing, 1)
  )
  return (
    f"Configuration error: missing required settings {', '.join(missing)}\n"
    "\n"
    "Add the following environment variables to the tool host configuration:\n"
    f"{example}\n"
    "\n"
    "Notes:\n"
    f"{notes}\n"
    "\n"
    "Sandbox and production credentials are not interchangeable; use the ones"
    " issued for the chosen host."
  )


@lru_cache(maxsize=1)
def get_settings() -> EsignSettings:
  """Returns a cached settings object for repeated tool calls."""

  return EsignSettings()
