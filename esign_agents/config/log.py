"""File logging for the e-sign tools."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .settings import EsignSettings
from .settings import get_settings

_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_PACKAGE_LOGGER = "esign_agents"


def configure_logging(settings: EsignSettings) -> logging.Logger:
  """Attaches an append-mode file handler to the package logger once."""

  package_logger = logging.getLogger(_PACKAGE_LOGGER)
  package_logger.setLevel(settings.esign_log_level)

  for existing in package_logger.handlers:
    if getattr(existing, "_esign_handler", False):
      return package_logger

  try:
    handler: logging.Handler = logging.FileHandler(
      settings.esign_log_file, mode="a", encoding="utf-8"
    )
  except OSError as error:
    handler = logging.StreamHandler()
    package_logger.warning(
      "Cannot open log file %s (%s); logging to stderr.",
      settings.esign_log_file,
      error,
    )
  handler.setFormatter(logging.Formatter(_LOG_FORMAT))
  handler._esign_handler = True  # type: ignore[attr-defined]
  package_logger.addHandler(handler)
  return package_logger


def configure_default_logging() -> Optional[logging.Logger]:
  """Configures logging from the environment for hosts that import the agent.

  Invalid settings leave logging unconfigured; the tools report them.
  """

  try:
    settings = get_settings()
  except ValidationError as error:
    logging.getLogger(_PACKAGE_LOGGER).warning(
      "Log file not configured, invalid settings: %d error(s)", error.error_count()
    )
    return None
  return configure_logging(settings)
