"""Shared e-sign configuration exports."""

from __future__ import annotations

from .constants import FLOW_POLICY
from .constants import PRODUCTION_HOST
from .constants import SUPPORTED_FILE_EXTENSIONS
from .log import configure_default_logging
from .log import configure_logging
from .settings import EsignSettings
from .settings import configuration_guidance
from .settings import get_settings

__all__ = [
  "FLOW_POLICY",
  "PRODUCTION_HOST",
  "SUPPORTED_FILE_EXTENSIONS",
  "EsignSettings",
  "configuration_guidance",
  "configure_default_logging",
  "configure_logging",
  "get_settings",
]
