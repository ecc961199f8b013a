"""E-sign agent tools. Exposes root_agent for `adk web esign_agents`."""

from __future__ import annotations

from .agent import root_agent
from .config.settings import EsignSettings, get_settings
from .tools import call_tool, list_tools

__all__ = [
    "root_agent",
    "EsignSettings",
    "call_tool",
    "get_settings",
    "list_tools",
]
