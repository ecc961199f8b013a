"""Invoke an e-sign tool by name from the command line.

Usage:
    python -m esign_agents list
    python -m esign_agents create_sign_flow --args '{"filePath": "./contract.pdf",
        "fileName": "contract.pdf", "receiverPhone": "13800000000"}'
    python -m esign_agents query_sign_flow --args '{"flowId": "..."}'
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from esign_agents.config import configure_default_logging
from esign_agents.tools import call_tool, list_tools

_FAILURE_PREFIXES = ("Error:", "Configuration error:")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="esign-tools",
        description="Run an e-sign tool and print its text result.",
    )
    parser.add_argument(
        "tool",
        help="Tool name (create_sign_flow, query_sign_flow), or 'list' for the catalogue",
    )
    parser.add_argument(
        "--args",
        default="{}",
        help="Tool arguments as a JSON object (default: {})",
    )
    args = parser.parse_args(argv)

    if args.tool == "list":
        print(json.dumps(list_tools(), indent=2, ensure_ascii=False))
        return 0

    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as exc:
        parser.error(f"--args is not valid JSON: {exc}")
    if not isinstance(arguments, dict):
        parser.error("--args must be a JSON object")

    configure_default_logging()
    result = call_tool(args.tool, arguments)
    print(result)
    return 1 if result.startswith(_FAILURE_PREFIXES) else 0


if __name__ == "__main__":
    sys.exit(main())
