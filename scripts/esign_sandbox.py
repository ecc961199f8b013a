#!/usr/bin/env python3
"""Sandbox smoke test for the e-sign tools, against the e-sign mock server.

Runs create_sign_flow and query_sign_flow end to end against a running mock
(or any host given with --host) and checks the text results.

Usage:
    uvicorn mock_servers.esign_mock.app:app --port 8084
    python scripts/esign_sandbox.py
    python scripts/esign_sandbox.py --host http://localhost:8084 -v
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass, field

import httpx

# ---------------------------------------------------------------------------
# ANSI colour helpers
# ---------------------------------------------------------------------------
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
BOLD = "\033[1m"
RESET = "\033[0m"


def _pass(msg: str) -> str:
    return f"{GREEN}{BOLD}PASS{RESET} {msg}"


def _fail(msg: str) -> str:
    return f"{RED}{BOLD}FAIL{RESET} {msg}"


def _info(msg: str) -> str:
    return f"{YELLOW}{msg}{RESET}"


_FLOW_ID_PATTERN = re.compile(r"Flow ID: (\S+)")


def extract_flow_id(text: str) -> str:
    """Pull the flow id out of a create_sign_flow success message."""
    match = _FLOW_ID_PATTERN.search(text)
    return match.group(1) if match else ""


# ---------------------------------------------------------------------------
# Scenario definition
# ---------------------------------------------------------------------------

@dataclass
class Scenario:
    num: int
    name: str
    file_path: str
    file_name: str
    receiver_phone: str
    username: str = ""
    keywords: list[str] = field(default_factory=list)
    query_after: bool = False


def build_scenarios(host: str) -> list[Scenario]:
    return [
        Scenario(
            num=1,
            name="Remote PDF, registered signer",
            file_path=f"{host}/samples/contract.pdf",
            file_name="contract.pdf",
            receiver_phone="13800000000",
            keywords=["Success!", "Flow ID:", "Sign URL: http"],
            query_after=True,
        ),
        Scenario(
            num=2,
            name="Remote DOCX converted to PDF, named signer",
            file_path=f"{host}/samples/agreement.docx",
            file_name="agreement.docx",
            receiver_phone="13900000000",
            username="Li Si",
            keywords=["Success!", "Sign URL: http"],
        ),
        Scenario(
            num=3,
            name="Unsupported extension rejected",
            file_path=f"{host}/samples/contract.pdf",
            file_name="contract.xyz",
            receiver_phone="13800000000",
            keywords=["Error:", "Unsupported file format"],
        ),
        Scenario(
            num=4,
            name="Unregistered signer without a name",
            file_path=f"{host}/samples/contract.pdf",
            file_name="contract.pdf",
            receiver_phone="19900000000",
            keywords=["Error:", "psnName is required"],
        ),
    ]


def run_scenario(scenario: Scenario, *, total: int, verbose: bool) -> bool:
    """Execute one scenario and return True on success."""
    from esign_agents.tools import call_tool

    label = f"[{scenario.num}/{total}] {scenario.name}"
    print(f"\n{BOLD}--- {label} ---{RESET}")

    result = call_tool(
        "create_sign_flow",
        {
            "filePath": scenario.file_path,
            "fileName": scenario.file_name,
            "receiverPhone": scenario.receiver_phone,
            "username": scenario.username,
        },
    )
    if verbose:
        print(_info(f"  Result: {result}"))

    missing = [kw for kw in scenario.keywords if kw not in result]
    if missing:
        print(_fail(f"{label}: missing {missing} in: {result}"))
        return False

    if scenario.query_after:
        flow_id = extract_flow_id(result)
        detail = call_tool("query_sign_flow", {"flowId": flow_id})
        if verbose:
            print(_info(f"  Detail: {detail}"))
        if "Status: in-progress" not in detail:
            print(_fail(f"{label}: unexpected flow detail: {detail}"))
            return False

    print(_pass(label))
    return True


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="E-sign tools sandbox smoke test",
    )
    parser.add_argument(
        "--host",
        default="http://localhost:8084",
        help="E-sign API host (default: http://localhost:8084, the mock)",
    )
    parser.add_argument(
        "--app-id",
        default="mock-app-id",
        help="Application id (default: mock-app-id)",
    )
    parser.add_argument(
        "--app-secret",
        default="mock-app-secret",
        help="Application secret (default: mock-app-secret)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Print full tool results",
    )
    args = parser.parse_args()

    # Settings are read once, on the first tool call.
    os.environ["HOST"] = args.host
    os.environ["APP_ID"] = args.app_id
    os.environ["APP_SECRET"] = args.app_secret
    os.environ.setdefault("ESIGN_POLL_INTERVAL_SECONDS", "0.2")

    scenarios = build_scenarios(args.host.rstrip("/"))
    print(f"{BOLD}E-sign tools: Sandbox Smoke Test{RESET}")
    print(f"  Host     : {args.host}")
    print(f"  Scenarios: {len(scenarios)}")

    try:
        httpx.get(f"{args.host}/health", timeout=5).raise_for_status()
    except (httpx.ConnectError, httpx.HTTPStatusError) as exc:
        print(f"\n{RED}Cannot reach e-sign host at {args.host}. Is it running?{RESET}")
        print(f"  Error: {exc}")
        sys.exit(1)

    results: list[bool] = []
    for scenario in scenarios:
        try:
            passed = run_scenario(scenario, total=len(scenarios), verbose=args.verbose)
        except Exception as exc:
            print(_fail(f"[{scenario.num}] {scenario.name}: unexpected error: {exc}"))
            passed = False
        results.append(passed)

    passed_count = sum(results)
    total = len(results)
    color = GREEN if passed_count == total else RED
    print(f"\n{BOLD}{'=' * 40}{RESET}")
    print(f"{color}{BOLD}{passed_count}/{total} scenarios passed{RESET}")
    print(f"{BOLD}{'=' * 40}{RESET}")

    sys.exit(0 if passed_count == total else 1)


if __name__ == "__main__":
    main()
