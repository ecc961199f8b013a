"""E-sign assistant agent.

Standalone ADK agent that sends documents for e-signature and reports on
sign flows. Start with: adk web esign_agents
"""
from __future__ import annotations

from google.adk.agents import LlmAgent

from esign_agents.config.log import configure_default_logging
from esign_agents.tools import create_sign_flow, query_sign_flow

configure_default_logging()

root_agent = LlmAgent(
    name="esign_assistant",
    model="gemini-2.0-flash",
    description="Sends documents out for e-signature and tracks their sign flows.",
    instruction="""\
You are an e-signature assistant. You send documents to a signer and report
on the progress of existing sign flows.

## Your Scope
You ONLY handle:
1. Creating a sign flow for one document and one personal signer
   (call create_sign_flow)
2. Looking up an existing sign flow by its ID (call query_sign_flow)

## Creating a sign flow
- You need the file path or URL, the file name WITH its extension, and the
  signer's mobile number.
- The signer's name is optional. Only ask for it if the tool reports that the
  signer is not registered.
- Supported formats: PDF, Word, Excel, PowerPoint, WPS, images and HTML.
- On success, return the Flow ID and the Sign URL exactly as the tool gives
  them. Never invent a URL.

## Querying a sign flow
- Call query_sign_flow with the Flow ID and present the summary as-is.

## Errors
If a tool returns a message starting with "Error:" or "Configuration error:",
relay it to the user and suggest the next step. Do not retry on your own.
""",
    tools=[
        create_sign_flow,
        query_sign_flow,
    ],
)
