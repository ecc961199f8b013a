"""E-sign tools: create a sign flow for a document, query an existing flow.

Both tools return plain text. Errors anywhere in the chain come back as an
``Error: ...`` message instead of being raised to the tool host.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from esign_agents.config.settings import EsignSettings, configuration_guidance, get_settings
from esign_agents.contracts import QueryRequest, SignRequest
from esign_agents.errors import ConfigurationInvalid, ConfigurationMissing, EsignError
from esign_agents.esign_client import EsignClient
from esign_agents.flows import fetch_flow_detail, format_flow_detail, run_create_sign_flow
from esign_agents.signing import RequestSigner

logger = logging.getLogger(__name__)


def _get_client() -> EsignClient:
    settings = get_settings()
    return EsignClient(
        base_url=settings.host,
        signer=RequestSigner(
            app_id=settings.app_id,
            app_secret=settings.app_secret,
            user_agent=settings.esign_user_agent,
        ),
        timeout=settings.esign_http_timeout_seconds,
    )


def check_configuration() -> EsignSettings:
    """Loads settings, raising ConfigurationInvalid or ConfigurationMissing."""
    try:
        settings = get_settings()
    except ValidationError as error:
        raise ConfigurationInvalid(
            {str(e["loc"][0]).upper() if e["loc"] else "SETTINGS": e["msg"] for e in error.errors()}
        ) from error
    missing = settings.missing_settings()
    if missing:
        raise ConfigurationMissing(missing)
    return settings


def _configuration_error() -> Optional[str]:
    try:
        check_configuration()
    except ConfigurationMissing as error:
        logger.warning("Refusing tool call, missing settings: %s", ", ".join(error.missing))
        return configuration_guidance(error.missing)
    except ConfigurationInvalid as error:
        logger.warning("Refusing tool call: %s", error.message)
        return f"Configuration error: {error.message}"
    return None


def _error_text(tool_name: str, error: Exception) -> str:
    if isinstance(error, EsignError):
        logger.warning("%s failed: %s", tool_name, error.message)
        return f"Error: {error.message}"
    logger.exception("%s failed unexpectedly", tool_name)
    return f"Error: {error}"


def _validation_text(error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'arguments'}: {e['msg']}"
        for e in error.errors()
    )
    return f"Error: Invalid arguments: {problems}"


def _run_create_sign_flow(request: SignRequest) -> str:
    logger.info(
        "create_sign_flow filePath=%s fileName=%s", request.filePath, request.fileName
    )
    try:
        result = run_create_sign_flow(_get_client(), request, get_settings())
    except Exception as error:
        return _error_text("create_sign_flow", error)
    return f"Success!\nFlow ID: {result.flowId}\nSign URL: {result.signUrl}"


def _run_query_sign_flow(request: QueryRequest) -> str:
    logger.info("query_sign_flow flowId=%s", request.flowId)
    try:
        detail = fetch_flow_detail(_get_client(), request.flowId)
        return format_flow_detail(detail)
    except Exception as error:
        return _error_text("query_sign_flow", error)


def create_sign_flow(
    filePath: str, fileName: str, receiverPhone: str, username: str = ""
) -> str:
    """Create a sign flow for a document and return its signing URL.

    Supports PDF, Word, Excel, PowerPoint, WPS, image and HTML files. Non-PDF
    files are converted to PDF by the e-sign platform.

    Args:
        filePath: Local file path or http(s) URL of the document
        fileName: File name with an extension matching the real format (e.g. "contract.pdf")
        receiverPhone: Mobile number of the signer; receives the SMS notification
        username: Signer name; required only if the signer has no e-sign account yet

    Returns:
        Text with the flow id and signing URL, or an error message
    """
    config_error = _configuration_error()
    if config_error:
        return config_error
    try:
        request = SignRequest(
            filePath=filePath,
            fileName=fileName,
            receiverPhone=receiverPhone,
            username=username,
        )
    except ValidationError as error:
        return _validation_text(error)
    return _run_create_sign_flow(request)


def query_sign_flow(flowId: str) -> str:
    """Query the status, timestamps, documents and signers of a sign flow.

    Args:
        flowId: The sign flow ID returned by create_sign_flow

    Returns:
        Text summary of the sign flow, or an error message
    """
    config_error = _configuration_error()
    if config_error:
        return config_error
    try:
        request = QueryRequest(flowId=flowId)
    except ValidationError as error:
        return _validation_text(error)
    return _run_query_sign_flow(request)


# --- Tool registry ---


@dataclasses.dataclass(frozen=True)
class _Tool:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any], str]

    def spec(self) -> dict:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        return {"name": self.name, "description": self.description, "inputSchema": schema}


TOOLS: dict[str, _Tool] = {
    tool.name: tool
    for tool in (
        _Tool(
            name="create_sign_flow",
            description=(
                "Create a sign flow. Supports PDF, Word, Excel, PPT, WPS, image "
                "and HTML files; non-PDF files are converted to PDF automatically."
            ),
            input_model=SignRequest,
            handler=_run_create_sign_flow,
        ),
        _Tool(
            name="query_sign_flow",
            description="Query sign flow details",
            input_model=QueryRequest,
            handler=_run_query_sign_flow,
        ),
    )
}


def list_tools() -> list[dict]:
    """Returns name, description and JSON input schema for every tool."""
    return [tool.spec() for tool in TOOLS.values()]


def call_tool(name: str, arguments: Optional[dict] = None) -> str:
    """Invokes a tool by name and returns its text result. Never raises."""
    config_error = _configuration_error()
    if config_error:
        return config_error

    tool = TOOLS.get(name)
    if tool is None:
        return "Error: Unknown tool"

    try:
        request = tool.input_model.model_validate(arguments or {})
    except ValidationError as error:
        return _validation_text(error)
    return tool.handler(request)
