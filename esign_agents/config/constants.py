"""Shared constants for the e-sign tools and the vendor mock server."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

PRODUCTION_HOST: str = "https://openapi.esign.cn"

AUTH_MODE: str = "Signature"
ACCEPT: str = "*/*"
JSON_CONTENT_TYPE: str = "application/json; charset=UTF-8"
PDF_CONTENT_TYPE: str = "application/pdf"
OCTET_STREAM_CONTENT_TYPE: str = "application/octet-stream"

HEADER_APP_ID: str = "X-Tsign-Open-App-Id"
HEADER_AUTH_MODE: str = "X-Tsign-Open-Auth-Mode"
HEADER_TIMESTAMP: str = "X-Tsign-Open-Ca-Timestamp"
HEADER_SIGNATURE: str = "X-Tsign-Open-Ca-Signature"

FILE_UPLOAD_URL_PATH: str = "/v3/files/file-upload-url"
FILE_STATUS_PATH: str = "/v3/files/{file_id}"
CREATE_FLOW_PATH: str = "/v3/sign-flow/create-by-file"
SIGN_URL_PATH: str = "/v3/sign-flow/{flow_id}/sign-url"
FLOW_DETAIL_PATH: str = "/v3/sign-flow/{flow_id}/detail"

SUPPORTED_FILE_EXTENSIONS: tuple[str, ...] = (
  ".pdf",
  ".docx", ".doc", ".rtf",
  ".xlsx", ".xls",
  ".pptx", ".ppt",
  ".wps", ".et", ".dps",
  ".jpeg", ".jpg", ".png", ".bmp", ".tiff", ".tif", ".gif",
  ".html", ".htm",
)

HTML_EXTENSIONS: tuple[str, ...] = (".html", ".htm")

FLOW_EXPIRY_MS: int = 7 * 24 * 60 * 60 * 1000

# Fixed sign flow policy applied to every flow created by the tools.
FLOW_POLICY: Mapping[str, object] = MappingProxyType(
  {
    "title": "Document to sign",
    "description": "Please sign the document",
    "notify_type": "1",
    "forced_reading_time": "10",
    "position_page": "1",
    "position_x": 100,
    "position_y": 100,
    "sign_field_style": 1,
    "sign_field_size": "96",
    "date_format": "yyyy-MM-dd",
    "date_position_x": 100,
    "date_position_y": 150,
  }
)

ENTERPRISE_SIGNER_LABEL: str = "Enterprise signer"
NOT_COMPLETED_LABEL: str = "not completed"
INVALID_DATE_LABEL: str = "invalid date"
