"""In-memory store for the e-sign mock server."""

from __future__ import annotations

import time
import uuid
from typing import Any

# File status codes, as reported by the platform.
NOT_UPLOADED = 0
UPLOAD_COMPLETE = 2
WAITING_CONVERT = 4
CONVERT_COMPLETE = 5
CONVERTING = 8
CONVERT_FAILED = 9

_store: dict[str, dict[str, dict[str, Any]]] = {
    "files": {},
    "flows": {},
}

SAMPLE_FILES: dict[str, bytes] = {
    "contract.pdf": b"%PDF-1.4\n1 0 obj <<>> endobj\ntrailer <<>>\n%%EOF\n",
    "agreement.docx": b"PK\x03\x04mock-docx-content",
}


def reset() -> None:
    for collection in _store.values():
        collection.clear()


def now_ms() -> int:
    return int(time.time() * 1000)


def create_file(
    file_name: str,
    file_size: int,
    content_md5: str,
    content_type: str,
    convert_to_pdf: bool,
) -> dict[str, Any]:
    record = {
        "fileId": uuid.uuid4().hex,
        "fileName": file_name,
        "fileSize": file_size,
        "contentMd5": content_md5,
        "contentType": content_type,
        "convertToPDF": convert_to_pdf,
        "fileStatus": NOT_UPLOADED,
    }
    _store["files"][record["fileId"]] = record
    return record


def get_file(file_id: str) -> dict[str, Any] | None:
    return _store["files"].get(file_id)


def mark_uploaded(file_id: str) -> None:
    record = _store["files"][file_id]
    record["fileStatus"] = WAITING_CONVERT if record["convertToPDF"] else UPLOAD_COMPLETE


def poll_file(file_id: str) -> dict[str, Any] | None:
    """Returns the file and advances conversion one step per poll."""
    record = get_file(file_id)
    if record is None:
        return None
    status = record["fileStatus"]
    if status == WAITING_CONVERT:
        record["fileStatus"] = CONVERTING
    elif status == CONVERTING:
        # File names containing "corrupt" never convert.
        failed = "corrupt" in record["fileName"].lower()
        record["fileStatus"] = CONVERT_FAILED if failed else CONVERT_COMPLETE
    return dict(record, fileStatus=status)


def create_flow(body: dict[str, Any]) -> dict[str, Any]:
    created = now_ms()
    started = created if body.get("autoStart") else None
    record = {
        "signFlowId": uuid.uuid4().hex,
        "signFlowStatus": 1 if started else 0,
        "signFlowDescription": "signing" if started else "draft",
        "signFlowCreateTime": created,
        "signFlowStartTime": started,
        "signFlowFinishTime": None,
        "docs": body.get("docs", []),
        "signers": body.get("signers", []),
    }
    _store["flows"][record["signFlowId"]] = record
    return record


def get_flow(flow_id: str) -> dict[str, Any] | None:
    return _store["flows"].get(flow_id)
