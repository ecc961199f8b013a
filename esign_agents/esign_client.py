"""Connector for the e-sign open platform ``/v3`` REST API."""
from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Union

import httpx

from esign_agents.config.constants import (
    CREATE_FLOW_PATH,
    FILE_STATUS_PATH,
    FILE_UPLOAD_URL_PATH,
    FLOW_DETAIL_PATH,
    JSON_CONTENT_TYPE,
    SIGN_URL_PATH,
)
from esign_agents.contracts import (
    Failure,
    FileStatusInfo,
    SignFlowCreated,
    SignFlowDetail,
    SignUrl,
    Success,
    UploadSlot,
    parse_envelope,
)
from esign_agents.errors import (
    DownloadFailed,
    FileStatusQueryFailed,
    FileUploadFailed,
    FlowCreationFailed,
    FlowDetailFailed,
    SignUrlFailed,
    TransportError,
    UploadUrlRequestFailed,
    VendorError,
)
from esign_agents.signing import RequestSigner

logger = logging.getLogger(__name__)

_DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _drop_none(value: Any) -> Any:
    """Removes ``None`` members so optional fields are omitted, not sent as null."""
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


def encode_body(payload: dict) -> bytes:
    """Serializes a JSON body once; these exact bytes are hashed, signed and sent."""
    return json.dumps(
        _drop_none(payload), ensure_ascii=False, separators=(",", ":")
    ).encode("utf-8")


class EsignClient:
    def __init__(
        self,
        base_url: str,
        signer: RequestSigner,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._signer = signer
        self._timeout = timeout
        self._http_client = http_client

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        if self._http_client is not None:
            yield self._http_client
            return
        with httpx.Client(timeout=self._timeout) as c:
            yield c

    def _call(
        self,
        method: str,
        path: str,
        model: type,
        payload: Optional[dict] = None,
    ) -> Union[Success, Failure]:
        """Issues one signed request and parses the ``{code, message, data}`` envelope."""
        body = encode_body(payload) if payload is not None else None
        headers = self._signer.get_headers(method, path, body, JSON_CONTENT_TYPE)
        try:
            with self._session() as c:
                r = c.request(
                    method, f"{self._base_url}{path}", headers=headers, content=body
                )
        except httpx.HTTPError as error:
            raise TransportError(path, repr(error)) from error

        logger.debug("%s %s -> HTTP %d %s", method, path, r.status_code, r.text)
        try:
            return parse_envelope(r.json(), model)
        except ValueError as error:
            raise TransportError(
                path, f"HTTP {r.status_code}, unexpected reply: {error}"
            ) from error

    @staticmethod
    def _unwrap(envelope: Union[Success, Failure], error_cls: type[VendorError]) -> Any:
        if isinstance(envelope, Failure):
            raise error_cls(envelope.message, code=envelope.code)
        return envelope.data

    def request_upload_slot(
        self,
        content_md5: str,
        content_type: str,
        file_name: str,
        file_size: int,
        convert_to_pdf: bool,
        convert_to_html: Optional[bool] = None,
    ) -> UploadSlot:
        """Asks for a pre-signed upload URL and the id the file will have."""
        envelope = self._call(
            "POST",
            FILE_UPLOAD_URL_PATH,
            UploadSlot,
            {
                "contentMd5": content_md5,
                "contentType": content_type,
                "fileName": file_name,
                "fileSize": file_size,
                "convertToPDF": convert_to_pdf,
                "convertToHTML": convert_to_html,
            },
        )
        return self._unwrap(envelope, UploadUrlRequestFailed)

    def put_file(
        self, upload_url: str, data: bytes, content_type: str, content_md5: str
    ) -> None:
        """PUTs the raw bytes to the pre-signed URL. The URL carries its own auth."""
        headers = {"Content-Type": content_type, "Content-MD5": content_md5}
        try:
            with self._session() as c:
                r = c.put(upload_url, headers=headers, content=data)
        except httpx.HTTPError as error:
            raise TransportError(upload_url, repr(error)) from error
        if not r.is_success:
            raise FileUploadFailed(r.status_code, r.reason_phrase)

    def create_flow(
        self,
        docs: list[dict],
        sign_flow_config: dict,
        signers: list[dict],
        auto_start: bool = True,
    ) -> str:
        envelope = self._call(
            "POST",
            CREATE_FLOW_PATH,
            SignFlowCreated,
            {
                "docs": docs,
                "signFlowConfig": sign_flow_config,
                "signers": signers,
                "autoStart": auto_start,
            },
        )
        return self._unwrap(envelope, FlowCreationFailed).signFlowId

    def get_sign_url(self, flow_id: str, operator_account: str) -> SignUrl:
        """Requests a no-login signing link that adapts to mobile or desktop."""
        envelope = self._call(
            "POST",
            SIGN_URL_PATH.format(flow_id=flow_id),
            SignUrl,
            {
                "needLogin": False,
                "urlType": 2,
                "operator": {"psnAccount": operator_account},
                "clientType": "ALL",
            },
        )
        return self._unwrap(envelope, SignUrlFailed)

    def get_flow_detail(self, flow_id: str) -> SignFlowDetail:
        envelope = self._call(
            "GET", FLOW_DETAIL_PATH.format(flow_id=flow_id), SignFlowDetail
        )
        return self._unwrap(envelope, FlowDetailFailed)

    def get_file_status(self, file_id: str) -> FileStatusInfo:
        envelope = self._call(
            "GET", FILE_STATUS_PATH.format(file_id=file_id), FileStatusInfo
        )
        return self._unwrap(envelope, FileStatusQueryFailed)

    def download(self, url: str, destination: Path) -> int:
        """Streams ``url`` into ``destination`` and returns the byte count."""
        size = 0
        try:
            with self._session() as c:
                with c.stream("GET", url, follow_redirects=True) as r:
                    if not r.is_success:
                        raise DownloadFailed(url, status_code=r.status_code)
                    with open(destination, "wb") as f:
                        for chunk in r.iter_bytes(_DOWNLOAD_CHUNK_SIZE):
                            f.write(chunk)
                            size += len(chunk)
        except httpx.HTTPError as error:
            raise DownloadFailed(url, cause=repr(error)) from error
        return size
