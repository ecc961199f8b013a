"""Sign flow orchestration: upload, wait, create the flow, fetch the signing URL."""
from __future__ import annotations

import logging
import time
from datetime import datetime, tzinfo
from typing import Callable, Optional

from esign_agents.config.constants import (
    ENTERPRISE_SIGNER_LABEL,
    FLOW_EXPIRY_MS,
    FLOW_POLICY,
    INVALID_DATE_LABEL,
    NOT_COMPLETED_LABEL,
)
from esign_agents.config.settings import EsignSettings
from esign_agents.contracts import (
    FlowSigner,
    SignerType,
    SignFlowDetail,
    SignFlowResult,
    SignFlowStatus,
    SignRequest,
)
from esign_agents.esign_client import EsignClient
from esign_agents.files import upload_file
from esign_agents.watcher import wait_until_ready

logger = logging.getLogger(__name__)


def build_sign_flow_request(
    file_id: str,
    receiver_phone: str,
    file_name: str,
    username: Optional[str] = None,
    now_ms: Optional[int] = None,
) -> dict:
    """Builds the single-document, single-signer create-by-file payload.

    Without a username the vendor uses the name already registered for the
    signer's account, so ``psnInfo`` is left out entirely.
    """
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    psn_name = (username or "").strip() or None
    psn_signer_info: dict = {"psnAccount": receiver_phone}
    if psn_name:
        psn_signer_info["psnInfo"] = {"psnName": psn_name}

    sign_flow_config = {
        "signFlowTitle": FLOW_POLICY["title"],
        "signFlowDesc": FLOW_POLICY["description"],
        "signFlowEffectiveTime": now_ms,
        "signFlowExpireTime": now_ms + FLOW_EXPIRY_MS,
        "signOrder": False,
        "notifyType": FLOW_POLICY["notify_type"],
        "redirectUrl": "",
        "autoFinish": True,
    }
    signer = {
        "signConfig": {
            "signOrder": 1,
            "forcedReadingTime": FLOW_POLICY["forced_reading_time"],
        },
        "noticeConfig": {"noticeTypes": FLOW_POLICY["notify_type"]},
        "signerType": int(SignerType.PERSONAL),
        "psnSignerInfo": psn_signer_info,
        "signFields": [
            {
                "fileId": file_id,
                "signFieldType": 0,
                "normalSignFieldConfig": {
                    "autoSign": False,
                    "freeMode": False,
                    "movableSignField": False,
                    "signFieldStyle": FLOW_POLICY["sign_field_style"],
                    "signFieldSize": FLOW_POLICY["sign_field_size"],
                    "signFieldPosition": {
                        "positionPage": FLOW_POLICY["position_page"],
                        "positionX": FLOW_POLICY["position_x"],
                        "positionY": FLOW_POLICY["position_y"],
                    },
                },
                "signDateConfig": {
                    "dateFormat": FLOW_POLICY["date_format"],
                    "showSignDate": 1,
                    "signDatePositionX": FLOW_POLICY["date_position_x"],
                    "signDatePositionY": FLOW_POLICY["date_position_y"],
                },
            }
        ],
    }
    return {
        "docs": [{"fileId": file_id, "fileName": file_name}],
        "signFlowConfig": sign_flow_config,
        "signers": [signer],
        "autoStart": True,
    }


def create_sign_flow_for(
    client: EsignClient,
    file_id: str,
    receiver_phone: str,
    file_name: str,
    username: Optional[str] = None,
) -> str:
    request = build_sign_flow_request(file_id, receiver_phone, file_name, username)
    flow_id = client.create_flow(
        docs=request["docs"],
        sign_flow_config=request["signFlowConfig"],
        signers=request["signers"],
        auto_start=request["autoStart"],
    )
    logger.info("Created sign flow %s for file %s", flow_id, file_id)
    return flow_id


def fetch_sign_url(client: EsignClient, flow_id: str, receiver_phone: str) -> str:
    """Returns the short signing URL when the vendor provides one."""
    return client.get_sign_url(flow_id, receiver_phone).preferred


def fetch_flow_detail(client: EsignClient, flow_id: str) -> SignFlowDetail:
    return client.get_flow_detail(flow_id)


def run_create_sign_flow(
    client: EsignClient,
    request: SignRequest,
    settings: EsignSettings,
    sleep: Callable[[float], None] = time.sleep,
) -> SignFlowResult:
    """Upload -> wait for processing -> create flow -> signing URL."""
    file_id = upload_file(
        client, request.filePath, request.fileName, settings.esign_scratch_dir
    )
    wait_until_ready(
        client,
        file_id,
        max_attempts=settings.esign_poll_max_attempts,
        interval=settings.esign_poll_interval_seconds,
        sleep=sleep,
    )
    flow_id = create_sign_flow_for(
        client, file_id, request.receiverPhone, request.fileName, request.username
    )
    sign_url = fetch_sign_url(client, flow_id, request.receiverPhone)
    return SignFlowResult(flowId=flow_id, signUrl=sign_url)


# --- Detail formatting ---


def format_timestamp(timestamp_ms: Optional[int], tz: Optional[tzinfo] = None) -> str:
    if not timestamp_ms:
        return NOT_COMPLETED_LABEL
    try:
        moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)
    except (ValueError, OverflowError, OSError):
        logger.warning("Timestamp out of range: %r", timestamp_ms)
        return INVALID_DATE_LABEL
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def format_signer(signer: FlowSigner) -> str:
    if signer.psnSigner is not None:
        account = signer.psnSigner.psnAccount
        mobile = (account.accountMobile if account else None) or ""
        return f"{signer.psnSigner.psnName or ''} ({mobile})"
    return ENTERPRISE_SIGNER_LABEL


def format_flow_detail(detail: SignFlowDetail, tz: Optional[tzinfo] = None) -> str:
    """Renders a flow detail as the text shown by query_sign_flow."""
    status = SignFlowStatus.label_for(detail.signFlowStatus)
    return "\n".join(
        [
            "Sign flow details:",
            f"Status: {status} ({detail.signFlowDescription or ''})",
            f"Created: {format_timestamp(detail.signFlowCreateTime, tz)}",
            f"Started: {format_timestamp(detail.signFlowStartTime, tz)}",
            f"Finished: {format_timestamp(detail.signFlowFinishTime, tz)}",
            f"Documents: {', '.join(doc.fileName or '' for doc in detail.docs)}",
            f"Signers: {', '.join(format_signer(s) for s in detail.signers)}",
        ]
    )
