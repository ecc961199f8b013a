"""Sign flow endpoints.

Implements:
    POST   /v3/sign-flow/create-by-file
    POST   /v3/sign-flow/{signFlowId}/sign-url
    GET    /v3/sign-flow/{signFlowId}/detail
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from mock_servers.esign_mock import db
from mock_servers.esign_mock.auth import verify_signature
from mock_servers.esign_mock.envelope import CODE_BAD_REQUEST, CODE_NOT_FOUND, EnvelopeError, ok
from mock_servers.esign_mock.models import SignFlowCreate, SignUrlCreate

router = APIRouter(
    prefix="/v3/sign-flow", tags=["sign-flow"], dependencies=[Depends(verify_signature)]
)

# Accounts with a name on file; others must be created with psnInfo.psnName.
REGISTERED_ACCOUNTS: dict[str, str] = {
    "13800000000": "Zhang San",
}


def _require_flow(flow_id: str) -> dict[str, Any]:
    record = db.get_flow(flow_id)
    if record is None:
        raise EnvelopeError(CODE_NOT_FOUND, f"Sign flow {flow_id} not found")
    return record


@router.post("/create-by-file")
async def create_by_file(body: SignFlowCreate) -> dict:
    for doc in body.docs:
        file_record = db.get_file(str(doc.get("fileId", "")))
        if file_record is None:
            raise EnvelopeError(CODE_BAD_REQUEST, f"File {doc.get('fileId')} not found")
        if file_record["fileStatus"] not in (db.UPLOAD_COMPLETE, db.CONVERT_COMPLETE):
            raise EnvelopeError(CODE_BAD_REQUEST, "File is not ready for signing")

    for signer in body.signers:
        info = signer.get("psnSignerInfo") or {}
        account = str(info.get("psnAccount", ""))
        name = (info.get("psnInfo") or {}).get("psnName")
        if not name and account not in REGISTERED_ACCOUNTS:
            raise EnvelopeError(
                CODE_BAD_REQUEST,
                f"Signer {account} is not registered, psnName is required",
            )

    record = db.create_flow(body.model_dump())
    return ok({"signFlowId": record["signFlowId"]})


@router.post("/{flow_id}/sign-url")
async def create_sign_url(flow_id: str, body: SignUrlCreate, request: Request) -> dict:
    _require_flow(flow_id)
    base = str(request.base_url).rstrip("/")
    return ok(
        {
            "url": f"{base}/sign/{flow_id}?account={body.operator.psnAccount}",
            "shortUrl": f"{base}/s/{flow_id[:8]}",
        }
    )


@router.get("/{flow_id}/detail")
async def get_detail(flow_id: str) -> dict:
    record = _require_flow(flow_id)
    signers = []
    for signer in record["signers"]:
        info = signer.get("psnSignerInfo") or {}
        account = str(info.get("psnAccount", ""))
        name = (info.get("psnInfo") or {}).get("psnName") or REGISTERED_ACCOUNTS.get(account, "")
        signers.append(
            {
                "signerType": signer.get("signerType", 0),
                "signOrder": (signer.get("signConfig") or {}).get("signOrder", 1),
                "signStatus": 1,
                "psnSigner": {
                    "psnName": name,
                    "psnAccount": {"accountMobile": account, "accountEmail": None},
                },
            }
        )
    return ok(
        {
            "signFlowStatus": record["signFlowStatus"],
            "signFlowDescription": record["signFlowDescription"],
            "signFlowCreateTime": record["signFlowCreateTime"],
            "signFlowStartTime": record["signFlowStartTime"],
            "signFlowFinishTime": record["signFlowFinishTime"],
            "docs": [
                {"fileId": d.get("fileId", ""), "fileName": d.get("fileName", "")}
                for d in record["docs"]
            ],
            "signers": signers,
        }
    )
