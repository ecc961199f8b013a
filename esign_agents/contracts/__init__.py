"""Shared contracts for the e-sign tools: models, enums and envelopes."""

from .enums import (
    FileStatus,
    FileStatusClass,
    SignerType,
    SignFlowStatus,
    classify_file_status,
)
from .models import (
    Envelope,
    Failure,
    FileStatusInfo,
    FlowDoc,
    FlowSigner,
    OrgSigner,
    PsnAccount,
    PsnSigner,
    QueryRequest,
    SignFlowCreated,
    SignFlowDetail,
    SignFlowResult,
    SignRequest,
    SignUrl,
    Success,
    UploadSlot,
    parse_envelope,
)

__all__ = [
    "Envelope",
    "Failure",
    "FileStatus",
    "FileStatusClass",
    "FileStatusInfo",
    "FlowDoc",
    "FlowSigner",
    "OrgSigner",
    "PsnAccount",
    "PsnSigner",
    "QueryRequest",
    "SignFlowCreated",
    "SignFlowDetail",
    "SignFlowResult",
    "SignFlowStatus",
    "SignRequest",
    "SignUrl",
    "SignerType",
    "Success",
    "UploadSlot",
    "classify_file_status",
    "parse_envelope",
]
