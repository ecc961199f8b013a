"""Wire and tool models for the e-sign open platform.

Vendor payload fields keep the camelCase names used on the wire.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

_T = TypeVar("_T")


# --- Response envelope ---


class Success(BaseModel, Generic[_T]):
    """``{code: 0, data}`` envelope."""

    data: _T
    message: str = ""


class Failure(BaseModel):
    """``{code != 0, message}`` envelope."""

    code: int
    message: str = ""


Envelope = Union[Success[Any], Failure]


def parse_envelope(payload: Any, model: type[_T]) -> Union[Success[_T], Failure]:
    """Splits a ``{code, message, data}`` reply into Success or Failure.

    Raises ValueError when the payload is not an envelope at all.
    """
    if not isinstance(payload, dict) or "code" not in payload:
        raise ValueError(f"Unexpected response payload: {payload!r}")

    try:
        code = int(payload["code"])
    except (TypeError, ValueError) as error:
        raise ValueError(f"Invalid envelope code: {payload['code']!r}") from error

    message = str(payload.get("message") or "")
    if code != 0:
        return Failure(code=code, message=message)
    return Success[model].model_validate(  # type: ignore[valid-type]
        {"data": payload.get("data"), "message": message}
    )


# --- Vendor payloads ---


class UploadSlot(BaseModel):
    """Reply of the upload-URL negotiation."""

    fileId: str
    fileUploadUrl: str


class FileStatusInfo(BaseModel):
    fileId: str = ""
    fileName: str = ""
    fileStatus: int
    fileDownloadUrl: Optional[str] = None
    fileTotalPageCount: Optional[int] = None


class SignFlowCreated(BaseModel):
    signFlowId: str


class SignUrl(BaseModel):
    url: str = ""
    shortUrl: Optional[str] = None

    @property
    def preferred(self) -> str:
        return self.shortUrl or self.url


class FlowDoc(BaseModel):
    fileId: Optional[str] = None
    fileName: Optional[str] = None


class PsnAccount(BaseModel):
    accountMobile: Optional[str] = None
    accountEmail: Optional[str] = None


class PsnSigner(BaseModel):
    """Personal signer identified by a mobile or email account."""

    psnName: Optional[str] = None
    psnAccount: Optional[PsnAccount] = None


class OrgSigner(BaseModel):
    orgName: Optional[str] = None


class FlowSigner(BaseModel):
    signerType: int = 0
    signOrder: int = 1
    signStatus: int = 0
    psnSigner: Optional[PsnSigner] = None
    orgSigner: Optional[OrgSigner] = None


class SignFlowDetail(BaseModel):
    signFlowStatus: int
    signFlowDescription: Optional[str] = None
    signFlowCreateTime: Optional[int] = None
    signFlowStartTime: Optional[int] = None
    signFlowFinishTime: Optional[int] = None
    docs: list[FlowDoc] = Field(default_factory=list)
    signers: list[FlowSigner] = Field(default_factory=list)

    @field_validator("docs", "signers", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value


# --- Tool inputs / outputs ---


class SignRequest(BaseModel):
    """Arguments of the create_sign_flow tool."""

    filePath: str = Field(
        min_length=1,
        description=(
            "Local file path or http(s) download URL. Supported formats: "
            "PDF (.pdf), Word (.docx/.doc/.rtf), Excel (.xlsx/.xls), "
            "PowerPoint (.pptx/.ppt), WPS (.wps/.et/.dps), images "
            "(.jpeg/.jpg/.png/.bmp/.tiff/.tif/.gif) and HTML (.html/.htm)."
        ),
    )
    fileName: str = Field(
        min_length=1,
        description=(
            "File name including an extension that matches the real format, "
            "e.g. contract.pdf or agreement.docx."
        ),
    )
    receiverPhone: str = Field(
        min_length=1,
        description="Mobile number of the signer; receives the SMS notification.",
    )
    username: Optional[str] = Field(
        default=None,
        description=(
            "Signer name. Required when the signer has no account with the "
            "e-sign platform yet; leave empty to use the registered name."
        ),
    )

    @field_validator("username", mode="before")
    @classmethod
    def _blank_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class QueryRequest(BaseModel):
    """Arguments of the query_sign_flow tool."""

    flowId: str = Field(min_length=1, description="Sign flow ID.")


class SignFlowResult(BaseModel):
    flowId: str
    signUrl: str
