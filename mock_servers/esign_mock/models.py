"""Request models for the e-sign mock server."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class FileUploadUrlCreate(BaseModel):
    contentMd5: str = Field(min_length=1)
    contentType: str = Field(min_length=1)
    fileName: str = Field(min_length=1)
    fileSize: int = Field(ge=0)
    convertToPDF: bool = False
    convertToHTML: Optional[bool] = None


class SignFlowCreate(BaseModel):
    docs: list[dict[str, Any]] = Field(min_length=1)
    signFlowConfig: dict[str, Any]
    signers: list[dict[str, Any]] = Field(min_length=1)
    autoStart: bool = False


class SignUrlOperator(BaseModel):
    psnAccount: str = Field(min_length=1)


class SignUrlCreate(BaseModel):
    needLogin: bool = True
    urlType: int = 2
    operator: SignUrlOperator
    clientType: str = "ALL"
