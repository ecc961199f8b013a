"""Exceptions raised while talking to the e-sign open platform.

Every error carries a human readable ``message`` (what the tools show the
caller) and a ``details`` dict with the vendor code or HTTP status when known.
"""

from __future__ import annotations

from typing import Optional


class EsignError(Exception):
    """Base exception for all e-sign tool errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationMissing(EsignError):
    """Raised when HOST, APP_ID or APP_SECRET is not configured."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required settings: {', '.join(self.missing)}",
            {"missing": self.missing},
        )


class ConfigurationInvalid(EsignError):
    """Raised when a setting is present but cannot be parsed."""

    def __init__(self, problems: dict[str, str]):
        self.problems = dict(problems)
        super().__init__(
            "Invalid settings: "
            + "; ".join(f"{name} ({reason})" for name, reason in self.problems.items()),
            {"invalid": sorted(self.problems)},
        )


class UnsupportedFileFormat(EsignError):
    def __init__(self, file_name: str, supported: tuple[str, ...]):
        super().__init__(
            f"Unsupported file format for '{file_name}'. "
            f"Supported formats: {', '.join(supported)}",
            {"file_name": file_name},
        )


class LocalFileMissing(EsignError):
    def __init__(self, path: str):
        super().__init__(f"File not found: {path}", {"path": path})


class DownloadFailed(EsignError):
    """Raised when a remote file cannot be fetched into the scratch area."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        cause: Optional[str] = None,
    ):
        reason = f"HTTP {status_code}" if status_code is not None else cause
        super().__init__(
            f"Download failed for {url}: {reason}",
            {"url": url, "status_code": status_code, "cause": cause},
        )


class TransportError(EsignError):
    """Network failure or an undecodable reply from the vendor API."""

    def __init__(self, path: str, cause: str):
        super().__init__(
            f"Request to {path} failed: {cause}", {"path": path, "cause": cause}
        )


class VendorError(EsignError):
    """An application-level failure reported in the ``{code, message}`` envelope."""

    prefix = "Vendor request failed"

    def __init__(self, vendor_message: str, code: Optional[int] = None):
        self.code = code
        self.vendor_message = vendor_message
        super().__init__(
            f"{self.prefix}: {vendor_message}",
            {"code": code, "vendor_message": vendor_message},
        )


class UploadUrlRequestFailed(VendorError):
    prefix = "Failed to get upload URL"


class FileStatusQueryFailed(VendorError):
    prefix = "Failed to query file status"


class FlowCreationFailed(VendorError):
    prefix = "Sign flow creation failed"


class SignUrlFailed(VendorError):
    prefix = "Failed to get sign URL"


class FlowDetailFailed(VendorError):
    prefix = "Failed to get sign flow detail"


class FileUploadFailed(EsignError):
    """Raised when the PUT to the pre-signed upload URL is not 2xx."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        text = f"HTTP {status_code}" + (f" {reason}" if reason else "")
        super().__init__(
            f"Failed to upload file: {text}", {"status_code": status_code}
        )


class FileProcessingFailed(EsignError):
    def __init__(self, file_id: str, status: int):
        self.status = status
        super().__init__(
            f"File processing failed: status {status}",
            {"file_id": file_id, "status": status},
        )


class FileProcessingTimeout(EsignError):
    def __init__(self, file_id: str, attempts: int):
        super().__init__(
            "File processing timed out, please try again later",
            {"file_id": file_id, "attempts": attempts},
        )
