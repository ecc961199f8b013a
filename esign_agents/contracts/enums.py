"""Enumerations for vendor-side files, sign flows and signers."""

from __future__ import annotations

from enum import Enum, IntEnum


class FileStatus(IntEnum):
    """Processing status of an uploaded file."""

    NOT_UPLOADED = 0
    UPLOADING = 1
    UPLOAD_COMPLETE = 2  # also: converted to HTML
    UPLOAD_FAILED = 3
    WAITING_CONVERT = 4
    CONVERT_COMPLETE = 5
    WATERMARKING = 6
    WATERMARK_COMPLETE = 7
    CONVERTING = 8
    CONVERT_FAILED = 9
    WAITING_HTML = 10
    CONVERTING_HTML = 11
    CONVERT_HTML_FAILED = 12


class FileStatusClass(str, Enum):
    """What the polling loop should do with a file status."""

    TRANSIENT = "transient"
    SUCCESS = "success"
    FAILURE = "failure"


_FILE_STATUS_CLASSES: dict[FileStatus, FileStatusClass] = {
    FileStatus.UPLOAD_COMPLETE: FileStatusClass.SUCCESS,
    FileStatus.CONVERT_COMPLETE: FileStatusClass.SUCCESS,
    FileStatus.UPLOAD_FAILED: FileStatusClass.FAILURE,
    FileStatus.CONVERT_FAILED: FileStatusClass.FAILURE,
    FileStatus.CONVERT_HTML_FAILED: FileStatusClass.FAILURE,
}


def classify_file_status(status: int) -> FileStatusClass:
    """Classifies a raw status code; codes outside the enum are transient."""
    try:
        member = FileStatus(status)
    except ValueError:
        return FileStatusClass.TRANSIENT
    return _FILE_STATUS_CLASSES.get(member, FileStatusClass.TRANSIENT)


class SignFlowStatus(IntEnum):
    """Lifecycle status of a sign flow."""

    DRAFT = 0
    IN_PROGRESS = 1
    COMPLETED = 2
    REVOKED = 3
    EXPIRED = 5
    REJECTED = 7

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def label_for(cls, code: int) -> str:
        try:
            return cls(code).label
        except ValueError:
            return "unknown"


class SignerType(IntEnum):
    PERSONAL = 0
    ENTERPRISE = 1
