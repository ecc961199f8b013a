"""File acquisition and upload: a local path or remote URL becomes a vendor file id."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from esign_agents.config.constants import (
    HTML_EXTENSIONS,
    OCTET_STREAM_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    SUPPORTED_FILE_EXTENSIONS,
)
from esign_agents.errors import LocalFileMissing, UnsupportedFileFormat
from esign_agents.esign_client import EsignClient
from esign_agents.signing import content_md5

logger = logging.getLogger(__name__)

Release = Callable[[], None]


def file_extension(file_name: str) -> str:
    """Lower-cased extension including the dot, or '' when there is none."""
    name = file_name.lower()
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def is_file_supported(file_name: str) -> bool:
    return file_extension(file_name) in SUPPORTED_FILE_EXTENSIONS


def is_remote(path_or_url: str) -> bool:
    return path_or_url.startswith(("http://", "https://"))


def _create_scratch(scratch_dir: str) -> Path:
    """Atomically creates an empty file named like 'download-1718000000000-k3j9x_2a'."""
    fd, path = tempfile.mkstemp(prefix=f"download-{int(time.time() * 1000)}-", dir=scratch_dir)
    os.close(fd)
    return Path(path)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        logger.info("Removed scratch file %s", path)
    except OSError as error:
        logger.warning("Failed to remove scratch file %s: %s", path, error)


def _releaser(path: Path) -> Release:
    released = False

    def release() -> None:
        nonlocal released
        if released:
            return
        released = True
        _remove(path)

    return release


def _noop() -> None:
    return None


def resolve_file(
    path_or_url: str, client: EsignClient, scratch_dir: str
) -> tuple[Path, Release]:
    """Resolves a local path or http(s) URL to a local file.

    Remote files are downloaded into ``scratch_dir``; the returned release
    callback deletes the download and is safe to call more than once. Local
    paths come back unchanged with a no-op release.
    """
    if not is_remote(path_or_url):
        return Path(path_or_url), _noop

    scratch = _create_scratch(scratch_dir)
    logger.info("Downloading remote file %s -> %s", path_or_url, scratch)
    try:
        size = client.download(path_or_url, scratch)
    except Exception:
        _remove(scratch)
        raise
    logger.info("Downloaded %d bytes to %s", size, scratch)
    return scratch, _releaser(scratch)


@contextmanager
def acquire_file(
    path_or_url: str, client: EsignClient, scratch_dir: str
) -> Iterator[Path]:
    """Context manager around resolve_file that always releases on exit."""
    local_path, release = resolve_file(path_or_url, client, scratch_dir)
    try:
        yield local_path
    finally:
        release()


def upload_file(
    client: EsignClient,
    path_or_url: str,
    file_name: str,
    scratch_dir: str,
    convert_to_html: bool = False,
) -> str:
    """Uploads a document and returns the vendor file id.

    Non-PDF files are converted to PDF by the vendor. The extension check
    happens before any I/O.
    """
    if not is_file_supported(file_name):
        raise UnsupportedFileFormat(file_name, SUPPORTED_FILE_EXTENSIONS)

    extension = file_extension(file_name)
    is_pdf = extension == ".pdf"
    is_html = extension in HTML_EXTENSIONS
    content_type = PDF_CONTENT_TYPE if is_pdf else OCTET_STREAM_CONTENT_TYPE
    html_flag: Optional[bool] = False if is_html else (True if convert_to_html else None)

    with acquire_file(path_or_url, client, scratch_dir) as local_path:
        if not local_path.is_file():
            raise LocalFileMissing(str(local_path))

        data = local_path.read_bytes()
        md5 = content_md5(data)
        logger.info(
            "Requesting upload slot for %s (size=%d, md5=%s)", file_name, len(data), md5
        )
        slot = client.request_upload_slot(
            content_md5=md5,
            content_type=content_type,
            file_name=file_name,
            file_size=len(data),
            convert_to_pdf=not is_pdf,
            convert_to_html=html_flag,
        )
        client.put_file(slot.fileUploadUrl, data, content_type, md5)
        logger.info("Uploaded %s as file %s", file_name, slot.fileId)
        return slot.fileId
