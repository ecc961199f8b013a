"""Tests for file acquisition and the upload pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from esign_agents.contracts import UploadSlot
from esign_agents.errors import DownloadFailed, LocalFileMissing, UnsupportedFileFormat
from esign_agents.esign_client import EsignClient
from esign_agents.files import (
    acquire_file,
    file_extension,
    is_file_supported,
    resolve_file,
    upload_file,
)
from esign_agents.signing import content_md5


@pytest.fixture
def client():
    mock = MagicMock(spec=EsignClient)
    mock.request_upload_slot.return_value = UploadSlot(
        fileId="file-1", fileUploadUrl="https://upload.test/file-1"
    )
    return mock


def _download_writes(content: bytes):
    def download(url: str, destination: Path) -> int:
        Path(destination).write_bytes(content)
        return len(content)

    return download


# --- Extension checks ---


class TestSupportedFormats:
    @pytest.mark.parametrize(
        "name", ["a.pdf", "A.PDF", "b.docx", "c.Xlsx", "d.pptx", "e.wps", "f.jpg", "g.htm"]
    )
    def test_supported(self, name):
        assert is_file_supported(name)

    @pytest.mark.parametrize("name", ["contract.xyz", "noextension", "archive.zip", ""])
    def test_unsupported(self, name):
        assert not is_file_supported(name)

    def test_extension_uses_last_dot(self):
        assert file_extension("report.final.DOCX") == ".docx"
        assert file_extension("README") == ""


# --- Acquisition ---


class TestResolveFile:
    def test_local_path_is_returned_unchanged(self, client, tmp_path):
        local = tmp_path / "contract.pdf"
        local.write_bytes(b"%PDF")
        path, release = resolve_file(str(local), client, str(tmp_path))
        assert path == local
        release()
        assert local.exists()
        client.download.assert_not_called()

    def test_remote_file_removed_on_release(self, client, tmp_path):
        client.download.side_effect = _download_writes(b"remote")
        path, release = resolve_file("https://files.test/a.pdf", client, str(tmp_path))
        assert path.parent == tmp_path
        assert path.name.startswith("download-")
        assert path.read_bytes() == b"remote"
        release()
        assert not path.exists()
        release()  # second call is a no-op

    def test_scratch_file_exists_before_download(self, client, tmp_path):
        seen = {}

        def download(url, destination):
            seen["exists"] = Path(destination).exists()
            Path(destination).write_bytes(b"remote")
            return 6

        client.download.side_effect = download
        path, release = resolve_file("https://files.test/a.pdf", client, str(tmp_path))
        assert seen["exists"] is True
        assert path.name.startswith("download-")
        assert path.name.split("-")[1].isdigit()
        release()

    def test_partial_download_removed_on_failure(self, client, tmp_path):
        def failing_download(url, destination):
            Path(destination).write_bytes(b"partial")
            raise DownloadFailed(url, status_code=500)

        client.download.side_effect = failing_download
        with pytest.raises(DownloadFailed):
            resolve_file("http://files.test/a.pdf", client, str(tmp_path))
        assert list(tmp_path.iterdir()) == []

    def test_acquire_releases_when_body_raises(self, client, tmp_path):
        client.download.side_effect = _download_writes(b"remote")
        with pytest.raises(RuntimeError):
            with acquire_file("https://files.test/a.pdf", client, str(tmp_path)) as path:
                assert path.exists()
                raise RuntimeError("boom")
        assert list(tmp_path.iterdir()) == []


# --- Upload pipeline ---


class TestUploadFile:
    def test_unsupported_format_rejected_before_io(self, client, tmp_path):
        with pytest.raises(UnsupportedFileFormat) as exc_info:
            upload_file(client, "https://files.test/a.xyz", "a.xyz", str(tmp_path))
        assert "Supported formats" in exc_info.value.message
        assert client.method_calls == []

    def test_local_pdf(self, client, tmp_path):
        local = tmp_path / "contract.pdf"
        local.write_bytes(b"%PDF-1.4 data")

        file_id = upload_file(client, str(local), "contract.pdf", str(tmp_path))

        assert file_id == "file-1"
        md5 = content_md5(b"%PDF-1.4 data")
        client.request_upload_slot.assert_called_once_with(
            content_md5=md5,
            content_type="application/pdf",
            file_name="contract.pdf",
            file_size=len(b"%PDF-1.4 data"),
            convert_to_pdf=False,
            convert_to_html=None,
        )
        client.put_file.assert_called_once_with(
            "https://upload.test/file-1", b"%PDF-1.4 data", "application/pdf", md5
        )

    def test_docx_is_converted(self, client, tmp_path):
        local = tmp_path / "agreement.docx"
        local.write_bytes(b"PK docx")
        upload_file(client, str(local), "agreement.docx", str(tmp_path))
        kwargs = client.request_upload_slot.call_args.kwargs
        assert kwargs["content_type"] == "application/octet-stream"
        assert kwargs["convert_to_pdf"] is True
        assert kwargs["convert_to_html"] is None

    def test_html_disables_html_conversion(self, client, tmp_path):
        local = tmp_path / "page.html"
        local.write_bytes(b"<html></html>")
        upload_file(client, str(local), "page.html", str(tmp_path))
        kwargs = client.request_upload_slot.call_args.kwargs
        assert kwargs["convert_to_pdf"] is True
        assert kwargs["convert_to_html"] is False

    def test_missing_local_file(self, client, tmp_path):
        with pytest.raises(LocalFileMissing):
            upload_file(client, str(tmp_path / "nope.pdf"), "nope.pdf", str(tmp_path))
        client.request_upload_slot.assert_not_called()

    def test_remote_scratch_removed_after_upload(self, client, tmp_path):
        scratch = tmp_path / "scratch"
        scratch.mkdir()
        client.download.side_effect = _download_writes(b"%PDF remote")
        upload_file(client, "https://files.test/a.pdf", "a.pdf", str(scratch))
        assert client.put_file.call_args.args[1] == b"%PDF remote"
        assert list(scratch.iterdir()) == []

    def test_remote_scratch_removed_when_upload_fails(self, client, tmp_path):
        client.download.side_effect = _download_writes(b"%PDF remote")
        client.put_file.side_effect = RuntimeError("upload broke")
        with pytest.raises(RuntimeError):
            upload_file(client, "https://files.test/a.pdf", "a.pdf", str(tmp_path))
        assert list(tmp_path.iterdir()) == []
