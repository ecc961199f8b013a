"""File endpoints.

Implements:
    POST   /v3/files/file-upload-url
    GET    /v3/files/{fileId}
    PUT    /upload/{fileId}        (pre-signed, unsigned)
    GET    /samples/{name}         (remote files for download tests)
"""

from __future__ import annotations

import base64
import hashlib

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from mock_servers.esign_mock import db
from mock_servers.esign_mock.auth import verify_signature
from mock_servers.esign_mock.envelope import CODE_NOT_FOUND, EnvelopeError, ok
from mock_servers.esign_mock.models import FileUploadUrlCreate

router = APIRouter(
    prefix="/v3/files", tags=["files"], dependencies=[Depends(verify_signature)]
)
upload_router = APIRouter(tags=["upload"])


@router.post("/file-upload-url")
async def create_file_upload_url(body: FileUploadUrlCreate, request: Request) -> dict:
    record = db.create_file(
        file_name=body.fileName,
        file_size=body.fileSize,
        content_md5=body.contentMd5,
        content_type=body.contentType,
        convert_to_pdf=body.convertToPDF,
    )
    upload_url = f"{str(request.base_url).rstrip('/')}/upload/{record['fileId']}"
    return ok({"fileId": record["fileId"], "fileUploadUrl": upload_url})


@router.get("/{file_id}")
async def get_file_status(file_id: str) -> dict:
    record = db.poll_file(file_id)
    if record is None:
        raise EnvelopeError(CODE_NOT_FOUND, f"File {file_id} not found")
    return ok(
        {
            "fileId": record["fileId"],
            "fileName": record["fileName"],
            "fileStatus": record["fileStatus"],
            "fileDownloadUrl": "",
            "fileTotalPageCount": 1,
        }
    )


@upload_router.put("/upload/{file_id}")
async def put_file(file_id: str, request: Request) -> Response:
    record = db.get_file(file_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Upload URL unknown or expired")

    body = await request.body()
    body_md5 = base64.b64encode(hashlib.md5(body).digest()).decode("ascii")
    if request.headers.get("Content-MD5") != record["contentMd5"] or body_md5 != record["contentMd5"]:
        raise HTTPException(status_code=400, detail="Content-MD5 mismatch")
    if request.headers.get("Content-Type") != record["contentType"]:
        raise HTTPException(status_code=400, detail="Content-Type mismatch")
    if len(body) != record["fileSize"]:
        raise HTTPException(status_code=400, detail="File size mismatch")

    db.mark_uploaded(file_id)
    return Response(status_code=200)


@upload_router.get("/samples/{name}")
async def get_sample(name: str) -> Response:
    content = db.SAMPLE_FILES.get(name)
    if content is None:
        raise HTTPException(status_code=404, detail="Sample not found")
    return Response(content=content, media_type="application/octet-stream")
