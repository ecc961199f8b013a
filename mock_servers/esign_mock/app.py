"""E-sign open platform mock server.

FastAPI application implementing the subset of the ``/v3`` API used by the
e-sign tools, with the platform's request signature check.

Start with:
    uvicorn mock_servers.esign_mock.app:app --port 8084
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from mock_servers.esign_mock.envelope import CODE_BAD_REQUEST, EnvelopeError, failure
from mock_servers.esign_mock.routes.files import router as files_router
from mock_servers.esign_mock.routes.files import upload_router
from mock_servers.esign_mock.routes.sign_flows import router as sign_flows_router

app = FastAPI(
    title="E-sign Open API Mock",
    description="Mock implementation of the e-sign open platform v3 API for local development",
    version="3.0-mock",
)


@app.exception_handler(EnvelopeError)
async def envelope_error_handler(request: Request, exc: EnvelopeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=failure(exc.code, exc.message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=200, content=failure(CODE_BAD_REQUEST, f"Invalid request: {exc.errors()}")
    )


app.include_router(files_router)
app.include_router(upload_router)
app.include_router(sign_flows_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
