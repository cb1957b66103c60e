"""Exception handlers: every failure leaves the API as ``{"error": message}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.errors import ContentPackError

logger = logging.getLogger(__name__)


async def content_pack_error_handler(request: Request, exc: ContentPackError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts: list[str] = []
    for error in exc.errors():
        # Drop the "body"/"query" prefix so the message names the field itself
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "form")]
        parts.append(f"{'.'.join(loc) or 'body'}: {error.get('msg', 'invalid value')}")
    return JSONResponse(status_code=400, content={"error": "; ".join(parts) or "Invalid request."})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to *app*."""
    app.add_exception_handler(ContentPackError, content_pack_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
