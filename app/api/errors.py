"""Render domain errors as {"error": message} responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import PublisherError, ValidationError

logger = logging.getLogger(__name__)


async def publisher_error_handler(request: Request, exc: PublisherError) -> JSONResponse:
    content = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PublisherError, publisher_error_handler)
