"""Client-facing relay errors.

Every failure a relay endpoint reports is one of these. The body is always
``{"reply": <fixed message>}``; provider detail never reaches the caller.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RelayHTTPError(Exception):
    """Base relay error rendered as ``{"reply": reply}`` with ``status_code``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    reply: str = "Server error"

    def __init__(self, reply: str | None = None) -> None:
        if reply is not None:
            self.reply = reply
        super().__init__(self.reply)


class InvalidInput(RelayHTTPError):
    status_code = status.HTTP_400_BAD_REQUEST
    reply = "Invalid input"


class NoFileUploaded(RelayHTTPError):
    status_code = status.HTTP_400_BAD_REQUEST
    reply = "No file uploaded"


class FileTooLarge(RelayHTTPError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    reply = "File too large"


class ServerError(RelayHTTPError):
    reply = "Server error"


class UploadRejected(RelayHTTPError):
    reply = "Upload failed"


class FileChatFailed(RelayHTTPError):
    reply = "File chat failed"


async def relay_error_handler(request: Request, exc: RelayHTTPError) -> JSONResponse:
    """Render a RelayHTTPError as the relay's JSON reply body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.reply}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.reply}")
    return JSONResponse(status_code=exc.status_code, content={"reply": exc.reply})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayHTTPError, relay_error_handler)
