"""
Error handling

Maps the request-level error taxonomy onto HTTP statuses. Core code never
knows about HTTP; this is the only place the two meet.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from roster_merge.errors import (
    DecoderError,
    MalformedInputError,
    MissingInputError,
    RosterMergeError,
    UnsupportedFormatError,
    UploadTooLargeError,
    ZeroYieldError,
)

logger = structlog.get_logger(__name__)

# Checked in order; subclasses before their parents
STATUS_CODES: list[tuple[type[RosterMergeError], int]] = [
    (MissingInputError, 400),
    (UploadTooLargeError, 400),
    (UnsupportedFormatError, 422),
    (MalformedInputError, 400),
    (ZeroYieldError, 422),
    (DecoderError, 500),
]


def status_for(error: RosterMergeError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def roster_merge_error_handler(request: Request, exc: RosterMergeError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_failed",
        path=request.url.path,
        kind=exc.kind,
        status=status_code,
        error=exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "kind": exc.kind},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RosterMergeError, roster_merge_error_handler)
