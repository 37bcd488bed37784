"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises ``ValueError`` for requests it cannot serve (e.g. no
transcription backend configured), ``KeyError`` for unknown reference IDs,
and ``TranscriptionError`` when the upstream backend fails.  Rather than
catching these in every route, we install global handlers.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from smartflow_rules.transcription import TranscriptionError

logger = logging.getLogger(__name__)

# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("not found", 404),
    ("no transcription backend", 503),
]


# --- Client-safe messages keyed by HTTP status code ---
_SAFE_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    503: "Service unavailable",
}


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map SDK ``ValueError`` to a contextual HTTP error response.

    The raw exception message is logged server-side but never sent to
    the client.
    """
    msg = str(exc)
    status = 400  # default
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    safe_detail = _SAFE_MESSAGES.get(status, "Invalid request")
    return JSONResponse(status_code=status, content={"detail": safe_detail})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (e.g. unknown route ID) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def transcription_error_handler(
    request: Request, exc: TranscriptionError
) -> JSONResponse:
    """Upstream transcription failure — 502 Bad Gateway."""
    logger.error("Transcription failed at %s: %s", request.url, exc)
    return JSONResponse(
        status_code=502,
        content={"detail": "Transcription service failed"},
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
