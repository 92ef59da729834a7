"""FastAPI server for the address finder.

Endpoints
---------
GET /health
    {"status": "ok"}

POST /api/extract
Request JSON:
    {"text": "...", "normalize": false}
Response JSON:
    {"addresses": ["..."], "mode": "list|prose|fallback|empty", "count": 2}

POST /api/find-closest
Request JSON (either pre-extracted addresses or raw text):
    {"startingAddress": "...", "addresses": ["...", "..."]}
    {"startingAddress": "...", "text": "...pasted text..."}
Response JSON:
    {
      "success": true,
      "results": [{"address": ..., "status": "OK", "distance": {...}, "duration": {...}}],
      "failed": [{"address": ..., "status": "NOT_FOUND", "distance": null, "duration": null}],
      "startingAddress": "..."
    }

Errors are returned as {"error": "..."}: 400 for invalid input, 413 for text
over the configured size cap, 500 for configuration or lookup failures.

Configuration is read from the environment once at startup (see `config`).

Run (example)
-------------
    pip install -e ".[api]"
    export GOOGLE_MAPS_API_KEY="..."
    uvicorn address_finder.api:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import Settings
from .distance import DistanceMatrixClient
from .errors import (
    AddressFinderError,
    ConfigurationError,
    DistanceMatrixError,
    InvalidRequestError,
)
from .extractor import AddressExtractor
from .normalization import normalize_address
from .service import find_closest

log = logging.getLogger(__name__)


class ExtractRequest(BaseModel):
    """Request payload for POST /api/extract."""

    text: str = Field(..., description="Pasted text containing addresses.")
    normalize: bool = Field(False, description="Apply address normalization to results.")


class ExtractResponse(BaseModel):
    """Response payload for POST /api/extract."""

    addresses: list[str]
    mode: str
    count: int


class FindClosestRequest(BaseModel):
    """Request payload for POST /api/find-closest.

    Fields are untyped so that malformed payloads reach `validate_request` and
    get its 400 message instead of a 422 from request parsing.
    """

    startingAddress: Any = None
    addresses: Any = None
    text: Any = None


class InputTooLargeError(InvalidRequestError):
    """Raised when pasted text exceeds the configured size cap."""


class _AppState:
    """Holds long-lived objects shared across requests."""

    def __init__(self) -> None:
        self.settings: Settings = Settings()
        self.extractor: AddressExtractor = AddressExtractor()
        self.distance_client: DistanceMatrixClient | None = None


STATE = _AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and build the distance client once."""
    settings = Settings.from_env()

    STATE.settings = settings
    STATE.extractor = AddressExtractor()
    STATE.distance_client = settings.distance_client()

    if STATE.distance_client is None:
        log.warning("GOOGLE_MAPS_API_KEY is not set; /api/find-closest will fail")

    yield


app = FastAPI(title="Address Proximity Finder", version="0.1.0", lifespan=lifespan)


@app.exception_handler(InputTooLargeError)
async def _too_large(_request: Request, exc: InputTooLargeError) -> JSONResponse:
    return JSONResponse(status_code=413, content={"error": str(exc)})


@app.exception_handler(InvalidRequestError)
async def _invalid_request(_request: Request, exc: InvalidRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(AddressFinderError)
async def _server_side(_request: Request, exc: AddressFinderError) -> JSONResponse:
    # ConfigurationError / DistanceMatrixError: the user did nothing wrong.
    return JSONResponse(status_code=500, content={"error": str(exc)})


def _check_input_size(text: str) -> None:
    limit = STATE.settings.max_input_chars
    if len(text) > limit:
        raise InputTooLargeError(f"Input text is too long (maximum {limit} characters).")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/extract", response_model=ExtractResponse)
def extract(req: ExtractRequest) -> ExtractResponse:
    """Extract candidate addresses from pasted text."""
    _check_input_size(req.text)

    result = STATE.extractor.extract_detailed(req.text)
    addresses = result.addresses
    if req.normalize:
        addresses = [normalize_address(a) for a in addresses]

    return ExtractResponse(addresses=addresses, mode=result.mode, count=len(addresses))


@app.post("/api/find-closest")
def find_closest_endpoint(req: FindClosestRequest) -> JSONResponse:
    """Rank destination addresses by driving distance from the starting address."""
    addresses = req.addresses
    if addresses is None and isinstance(req.text, str):
        _check_input_size(req.text)
        addresses = STATE.extractor.extract(req.text)

    try:
        result = find_closest(
            req.startingAddress,
            addresses,
            client=STATE.distance_client,
            max_addresses=STATE.settings.max_addresses,
        )
    except (InvalidRequestError, ConfigurationError, DistanceMatrixError):
        raise
    except Exception:
        log.exception("Error in find-closest")
        return JSONResponse(
            status_code=500,
            content={"error": "An error occurred while processing your request."},
        )

    return JSONResponse(content=result.to_dict())
