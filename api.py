"""
FastAPI server for the ZIP Utility Lookup.

GET /lookup?zip=44114 or POST /lookup {"zip": "44114"} -> best-guess
electric/gas utility for the ZIP's city. The utility table is static and
built at import; the only I/O per request is one Zippopotam call.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from zip_lookup.config import Config, load_dotenv
from zip_lookup.errors import InvalidZipError, ZipLookupError
from zip_lookup.resolver import ZipUtilityResolver
from zip_lookup.response import assemble, error_payload
from zip_lookup.validation import extract_zip_from_body

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("api")

# ---------------------------------------------------------------------------
# Global resolver (built once at startup)
# ---------------------------------------------------------------------------
resolver: Optional[ZipUtilityResolver] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the resolver on startup."""
    global resolver
    load_dotenv(Config().env_file)
    config = Config.from_env()
    resolver = ZipUtilityResolver(config)
    logger.info(f"Geocoder: {config.geocoder_base_url} (timeout {config.geocode_timeout}s)")

    yield

    logger.info("Shutdown complete.")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ZIP Utility Lookup API",
    description="Best-guess electric and gas utility for a US ZIP code.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------
class LookupData(BaseModel):
    zip: str
    city: str
    state: str
    electric: str
    gas: Optional[str] = None
    matched_via: str
    matched_key: Optional[str] = None
    alternatives: list[str] = Field(default_factory=list)
    lookup_time_ms: int
    timestamp: str


class LookupResponse(BaseModel):
    ok: bool = True
    data: LookupData
    meta: str
    note: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    resolver_loaded: bool
    uptime_seconds: float
    states: int


_start_time = time.time()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Bad input on /lookup is a bad ZIP; anywhere else it is a malformed request."""
    if request.url.path == "/lookup":
        message = InvalidZipError.public_message
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=error_payload(message))


async def _run_lookup(raw_zip: Any) -> JSONResponse:
    """Run one lookup off the event loop and map the outcome to a response."""
    if not resolver:
        return JSONResponse(status_code=503, content=error_payload("Resolver is still loading."))

    try:
        result = await run_in_threadpool(resolver.lookup, raw_zip)
    except ZipLookupError as e:
        if e.status_code >= 500:
            logger.error(f"Lookup error for {raw_zip!r}: {e}")
        return JSONResponse(status_code=e.status_code, content=error_payload(e.public_message))
    except Exception as e:
        logger.exception(f"Lookup error for {raw_zip!r}: {e}")
        return JSONResponse(status_code=500, content=error_payload("lookup_failed"))

    return JSONResponse(content=assemble(result))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok" if resolver else "loading",
        resolver_loaded=resolver is not None,
        uptime_seconds=round(time.time() - _start_time, 1),
        states=len(resolver.table) if resolver else 0,
    )


@app.get("/lookup", response_model=LookupResponse, responses=_ERROR_RESPONSES)
async def lookup(
    zip_code: Optional[str] = Query(None, alias="zip", description="5-digit US ZIP code"),
):
    """
    Look up the electric and gas utility for a US ZIP code.

    City-specific mapping first, then the state default.
    """
    return await _run_lookup(zip_code)


@app.post("/lookup", response_model=LookupResponse, responses=_ERROR_RESPONSES)
async def lookup_post(request: Request):
    """POST variant of lookup. Reads {"zip": "..."} from the JSON body."""
    try:
        raw_zip = extract_zip_from_body(await request.body())
    except InvalidZipError as e:
        logger.debug(f"Rejected POST body: {e}")
        return JSONResponse(status_code=e.status_code, content=error_payload(e.public_message))
    return await _run_lookup(raw_zip)


class BatchRequest(BaseModel):
    zips: list[Any] = Field(..., description="ZIP codes to look up")


@app.post("/lookup/batch")
async def lookup_batch(req: BatchRequest):
    """
    Batch lookup, up to 100 ZIPs at once.

    Each ZIP is looked up sequentially; a failed ZIP yields an error item
    instead of failing the batch.
    """
    if not resolver:
        return JSONResponse(status_code=503, content=error_payload("Resolver is still loading."))

    max_zips = resolver.config.batch_max_zips
    if len(req.zips) > max_zips:
        return JSONResponse(status_code=400, content=error_payload(f"At most {max_zips} ZIPs per batch"))

    t0 = time.time()
    outcomes = await run_in_threadpool(resolver.lookup_batch, req.zips)
    results = []
    for raw_zip, outcome in zip(req.zips, outcomes):
        if isinstance(outcome, ZipLookupError):
            results.append({**error_payload(outcome.public_message), "zip": raw_zip})
        else:
            results.append(assemble(outcome))

    total_ms = int((time.time() - t0) * 1000)
    return JSONResponse(content={
        "results": results,
        "total": len(results),
        "lookup_time_ms": total_ms,
    })


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api:app", host="0.0.0.0", port=8000)
