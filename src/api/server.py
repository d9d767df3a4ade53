#!/usr/bin/env python
"""FastAPI server for the prompt enhancer."""

import logging
import sys
import time
import uuid
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import core, enhance
from utils.config import load_config, validate_config
from utils.logging import clear_request_context, set_request_context, setup_logging

config = load_config()
setup_logging(config["log_level"], json_output=config["log_json"])
logger = logging.getLogger(__name__)

for problem in validate_config(config):
    logger.warning(f"Config: {problem}")

app = FastAPI(title="Prompt Enhancer API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its request ID."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    set_request_context(request_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f} ms)"
        )
    finally:
        clear_request_context()
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400 in the shared error shape."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "detail": jsonable_errors(exc)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework HTTP errors (unparseable multipart body, unknown route) as {error}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with only JSON-safe fields."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


app.include_router(core.router)
app.include_router(enhance.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config["host"], port=config["port"], log_level="info")
