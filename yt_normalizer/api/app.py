"""
FastAPI application for the YouTube normalization service.
"""

import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from yt_normalizer.config import config
from yt_normalizer.api.routes import router
from yt_normalizer.utils.error_handling import (
    InitializationError,
    OperationError,
    TranscriptUnavailableError,
)
from yt_normalizer.utils.logger import logging

# FastAPI application
app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="Normalized YouTube video, search, channel, playlist and transcript data",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Middleware to add processing time header to responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Invalid operation input that got past the query parameter checks."""
    detail = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": detail})


@app.exception_handler(TranscriptUnavailableError)
async def transcript_unavailable_handler(request: Request, exc: TranscriptUnavailableError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InitializationError)
async def initialization_exception_handler(request: Request, exc: InitializationError):
    logging.error(f"Service unavailable: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(OperationError)
async def operation_exception_handler(request: Request, exc: OperationError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logging.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred"},
    )


# Include API router
app.include_router(router)


# Root
@app.get("/")
async def root():
    """Root endpoint returning basic API information."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": "YouTube Normalizer API",
    }
