"""
DevPalette Backend
Local API the color swatch front end talks to.
"""
import argparse

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devpalette import __version__
from devpalette.api.v1 import router as v1_router
from devpalette.config import config
from devpalette.schemas import HealthResponse
from devpalette.utils.logging import get_logger
from devpalette.utils.metrics import get_metrics

logger = get_logger("api")

app = FastAPI(
    title="DevPalette Backend",
    description="Saved colors, favorites, combinations and JSON import/export",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__, storage_backend=config.STORAGE_BACKEND)


@app.get("/metrics")
def metrics_summary():
    """In-process counters and timings."""
    return get_metrics().get_summary()


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "DevPalette Backend API",
        "version": __version__,
        "docs": "/docs"
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    logger.info("Starting DevPalette backend", {"host": args.host, "port": args.port})
    uvicorn.run("main:app", host=args.host, port=args.port, reload=args.reload)
