"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI

from api.routes import health, algorithms, root
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    merkle_error_handler,
)
from core.schemas.errors import MerkleException


# Configure logging: respects MERKLE_LOG_LEVEL env var and merkle.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from env var or merkle.json, defaulting to INFO."""
    raw = os.getenv("MERKLE_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "merkle.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError):
                pass
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Root API",
        description="""
HTTP API for Merkle root derivation.

## Endpoints

- **POST /root** - Derive the root of an ordered list of leaves
- **POST /verify** - Recompute a root and compare it with an expected one
- **GET /algorithms** - List supported hash algorithms
- **GET /health** - Health check

## Process Types

- `0` / `PASS_THROUGH` - unpaired nodes are carried up unchanged
- `1` / `DUPE_APPEND` - unpaired nodes are duplicated
- `2` / `BINARY_TREE` - leaves are first aligned to a power of two
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleException, merkle_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(algorithms.router)
    app.include_router(root.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
