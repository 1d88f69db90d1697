"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_runtime_config
from api.errors import (
    APIError,
    api_error_handler,
    arbor_error_handler,
    generic_error_handler,
    validation_error_handler,
)
from api.routes import health, tree, verify
from core.schemas.errors import ArborException, ConfigException


def _resolve_logging() -> tuple[int, str | None]:
    """Log level and log file from configuration, defaulting to INFO on stderr."""
    try:
        config = get_runtime_config()
    except (ConfigException, FileNotFoundError):
        return logging.INFO, None
    return getattr(logging, config.log_level.upper(), logging.INFO), config.log_file


def setup_logging() -> None:
    level, log_file = _resolve_logging()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


setup_logging()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Arbor API",
        description="""
HTTP API for Merkle roots and inclusion proofs.

## Endpoints

- **POST /root** - Compute the Merkle root of submitted blocks
- **POST /prove** - Generate an inclusion proof for one block
- **POST /verify** - Verify a block against a proof document
- **GET /health** - Health check

## Blocks

Blocks are submitted as strings with `encoding` set to `utf-8` (default)
or `hex`. Block order is significant: it defines the leaf index.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ArborException, arbor_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(tree.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
