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
from fastapi.middleware.cors import CORSMiddleware

from api.deps import load_runtime_config
from api.routes import allowlist, health, sale, tokens
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    mint_error_handler,
)
from core.schemas.errors import MintGateException


def _resolve_log_level() -> int:
    """Log level from the runtime config file, overridden by MINTGATE_LOG_LEVEL."""
    return getattr(logging, load_runtime_config().log_level.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="MintGate API",
        description="""
HTTP API for a two-phase token sale gated by a Merkle allow-list.

## Endpoints

- **POST /allowlist/root** - Build a commitment root from an allow-list
- **POST /allowlist/proof** - Build a member's inclusion proof
- **POST /allowlist/verify** - Check a proof against a root
- **POST /sale/mint/public**, **/sale/mint/whitelist**, **/sale/mint/team** - Mint
- **POST /sale/withdraw** - Pay accumulated funds to the owner
- **POST /sale/admin/...** - Owner-only setters
- **GET /sale/state**, **GET /sale/root** - Sale state
- **GET /tokens/{token_id}/uri** - Token metadata URI
- **GET /health**, **GET /health/ready** - Liveness and readiness

## Errors

Every failure returns `{"ok": false, "error": {"code", "message", "details"}}`.
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
    app.add_exception_handler(MintGateException, mint_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(allowlist.router)
    app.include_router(sale.router)
    app.include_router(tokens.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    server = load_runtime_config().server
    uvicorn.run(app, host=server.host, port=server.port)
