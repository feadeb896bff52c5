"""ASGI entry‑point for the account gateway.

Run in dev mode:
    uvicorn account_gateway.main:app --reload
"""
from __future__ import annotations

import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from account_gateway.config import settings
from account_gateway.routes import auth_routes, user_routes
from account_gateway.services.errors import ClientError

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())


app = FastAPI(
    title="Account Gateway",
    version="0.1.0",
    description="HTTP layer of the user‑account service: refresh guard and profile endpoints.",
)

# ---------------------------------------------------------------------------
# Middleware (CORS for browser‑based clients)
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------


@app.exception_handler(ClientError)
async def _client_error(_: Request, exc: ClientError) -> JSONResponse:
    # body is already the public shape; no ``detail`` wrapper
    return JSONResponse(status_code=exc.status_code, content=exc.body)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

app.include_router(auth_routes.router)
app.include_router(user_routes.router)


# ---------------------------------------------------------------------------
# Root & liveness endpoints
# ---------------------------------------------------------------------------

@app.get("/", include_in_schema=False)
async def _root() -> dict[str, str]:
    return {"service": "account‑gateway", "status": "alive"}
