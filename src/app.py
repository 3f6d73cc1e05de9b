"""Storefront FastAPI application.

Serves signup, login and the authenticated customer's own account. Every
request runs inside the identity domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 9000
"""

import time
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity
from identity.utils import settings

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default      → event_processing = "sync"  (customer linked within signup)
#   - "production" → event_processing = "async" (customer linked via Engine)
identity.init()

_STARTED_AT = time.monotonic()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Customer signup, login and account management",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.store_cors(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the identity domain context for each request."""
    with identity.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from identity.api import router as identity_router  # noqa: E402

app.include_router(identity_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "message": "Service is healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(time.monotonic() - _STARTED_AT, 3),
        }
    )
