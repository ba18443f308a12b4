"""Campus canteen FastAPI application.

Every request runs inside the canteen domain context and processes commands
synchronously. The lifespan owns the persistence handle: the schema is
created once at startup and provider connections are released at shutdown.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from canteen.api import install_api
from canteen.config import get_settings
from canteen.domain import canteen
from canteen.utils.db import close_connections, setup_db
from canteen.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default      → event_processing = "sync"  (notification handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
canteen.init()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_db(canteen)
    logger.info("Canteen API started", environment=get_settings().environment)
    yield
    close_connections(canteen)
    logger.info("Canteen API stopped")


app = FastAPI(
    title="Campus Canteen API",
    description="Menu, cart and order management for the campus canteen",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the canteen domain context and tag log lines with the request."""
    clear_context()
    add_context(request_id=request.headers.get("X-Request-ID", uuid4().hex), path=request.url.path)
    with canteen.domain_context():
        response = await call_next(request)
    return response


install_api(app)
