"""FastAPI application entrypoint. No business logic; only wiring, middleware and error envelopes."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.api import static
from app.core.config import settings
from app.core.database import SessionLocal, check_db_connected

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Refuse to start without a reachable database."""
    db = SessionLocal()
    try:
        connected = check_db_connected(db)
    finally:
        db.close()
    if not connected:
        logger.critical("Database connection failed; shutting down")
        raise RuntimeError("Database connection failed")
    logger.info("Successfully connected to database")
    Path(settings.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="Repair Shop API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def strip_api_trailing_slash(request: Request, call_next) -> Response:
    """Route /api/devices/ like /api/devices; otherwise the frontend catch-all would claim it."""
    path = request.scope["path"]
    if path.startswith(f"{settings.API_PREFIX}/") and path.endswith("/"):
        stripped = path.rstrip("/")
        if stripped != settings.API_PREFIX:
            request.scope["path"] = stripped
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid input"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Last resort: log the traceback, hide it from the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Something broke!", status_code=500)


app.include_router(api_router, prefix=settings.API_PREFIX)
# Catch-all frontend route; must stay last.
app.include_router(static.router)
