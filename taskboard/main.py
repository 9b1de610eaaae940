"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.api.gate import AuthenticationGate
from taskboard.api.v1 import router as v1_router
from taskboard.core.config import settings
from taskboard.core.database import SessionLocal, init_db
from taskboard.core.exceptions import TaskboardError
from taskboard.core.security import TokenService
from taskboard.schemas.common import ErrorResponse
from taskboard.services.preload import run_preload

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    if settings.PRELOAD_ENABLED:
        db = SessionLocal()
        try:
            run_preload(db, settings)
        finally:
            db.close()
    logger.info("Taskboard API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Taskboard API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.token_service = TokenService.from_settings(settings)

# Starlette runs the last-added middleware first: CORS wraps the gate.
app.middleware("http")(
    AuthenticationGate(app.state.token_service, SessionLocal)
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    body = ErrorResponse(error_code=exc.code, error_description=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorResponse(
        error_code="L1999",
        error_description="An unexpected error occurred. Please try again later.",
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Taskboard API", "version": __version__}
