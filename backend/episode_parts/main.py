"""
Episode Parts - Episodes and ordered parts
Main FastAPI Application
"""
import contextlib
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
import sys

from episode_parts import __version__
from episode_parts.config import settings
from episode_parts.database import init_db
from episode_parts.routers import episodes, parts, health
from episode_parts.services import ServiceError

# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.log_level.upper()
)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting Episode Parts API...")

    if settings.create_tables_on_startup:
        await init_db()
        logger.info("Database initialized")

    logger.info(f"Episode Parts API is running, routes under {settings.api_prefix or '/'}")

    yield

    logger.info("Shutting down Episode Parts API...")


app = FastAPI(
    title="Episode Parts",
    description="Episodes and their ordered parts",
    version=__version__,
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report invalid input as 400 with messages grouped by field"""
    errors: dict = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))

    logger.debug(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"message": "Validation error", "errors": errors})


# Include routers
app.include_router(health.router, prefix=settings.api_prefix, tags=["Health"])
app.include_router(episodes.router, prefix=settings.api_prefix, tags=["Episodes"])
app.include_router(parts.router, prefix=settings.api_prefix, tags=["Parts"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "Episode Parts",
        "version": __version__,
        "status": "running",
        "docs": "/docs"
    }
