import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from autobiography.api.generation import router as generation_router
from autobiography.api.shares import router as shares_router
from autobiography.api.stories import router as stories_router
from autobiography.database import create_tables, init_record_store, close_database
from autobiography.errors import (
    AutobiographyError,
    AuthenticationRequired,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from autobiography.settings import settings


logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup/shutdown."""
    # Startup: Create database tables
    if settings.DATABASE_URL:
        logger.info("Initializing database...")
        await create_tables()
        logger.info("Database tables ready")
    else:
        logger.warning("DATABASE_URL not set - skipping database initialization")

    # Initialize record store (SQL or in-memory fallback)
    init_record_store()

    yield

    # Shutdown: release pooled connections
    await close_database()
    logger.info("Shutting down...")


app = FastAPI(title="Autobiography Builder API", lifespan=lifespan)

# Allow CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(stories_router)
app.include_router(generation_router)
app.include_router(shares_router)


# Most specific first; the first matching class wins
ERROR_STATUS = (
    (AuthenticationRequired, 401),
    (AuthorizationError, 403),
    (ValidationError, 422),
    (NotFoundError, 404),
    (ExternalServiceError, 502),
)


@app.exception_handler(AutobiographyError)
async def autobiography_error_handler(request: Request, exc: AutobiographyError):
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind}
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "database": bool(settings.DATABASE_URL)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
