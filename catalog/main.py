"""FastAPI application entry point.

Product Catalog API - admin CRUD, search and tag filtering for products.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.errors import NotFoundError, StoreError, ValidationError
from catalog.routes import api_router
from catalog.services.seed import seed_sample_products
from catalog.services.validation import field_errors
from catalog.settings import Settings, get_settings
from catalog.stores.database import Database
from catalog.stores.products import ProductRecordStore

logger = logging.getLogger("uvicorn.error")


async def init_database(settings: Settings) -> Database:
    """Connect, optionally create tables, and optionally seed sample data.

    Runs once at process start, before any request is served.
    """
    db = Database(settings.async_database_url, echo=settings.debug)
    await db.ping()
    logger.info("Database connected")

    if settings.create_tables:
        await db.create_tables()
        logger.info("Database tables created")

    if settings.seed_sample_data:
        async with db.session() as session:
            await seed_sample_products(ProductRecordStore(session))

    return db


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    db = await init_database(get_settings())
    app.state.db = db

    yield

    # Shutdown
    await db.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Admin product catalog API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "details": exc.details},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed JSON bodies and query params get the same 400 shape as form errors."""
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": field_errors(list(exc.errors()))},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(f"[store] {request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=500, content={"error": exc.message})

    # Exception handler for anything unexpected
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) if settings.debug else "Internal server error"},
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
