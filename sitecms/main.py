import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitecms.api.v1.routes.catalogues import router as catalogues_router
from sitecms.api.v1.routes.cities import router as cities_router
from sitecms.api.v1.routes.countries import router as countries_router
from sitecms.api.v1.routes.health import router as health_router
from sitecms.api.v1.routes.revalidation import router as revalidation_router
from sitecms.config import settings
from sitecms.core.database_init import initialize_database
from sitecms.core.dependencies import USE_DB_REPOS, get_revalidation_notifier
from sitecms.infrastructure.external_apis.http_client import close_shared_client

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    logger.info("Starting up application...")

    if USE_DB_REPOS:
        try:
            initialize_database()
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await get_revalidation_notifier().drain(timeout=5)
    await close_shared_client()


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    app = FastAPI(
        title="Site CMS Console Backend",
        version="0.1.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(cities_router, prefix="/api/v1")
    app.include_router(countries_router, prefix="/api/v1")
    app.include_router(catalogues_router, prefix="/api/v1")
    app.include_router(revalidation_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")
    # Load balancers health-check the root path
    app.include_router(health_router)
    return app


app = create_app()
