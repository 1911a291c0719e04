import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from catalog.api import health, products
from catalog.core.config import Settings, settings
from catalog.core.errors import InvalidRequest, StoreUnavailable
from catalog.db.base import Database

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, database: Database | None = None) -> FastAPI:
    logging.basicConfig(level=app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database = database or Database.from_settings(app_settings)
        yield
        await app.state.database.dispose()

    app = FastAPI(
        title=f"{app_settings.PROJECT_NAME} API",
        description="Dental product catalog: listing, full-text search and facets",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        logger.error("Store unavailable while serving %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Catalog temporarily unavailable"})

    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    # Routers
    app.include_router(health.router)
    app.include_router(products.router)

    @app.get("/", include_in_schema=False)
    async def index():
        return RedirectResponse(url="/products")

    return app


app = create_app()
