import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from app.api.health import router as health_router
from app.api.routes_products import router as products_router
from app.config import Settings, settings as default_settings
from app.db import open_store
from app.repositories.product_repo import ProductRepository, StoreError

log = logging.getLogger(__name__)

DOCS_PATH = "/api-docs"
WELCOME_HTML = (
    "Welcome to the Product Catalog API. "
    f'Visit <a href="{DOCS_PATH}">{DOCS_PATH}</a> for the documentation.'
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _start_liveness_job(store: ProductRepository, seconds: int) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()

    def ping_job():
        if not store.ping():
            log.warning("%s store did not answer the liveness ping", store.backend)

    scheduler.add_job(ping_job, "interval", seconds=seconds, id="store_liveness")
    scheduler.start()
    return scheduler


def create_app(
    settings: Optional[Settings] = None, store: Optional[ProductRepository] = None
) -> FastAPI:
    """
    Build the application. `store` lets callers hand in an already opened
    handle; otherwise one is opened from settings.DATABASE_URL at startup.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup
        try:
            handle = store or open_store(settings.DATABASE_URL)
        except StoreError as e:
            log.error("Store connection error: %s", e)
            raise
        app.state.store = handle
        log.info("Store connected (%s)", handle.backend)
        log.info("API docs available at %s%s", settings.docs_server_url(), DOCS_PATH)

        scheduler = None
        if settings.STORE_PING_SECONDS > 0:
            scheduler = _start_liveness_job(handle, settings.STORE_PING_SECONDS)

        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown(wait=False)
            handle.close()
            log.info("Store connection closed")

    app = FastAPI(
        title="Product Catalog API",
        description="API for managing products",
        version="1.0.0",
        docs_url=DOCS_PATH,
        servers=[{"url": settings.docs_server_url()}],
        lifespan=lifespan,
    )

    # browsers reject credentials together with a wildcard origin
    wildcard = "*" in settings.FRONTEND_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api", tags=["health"])

    app.include_router(products_router, prefix="/api/products", tags=["products"])

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def root():
        return WELCOME_HTML

    return app


app = create_app()


def run():
    configure_logging(default_settings.LOG_LEVEL)
    if not default_settings.DATABASE_URL:
        log.error("The MongoDB URI is not defined in the environment variables.")
        sys.exit(1)
    uvicorn.run(app, host=default_settings.APP_HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
