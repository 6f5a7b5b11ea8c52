"""Storefront FastAPI application.

One web process serving the identity, catalogue and ordering routers over a
single MongoDB database. Requests are handled synchronously; there is no
background work.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalogue.api import category_router, product_router
from identity.api.routes import router as identity_router
from ordering.api.routes import cart_router, order_router
from shared.config import get_settings
from shared.database import close_database, get_database
from shared.http import register_exception_handlers, request_context_middleware
from shared.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Storefront starting", environment=get_settings().environment)
    yield
    close_database()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Storefront API",
        description="E-commerce backend: accounts, catalogue, cart and orders",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context_middleware)
    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    def health(database=Depends(get_database)):
        database.command("ping")
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_app()
