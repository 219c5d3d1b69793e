"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapter.services.database import Database
from src.api.error import ClientError, client_error_handler
from src.api.routes import (
    auth,
    areas,
    products,
    customers,
    subscriptions,
    deliveries,
    invoices,
    payments,
    reports,
)

logger = logging.getLogger(__name__)


def create_app(config, database: Database = None) -> FastAPI:
    """
    Build the API application

    Args:
        config: ApplicationConfig (or a subclass overriding its values)
        database: Pre-built Database handle; one is created from config.DB_URI when omitted
    """
    database = database or Database(config.DB_URI, echo=config.DB_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.connect(create_tables=True)
        logger.info(f"API started, routes under {config.API_PREFIX}")
        yield
        await database.disconnect()

    app = FastAPI(
        title="Dairy Delivery Service",
        description="Customers, deliveries, invoices and payment allocation for a milk delivery business",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = database

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ClientError, client_error_handler)

    api_router = APIRouter(prefix=config.API_PREFIX)
    for module in (
        auth, areas, products, customers, subscriptions, deliveries, invoices, payments, reports,
    ):
        api_router.include_router(module.router)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
