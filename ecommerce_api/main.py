"""
FastAPI Application Entry Point - E-commerce API
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from ecommerce_api import __version__
from ecommerce_api.config import settings
from ecommerce_api.database import init_db
from ecommerce_api.logging_config import setup_logging
from ecommerce_api.api import analytics, auth, categories, health, orders, products, reviews, users
from ecommerce_api.api.errors import register_exception_handlers

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# Create FastAPI application
app = FastAPI(
    title="E-commerce API",
    description="Catalog, orders with stock reservation, reviews and sales analytics",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
for module in (auth, users, categories, products, orders, reviews, analytics):
    app.include_router(module.router, prefix=API_PREFIX)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Check configuration and initialize database on startup"""
    setup_logging()
    settings.validate_for_startup()
    logger.info("Starting %s (%s)...", settings.SERVICE_NAME, settings.ENVIRONMENT)
    init_db()
    logger.info("RabbitMQ events %s (%s)", "enabled" if settings.EVENTS_ENABLED else "disabled", settings.RABBITMQ_EXCHANGE)
    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
