"""
Vegetable Federation Procurement Service
Main Application Entry Point
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import config
from .controllers.advisory_controller import router as advisory_router
from .controllers.audit_controller import router as audit_router
from .controllers.config_controller import router as config_router
from .controllers.directory_controller import router as directory_router
from .controllers.health_controller import router as health_router
from .controllers.ledger_controller import router as ledger_router
from .controllers.price_controller import router as price_router
from .controllers.wizard_controller import router as wizard_router
from .services.container import ServiceContainer
from .utils.constants import APP_NAME, APP_VERSION
from .utils.logger import setup_logger, logger


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """Build the API around a service container (one is created from config if omitted)"""
    services = container or ServiceContainer(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info(f"{APP_NAME} starting...")
        if services.config.price_feed.enabled:
            services.scheduler.start()
        yield
        services.scheduler.stop()
        logger.info(f"{APP_NAME} shutting down...")

    app = FastAPI(
        title=APP_NAME,
        description="Procurement and sales entry, grade-based pricing and ledger views for PVCS centres",
        version=APP_VERSION,
        lifespan=lifespan
    )
    app.state.container = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=services.config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(price_router, prefix="/api/prices", tags=["Prices"])
    app.include_router(wizard_router, prefix="/api/wizard", tags=["Wizard"])
    app.include_router(ledger_router, prefix="/api/ledger", tags=["Ledger"])
    app.include_router(directory_router, prefix="/api/directory", tags=["Directory"])
    app.include_router(advisory_router, prefix="/api/advisory", tags=["Advisory"])
    app.include_router(audit_router, prefix="/api/audit", tags=["Audit"])
    app.include_router(config_router, prefix="/api/config", tags=["Config"])
    app.include_router(health_router, prefix="/api/health", tags=["Health"])

    @app.get("/")
    async def root():
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "status": "running",
            "docs": "/docs"
        }

    @app.get("/api/info")
    async def info():
        """System information"""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "ledger_records": services.ledger.count(),
            "commodities": services.price_book.commodities(),
            "strict_validation": services.config.ledger.strict_validation
        }

    return app


# Setup logging
setup_logger(
    level=config.logging.level,
    log_file=config.logging.file,
    max_size=config.logging.max_size,
    backup_count=config.logging.backup_count,
    console=config.logging.console,
    colorize=config.logging.colorize
)

app = create_app()
