"""
Main FastAPI application entry point for the Server Manager Update Service.
Health check plus a single endpoint that runs the system update script.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CollectorRegistry, make_asgi_app

from . import __version__
from .api.routes import router
from .api.schemas import HealthResponse
from .core.settings import ServerManagerSettings, get_settings
from .logging_setup import setup_logging
from .managers.update_runner import UpdateRunner
from .monitoring import UpdateRunCollector

logger = logging.getLogger(__name__)

SERVICE_NAME = "Server Manager Update Service"


def create_app(settings: Optional[ServerManagerSettings] = None,
               runner: Optional[UpdateRunner] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (read from the environment when omitted)
        runner: Update runner to serve (built from settings when omitted)
    """
    settings = settings or get_settings()
    runner = runner or UpdateRunner.from_settings(settings)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Runs the system update script on request",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Root endpoint with service information."""
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "status": "running",
            "docs": "/docs"
        }

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.state.update_runner = runner
    app.include_router(router)

    # Each app reports on its own runner
    registry = CollectorRegistry()
    registry.register(UpdateRunCollector(lambda: runner))
    app.mount("/metrics", make_asgi_app(registry=registry))

    @app.on_event("startup")
    async def on_startup():
        """Log the effective configuration once the server is up."""
        logger.info(f"{SERVICE_NAME} listening on port {settings.port}")
        logger.info(f"Update command: {runner.command} "
                    f"(concurrency={runner.concurrency}, timeout={runner.timeout})")
        runner.check_configuration()

    return app


def configure_logging(settings: ServerManagerSettings) -> None:
    """Apply the configured log level, falling back to INFO for unknown names."""
    try:
        setup_logging(settings.log_level)
    except ValueError:
        setup_logging("INFO")
        logger.warning(f"Invalid log level {settings.log_level!r} (SERVER_MANAGER_LOG_LEVEL); using INFO")


_settings = get_settings()
configure_logging(_settings)

app = create_app(_settings)


def run(settings: Optional[ServerManagerSettings] = None) -> None:
    """Serve the app with uvicorn (the module-level app unless settings are given)."""
    import uvicorn

    application = create_app(settings) if settings is not None else app
    settings = settings or _settings
    uvicorn.run(
        application,
        host=settings.host,
        port=settings.port,
        log_level=logging.getLevelName(logging.getLogger().getEffectiveLevel()).lower()
    )


if __name__ == "__main__":
    run()
