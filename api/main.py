"""
FastAPI application entry point.

This is the main entry point for the user-preferences API.
"""

import argparse
import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from api.middleware import setup_exception_handlers
from api.routers import preferences_router
from core.config import CONFIG_ENV_VAR, fix_addr, get_settings
from database import close_database, init_database

logger = logging.getLogger(__name__)

GREETING = "Hello from user-preferences."


def configure_logging(force: bool = False) -> None:
    """Configure root logging from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
        force=force,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the database connection pool on startup and disposes of it on
    shutdown.
    """
    settings = get_settings()

    # ============ Startup ============
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.git_ref})")
    logger.info(f"Environment: {settings.environment}")

    if settings.is_database_configured:
        try:
            await init_database(settings)
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise
    else:
        logger.warning("Database not configured, preference requests will fail")

    logger.info("Application startup complete")

    yield

    # ============ Shutdown ============
    logger.info("Shutting down application...")
    await close_database()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    # Every top-level path is a username, so the docs routes stay off.
    app = FastAPI(
        title=settings.app_name,
        description="Per-user preference documents",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # ============ Exception Handlers ============
    setup_exception_handlers(app)

    # ============ Root Endpoint ============

    @app.get("/", response_class=PlainTextResponse, tags=["root"])
    async def greeting():
        """Liveness greeting."""
        return GREETING

    # ============ Routers ============
    app.include_router(preferences_router)

    return app


# Create application instance
configure_logging()
app = create_app()


def split_addr(addr: str) -> tuple[str, int]:
    """Split a listen address into host and port; an empty host means all interfaces."""
    host, _, port = fix_addr(addr).rpartition(":")
    return host or "0.0.0.0", int(port)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="user-preferences",
        description="Serve per-user preference documents over HTTP.",
    )
    parser.add_argument(
        "--config",
        help="Path to an env file with the service configuration",
    )
    parser.add_argument(
        "--port",
        help="Listen port or address, e.g. 60000 or 127.0.0.1:60000",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the version information and exit",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Run the application with uvicorn."""
    import uvicorn

    args = parse_args(argv)

    if args.config:
        os.environ[CONFIG_ENV_VAR] = args.config
    if args.port:
        os.environ["LISTEN"] = args.port
    get_settings.cache_clear()
    settings = get_settings()

    if args.version:
        print(f"{settings.app_name} version {settings.app_version} (git ref {settings.git_ref})")
        sys.exit(0)

    configure_logging(force=True)

    host, port = split_addr(settings.listen)
    logger.info(f"Listening on {host}:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
