"""FastAPI application initialization and configuration module.

This module serves as the main entry point for the Verdict API application.
It handles:
- Logging setup
- Exception handler registration
- Middleware registration in the correct order
- Mounting the route tree with the health and info endpoints

Middleware are executed in reverse order of registration, so the request
context is set before the request logging middleware runs.
"""

from fastapi import FastAPI
from loguru import logger
from starlette.requests import Request
from starlette.responses import Response

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routing import Route, group, handler
from src.api.utils.responses import ORJSONResponse, respond
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging


def system_routes(settings: Settings) -> Route:
    """Build the route tree for the operational endpoints.

    Args:
        settings: Settings reported by the info endpoint.

    Returns:
        Route: Tree holding ``GET /health`` and ``GET /info``.
    """

    async def health(request: Request) -> Response:
        """Health check endpoint for monitoring and container orchestration."""
        return respond({"status": "healthy"})

    async def info(request: Request) -> Response:
        """Get application information."""
        return respond(
            {
                "app_name": settings.app_name,
                "version": settings.app_version,
                "environment": settings.environment,
                "debug": settings.debug,
            }
        )

    return group(
        "/",
        [
            handler("GET", "/health", health),
            handler("GET", "/info", info),
        ],
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Setup logging first
    setup_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
    )

    # Register exception handlers BEFORE middleware
    register_exception_handlers(application)

    # 2. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 1. Request context middleware (correlation ID and client address)
    application.add_middleware(
        RequestContextMiddleware, client_ip_headers=settings.client_ip_headers
    )

    routes = system_routes(settings)
    application.router.routes.extend(routes.routes())

    logger.info(
        "Application created - {} v{}",
        settings.app_name,
        settings.app_version,
        routes=routes.dump(),
    )

    return application


app = create_app()
