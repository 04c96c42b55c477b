"""
FastAPI application factory and configuration.
"""

from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from ..services.booking import ServiceCatalog
from ..services.external import BookingAPI
from ..utils.logging import configure_logging
from .middleware import SecurityHeaders, LoggingMiddleware
from .handlers import BookingHandler, HealthHandler


def create_app(
    api: Optional[BookingAPI] = None,
    catalog: Optional[ServiceCatalog] = None,
    today: Optional[Callable[[], date]] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-step booking wizard for event services",
        version=settings.app_version,
        debug=settings.debug,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    # Initialize handlers
    booking_handler = BookingHandler(api=api, catalog=catalog, today=today)
    health_handler = HealthHandler(status_provider=booking_handler.status)

    # Register routes
    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(booking_handler.router, tags=["booking"])

    app.state.booking_handler = booking_handler
    return app
