"""
Health check handler.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ...config import get_settings


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    uptime: float


class HealthHandler:
    """Handler for health check endpoints.

    ``status_provider`` returns extra readiness details (catalog state,
    session count) from the wizard handler.
    """

    def __init__(self, status_provider: Optional[Callable[[], Dict[str, Any]]] = None):
        self.settings = get_settings()
        self.start_time = datetime.now()
        self.status_provider = status_provider
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup health check routes."""

        @self.router.get("/", response_model=HealthResponse)
        async def health_check():
            """Basic health check endpoint."""
            uptime = (datetime.now() - self.start_time).total_seconds()
            return HealthResponse(
                status="healthy",
                timestamp=datetime.now().isoformat(),
                version=self.settings.app_version,
                uptime=uptime,
            )

        @self.router.get("/ready")
        async def readiness_check():
            """Readiness check for container orchestration."""
            details = self.status_provider() if self.status_provider else {}
            return {"status": "ready", "service": self.settings.app_name, **details}

        @self.router.get("/live")
        async def liveness_check():
            """Liveness check for container orchestration."""
            return {"status": "alive"}
