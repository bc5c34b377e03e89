from __future__ import annotations

from admission.api.routes.health import router as health_router
from admission.api.routes.requests import router as requests_router

__all__ = ["health_router", "requests_router"]
