"""Health endpoint.

- GET /health: service status, browser session stats, registered extractors
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter

from job_extractor.models.responses import ApiResponse, HealthStatus

if TYPE_CHECKING:
    from job_extractor.extractors.registry import ExtractorRegistry


def create_health_router(
    *,
    registry: "ExtractorRegistry",
    browser_session: Any = None,
) -> APIRouter:
    """Factory that creates the health router with injected dependencies."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check."""
        session_stats = browser_session.get_stats() if browser_session else {}

        return ApiResponse[HealthStatus](
            success=True,
            data=HealthStatus(
                browser=session_stats,
                extractors=[e.id for e in registry],
            ),
        ).model_dump()

    return health_router
