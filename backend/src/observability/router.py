"""Observability API endpoints.

Provides Prometheus metrics and a health check.
"""

from fastapi import APIRouter, Request, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST


router = APIRouter(tags=["Observability"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get("/health", summary="Health check endpoint")
def health_check(request: Request):
    """Report service health and the active store backend."""
    services = getattr(request.app.state, "services", None)
    return {
        "status": "healthy" if services is not None else "starting",
        "store_backend": services.store_backend if services is not None else None,
    }
