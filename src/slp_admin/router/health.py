"""Router – health check."""

from fastapi import APIRouter

from slp_admin.services import storage_service

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness / readiness probe."""
    return {"status": "ok", "storage_ready": storage_service.is_initialized()}
