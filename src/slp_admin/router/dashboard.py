"""Router – admin dashboard."""

from fastapi import APIRouter

from slp_admin.config import ENTITY_REGISTRY
from slp_admin.dependencies import SupabaseDep
from slp_admin.schemas.dashboard import CategoriesResponse, DashboardStats
from slp_admin.services.entity_service import count_all

router = APIRouter(prefix="/admin", tags=["Dashboard"])


@router.get("", response_model=DashboardStats)
async def dashboard(client: SupabaseDep) -> DashboardStats:
    """Number of rows in each directory table."""
    return DashboardStats(**await count_all(client))


@router.get("/categories", response_model=CategoriesResponse)
def categories() -> CategoriesResponse:
    """Allowed category values per entity, for form selects and list filters."""
    return CategoriesResponse(
        **{kind: meta["categories"] for kind, meta in ENTITY_REGISTRY.items()}
    )
