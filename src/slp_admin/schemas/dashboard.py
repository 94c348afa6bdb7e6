from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Response schema for GET /admin."""
    places: int = 0
    events: int = 0
    services: int = 0
    brands: int = 0


class CategoriesResponse(BaseModel):
    """Response schema for GET /admin/categories."""
    places: list[str]
    events: list[str]
    services: list[str]
    brands: list[str]
