from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response schema for POST /admin/uploads/{preset}."""
    url: str
    path: str
    filename: str
    size: int
    content_type: str
    preview: str | None = None


class UploadPresetInfo(BaseModel):
    """Single preset entry returned by /admin/uploads/presets."""
    id: str
    label: str
    allowed_types: list[str]
    max_size_mb: float
    summary: str


class UploadPresetsResponse(BaseModel):
    """Response schema for GET /admin/uploads/presets."""
    presets: list[UploadPresetInfo]
