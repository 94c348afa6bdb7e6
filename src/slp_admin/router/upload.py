"""Router – validated file upload to Supabase storage."""

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from slp_admin.config import UPLOAD_PRESETS
from slp_admin.dependencies import SupabaseDep
from slp_admin.schemas.upload import UploadPresetInfo, UploadPresetsResponse, UploadResponse
from slp_admin.services.upload_service import (
    UploadRequest,
    get_preset,
    upload_file,
    validate,
)

router = APIRouter(prefix="/admin/uploads", tags=["Upload"])


@router.get("/presets", response_model=UploadPresetsResponse)
def list_presets() -> UploadPresetsResponse:
    """Return every upload preset with its accepted formats and size limit."""
    presets = []
    for preset_id in UPLOAD_PRESETS:
        constraints = get_preset(preset_id)
        presets.append(
            UploadPresetInfo(
                id=preset_id,
                label=constraints.label,
                allowed_types=list(constraints.allowed_types),
                max_size_mb=constraints.max_size_mb,
                summary=constraints.describe(),
            )
        )
    return UploadPresetsResponse(presets=presets)


@router.post("/{preset_id}", response_model=UploadResponse)
async def upload(
    preset_id: str,
    client: SupabaseDep,
    file: UploadFile = File(...),
    folder: str = Form(...),
) -> UploadResponse:
    """
    Upload a file for an entity form and return its public URL.

    Parameters
    ----------
    preset_id : str        – ``file``, ``image``, ``document`` or ``pdf``.
    file      : UploadFile – the chosen file.
    folder    : str        – storage folder, e.g. ``places``.

    Returns
    -------
    UploadResponse with:
        - url     : public URL of the stored object
        - path    : ``<folder>/<uuid>.<ext>`` inside the bucket
        - preview : PNG data URL thumbnail (images only, best effort)
    """
    if preset_id not in UPLOAD_PRESETS:
        raise HTTPException(
            status_code=404,
            detail=f"Upload preset '{preset_id}' not found. "
                   f"Use GET /admin/uploads/presets for available presets.",
        )
    constraints = get_preset(preset_id)
    content_type = file.content_type or "application/octet-stream"

    try:
        # ── reject on the declared size before reading the body ──
        if file.size is not None:
            validate(content_type, file.size, constraints)

        content = await file.read()
        result = await upload_file(
            UploadRequest(
                content=content,
                filename=file.filename or "upload",
                content_type=content_type,
                folder=folder,
                constraints=constraints,
            ),
            client,
        )
    finally:
        # ── always release the handle so the same file can be sent again ──
        await file.close()

    return UploadResponse(
        url=result.url,
        path=result.path,
        filename=result.filename,
        size=result.size,
        content_type=result.content_type,
        preview=result.preview,
    )
