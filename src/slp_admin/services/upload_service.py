"""Service layer – validated file uploads into Supabase storage.

One validator serves every upload widget; the image / document / PDF
variants are nothing more than ``UploadConstraints`` presets from
``config.UPLOAD_PRESETS``.

Flow for a single upload::

    validate size → validate type → (image) preview → upload once → public URL

The storage backend is only contacted after both checks pass, and the
upload itself is attempted exactly once per call.
"""

from __future__ import annotations

import base64
import io
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import PurePosixPath

from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from slp_admin.config import PREVIEW_SIZE, UPLOAD_PRESETS
from slp_admin.exceptions import (
    BackendError,
    BucketMissing,
    FileTooLarge,
    PermissionDenied,
    UnsupportedType,
    UploadFailed,
    ValidationError,
    format_name,
)
from slp_admin.services.supabase_service import SupabaseClient

logger = logging.getLogger(__name__)

_FOLDER_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*(/[a-z0-9][a-z0-9_-]*)*$")


# ──────────────────────────────────────────────
# Types
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class UploadConstraints:
    """What a given upload widget accepts."""

    allowed_types: tuple[str, ...] = ()
    max_size_mb: float = 5
    label: str = "Choose File"

    @property
    def max_size_bytes(self) -> int:
        return int(self.max_size_mb * 1024 * 1024)

    def describe(self) -> str:
        """Human summary, e.g. ``JPEG, PNG up to 5MB``."""
        if not self.allowed_types:
            formats = "All files"
        else:
            formats = ", ".join(format_name(t) for t in self.allowed_types)
        return f"{formats} up to {self.max_size_mb:g}MB"


@dataclass(frozen=True)
class UploadRequest:
    content: bytes
    filename: str
    content_type: str
    folder: str
    constraints: UploadConstraints

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadResult:
    url: str
    path: str
    filename: str
    size: int
    content_type: str
    preview: str | None = None


def get_preset(preset_id: str) -> UploadConstraints:
    """Build constraints for a preset registered in ``UPLOAD_PRESETS``."""
    meta = UPLOAD_PRESETS[preset_id]
    return UploadConstraints(
        allowed_types=tuple(meta["allowed_types"]),
        max_size_mb=meta["max_size_mb"],
        label=meta["label"],
    )


# ──────────────────────────────────────────────
# Validation
# ──────────────────────────────────────────────
def validate(content_type: str, size: int, constraints: UploadConstraints) -> None:
    """Raise ``FileTooLarge`` / ``UnsupportedType`` when the file is rejected."""
    if size > constraints.max_size_bytes:
        raise FileTooLarge(size, constraints.max_size_mb)

    if constraints.allowed_types and content_type not in constraints.allowed_types:
        raise UnsupportedType(content_type, constraints.allowed_types)


def validate_folder(folder: str) -> str:
    folder = folder.strip().strip("/")
    if not _FOLDER_RE.match(folder):
        raise ValidationError(f"Invalid upload folder '{folder}'")
    return folder


# ──────────────────────────────────────────────
# Naming
# ──────────────────────────────────────────────
def file_extension(filename: str, content_type: str) -> str:
    """Extension of the original name, else the MIME type's, else ``bin``."""
    suffix = PurePosixPath(filename).suffix
    if suffix and suffix != ".":
        return suffix[1:]
    guessed = mimetypes.guess_extension(content_type or "")
    return guessed[1:] if guessed else "bin"


def build_storage_path(folder: str, filename: str, content_type: str) -> str:
    """``<folder>/<uuid4>.<ext>`` – a fresh name on every call."""
    return f"{folder}/{uuid.uuid4()}.{file_extension(filename, content_type)}"


# ──────────────────────────────────────────────
# Preview
# ──────────────────────────────────────────────
def build_preview(content: bytes, content_type: str) -> str | None:
    """
    Best-effort inline preview for images, as a PNG ``data:`` URL.

    Formats PIL cannot rasterise (SVG, truncated files …) simply yield
    ``None``; a missing preview never blocks the upload.
    """
    if not content_type.startswith("image/"):
        return None
    try:
        with Image.open(io.BytesIO(content)) as image:
            image.thumbnail(PREVIEW_SIZE)
            buffer = io.BytesIO()
            image.convert("RGBA").save(buffer, format="PNG")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.info("No preview for %s upload: %s", content_type, exc)
        return None
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


# ──────────────────────────────────────────────
# Upload
# ──────────────────────────────────────────────
def classify_storage_error(exc: BackendError, bucket: str) -> BackendError:
    """Map a raw storage rejection onto the user-facing failure kinds."""
    message = exc.message.lower()
    if "bucket" in message and ("not found" in message or "does not exist" in message):
        return BucketMissing(bucket, exc.status_code)
    if (
        exc.status_code in (401, 403)
        or "permission denied" in message
        or "row-level security" in message
        or "unauthorized" in message
    ):
        return PermissionDenied(exc.status_code)
    return UploadFailed(exc.message, exc.status_code)


async def upload_file(request: UploadRequest, client: SupabaseClient) -> UploadResult:
    """
    Validate *request* and store it under a freshly generated name.

    Raises
    ------
    FileTooLarge, UnsupportedType, ValidationError
        Before any network call.
    BucketMissing, PermissionDenied, UploadFailed
        When the storage backend rejects the write.
    NetworkError
        When the storage backend cannot be reached.
    """
    validate(request.content_type, request.size, request.constraints)
    folder = validate_folder(request.folder)

    preview = None
    if request.content_type.startswith("image/"):
        preview = await run_in_threadpool(build_preview, request.content, request.content_type)

    path = build_storage_path(folder, request.filename, request.content_type)
    try:
        await client.upload(path, request.content, request.content_type)
    except BackendError as exc:
        raise classify_storage_error(exc, client.bucket) from exc

    logger.info("📤 Uploaded %s (%d bytes) as %s", request.filename, request.size, path)

    return UploadResult(
        url=client.public_url(path),
        path=path,
        filename=request.filename,
        size=request.size,
        content_type=request.content_type,
        preview=preview,
    )
