"""Service layer – one-time provisioning of the upload bucket."""

from __future__ import annotations

import logging

from slp_admin.config import BUCKET_ALLOWED_MIME_TYPES, BUCKET_FILE_SIZE_LIMIT
from slp_admin.exceptions import AdminError
from slp_admin.services.supabase_service import SupabaseClient

logger = logging.getLogger(__name__)

_initialized = False


async def ensure_storage_bucket(client: SupabaseClient) -> bool:
    """
    Make sure the public upload bucket exists.

    Idempotent: the first successful call sets a process-wide flag and every
    later call returns immediately.  Failures are logged and leave the flag
    unset, so startup never aborts and a later call can try again.

    Returns ``True`` once the bucket is known to exist.
    """
    global _initialized
    if _initialized:
        return True

    try:
        if not await client.bucket_exists(client.bucket):
            await client.create_bucket(
                client.bucket,
                public=True,
                file_size_limit=BUCKET_FILE_SIZE_LIMIT,
                allowed_mime_types=BUCKET_ALLOWED_MIME_TYPES,
            )
            logger.info("🪣 Created storage bucket %s", client.bucket)
    except AdminError as exc:
        logger.error("Error initializing storage bucket %s: %s", client.bucket, exc)
        return False

    _initialized = True
    return True


def reset_storage_state() -> None:
    """Forget the provisioning flag (used when the client is replaced)."""
    global _initialized
    _initialized = False


def is_initialized() -> bool:
    return _initialized
