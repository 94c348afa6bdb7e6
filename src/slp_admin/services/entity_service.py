"""Service layer – list / create / delete for directory entities."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from slp_admin.config import ENTITY_REGISTRY
from slp_admin.schemas.entities import EntityForm
from slp_admin.services.supabase_service import SupabaseClient

logger = logging.getLogger(__name__)


def matches(row: dict[str, Any], search_fields: tuple[str, ...], search: str, category: str) -> bool:
    """Case-insensitive substring search over *search_fields* plus exact category."""
    if category and row.get("category") != category:
        return False
    if not search:
        return True
    needle = search.lower()
    return any(needle in str(row.get(field) or "").lower() for field in search_fields)


async def list_entities(
    client: SupabaseClient,
    kind: str,
    search: str = "",
    category: str = "",
) -> list[dict[str, Any]]:
    """Fetch every row of *kind* in display order, then filter in process."""
    meta = ENTITY_REGISTRY[kind]
    rows = await client.select(kind, order_by=meta["order_by"], ascending=meta["ascending"])
    search = search.strip()
    return [row for row in rows if matches(row, meta["search_fields"], search, category)]


async def create_entity(client: SupabaseClient, kind: str, form: EntityForm) -> dict[str, Any]:
    row = await client.insert(kind, form.to_record())
    logger.info("➕ %s added: id=%s", ENTITY_REGISTRY[kind]["label"], row.get("id"))
    return row


async def delete_entity(client: SupabaseClient, kind: str, row_id: int) -> None:
    await client.delete(kind, row_id)
    logger.info("🗑️  %s deleted: id=%s", ENTITY_REGISTRY[kind]["label"], row_id)


async def count_all(client: SupabaseClient) -> dict[str, int]:
    """Row count per entity table; the four queries run concurrently."""
    kinds = list(ENTITY_REGISTRY)
    counts = await asyncio.gather(*(client.count(kind) for kind in kinds))
    return dict(zip(kinds, counts))
