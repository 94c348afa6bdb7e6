"""Router – list / create / delete for places, events, services and brands."""

from typing import Any

from fastapi import APIRouter, Response

from slp_admin.config import ENTITY_REGISTRY
from slp_admin.dependencies import SupabaseDep
from slp_admin.schemas.entities import ENTITY_FORMS
from slp_admin.services.entity_service import create_entity, delete_entity, list_entities


def build_entity_router(kind: str) -> APIRouter:
    """One router per table; the body schema comes from ``ENTITY_FORMS``."""
    form_cls = ENTITY_FORMS[kind]
    label = ENTITY_REGISTRY[kind]["label"]
    router = APIRouter(prefix=f"/admin/{kind}", tags=[f"{label}s"])

    @router.get("", summary=f"List {kind}")
    async def list_rows(
        client: SupabaseDep,
        search: str = "",
        category: str = "",
    ) -> list[dict[str, Any]]:
        """Every row, ordered for display, filtered by free text and category."""
        return await list_entities(client, kind, search=search, category=category)

    @router.post("", status_code=201, summary=f"Add {label.lower()}")
    async def create_row(form: form_cls, client: SupabaseDep) -> dict[str, Any]:
        return await create_entity(client, kind, form)

    @router.delete("/{row_id}", status_code=204, summary=f"Delete {label.lower()}")
    async def delete_row(row_id: int, client: SupabaseDep) -> Response:
        await delete_entity(client, kind, row_id)
        return Response(status_code=204)

    return router


routers = [build_entity_router(kind) for kind in ENTITY_REGISTRY]
