"""Tests for the Supabase client and the storage provisioning step."""

import asyncio
import json

import httpx
import pytest

from slp_admin.config import BUCKET_ALLOWED_MIME_TYPES, BUCKET_FILE_SIZE_LIMIT, UPLOAD_PRESETS
from slp_admin.exceptions import BackendError, NetworkError
from slp_admin.services import storage_service
from slp_admin.services.entity_service import matches
from slp_admin.services.supabase_service import _parse_content_range


# ──────────────────────────────────────────────
# SupabaseClient
# ──────────────────────────────────────────────
@pytest.mark.parametrize(
    ("header", "expected"),
    [("0-24/25", 25), ("*/0", 0), ("", 0), ("0-9/*", 0)],
)
def test_parse_content_range(header: str, expected: int) -> None:
    assert _parse_content_range(header) == expected


def test_select_sends_auth_headers_and_order(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(200, json=[{"id": 1}]))
    rows = asyncio.run(fake.client.select("brands", order_by="name", ascending=False))

    assert rows == [{"id": 1}]
    request = fake.requests[0]
    assert request.url.path == "/rest/v1/brands"
    assert request.url.params["select"] == "*"
    assert request.url.params["order"] == "name.desc"
    assert request.headers["authorization"] == "Bearer anon-key"


def test_backend_error_carries_message(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(
        400, json={"code": "42703", "message": 'column "start_time" does not exist'},
    ))
    with pytest.raises(BackendError) as exc_info:
        asyncio.run(fake.client.insert("events", {"title": "x"}))
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == 'column "start_time" does not exist'


def test_backend_error_with_plain_text_body(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(502, text="upstream gone"))
    with pytest.raises(BackendError) as exc_info:
        asyncio.run(fake.client.select("places"))
    assert exc_info.value.message == "upstream gone"


def test_unreadable_success_body_is_backend_error(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(201, content=b""))
    with pytest.raises(BackendError) as exc_info:
        asyncio.run(fake.client.insert("brands", {"name": "x"}))
    assert exc_info.value.message == "Unexpected response from Supabase during insert into brands."

    fake.handler = lambda request: httpx.Response(200, text="<html>gateway</html>")
    with pytest.raises(BackendError):
        asyncio.run(fake.client.select("places"))
    with pytest.raises(BackendError):
        asyncio.run(fake.client.list_buckets())


def test_transport_failure_is_network_error(make_supabase) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    fake = make_supabase(handler)
    with pytest.raises(NetworkError):
        asyncio.run(fake.client.count("places"))


def test_public_url(make_supabase) -> None:
    fake = make_supabase()
    assert fake.client.public_url("places/a b.png") == (
        "https://db.test/storage/v1/object/public/images/places/a%20b.png"
    )


# ──────────────────────────────────────────────
# ensure_storage_bucket
# ──────────────────────────────────────────────
def test_bucket_created_once_when_missing(make_supabase) -> None:
    created = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=[{"name": name} for name in created])
        body = json.loads(request.content)
        created.append(body["name"])
        return httpx.Response(200, json={"name": body["name"]})

    fake = make_supabase(handler)
    assert asyncio.run(storage_service.ensure_storage_bucket(fake.client))
    assert asyncio.run(storage_service.ensure_storage_bucket(fake.client))

    assert created == ["images"]
    create_request = fake.requests[1]
    body = json.loads(create_request.content)
    assert body["public"] is True
    assert body["file_size_limit"] == BUCKET_FILE_SIZE_LIMIT
    assert "image/webp" in body["allowed_mime_types"]
    # the second call is answered from the process-wide flag
    assert len(fake.requests) == 2
    assert storage_service.is_initialized()


def test_provisioned_bucket_admits_every_preset() -> None:
    assert BUCKET_FILE_SIZE_LIMIT == 15 * 1024 * 1024
    for preset in UPLOAD_PRESETS.values():
        assert preset["max_size_mb"] * 1024 * 1024 <= BUCKET_FILE_SIZE_LIMIT
        assert set(preset["allowed_types"]) <= set(BUCKET_ALLOWED_MIME_TYPES)
    assert len(BUCKET_ALLOWED_MIME_TYPES) == len(set(BUCKET_ALLOWED_MIME_TYPES))


def test_existing_bucket_is_left_alone(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(200, json=[{"name": "images"}]))
    assert asyncio.run(storage_service.ensure_storage_bucket(fake.client))
    assert [r.method for r in fake.requests] == ["GET"]


def test_provisioning_failure_can_be_retried(make_supabase) -> None:
    fake = make_supabase(lambda request: httpx.Response(401, json={"message": "Invalid API key"}))
    assert not asyncio.run(storage_service.ensure_storage_bucket(fake.client))
    assert not storage_service.is_initialized()

    fake.handler = lambda request: httpx.Response(200, json=[{"name": "images"}])
    assert asyncio.run(storage_service.ensure_storage_bucket(fake.client))


# ──────────────────────────────────────────────
# entity filtering
# ──────────────────────────────────────────────
def test_matches_handles_missing_fields() -> None:
    row = {"name": "Pan de Caja", "category": "food", "description": None}
    fields = ("name", "description", "notable_products")
    assert matches(row, fields, "caja", "")
    assert matches(row, fields, "", "food")
    assert not matches(row, fields, "caja", "crafts")
    assert not matches(row, fields, "queso", "")
