"""
OurNotes — Notes API Tests
============================

What:  End-to-end tests of the /api/{kind} endpoints.
How:   HTTPX AsyncClient against the real app and a throwaway SQLite schema
       (see the test_client fixture).

What we test:
    ✅ Create → 201 with minted id/created_at, listed first afterwards
    ✅ Missing/invalid fields → 400 with the kind's message, no row written
    ✅ Ordering: newest first (shopping/map), latest date first (calendar)
    ✅ Update echo, 404 on unknown id
    ✅ Delete twice → success then 404
    ✅ Store failures → 500 with a generic message (mocked and real store)
    ✅ Unexpected errors → 500 that still carries CORS and request-id headers
    ✅ Liveness, health and CORS headers
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from ournotes.database import engine
from ournotes.exceptions import StoreError
from ournotes.main import create_app
from ournotes.services.note_service import note_services


class TestShoppingAndMapNotes:

    @pytest.mark.asyncio
    async def test_create_then_list_first(self, test_client):
        await test_client.post("/api/shopping-notes", json={"text": "bread"})
        response = await test_client.post("/api/shopping-notes", json={"text": "milk"})

        assert response.status_code == 201
        created = response.json()
        assert created["text"] == "milk"
        assert str(uuid.UUID(created["id"])) == created["id"]
        assert "created_at" in created

        listing = await test_client.get("/api/shopping-notes")
        assert listing.status_code == 200
        assert [n["text"] for n in listing.json()] == ["milk", "bread"]
        assert listing.json()[0] == created

    @pytest.mark.asyncio
    async def test_ids_unique(self, test_client):
        ids = set()
        for _ in range(3):
            response = await test_client.post("/api/map-notes", json={"text": "same"})
            ids.add(response.json()["id"])
        assert len(ids) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": None}])
    async def test_create_without_text(self, test_client, body):
        response = await test_client.post("/api/map-notes", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}
        assert (await test_client.get("/api/map-notes")).json() == []

    @pytest.mark.asyncio
    async def test_malformed_body(self, test_client):
        response = await test_client.post(
            "/api/shopping-notes",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    @pytest.mark.asyncio
    async def test_update(self, test_client):
        created = (await test_client.post("/api/shopping-notes", json={"text": "milk"})).json()

        response = await test_client.put(
            f"/api/shopping-notes/{created['id']}", json={"text": "oat milk"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "text": "oat milk", "success": True}
        listing = (await test_client.get("/api/shopping-notes")).json()
        assert listing[0]["text"] == "oat milk"
        assert listing[0]["created_at"] == created["created_at"]

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client):
        response = await test_client.put("/api/map-notes/unknown-id", json={"text": "x"})
        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_update_without_text(self, test_client):
        created = (await test_client.post("/api/map-notes", json={"text": "park"})).json()

        response = await test_client.put(f"/api/map-notes/{created['id']}", json={"text": ""})

        assert response.status_code == 400
        assert (await test_client.get("/api/map-notes")).json()[0]["text"] == "park"

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, test_client):
        response = await test_client.delete("/api/map-notes/unknown-id")
        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        created = (await test_client.post("/api/map-notes", json={"text": "museum"})).json()

        first = await test_client.delete(f"/api/map-notes/{created['id']}")
        second = await test_client.delete(f"/api/map-notes/{created['id']}")

        assert first.status_code == 200
        assert first.json() == {"success": True}
        assert second.status_code == 404
        assert (await test_client.get("/api/map-notes")).json() == []

    @pytest.mark.asyncio
    async def test_collections_are_independent(self, test_client):
        await test_client.post("/api/shopping-notes", json={"text": "milk"})
        assert (await test_client.get("/api/map-notes")).json() == []


class TestCalendarNotes:

    @pytest.mark.asyncio
    async def test_missing_date_and_person(self, test_client):
        response = await test_client.post("/api/calendar-notes", json={"text": "meeting"})

        assert response.status_code == 400
        assert response.json() == {"error": "Text, date, and person are required"}
        assert (await test_client.get("/api/calendar-notes")).json() == []

    @pytest.mark.asyncio
    async def test_invalid_person(self, test_client):
        response = await test_client.post(
            "/api/calendar-notes", json={"text": "gym", "date": "2024-03-01", "person": 5}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Person must be 1 or 2"}

    @pytest.mark.asyncio
    async def test_listed_by_date_descending(self, test_client):
        for text, day in [("b", "2024-03-02"), ("c", "2024-03-03"), ("a", "2024-03-01")]:
            response = await test_client.post(
                "/api/calendar-notes", json={"text": text, "date": day, "person": 1}
            )
            assert response.status_code == 201

        listing = (await test_client.get("/api/calendar-notes")).json()
        assert [n["text"] for n in listing] == ["c", "b", "a"]
        assert listing[0]["date"] == "2024-03-03"
        assert listing[0]["person"] == 1

    @pytest.mark.asyncio
    async def test_update_echoes_all_fields(self, test_client):
        created = (
            await test_client.post(
                "/api/calendar-notes",
                json={"text": "dinner", "date": "2024-06-01T00:00:00.000Z", "person": 1},
            )
        ).json()
        assert created["date"] == "2024-06-01"

        response = await test_client.put(
            f"/api/calendar-notes/{created['id']}",
            json={"text": "late dinner", "date": "2024-06-02", "person": 2},
        )

        assert response.json() == {
            "id": created["id"],
            "text": "late dinner",
            "date": "2024-06-02",
            "person": 2,
            "success": True,
        }

    @pytest.mark.asyncio
    async def test_timestamp_keeps_its_own_day(self, test_client):
        # local midnight in UTC+9 is still May 1st
        response = await test_client.post(
            "/api/calendar-notes",
            json={"text": "tokyo", "date": "2024-05-01T00:00:00+09:00", "person": 1},
        )
        assert response.status_code == 201
        assert response.json()["date"] == "2024-05-01"

        response = await test_client.post(
            "/api/calendar-notes",
            json={"text": "utc", "date": "2024-04-30T15:00:00.000Z", "person": 1},
        )
        assert response.json()["date"] == "2024-04-30"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("person", [True, "1", 1.5])
    async def test_person_must_be_an_integer(self, test_client, person):
        response = await test_client.post(
            "/api/calendar-notes", json={"text": "gym", "date": "2024-03-01", "person": person}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
        assert (await test_client.get("/api/calendar-notes")).json() == []


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_list_store_error(self, test_client):
        service = note_services["shopping-notes"]
        failing = AsyncMock(side_effect=StoreError("Failed to fetch shopping notes"))
        with patch.object(service, "list_notes", failing):
            response = await test_client.get("/api/shopping-notes")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch shopping notes"}

    @pytest.mark.asyncio
    async def test_create_store_error(self, test_client):
        service = note_services["calendar-notes"]
        failing = AsyncMock(side_effect=StoreError("Failed to create calendar note"))
        with patch.object(service, "create_note", failing):
            response = await test_client.post(
                "/api/calendar-notes", json={"text": "x", "date": "2024-01-01", "person": 1}
            )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create calendar note"}


class TestServiceSurface:

    @pytest.mark.asyncio
    async def test_root_liveness(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Our Notes API is running!"}

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_cors_reflects_any_origin(self, test_client):
        response = await test_client.options(
            "/api/shopping-notes",
            headers={
                "Origin": "https://example.org",
                "Access-Control-Request-Method": "DELETE",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://example.org"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-max-age"] == "86400"


class TestStoreOutage:
    """A missing table makes every statement fail inside the real store."""

    @pytest.mark.asyncio
    async def test_every_operation_reports_500(self, test_client):
        created = (await test_client.post("/api/shopping-notes", json={"text": "milk"})).json()
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE shopping_notes"))

        listing = await test_client.get("/api/shopping-notes")
        creating = await test_client.post("/api/shopping-notes", json={"text": "eggs"})
        updating = await test_client.put(
            f"/api/shopping-notes/{created['id']}", json={"text": "oat milk"}
        )
        deleting = await test_client.delete(f"/api/shopping-notes/{created['id']}")

        assert [r.status_code for r in (listing, creating, updating, deleting)] == [500] * 4
        assert listing.json() == {"error": "Failed to fetch shopping notes"}
        assert creating.json() == {"error": "Failed to create shopping note"}
        assert updating.json() == {"error": "Failed to update shopping note"}
        assert deleting.json() == {"error": "Failed to delete shopping note"}

        # other collections are unaffected
        assert (await test_client.get("/api/map-notes")).status_code == 200


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_500_keeps_cors_and_request_id(self):
        app = create_app()

        @app.get("/explode")
        async def explode():
            raise RuntimeError("boom")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/explode",
                headers={"Origin": "https://example.org", "X-Request-ID": "err1"},
            )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "https://example.org"
        assert response.headers["X-Request-ID"] == "err1"
