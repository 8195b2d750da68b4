"""
NoteKeep Backend — Notes API Tests
====================================

What:  End-to-end tests of /api/notes through the FastAPI app.
Why:   Status codes, error bodies, and headers are the contract clients see.
How:   HTTPX AsyncClient over ASGITransport, backed by in-memory SQLite.

What we test:
    ✅ Every notes route requires a bearer token
    ✅ CRUD round trip with Location / X-Total-Count headers
    ✅ Cross-owner access is indistinguishable from absence (404)
    ✅ Malformed ids → 400 bad_request; bad bodies → 400 validation_failed
    ✅ Storage faults → 500 with a generic message
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import auth_headers
from notekeep.exceptions import PersistenceError


async def _create(client, headers, title="Shopping", content="milk, eggs"):
    response = await client.post(
        "/api/notes", json={"title": title, "content": content}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthenticationRequired:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/notes"),
            ("POST", "/api/notes"),
            ("GET", f"/api/notes/{uuid.uuid4()}"),
            ("PUT", f"/api/notes/{uuid.uuid4()}"),
            ("DELETE", f"/api/notes/{uuid.uuid4()}"),
        ],
    )
    async def test_missing_token_is_401(self, test_client, method, path):
        response = await test_client.request(
            method, path, json={"title": "t", "content": "c"} if method in ("POST", "PUT") else None
        )

        assert response.status_code == 401
        assert response.json()["error"] == "access_denied"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_wrong_scheme_is_401(self, test_client, create_user):
        alice = await create_user()
        token = auth_headers(alice)["Authorization"].split(" ", 1)[1]

        response = await test_client.get("/api/notes", headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401


class TestNoteLifecycle:

    @pytest.mark.asyncio
    async def test_create_get_update_delete(self, test_client, create_user, frozen_clock):
        alice = await create_user()
        headers = auth_headers(alice)

        response = await test_client.post(
            "/api/notes", json={"title": "  Shopping  ", "content": "milk, eggs"}, headers=headers
        )
        assert response.status_code == 201
        created = response.json()
        assert created["title"] == "Shopping"
        assert created["owner_id"] == str(alice.id)
        assert response.headers["location"] == f"/api/notes/{created['id']}"

        response = await test_client.get(f"/api/notes/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["content"] == "milk, eggs"
        assert response.headers["cache-control"] == "no-store"

        response = await test_client.put(
            f"/api/notes/{created['id']}",
            json={"title": "Groceries", "content": "milk, eggs, bread"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Groceries"

        response = await test_client.delete(f"/api/notes/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Note deleted successfully", "id": created["id"]}

        response = await test_client.get(f"/api/notes/{created['id']}", headers=headers)
        assert response.status_code == 404

        response = await test_client.delete(f"/api/notes/{created['id']}", headers=headers)
        assert response.status_code == 404


class TestListing:

    @pytest.mark.asyncio
    async def test_pagination_and_headers(self, test_client, create_user, frozen_clock):
        alice = await create_user()
        headers = auth_headers(alice)
        for i in range(12):
            await _create(test_client, headers, title=f"Note {i}", content=f"body {i}")

        response = await test_client.get("/api/notes", params={"page": 2}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert response.headers["x-total-count"] == "12"
        assert [n["title"] for n in body["notes"]] == ["Note 1", "Note 0"]
        assert body["pagination"] == {
            "current_page": 2,
            "page_size": 10,
            "total_pages": 2,
            "total_notes": 12,
            "has_next": False,
            "has_prev": True,
        }

    @pytest.mark.asyncio
    async def test_garbage_paging_uses_defaults(self, test_client, create_user, frozen_clock):
        alice = await create_user()
        headers = auth_headers(alice)
        await _create(test_client, headers)

        response = await test_client.get(
            "/api/notes", params={"page": "abc", "page_size": "-5"}, headers=headers
        )

        assert response.status_code == 200
        meta = response.json()["pagination"]
        assert (meta["current_page"], meta["page_size"]) == (1, 10)

    @pytest.mark.asyncio
    async def test_search_is_scoped_to_caller(self, test_client, create_user, frozen_clock):
        alice = await create_user("alice@example.com")
        bob = await create_user("bob@example.com", "Bob")
        await _create(test_client, auth_headers(alice), "Shopping", "milk, eggs")
        await _create(test_client, auth_headers(alice), "Work", "finish report")

        response = await test_client.get(
            "/api/notes", params={"search": "report"}, headers=auth_headers(alice)
        )
        assert [n["title"] for n in response.json()["notes"]] == ["Work"]

        response = await test_client.get(
            "/api/notes", params={"search": "report"}, headers=auth_headers(bob)
        )
        body = response.json()
        assert body["notes"] == []
        assert body["pagination"]["total_notes"] == 0
        assert body["pagination"]["total_pages"] == 0

    @pytest.mark.asyncio
    async def test_long_search_is_an_ordinary_search(self, test_client, create_user, frozen_clock):
        alice = await create_user()
        headers = auth_headers(alice)
        long_word = "x" * 300
        await _create(test_client, headers, "Long", f"starts with {long_word}")
        await _create(test_client, headers, "Short", "nothing here")

        miss = await test_client.get("/api/notes", params={"search": "y" * 201}, headers=headers)
        hit = await test_client.get("/api/notes", params={"search": long_word}, headers=headers)

        assert miss.status_code == 200
        assert miss.json()["pagination"]["total_notes"] == 0
        assert hit.status_code == 200
        assert [n["title"] for n in hit.json()["notes"]] == ["Long"]

    @pytest.mark.asyncio
    async def test_huge_page_number_returns_empty_page(
        self, test_client, create_user, frozen_clock
    ):
        alice = await create_user()
        headers = auth_headers(alice)
        await _create(test_client, headers)

        response = await test_client.get(
            "/api/notes",
            params={"page": "99999999999999999999", "page_size": "99999999999999999999"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["notes"] == []
        assert body["pagination"]["total_notes"] == 1
        assert body["pagination"]["total_pages"] == 1
        assert body["pagination"]["has_next"] is False
        assert body["pagination"]["has_prev"] is True


class TestOwnership:

    @pytest.mark.asyncio
    async def test_foreign_note_looks_absent(self, test_client, create_user, frozen_clock):
        alice = await create_user("alice@example.com")
        bob = await create_user("bob@example.com", "Bob")
        note = await _create(test_client, auth_headers(alice), "Private", "alice only")
        path = f"/api/notes/{note['id']}"
        bob_headers = auth_headers(bob)

        foreign = await test_client.get(path, headers=bob_headers)
        missing = await test_client.get(f"/api/notes/{uuid.uuid4()}", headers=bob_headers)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json()["message"] == missing.json()["message"]

        response = await test_client.put(
            path, json={"title": "Hijacked", "content": "pwned"}, headers=bob_headers
        )
        assert response.status_code == 404
        response = await test_client.delete(path, headers=bob_headers)
        assert response.status_code == 404

        response = await test_client.get(path, headers=auth_headers(alice))
        assert response.status_code == 200
        assert response.json()["title"] == "Private"


class TestBadInput:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_malformed_id_is_bad_request(self, test_client, create_user, method):
        alice = await create_user()

        response = await test_client.request(
            method,
            "/api/notes/123",
            json={"title": "t", "content": "c"} if method == "PUT" else None,
            headers=auth_headers(alice),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "bad_request"
        assert body["message"] == "Invalid note ID format"

    @pytest.mark.asyncio
    async def test_length_boundaries(self, test_client, create_user, frozen_clock):
        alice = await create_user()
        headers = auth_headers(alice)

        ok = await test_client.post(
            "/api/notes", json={"title": "t" * 100, "content": "c" * 5000}, headers=headers
        )
        assert ok.status_code == 201

        too_long = await test_client.post(
            "/api/notes", json={"title": "t" * 101, "content": "c" * 5001}, headers=headers
        )
        assert too_long.status_code == 400
        body = too_long.json()
        assert body["error"] == "validation_failed"
        assert [e["field"] for e in body["details"]["errors"]] == ["title", "content"]

        listing = await test_client.get("/api/notes", headers=headers)
        assert listing.json()["pagination"]["total_notes"] == 1

    @pytest.mark.asyncio
    async def test_missing_field_is_validation_failure(self, test_client, create_user):
        alice = await create_user()

        response = await test_client.post(
            "/api/notes", json={"title": "Only a title"}, headers=auth_headers(alice)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_failed"
        assert body["details"]["errors"][0]["field"] == "content"


class TestInternalFailure:

    @pytest.mark.asyncio
    async def test_storage_fault_is_generic_500(self, test_client, create_user, monkeypatch):
        from notekeep.services.note_service import note_service

        failing_store = MagicMock()
        failing_store.list = AsyncMock(side_effect=PersistenceError("relation notes is on fire"))
        monkeypatch.setattr(note_service, "store", failing_store)
        alice = await create_user()

        response = await test_client.get("/api/notes", headers=auth_headers(alice))

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_error"
        assert "fire" not in response.text
        assert body["request_id"]
