"""End-to-end HTTP tests for the auth and ownership flow."""

from collections.abc import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tasknote.errors import AuthorizationError
from tasknote.web.error_handlers import user_error_handler
from tasknote.web.server import create_fastapi_app


@pytest_asyncio.fixture
async def client(app, config) -> AsyncGenerator[AsyncClient]:
    fastapi_app = create_fastapi_app(app, config)
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as client:
        yield client


async def register(client: AsyncClient, email: str, password: str = "secret1") -> dict:
    response = await client.post("/api/v1/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestAuthEndpoints:
    """Tests for registration, login and the profile."""

    async def test_register_then_login(self, client):
        """Test that login returns a token for the registered user."""
        registered = await register(client, "alice@example.com")
        response = await client.post("/api/v1/auth/login", json={"email": "Alice@Example.com", "password": "secret1"})
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == registered["user"]["id"]
        assert "password_hash" not in body["user"]

        profile = await client.get("/api/v1/profile", headers=bearer(body["token"]))
        assert profile.status_code == 200
        assert profile.json() == {"id": registered["user"]["id"], "email": "alice@example.com"}

    async def test_duplicate_registration_conflicts(self, client):
        """Test that registering the same email twice is 409."""
        await register(client, "alice@example.com")
        response = await client.post("/api/v1/auth/register", json={"email": "ALICE@example.com", "password": "secret1"})
        assert response.status_code == 409
        assert response.json()["type"] == "conflict"

    async def test_invalid_registration(self, client):
        """Test that a short password is 400."""
        response = await client.post("/api/v1/auth/register", json={"email": "alice@example.com", "password": "12345"})
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    async def test_wrong_password(self, client):
        """Test that bad credentials are 401."""
        await register(client, "alice@example.com")
        response = await client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
        assert response.status_code == 401

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Token abc"}, {"Authorization": "Bearer abc"}])
    async def test_unauthorized_requests(self, client, headers):
        """Test that missing, malformed and invalid credentials all give the same 401."""
        response = await client.get("/api/v1/notes", headers=headers)
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized", "type": "authentication_error"}
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestScenario:
    """Walk-through of the Alice/Bob flow."""

    async def test_alice_and_bob(self, client):
        """Test ownership isolation, task update and cascading delete over HTTP."""
        alice = await register(client, "alice@example.com", "secret1")
        t1 = alice["token"]

        note = await client.post("/api/v1/notes", json={"title": "Groceries"}, headers=bearer(t1))
        assert note.status_code == 201
        n1 = note.json()["id"]
        assert note.json()["owner_id"] == alice["user"]["id"]

        task = await client.post(f"/api/v1/notes/{n1}/tasks", json={"title": "Milk"}, headers=bearer(t1))
        assert task.status_code == 201
        assert task.json()["status"] == "pending"
        assert task.json()["priority"] == ""
        milk = task.json()["id"]

        bob = await register(client, "bob@example.com", "secret2")
        as_bob = await client.get(f"/api/v1/notes/{n1}/tasks", headers=bearer(bob["token"]))
        missing = await client.get(f"/api/v1/notes/{uuid4()}/tasks", headers=bearer(bob["token"]))
        assert as_bob.status_code == 404
        assert as_bob.json() == missing.json()

        updated = await client.put(f"/api/v1/notes/{n1}/tasks/{milk}", json={"status": "completed"}, headers=bearer(t1))
        assert updated.status_code == 200
        assert updated.json()["status"] == "completed"

        deleted = await client.delete(f"/api/v1/notes/{n1}", headers=bearer(t1))
        assert deleted.status_code == 200

        after = await client.get(f"/api/v1/notes/{n1}/tasks", headers=bearer(t1))
        assert after.status_code == 404

        for _ in range(2):
            again = await client.delete(f"/api/v1/notes/{n1}", headers=bearer(t1))
            assert again.status_code == 404

    async def test_invalid_update_is_400(self, client):
        """Test that an invalid status returns 400."""
        token = (await register(client, "alice@example.com"))["token"]
        n1 = (await client.post("/api/v1/notes", json={"title": "Groceries"}, headers=bearer(token))).json()["id"]
        milk = (await client.post(f"/api/v1/notes/{n1}/tasks", json={"title": "Milk"}, headers=bearer(token))).json()["id"]

        response = await client.put(f"/api/v1/notes/{n1}/tasks/{milk}", json={"status": "done"}, headers=bearer(token))
        assert response.status_code == 400

    async def test_priorities(self, client):
        """Test that /priorities lists the caller's high-priority tasks."""
        token = (await register(client, "alice@example.com"))["token"]
        n1 = (await client.post("/api/v1/notes", json={"title": "Groceries"}, headers=bearer(token))).json()["id"]
        await client.post(f"/api/v1/notes/{n1}/tasks", json={"title": "Milk", "priority": "high"}, headers=bearer(token))
        await client.post(f"/api/v1/notes/{n1}/tasks", json={"title": "Eggs"}, headers=bearer(token))

        response = await client.get("/api/v1/priorities", headers=bearer(token))
        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Milk"]


class TestErrorMapping:
    """Tests for error responses."""

    async def test_authorization_error_reads_as_not_found(self):
        """Test that AuthorizationError never reveals the resource exists."""
        response = await user_error_handler(None, AuthorizationError("Note belongs to another user"))
        assert response.status_code == 404
        assert response.body == b'{"message":"Not found","type":"not_found"}'

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}
