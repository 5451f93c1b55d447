"""Profile completion and GitHub linking."""

from __future__ import annotations

from httpx import AsyncClient

from tests.helpers import auth_headers


class TestProfile:
    async def test_get_me(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/users/me")
        assert response.status_code == 200
        data = response.json()
        assert data["email"] is None
        assert len(data["wallets"]) == 1
        assert "githubAccessToken" not in data

    async def test_profile_setup_clears_flag(self, authed_client: AsyncClient):
        response = await authed_client.patch(
            "/api/users/me", json={"email": "Alice@Example.com", "username": "alice"}
        )
        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"
        assert response.json()["username"] == "alice"

        session = await authed_client.get("/api/auth/session")
        assert session.json()["needsProfileSetup"] is False

    async def test_partial_update_keeps_other_fields(self, authed_client: AsyncClient):
        await authed_client.patch("/api/users/me", json={"email": "bob@example.com", "username": "bob"})
        response = await authed_client.patch("/api/users/me", json={"avatarUrl": "https://img.test/bob.png"})
        data = response.json()
        assert data["avatarUrl"] == "https://img.test/bob.png"
        assert data["email"] == "bob@example.com"
        assert data["username"] == "bob"

    async def test_empty_update_rejected(self, authed_client: AsyncClient):
        response = await authed_client.patch("/api/users/me", json={})
        assert response.status_code == 400

    async def test_invalid_email_rejected(self, authed_client: AsyncClient):
        response = await authed_client.patch("/api/users/me", json={"email": "not-an-email"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Validation error"

    async def test_username_taken_is_409(self, client: AsyncClient, make_session):
        _first, first_token = await make_session()
        _second, second_token = await make_session()

        response = await client.patch("/api/users/me", json={"username": "carol"}, headers=auth_headers(first_token))
        assert response.status_code == 200

        response = await client.patch("/api/users/me", json={"username": "CAROL"}, headers=auth_headers(second_token))
        assert response.status_code == 409

    async def test_email_taken_is_409(self, client: AsyncClient, make_session):
        _first, first_token = await make_session()
        _second, second_token = await make_session()

        await client.patch("/api/users/me", json={"email": "dave@example.com"}, headers=auth_headers(first_token))
        response = await client.patch(
            "/api/users/me", json={"email": "dave@example.com"}, headers=auth_headers(second_token)
        )
        assert response.status_code == 409

    async def test_unique_violation_on_write_is_409(self, client: AsyncClient, make_session, monkeypatch):
        _first, first_token = await make_session()
        _second, second_token = await make_session()

        # Both requests pass the lookup, as when they race; the unique index decides.
        async def _never_taken(*_args) -> bool:
            return False

        monkeypatch.setattr("dapp0.users.service._taken_by_other", _never_taken)

        response = await client.patch("/api/users/me", json={"username": "erin"}, headers=auth_headers(first_token))
        assert response.status_code == 200

        response = await client.patch("/api/users/me", json={"username": "erin"}, headers=auth_headers(second_token))
        assert response.status_code == 409
        assert response.json()["detail"] == "Email or username already in use"

        me = await client.get("/api/users/me", headers=auth_headers(second_token))
        assert me.json()["username"] is None

    async def test_requires_auth(self, client: AsyncClient):
        assert (await client.get("/api/users/me")).status_code == 401


class TestGitHubLink:
    async def test_link_and_unlink(self, authed_client: AsyncClient):
        response = await authed_client.put(
            "/api/users/me/github", json={"githubUsername": "octocat", "accessToken": "gho_secret"}
        )
        assert response.status_code == 200
        assert response.json()["githubUsername"] == "octocat"
        assert "gho_secret" not in response.text

        response = await authed_client.delete("/api/users/me/github")
        assert response.status_code == 200
        assert response.json()["githubUsername"] is None
