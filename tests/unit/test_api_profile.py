"""Tests for the self-service profile endpoints."""

_PROFILE_URL = "/api/profile"


class TestProfile:
    """Tests for GET/PUT /api/profile."""

    async def test_show_profile(self, client, register, auth_headers):
        """GET should return the caller's own account."""
        user, token = await register()

        response = await client.get(_PROFILE_URL, headers=auth_headers(token))

        assert response.status_code == 200
        assert response.json()["data"]["user"] == user

    async def test_requires_token(self, client):
        """Profile access without a token should be 401."""
        response = await client.get(_PROFILE_URL)
        assert response.status_code == 401

    async def test_update_name(self, client, register, auth_headers):
        """PUT should change the supplied fields only."""
        _, token = await register()

        response = await client.put(
            _PROFILE_URL, json={"name": "Johnny"}, headers=auth_headers(token)
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Profile updated successfully"
        user = response.json()["data"]["user"]
        assert user["name"] == "Johnny"
        assert user["email"] == "john@example.com"

    async def test_update_password_then_login(self, client, register, auth_headers):
        """A changed password should be the one that logs in."""
        _, token = await register()

        await client.put(
            _PROFILE_URL,
            json={"password": "brand-new-pass"},
            headers=auth_headers(token),
        )

        old = await client.post(
            "/api/auth/login",
            json={"email": "john@example.com", "password": "password123"},
        )
        new = await client.post(
            "/api/auth/login",
            json={"email": "john@example.com", "password": "brand-new-pass"},
        )
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_update_to_taken_email(self, client, register, auth_headers):
        """Taking another account's email should be a 422."""
        _, token = await register()
        await register("jane@example.com", name="Jane")

        response = await client.put(
            _PROFILE_URL,
            json={"email": "jane@example.com"},
            headers=auth_headers(token),
        )

        assert response.status_code == 422
        assert "email" in response.json()["errors"]
