"""API tests for signup, login, logout and account removal."""

from fastapi.testclient import TestClient

from worldbuilder.core.security import create_access_token

from .conftest import PASSWORD, Owner, signup


class TestSignup:
    """Test POST /api/auth/signup."""

    def test_signup_sets_cookie(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "alice@example.com", "password": PASSWORD},
        )
        assert response.status_code == 201
        assert response.json() == {"message": "User created.", "userId": 1}
        assert "access_token" in response.cookies

        # the cookie alone authenticates follow-up requests
        assert client.get("/api/series").status_code == 200

    def test_duplicate_email(self, client: TestClient) -> None:
        signup(client, "alice", "shared@example.com")
        response = client.post(
            "/api/auth/signup",
            json={"username": "bob", "email": "shared@example.com", "password": PASSWORD},
        )
        assert response.status_code == 401
        assert response.json() == {"message": "A user with this email already exists."}

    def test_duplicate_username(self, client: TestClient) -> None:
        signup(client, "alice")
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "other@example.com", "password": PASSWORD},
        )
        assert response.status_code == 409

    def test_weak_password(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "alice@example.com", "password": "password"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed."
        assert body["data"][0]["path"] == "password"

    def test_username_too_long(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"username": "a" * 36, "email": "alice@example.com", "password": PASSWORD},
        )
        assert response.status_code == 400
        assert response.json()["data"][0]["path"] == "username"

    def test_invalid_email(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "not-an-email", "password": PASSWORD},
        )
        assert response.status_code == 400
        assert response.json()["data"][0]["path"] == "email"


class TestLogin:
    """Test POST /api/auth/login."""

    def test_login(self, client: TestClient) -> None:
        user_id, _ = signup(client, "alice")
        response = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
        )
        assert response.status_code == 200
        assert response.json() == {"userId": user_id}
        assert "access_token" in response.cookies

    def test_unknown_email(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD}
        )
        assert response.status_code == 401
        assert response.json() == {"message": "A user with this email could not be found."}

    def test_wrong_password(self, client: TestClient) -> None:
        signup(client, "alice")
        response = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "Wr0ng!pass"}
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Incorrect password."}


class TestAuthentication:
    """Test the current-user dependency."""

    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/api/series")
        assert response.status_code == 401
        assert response.json() == {"message": "Missing authentication token."}

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get("/api/series", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid or expired token."}

    def test_bearer_header(self, client: TestClient, owner: Owner) -> None:
        response = client.get("/api/series", headers=owner.headers)
        assert response.status_code == 200

    def test_token_claims_must_match_user(self, client: TestClient, owner: Owner) -> None:
        token = create_access_token(
            owner.user_id,
            extra_claims={"username": "alice", "email": "someone-else@example.com"},
        )
        response = client.get("/api/series", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token payload."}


class TestLogout:
    """Test GET /api/auth/logout."""

    def test_logout_clears_cookie(self, client: TestClient, owner: Owner) -> None:
        response = client.get("/api/auth/logout", headers=owner.headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Successfully logged out."}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("access_token=")
        assert "Max-Age=0" in set_cookie

    def test_logout_requires_authentication(self, client: TestClient) -> None:
        assert client.get("/api/auth/logout").status_code == 401


class TestDeleteAccount:
    """Test DELETE /api/auth/delete-account."""

    def test_delete_other_account(self, client: TestClient, owner: Owner, intruder: Owner) -> None:
        response = client.request(
            "DELETE",
            "/api/auth/delete-account",
            json={"id": owner.user_id},
            headers=intruder.headers,
        )
        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden account action."}

    def test_delete_own_account(self, client: TestClient, owner: Owner) -> None:
        response = client.request(
            "DELETE",
            "/api/auth/delete-account",
            json={"id": owner.user_id},
            headers=owner.headers,
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Successfully deleted user."}

        # the token outlives the account but no longer resolves to a user
        response = client.get("/api/series", headers=owner.headers)
        assert response.status_code == 401
        assert response.json() == {"message": "User not found."}

    def test_email_is_free_after_delete(self, client: TestClient, owner: Owner) -> None:
        client.request(
            "DELETE",
            "/api/auth/delete-account",
            json={"id": owner.user_id},
            headers=owner.headers,
        )
        user_id, headers = signup(client, "alice")
        assert user_id != owner.user_id
        assert client.get("/api/books", headers=headers).json()["data"] == []

    def test_deleted_users_token_cannot_read_new_account(
        self, client: TestClient, owner: Owner
    ) -> None:
        client.request(
            "DELETE",
            "/api/auth/delete-account",
            json={"id": owner.user_id},
            headers=owner.headers,
        )
        bob_id, bob_headers = signup(client, "bob")
        client.post("/api/series", json={"name": "bob secret"}, headers=bob_headers)

        assert bob_id != owner.user_id
        response = client.get("/api/series", headers=owner.headers)
        assert response.status_code == 401
