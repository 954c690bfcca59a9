"""
Tests for the auth endpoints and session middleware.
"""

from tests.conftest import TEST_PASSWORD, create_test_token


class TestLogin:
    def test_login_sets_cookie_and_returns_token(self, client, stored_users):
        response = client.post("/api/auth/login", json={"username": "alex.morgan", "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["username"] == "alex.morgan"
        assert "password" not in data["user"]
        assert data["auth_token"]
        assert response.cookies.get("trak_session") == data["auth_token"]

    def test_login_by_email(self, client, stored_users):
        response = client.post(
            "/api/auth/login",
            json={"username": "alex.morgan@ecocorp.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200

    def test_login_wrong_password(self, client, stored_users):
        response = client.post("/api/auth/login", json={"username": "alex.morgan", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_CREDENTIALS"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_login_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"username": "alex.morgan"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["message"] == "Invalid data"
        assert data["errors"]


class TestRegister:
    def test_register_creates_member_and_session(self, client):
        response = client.post("/api/auth/register", json={
            "username": "emma",
            "email": "emma@ecocorp.com",
            "name": "Emma Wilson",
            "password": "password123",
            "company_id": 1,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["role"] == "member"
        assert data["user"]["points_total"] == 0
        assert response.cookies.get("trak_session")

        profile = client.get(
            "/api/user/profile",
            headers={"Authorization": f"Bearer {data['auth_token']}"},
        )
        assert profile.json()["username"] == "emma"

    def test_register_duplicate_username(self, client, stored_users):
        response = client.post("/api/auth/register", json={
            "username": "alex.morgan",
            "email": "other@ecocorp.com",
            "name": "Other",
            "password": "password123",
        })
        assert response.status_code == 409
        assert response.json()["error"] == "USERNAME_TAKEN"

    def test_register_invalid_email(self, client):
        response = client.post("/api/auth/register", json={
            "username": "emma",
            "email": "not-an-email",
            "name": "Emma",
            "password": "password123",
        })
        assert response.status_code == 400


class TestSession:
    def test_cookie_session(self, client, stored_users):
        client.post("/api/auth/login", json={"username": "alex.morgan", "password": TEST_PASSWORD})

        response = client.get("/api/user/profile")

        assert response.status_code == 200
        assert response.json()["id"] == 1

    def test_logout_clears_cookie(self, client, stored_users):
        client.post("/api/auth/login", json={"username": "alex.morgan", "password": TEST_PASSWORD})

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        assert client.get("/api/user/profile").status_code == 401

    def test_no_session(self, client):
        response = client.get("/api/user/profile")
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_TOKEN"

    def test_expired_token(self, client, stored_users):
        headers = {"Authorization": f"Bearer {create_test_token(expired=True)}"}
        response = client.get("/api/user/profile", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "TOKEN_EXPIRED"

    def test_invalid_token(self, client):
        response = client.get("/api/user/profile", headers={"Authorization": "Bearer invalid"})
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    def test_bearer_wins_over_cookie(self, client, stored_users):
        client.post("/api/auth/login", json={"username": "alex.morgan", "password": TEST_PASSWORD})
        headers = {"Authorization": f"Bearer {create_test_token(user_id=2, username='daniel')}"}

        response = client.get("/api/user/profile", headers=headers)

        assert response.json()["id"] == 2
