"""Tests for authentication endpoints."""

PASSWORD = "Passw0rd@1"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_returns_token_and_user(self, client):
        """Registration answers 201 with a bearer token for the new user."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "a@x.com", "password": PASSWORD, "confirmPassword": PASSWORD},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 86400
        assert data["user"]["userId"] == "a"
        assert data["user"]["role"] == "USER"
        assert data["user"]["isActive"] is True

    def test_register_seeds_default_categories(self, client, user_a):
        response = client.get("/api/categories", headers=user_a["headers"])
        assert response.status_code == 200
        names = {c["name"] for c in response.json()}
        assert names == {"Food", "Shopping", "Travel", "Bills", "Entertainment", "Others"}

    def test_user_id_collision_gets_suffix(self, register):
        """Same email local-part on another domain yields a suffixed user id."""
        register("a@x.com")
        second = register("a@y.com")
        assert second["user"]["userId"] == "a1"

    def test_longest_local_part_fits_id_columns(self, register):
        """A 64-character local-part, plus a collision suffix, fits every column keyed on the user id."""
        from app.models.category import Category
        from app.models.expense import Expense
        from app.models.user import User

        register("a" * 64 + "@x.com")
        second = register("a" * 64 + "@y.com")
        user_id = second["user"]["userId"]
        assert user_id == "a" * 64 + "1"

        for column in (User.__table__.c.user_id, Category.__table__.c.user_id, Expense.__table__.c.user_id):
            assert column.type.length >= len(user_id)
        assert Expense.__table__.c.expense_id.type.length >= len(Expense.generate_expense_id(user_id))

    def test_local_part_punctuation_is_kept(self, client, register):
        """Dots and plus signs stay in the user id and in derived category ids."""
        auth = register("first.last+bills@x.com")
        assert auth["user"]["userId"] == "first.last+bills"

        response = client.get("/api/categories/first.last+bills_food", headers=bearer(auth["token"]))
        assert response.status_code == 200
        assert response.json()["name"] == "Food"

    def test_duplicate_email_conflicts(self, client, user_a):
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "a@x.com", "password": PASSWORD, "confirmPassword": PASSWORD},
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "User with this email already exists"

    def test_password_mismatch(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "a@x.com", "password": PASSWORD, "confirmPassword": "Other0@pass"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    def test_weak_password_is_rejected(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "a@x.com", "password": "password", "confirmPassword": "password"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Failed"
        assert "password" in body["details"]


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_success(self, client, user_a):
        response = client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["userId"] == "a"
        assert data["user"]["lastLogin"] is not None

    def test_wrong_password(self, client, user_a):
        response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "Wrong0@pass"})
        assert response.status_code == 401
        body = response.json()
        assert body["detail"] == "Invalid email or password"
        assert body["status"] == 401
        assert body["path"] == "/api/auth/login"

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": PASSWORD})
        assert response.status_code == 401

    def test_inactive_account_cannot_login(self, client, user_a):
        assert client.post("/api/users/me/deactivate", headers=user_a["headers"]).status_code == 200

        response = client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        assert response.status_code == 401
        assert response.json()["detail"] == "Account is inactive"


class TestTokens:
    """Tests for token validation and authenticated access."""

    def test_validate_token_in_body(self, client, user_a):
        """A registration token validates to the same user."""
        response = client.post("/api/auth/validate", json={"token": user_a["auth"]["token"]})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["user"]["userId"] == "a"
        assert data["user"]["email"] == "a@x.com"
        assert data["user"]["role"] == "USER"

    def test_validate_token_in_header(self, client, user_a):
        response = client.post("/api/auth/validate", headers=user_a["headers"])
        assert response.status_code == 200
        assert response.json()["valid"] is True

    def test_validate_garbage_token(self, client):
        response = client.post("/api/auth/validate", json={"token": "garbage"})
        assert response.status_code == 401
        assert response.json()["valid"] is False

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_me_with_cookie(self, client, user_a):
        client.cookies.set("access_token", user_a["auth"]["token"])
        response = client.get("/api/auth/me")
        assert response.status_code == 200
        assert response.json()["userId"] == "a"

    def test_logout(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["success"] is True


class TestChangePassword:
    """Tests for POST /api/auth/change-password."""

    def test_change_password_then_login(self, client, user_a):
        new_password = "N3wPass@word"
        response = client.post(
            "/api/auth/change-password",
            json={"currentPassword": PASSWORD, "newPassword": new_password, "confirmPassword": new_password},
            headers=user_a["headers"],
        )
        assert response.status_code == 200

        assert client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD}).status_code == 401
        assert client.post("/api/auth/login", json={"email": "a@x.com", "password": new_password}).status_code == 200

    def test_wrong_current_password(self, client, user_a):
        response = client.post(
            "/api/auth/change-password",
            json={"currentPassword": "Wrong0@pass", "newPassword": "N3wPass@word", "confirmPassword": "N3wPass@word"},
            headers=user_a["headers"],
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Current password is incorrect"
