"""Tests for user profile and admin endpoints."""


class TestUserProfile:
    """Tests for /api/users/me."""

    def test_read_profile(self, client, user_a):
        response = client.get("/api/users/me", headers=user_a["headers"])
        assert response.status_code == 200
        assert response.json()["email"] == "a@x.com"

    def test_update_profile(self, client, user_a):
        response = client.put(
            "/api/users/me",
            json={"name": "Alice Doe", "email": "alice@x.com"},
            headers=user_a["headers"],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Alice Doe"
        assert data["email"] == "alice@x.com"
        assert data["userId"] == "a"

    def test_update_to_taken_email_conflicts(self, client, user_a, user_b):
        response = client.put(
            "/api/users/me",
            json={"name": "Alice", "email": "b@x.com"},
            headers=user_a["headers"],
        )
        assert response.status_code == 409

    def test_stats(self, client, user_a, make_expense):
        make_expense(user_a["headers"], amount="10.50")
        make_expense(user_a["headers"], amount="4.50", category="Snacks")

        stats = client.get("/api/users/me/stats", headers=user_a["headers"]).json()
        assert stats["categoryCount"] == 7
        assert stats["expenseCount"] == 2
        assert stats["totalExpenses"] == 15.0

    def test_deactivated_token_stops_working(self, client, user_a):
        assert client.post("/api/users/me/deactivate", headers=user_a["headers"]).status_code == 200
        assert client.get("/api/users/me", headers=user_a["headers"]).status_code == 401

    def test_delete_account(self, client, user_a):
        assert client.delete("/api/users/me", headers=user_a["headers"]).status_code == 204
        assert client.get("/api/users/me", headers=user_a["headers"]).status_code == 401


class TestAdmin:
    """Tests for /api/admin."""

    def test_requires_admin_role(self, client, user_a):
        response = client.get("/api/admin/stats", headers=user_a["headers"])
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_stats(self, client, admin, user_a, make_expense):
        make_expense(user_a["headers"], amount="10.00", paymentMethod="UPI")
        make_expense(user_a["headers"], amount="20.00", paymentMethod="UPI")
        make_expense(user_a["headers"], amount="30.00")

        stats = client.get("/api/admin/stats", headers=admin["headers"]).json()
        assert stats["users"]["totalUsers"] == 2
        assert stats["users"]["activeUsers"] == 2
        assert stats["categories"]["defaultCategories"] == 12
        assert stats["categories"]["customCategories"] == 0
        assert stats["expenses"]["totalExpenses"] == 3
        assert stats["expenses"]["totalAmount"] == 60.0
        assert stats["expenses"]["averageAmount"] == 20.0
        assert stats["expenses"]["paymentMethods"] == {"UPI": 2, "Unspecified": 1}

    def test_deleting_user_leaves_expenses_behind(self, client, admin, user_b, make_expense):
        """User deletion removes categories but keeps expenses, which the integrity report counts."""
        make_expense(user_b["headers"])

        response = client.delete(f"/api/admin/users/{user_b['user_id']}", headers=admin["headers"])
        assert response.status_code == 204

        report = client.get("/api/admin/integrity", headers=admin["headers"]).json()
        assert report == {
            "orphanedCategories": 0,
            "orphanedExpensesByUser": 1,
            "orphanedExpensesByCategory": 1,
        }

    def test_deleting_category_orphans_its_expenses(self, client, admin, user_a, make_expense):
        custom = client.post("/api/categories", json={"name": "Gym"}, headers=user_a["headers"]).json()
        make_expense(user_a["headers"], category=None, categoryId=custom["categoryId"])
        client.delete(f"/api/categories/{custom['categoryId']}", headers=user_a["headers"])

        report = client.get("/api/admin/integrity", headers=admin["headers"]).json()
        assert report["orphanedExpensesByCategory"] == 1
        assert report["orphanedExpensesByUser"] == 0

    def test_deactivate_and_reactivate(self, client, admin, user_a):
        path = f"/api/admin/users/{user_a['user_id']}"

        assert client.put(f"{path}/deactivate", headers=admin["headers"]).json()["isActive"] is False
        assert client.put(f"{path}/deactivate", headers=admin["headers"]).status_code == 400
        active = [u["userId"] for u in client.get("/api/admin/users/active", headers=admin["headers"]).json()]
        assert user_a["user_id"] not in active

        assert client.put(f"{path}/reactivate", headers=admin["headers"]).json()["isActive"] is True

    def test_unknown_user(self, client, admin):
        assert client.delete("/api/admin/users/ghost", headers=admin["headers"]).status_code == 404
