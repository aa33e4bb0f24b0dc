"""Tests for category endpoints."""


class TestCategoryAPI:
    """Tests for /api/categories."""

    def test_list_categories_sorted_by_name(self, client, user_a):
        response = client.get("/api/categories", headers=user_a["headers"])
        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert names == sorted(names)
        assert len(names) == 6

    def test_default_category_ids(self, client, user_a):
        """Default ids are derived from the user id and the lower-cased name."""
        response = client.get("/api/categories/a_food", headers=user_a["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Food"
        assert data["isDefault"] is True
        assert data["color"] == "#EF4444"

    def test_create_category(self, client, user_a):
        response = client.post(
            "/api/categories",
            json={"name": "Home Office", "description": "Desk and chair", "color": "#123456"},
            headers=user_a["headers"],
        )
        assert response.status_code == 201
        data = response.json()
        assert data["categoryId"] == "a_home_office"
        assert data["color"] == "#123456"
        assert data["icon"] == "💰"
        assert data["isDefault"] is False

    def test_create_duplicate_name_conflicts(self, client, user_a):
        response = client.post("/api/categories", json={"name": "Food"}, headers=user_a["headers"])
        assert response.status_code == 409

    def test_create_name_too_short(self, client, user_a):
        response = client.post("/api/categories", json={"name": "X"}, headers=user_a["headers"])
        assert response.status_code == 400
        assert "name" in response.json()["details"]

    def test_update_keeps_color_when_omitted(self, client, user_a):
        response = client.put(
            "/api/categories/a_food",
            json={"name": "Groceries", "description": "Renamed"},
            headers=user_a["headers"],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["categoryId"] == "a_food"
        assert data["name"] == "Groceries"
        assert data["color"] == "#EF4444"

    def test_update_to_existing_name_conflicts(self, client, user_a):
        response = client.put("/api/categories/a_food", json={"name": "Travel"}, headers=user_a["headers"])
        assert response.status_code == 409

    def test_recreated_name_after_rename_gets_fresh_id(self, client, user_a):
        """A renamed category keeps its id, so a new category with the old name is suffixed."""
        client.put("/api/categories/a_food", json={"name": "Groceries"}, headers=user_a["headers"])
        response = client.post("/api/categories", json={"name": "Food"}, headers=user_a["headers"])
        assert response.status_code == 201
        assert response.json()["categoryId"] == "a_food_2"

    def test_delete_default_category_fails(self, client, user_a):
        response = client.delete("/api/categories/a_food", headers=user_a["headers"])
        assert response.status_code == 400
        assert client.get("/api/categories/a_food", headers=user_a["headers"]).status_code == 200

    def test_delete_custom_category(self, client, user_a):
        created = client.post("/api/categories", json={"name": "Gym"}, headers=user_a["headers"]).json()

        response = client.delete(f"/api/categories/{created['categoryId']}", headers=user_a["headers"])
        assert response.status_code == 204

        names = [c["name"] for c in client.get("/api/categories", headers=user_a["headers"]).json()]
        assert "Gym" not in names

    def test_other_users_category_is_not_found(self, client, user_a, user_b):
        response = client.get("/api/categories/b_food", headers=user_a["headers"])
        assert response.status_code == 404

    def test_defaults_search_and_count(self, client, user_a):
        client.post("/api/categories", json={"name": "Fitness"}, headers=user_a["headers"])

        defaults = client.get("/api/categories/defaults", headers=user_a["headers"]).json()
        assert len(defaults) == 6

        found = client.get("/api/categories/search", params={"query": "fo"}, headers=user_a["headers"]).json()
        assert [c["name"] for c in found] == ["Food"]

        assert client.get("/api/categories/count", headers=user_a["headers"]).json() == 7

    def test_initialize_defaults_is_idempotent(self, client, user_a):
        response = client.post("/api/categories/initialize-defaults", headers=user_a["headers"])
        assert response.status_code == 201
        assert len(response.json()) == 6
        assert client.get("/api/categories/count", headers=user_a["headers"]).json() == 6

    def test_requires_authentication(self, client):
        assert client.get("/api/categories").status_code == 401
