# tests/test_categories.py
import unittest

from budget_manager.db.database import DEFAULT_CATEGORIES
from tests.base import ApiTestCase


class CategoryApiTests(ApiTestCase):

    def test_default_categories_seeded_and_sorted(self):
        response = self.client.get("/api/categories")
        self.assertEqual(response.status_code, 200)
        names = [c["name"] for c in response.json()]
        self.assertEqual(names, sorted(DEFAULT_CATEGORIES))
        self.assertTrue(all(c["is_active"] for c in response.json()))

    def test_create_category(self):
        response = self.client.post("/api/categories", json={"name": "  Travel "})
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["name"], "Travel")
        self.assertTrue(body["is_active"])
        self.assertIn("Travel", [c["name"] for c in self.client.get("/api/categories").json()])

    def test_create_category_requires_name(self):
        for payload in ({}, {"name": ""}, {"name": "   "}, {"name": 42}):
            response = self.client.post("/api/categories", json=payload)
            self.assertEqual(response.status_code, 400, payload)
            self.assertIn("name", response.json()["error"])

    def test_duplicate_name_is_store_error(self):
        response = self.client.post("/api/categories", json={"name": "Housing"})
        self.assertEqual(response.status_code, 500)
        self.assertIn("UNIQUE", response.json()["error"])

    def test_rename_category(self):
        category_id = self.create_category("Pets")
        response = self.client.put(f"/api/categories/{category_id}", json={"name": "Pet Care"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Pet Care")
        self.assertEqual(self.category_id("Pet Care"), category_id)

    def test_rename_unknown_category(self):
        response = self.client.put("/api/categories/9999", json={"name": "Nope"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Category not found"})

    def test_delete_is_soft(self):
        category_id = self.category_id("Entertainment")
        txn = self.create_transaction(category_id=category_id, description="Cinema", amount=12.5)

        response = self.client.delete(f"/api/categories/{category_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Category deactivated successfully")

        names = [c["name"] for c in self.client.get("/api/categories").json()]
        self.assertNotIn("Entertainment", names)

        # Историческая транзакция не изменилась и по-прежнему знает имя категории
        listed = self.client.get("/api/transactions", params={"month": "2024-03"}).json()
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0]["id"], txn["id"])
        self.assertEqual(listed[0]["category_id"], category_id)
        self.assertEqual(listed[0]["category_name"], "Entertainment")
        self.assertEqual(listed[0]["amount"], 12.5)

    def test_delete_unknown_category(self):
        response = self.client.delete("/api/categories/9999")
        self.assertEqual(response.status_code, 404)

    def test_unmatched_route_returns_json_404(self):
        response = self.client.get("/api/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.json())

    def test_wrong_method_on_known_path_returns_404(self):
        for method, path in (
            ("DELETE", "/api/categories"),
            ("GET", "/api/transactions/import"),
            ("POST", "/api/reports/summary"),
            ("GET", "/api/categories/1"),
        ):
            response = self.client.request(method, path)
            self.assertEqual(response.status_code, 404, f"{method} {path}")
            self.assertEqual(response.json(), {"error": "Not Found"})

    def test_non_numeric_id_is_unmatched_route(self):
        response = self.client.put("/api/categories/abc", json={"name": "X"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})

        response = self.client.delete("/api/transactions/abc")
        self.assertEqual(response.status_code, 404)

    def test_cors_is_open(self):
        response = self.client.get("/api/categories", headers={"Origin": "http://example.com"})
        self.assertEqual(response.headers.get("access-control-allow-origin"), "*")


if __name__ == "__main__":
    unittest.main()
