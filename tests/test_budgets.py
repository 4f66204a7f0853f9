# tests/test_budgets.py
import unittest

from tests.base import ApiTestCase


class BudgetApiTests(ApiTestCase):

    def test_month_required(self):
        response = self.client.get("/api/budgets")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Month parameter is required"})

    def test_invalid_month(self):
        self.assertEqual(self.client.get("/api/budgets", params={"month": "March"}).status_code, 400)
        response = self.client.post("/api/budgets", json={"month": "2024-3", "budgets": []})
        self.assertEqual(response.status_code, 400)
        self.assertIn("month", response.json()["error"])

    def test_save_and_list(self):
        housing, groceries = self.category_id("Housing"), self.category_id("Groceries")
        result = self.save_budgets("2024-03", {housing: 1500, groceries: 400})
        self.assertEqual(result["saved"], 2)

        listed = self.client.get("/api/budgets", params={"month": "2024-03"}).json()
        # Сортировка по имени категории
        self.assertEqual([b["category_name"] for b in listed], ["Groceries", "Housing"])
        self.assertEqual({b["category_id"]: b["budget_amount"] for b in listed}, {housing: 1500, groceries: 400})
        self.assertTrue(all(b["month"] == "2024-03" for b in listed))

        self.assertEqual(self.client.get("/api/budgets", params={"month": "2024-04"}).json(), [])

    def test_saving_twice_keeps_one_row_with_latest_amount(self):
        housing = self.category_id("Housing")
        self.save_budgets("2024-03", {housing: 1500})
        self.save_budgets("2024-03", {housing: 1650})

        listed = self.client.get("/api/budgets", params={"month": "2024-03"}).json()
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0]["budget_amount"], 1650)

    def test_incomplete_pairs_are_skipped(self):
        housing = self.category_id("Housing")
        response = self.client.post("/api/budgets", json={"month": "2024-03", "budgets": [
            {"category_id": housing, "budget_amount": 100},
            {"category_id": housing},
            {"budget_amount": 50},
            "junk",
        ]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Budgets saved successfully", "saved": 1})

    def test_budgets_array_required(self):
        response = self.client.post("/api/budgets", json={"month": "2024-03"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("budgets", response.json()["error"])

    def test_unknown_category_is_store_error(self):
        response = self.client.post("/api/budgets", json={"month": "2024-03", "budgets": [
            {"category_id": 9999, "budget_amount": 10},
        ]})
        self.assertEqual(response.status_code, 500)
        self.assertIn("FOREIGN KEY", response.json()["error"])


if __name__ == "__main__":
    unittest.main()
