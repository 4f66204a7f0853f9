# tests/test_client.py
import unittest

from budget_manager.client import ApiError, AppState, BudgetApiClient, PageController
from budget_manager.client.console import build_parser, format_currency, render_table, run
from budget_manager.client.csv_import import CsvMapping, parse_csv
from budget_manager.db.models.transaction import TransactionType
from tests.base import ApiTestCase


class ClientTestCase(ApiTestCase):

    def setUp(self):
        super().setUp()
        # TestClient - это httpx.Client, клиент работает с приложением напрямую
        self.api = BudgetApiClient(http=self.client)
        self.state = AppState(current_month="2024-03")
        self.controller = PageController(self.api, self.state)
        self.controller.init()


class ApiClientTests(ClientTestCase):

    def test_errors_raise_api_error(self):
        with self.assertRaises(ApiError) as ctx:
            self.api.fetch_budgets("")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, "Month parameter is required")

        with self.assertRaises(ApiError) as ctx:
            self.api.delete_transaction(12345)
        self.assertEqual(ctx.exception.status_code, 404)

    def test_round_trip(self):
        housing = self.category_id("Housing")
        created = self.api.create_transaction({
            "date": "2024-03-02", "description": "Rent", "amount": 1500, "type": "expense", "category_id": housing,
        })
        self.assertEqual([t["id"] for t in self.api.fetch_transactions("2024-03")], [created["id"]])

        self.api.save_budgets("2024-03", [{"category_id": housing, "budget_amount": 1400}])
        self.assertEqual(self.api.fetch_budgets("2024-03")[0]["budget_amount"], 1400)

        self.api.delete_transaction(created["id"])
        self.assertEqual(self.api.fetch_transactions("2024-03"), [])


class PageControllerTests(ClientTestCase):

    def test_init_caches_categories(self):
        self.assertEqual(len(self.state.categories), 9)
        self.assertEqual(self.state.category_name(self.category_id("Housing")), "Housing")

    def test_dashboard_hides_empty_rows(self):
        housing, groceries = self.category_id("Housing"), self.category_id("Groceries")
        self.create_transaction(description="Rent", amount=1600.0, category_id=housing)
        self.create_transaction(type="income", description="Pay", amount=3000.0, category_id=groceries)
        self.save_budgets("2024-03", {housing: 1500, groceries: 300})

        view = self.controller.show("dashboard")
        self.assertEqual(view.month_label, "March 2024")
        self.assertEqual((view.total_income, view.total_expenses, view.net), (3000.0, 1600.0, 1400.0))
        self.assertEqual([r.name for r in view.rows], ["Housing", "Groceries"])

        rent = view.rows[0]
        self.assertEqual(rent.remaining, -100.0)
        self.assertEqual(rent.percent_used, 106.7)
        self.assertEqual(view.rows[1].percent_used, 0.0)
        # В диаграмме только категории с фактическими расходами
        self.assertEqual([(b.name, b.amount) for b in view.chart], [("Housing", 1600.0)])

    def test_budget_view_and_save(self):
        housing = self.category_id("Housing")
        self.create_transaction(description="Rent", amount=1450.0, category_id=housing)

        view = self.controller.save_budget({housing: 1500})
        rows = {r.name: r for r in view.rows}
        self.assertEqual(len(view.rows), 9)
        self.assertEqual((rows["Housing"].budgeted, rows["Housing"].difference), (1500.0, 50.0))
        self.assertEqual(view.total_budgeted, 1500.0)
        self.assertEqual(view.total_actual, 1450.0)
        self.assertEqual(view.total_difference, 50.0)

        # Повторное сохранение другой категории не сбрасывает ранее заданный бюджет
        view = self.controller.save_budget({self.category_id("Utilities"): 80})
        self.assertEqual(view.total_budgeted, 1580.0)
        self.assertEqual(len(self.api.fetch_budgets("2024-03")), 9)

    def test_month_navigation_keeps_view(self):
        self.controller.show("budget")
        view = self.controller.next_month()
        self.assertEqual(view.month, "2024-04")
        self.assertEqual(self.controller.active_view, "budget")

        self.controller.show("dashboard")
        view = self.controller.previous_month()
        self.assertEqual(view.month, "2024-03")
        self.assertEqual(view.month_label, "March 2024")

    def test_unknown_view(self):
        with self.assertRaises(ValueError):
            self.controller.show("reports")

    def test_transactions_view(self):
        self.create_transaction(description="Milk", amount=3.2)
        view = self.controller.show("transactions")
        self.assertEqual(view.month, "2024-03")
        self.assertEqual(len(view.month_options), 12)
        [row] = view.rows
        self.assertEqual((row.description, row.category_name, row.source), ("Milk", "Groceries", "manual"))

        view = self.controller.delete_transaction(row.id)
        self.assertEqual(view.rows, [])

    def test_csv_import_rent_example(self):
        rows = parse_csv("date,description,amount\n2024-03-01,Rent,$1500\nbad,,x\n")
        mapping = CsvMapping("date", "description", "amount", TransactionType.expense, self.category_id("Housing"))

        outcome = self.controller.import_csv(rows, mapping)
        self.assertEqual((outcome.submitted, outcome.imported), (1, 1))

        [row] = self.controller.load_transactions("2024-03").rows
        self.assertEqual((row.amount, row.type, row.source, row.category_name), (1500.0, "expense", "csv", "Housing"))

    def test_category_mutations_refresh_cache(self):
        view = self.controller.add_category("Travel")
        self.assertIn("Travel", [c["name"] for c in view.categories])
        travel = self.category_id("Travel")

        view = self.controller.rename_category(travel, "Trips")
        self.assertEqual(self.state.category_name(travel), "Trips")

        view = self.controller.delete_category(travel)
        self.assertNotIn("Trips", [c["name"] for c in view.categories])
        self.assertIsNone(self.state.category_name(travel))

    def test_blank_category_name_rejected_before_request(self):
        with self.assertRaises(ValueError):
            self.controller.add_category("   ")


class ConsoleTests(ClientTestCase):

    def run_command(self, *argv):
        args = build_parser().parse_args(list(argv))
        return run(args, self.controller)

    def test_format_currency(self):
        self.assertEqual(format_currency(1234.5), "$1,234.50")
        self.assertEqual(format_currency(-20), "-$20.00")
        self.assertEqual(format_currency(0), "$0.00")

    def test_render_table(self):
        table = render_table(["A", "Long header"], [(1, "x"), ("wide cell", "y")])
        lines = table.splitlines()
        self.assertEqual(lines[0], "A          Long header")
        self.assertEqual(len(lines), 4)

    def test_dashboard_command(self):
        self.create_transaction(description="Rent", amount=1500.0, category_id=self.category_id("Housing"))
        output = self.run_command("dashboard")
        self.assertIn("March 2024", output)
        self.assertIn("Expenses: $1,500.00", output)
        self.assertIn("Housing", output)

    def test_empty_dashboard(self):
        self.assertIn("No spending data for this month", self.run_command("dashboard"))

    def test_add_transaction_by_category_name(self):
        output = self.run_command(
            "add-transaction", "--date", "2024-03-04", "--description", "Fuel",
            "--amount", "45", "--category", "transportation",
        )
        self.assertIn("Fuel", output)
        self.assertIn("Transportation", output)

    def test_budget_set_command(self):
        housing = self.category_id("Housing")
        output = self.run_command("budget", "--set", f"{housing}=1200")
        self.assertIn("$1,200.00", output)

    def test_unknown_category_name(self):
        with self.assertRaises(ValueError):
            self.run_command("add-transaction", "--date", "2024-03-04", "--description", "X",
                             "--amount", "1", "--category", "Nope")


if __name__ == "__main__":
    unittest.main()
