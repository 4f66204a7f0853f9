# budget_manager/client/console.py
"""
Консольный клиент: те же четыре экрана, что и в веб-интерфейсе, в виде текстовых таблиц.

    budget-client dashboard --month 2024-03
    budget-client import-csv bank.csv --date-column Date --description-column Memo \
        --amount-column Amount --type expense --category Housing
"""
import argparse
import logging
import sys
from typing import Iterable, List, Optional, Sequence

from budget_manager.client.api import ApiError, BudgetApiClient
from budget_manager.client.controller import (
    PageController, DashboardView, BudgetView, TransactionsView, SettingsView
)
from budget_manager.client.csv_import import CsvMapping, column_names, preview, read_csv_file
from budget_manager.client.state import AppState
from budget_manager.core.config import settings
from budget_manager.core.logging import setup_logging
from budget_manager.core.months import current_month, is_month_key
from budget_manager.db.models.transaction import TransactionType

logger = logging.getLogger(__name__)


def format_currency(amount: float) -> str:
    """1234.5 -> '$1,234.50', -20 -> '-$20.00'"""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def render_table(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    rows = [[str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells):
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    out = [line(headers), line("-" * w for w in widths)]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


# --- Отрисовка экранов ---

def render_dashboard(view: DashboardView) -> str:
    parts = [
        view.month_label,
        f"Income:   {format_currency(view.total_income)}",
        f"Expenses: {format_currency(view.total_expenses)}",
        f"Net:      {format_currency(view.net)}",
        "",
    ]
    if view.rows:
        parts.append(render_table(
            ["Category", "Budgeted", "Actual", "Remaining", "Used"],
            [
                (r.name, format_currency(r.budgeted), format_currency(r.actual),
                 format_currency(r.remaining), f"{r.percent_used:.1f}%")
                for r in view.rows
            ]
        ))
    else:
        parts.append("No spending data for this month")
    return "\n".join(parts)


def render_budget(view: BudgetView) -> str:
    table = render_table(
        ["ID", "Category", "Budget", "Actual", "Difference"],
        [
            (r.category_id, r.name, format_currency(r.budgeted), format_currency(r.actual),
             format_currency(r.difference))
            for r in view.rows
        ] + [("", "Total", format_currency(view.total_budgeted), format_currency(view.total_actual),
              format_currency(view.total_difference))]
    )
    return f"{view.month_label}\n\n{table}"


def render_transactions(view: TransactionsView) -> str:
    if not view.rows:
        return f"No transactions for {view.month}"
    return render_table(
        ["ID", "Date", "Description", "Category", "Type", "Amount", "Source"],
        [
            (t.id, t.date, t.description, t.category_name, t.type, format_currency(t.amount), t.source)
            for t in view.rows
        ]
    )


def render_settings(view: SettingsView) -> str:
    return render_table(["ID", "Category"], [(c["id"], c["name"]) for c in view.categories])


# --- Аргументы ---

def _month(value: str) -> str:
    if not is_month_key(value):
        raise argparse.ArgumentTypeError(f"invalid month '{value}', expected YYYY-MM")
    return value


def _budget_pair(value: str):
    category_id, sep, amount = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected CATEGORY_ID=AMOUNT, got '{value}'")
    try:
        return int(category_id), float(amount)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected CATEGORY_ID=AMOUNT, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="budget-client", description="Personal budget console client")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="Budget API base URL")
    parser.add_argument("--month", type=_month, default=None, help="Month to show (YYYY-MM), defaults to current")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("dashboard", help="Monthly summary")

    budget = sub.add_parser("budget", help="Show or set the month's budget")
    budget.add_argument("--set", dest="amounts", type=_budget_pair, nargs="+", metavar="CATEGORY_ID=AMOUNT")

    sub.add_parser("transactions", help="List the month's transactions")

    add_txn = sub.add_parser("add-transaction", help="Add a transaction")
    add_txn.add_argument("--date", required=True, help="YYYY-MM-DD")
    add_txn.add_argument("--description", required=True)
    add_txn.add_argument("--amount", type=float, required=True)
    add_txn.add_argument("--type", choices=[t.value for t in TransactionType], default=TransactionType.expense.value)
    add_txn.add_argument("--category", required=True, help="Category ID or name")

    del_txn = sub.add_parser("delete-transaction", help="Delete a transaction")
    del_txn.add_argument("transaction_id", type=int)

    imp = sub.add_parser("import-csv", help="Import transactions from a CSV file")
    imp.add_argument("file")
    imp.add_argument("--date-column")
    imp.add_argument("--description-column")
    imp.add_argument("--amount-column")
    imp.add_argument("--type", choices=[t.value for t in TransactionType], default=TransactionType.expense.value)
    imp.add_argument("--category", help="Category ID or name applied to every row")
    imp.add_argument("--preview", action="store_true", help="Only show columns and the first rows")

    sub.add_parser("categories", help="List categories")

    add_cat = sub.add_parser("add-category", help="Add a category")
    add_cat.add_argument("name")

    ren_cat = sub.add_parser("rename-category", help="Rename a category")
    ren_cat.add_argument("category_id", type=int)
    ren_cat.add_argument("name")

    del_cat = sub.add_parser("delete-category", help="Deactivate a category")
    del_cat.add_argument("category_id", type=int)

    return parser


def resolve_category(state: AppState, value: str) -> int:
    """ID категории или ее имя (без учета регистра) -> ID."""
    if value.isdigit():
        return int(value)
    for category in state.categories:
        if category["name"].lower() == value.lower():
            return category["id"]
    raise ValueError(f"Unknown category '{value}'")


def run(args: argparse.Namespace, controller: PageController) -> str:
    command = args.command

    if command == "dashboard":
        return render_dashboard(controller.show("dashboard"))
    if command == "budget":
        if args.amounts:
            controller.active_view = "budget"
            return render_budget(controller.save_budget(dict(args.amounts)))
        return render_budget(controller.show("budget"))
    if command == "transactions":
        controller.active_view = "transactions"
        return render_transactions(controller.load_transactions(args.month))
    if command == "add-transaction":
        view = controller.add_transaction({
            "date": args.date,
            "description": args.description,
            "amount": args.amount,
            "type": args.type,
            "category_id": resolve_category(controller.state, args.category),
        })
        return render_transactions(view)
    if command == "delete-transaction":
        return render_transactions(controller.delete_transaction(args.transaction_id))
    if command == "import-csv":
        return _import_csv(args, controller)
    if command == "categories":
        return render_settings(controller.show("settings"))
    if command == "add-category":
        return render_settings(controller.add_category(args.name))
    if command == "rename-category":
        return render_settings(controller.rename_category(args.category_id, args.name))
    if command == "delete-category":
        return render_settings(controller.delete_category(args.category_id))
    raise ValueError(f"Unknown command '{command}'")


def _import_csv(args: argparse.Namespace, controller: PageController) -> str:
    rows = read_csv_file(args.file)
    if not rows:
        raise ValueError("No data found in CSV")

    columns = column_names(rows)
    if args.preview:
        return render_table(columns, [[row.get(c) or "" for c in columns] for row in preview(rows)])

    missing = [
        name for name, value in (
            ("--date-column", args.date_column),
            ("--description-column", args.description_column),
            ("--amount-column", args.amount_column),
            ("--category", args.category),
        ) if not value
    ]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} (columns: {', '.join(columns)})")
    for column in (args.date_column, args.description_column, args.amount_column):
        if column not in columns:
            raise ValueError(f"Column '{column}' not found (columns: {', '.join(columns)})")

    mapping = CsvMapping(
        date_column=args.date_column,
        description_column=args.description_column,
        amount_column=args.amount_column,
        default_type=TransactionType(args.type),
        default_category_id=resolve_category(controller.state, args.category),
    )
    outcome = controller.import_csv(rows, mapping)
    return f"Successfully imported {outcome.imported} of {outcome.submitted} transactions"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    state = AppState(current_month=args.month or current_month())
    with BudgetApiClient(base_url=args.base_url) as api:
        controller = PageController(api, state)
        try:
            controller.init()
            print(run(args, controller))
        except (ApiError, ValueError, OSError) as e:
            # Аналог блокирующего alert: сообщаем и прерываем действие
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
