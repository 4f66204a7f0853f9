# budget_manager/client/controller.py
"""
Контроллер страниц клиента: четыре экрана (dashboard, budget, transactions, settings).
Каждый экран при активации сам загружает свои данные и возвращает модель представления;
между переходами сохраняется только AppState (месяц и кэш категорий).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from budget_manager.client.api import BudgetApiClient
from budget_manager.client.csv_import import CsvMapping, CsvRow, map_rows
from budget_manager.client.state import AppState
from budget_manager.core.months import format_month, recent_months

logger = logging.getLogger(__name__)

VIEWS = ("dashboard", "budget", "transactions", "settings")
MONTH_FILTER_SIZE = 12


# --- Модели представлений ---

@dataclass
class DashboardRow:
    category_id: int
    name: str
    budgeted: float
    actual: float
    remaining: float
    percent_used: float


@dataclass
class ChartBar:
    name: str
    amount: float


@dataclass
class DashboardView:
    month: str
    month_label: str
    total_income: float
    total_expenses: float
    net: float
    rows: List[DashboardRow] = field(default_factory=list)
    chart: List[ChartBar] = field(default_factory=list)


@dataclass
class BudgetRow:
    category_id: int
    name: str
    budgeted: float
    actual: float
    difference: float


@dataclass
class BudgetView:
    month: str
    month_label: str
    rows: List[BudgetRow] = field(default_factory=list)
    total_budgeted: float = 0.0
    total_actual: float = 0.0
    total_difference: float = 0.0


@dataclass
class TransactionRow:
    id: int
    date: str
    description: str
    category_name: str
    type: str
    amount: float
    source: str


@dataclass
class TransactionsView:
    month: str
    month_options: List[Tuple[str, str]] # (ключ месяца, подпись)
    rows: List[TransactionRow] = field(default_factory=list)


@dataclass
class SettingsView:
    categories: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ImportOutcome:
    submitted: int # Строк отправлено после отбрасывания некорректных
    imported: int  # Строк реально сохранено сервером


class PageController:

    def __init__(self, api: BudgetApiClient, state: Optional[AppState] = None):
        self.api = api
        self.state = state or AppState()
        self.active_view = "dashboard"

    def init(self) -> None:
        """Первичная загрузка: кэш категорий."""
        self.refresh_categories()

    def refresh_categories(self) -> List[Dict[str, Any]]:
        self.state.set_categories(self.api.fetch_categories())
        return self.state.categories

    # --- Навигация ---

    def show(self, view: str):
        if view not in VIEWS:
            raise ValueError(f"Unknown view '{view}', expected one of {', '.join(VIEWS)}")
        self.active_view = view
        loader = getattr(self, f"load_{view}")
        return loader()

    def previous_month(self):
        self.state.shift_month(-1)
        return self._reload_month_view()

    def next_month(self):
        self.state.shift_month(1)
        return self._reload_month_view()

    def _reload_month_view(self):
        # Переключатель месяца есть только на экранах dashboard и budget
        if self.active_view == "budget":
            return self.load_budget()
        self.active_view = "dashboard"
        return self.load_dashboard()

    # --- Dashboard ---

    def load_dashboard(self) -> DashboardView:
        month = self.state.current_month
        summary = self.api.fetch_summary(month)

        rows = []
        for cat in summary["category_breakdown"]:
            # Категории без факта и без бюджета не показываем
            if cat["actual"] > 0 or cat["budgeted"] > 0:
                rows.append(DashboardRow(
                    category_id=cat["id"],
                    name=cat["name"],
                    budgeted=cat["budgeted"],
                    actual=cat["actual"],
                    remaining=cat["budgeted"] - cat["actual"],
                    percent_used=round(cat["actual"] / cat["budgeted"] * 100, 1) if cat["budgeted"] > 0 else 0.0
                ))

        chart = [
            ChartBar(name=cat["name"], amount=cat["actual"])
            for cat in summary["category_breakdown"] if cat["actual"] > 0
        ]

        return DashboardView(
            month=month,
            month_label=format_month(month),
            total_income=summary["total_income"],
            total_expenses=summary["total_expenses"],
            net=summary["net"],
            rows=rows,
            chart=chart
        )

    # --- Budget ---

    def load_budget(self) -> BudgetView:
        month = self.state.current_month
        summary = self.api.fetch_summary(month)
        by_category = {cat["id"]: cat for cat in summary["category_breakdown"]}

        view = BudgetView(month=month, month_label=format_month(month))
        for category in self.state.categories:
            cat_data = by_category.get(category["id"], {})
            budgeted = cat_data.get("budgeted", 0.0)
            actual = cat_data.get("actual", 0.0)
            view.rows.append(BudgetRow(
                category_id=category["id"],
                name=category["name"],
                budgeted=budgeted,
                actual=actual,
                difference=budgeted - actual
            ))
            view.total_budgeted += budgeted
            view.total_actual += actual

        view.total_difference = view.total_budgeted - view.total_actual
        return view

    def save_budget(self, amounts: Dict[int, float]) -> BudgetView:
        """
        Сохраняет бюджет месяца целиком: для каждой категории из кэша
        берется новая сумма из amounts или текущая, если ее не меняли.
        """
        current = {row.category_id: row.budgeted for row in self.load_budget().rows}
        current.update({int(k): float(v or 0) for k, v in amounts.items()})

        budgets = [
            {"category_id": category_id, "budget_amount": amount}
            for category_id, amount in current.items()
        ]
        self.api.save_budgets(self.state.current_month, budgets)
        logger.info("Saved budget for %s (%d categories)", self.state.current_month, len(budgets))
        return self.load_budget()

    # --- Transactions ---

    def load_transactions(self, month: Optional[str] = None) -> TransactionsView:
        month = month or self.state.current_month
        options = [(key, format_month(key)) for key in recent_months(MONTH_FILTER_SIZE)]

        rows = [
            TransactionRow(
                id=txn["id"],
                date=txn["date"],
                description=txn["description"],
                category_name=txn.get("category_name") or "Unknown",
                type=txn["type"],
                amount=txn["amount"],
                source=txn.get("source") or "manual"
            )
            for txn in self.api.fetch_transactions(month)
        ]
        return TransactionsView(month=month, month_options=options, rows=rows)

    def add_transaction(self, transaction: Dict[str, Any]) -> TransactionsView:
        self.api.create_transaction(transaction)
        return self.load_transactions()

    def edit_transaction(self, transaction_id: int, transaction: Dict[str, Any]) -> TransactionsView:
        self.api.update_transaction(transaction_id, transaction)
        return self.load_transactions()

    def delete_transaction(self, transaction_id: int) -> TransactionsView:
        self.api.delete_transaction(transaction_id)
        return self.load_transactions()

    def import_csv(self, rows: List[CsvRow], mapping: CsvMapping) -> ImportOutcome:
        transactions = map_rows(rows, mapping)
        result = self.api.import_transactions(transactions)
        outcome = ImportOutcome(submitted=len(transactions), imported=result["imported"])
        logger.info("CSV import: %d rows parsed, %d submitted, %d imported", len(rows), outcome.submitted, outcome.imported)
        return outcome

    # --- Settings ---

    def load_settings(self) -> SettingsView:
        return SettingsView(categories=list(self.state.categories))

    def add_category(self, name: str) -> SettingsView:
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a category name")
        self.api.create_category(name)
        self.refresh_categories()
        return self.load_settings()

    def rename_category(self, category_id: int, name: str) -> SettingsView:
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a category name")
        self.api.update_category(category_id, name)
        self.refresh_categories()
        return self.load_settings()

    def delete_category(self, category_id: int) -> SettingsView:
        self.api.delete_category(category_id)
        self.refresh_categories()
        return self.load_settings()
