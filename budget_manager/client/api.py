# budget_manager/client/api.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from budget_manager.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Ошибка ответа API: сообщение из {"error": ...} и HTTP статус."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BudgetApiClient:
    """
    Тонкая обертка над REST API бюджета.
    Принимает готовый httpx.Client (в тестах - TestClient приложения).
    """

    def __init__(self, http: Optional[httpx.Client] = None, base_url: Optional[str] = None, prefix: str = "/api"):
        self.http = http or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.HTTP_TIMEOUT
        )
        self.prefix = prefix

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "BudgetApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"Could not reach budget API: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text or response.reason_phrase
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)
        return response.json()

    # --- Categories ---

    def fetch_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/categories")

    def create_category(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/categories", json={"name": name})

    def update_category(self, category_id: int, name: str) -> Dict[str, Any]:
        return self._request("PUT", f"/categories/{category_id}", json={"name": name})

    def delete_category(self, category_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/categories/{category_id}")

    # --- Transactions ---

    def fetch_transactions(self, month: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"month": month} if month else None
        return self._request("GET", "/transactions", params=params)

    def create_transaction(self, transaction: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/transactions", json=transaction)

    def update_transaction(self, transaction_id: int, transaction: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/transactions/{transaction_id}", json=transaction)

    def delete_transaction(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/transactions/{transaction_id}")

    def import_transactions(self, transactions: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("POST", "/transactions/import", json={"transactions": transactions})

    # --- Budgets ---

    def fetch_budgets(self, month: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/budgets", params={"month": month})

    def save_budgets(self, month: str, budgets: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("POST", "/budgets", json={"month": month, "budgets": budgets})

    # --- Reports ---

    def fetch_summary(self, month: str) -> Dict[str, Any]:
        return self._request("GET", "/reports/summary", params={"month": month})
