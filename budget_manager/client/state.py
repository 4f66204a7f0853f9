# budget_manager/client/state.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from budget_manager.core.months import current_month, shift_month


@dataclass
class AppState:
    """
    Состояние клиентской сессии, общее для всех экранов:
    текущий месяц и кэш активных категорий.
    Живет столько же, сколько сессия; передается контроллеру явно.
    """
    current_month: str = field(default_factory=current_month)
    categories: List[Dict[str, Any]] = field(default_factory=list)

    def shift_month(self, offset: int) -> str:
        self.current_month = shift_month(self.current_month, offset)
        return self.current_month

    def set_categories(self, categories: List[Dict[str, Any]]) -> None:
        self.categories = list(categories)

    def category_name(self, category_id: int) -> Optional[str]:
        for category in self.categories:
            if category["id"] == category_id:
                return category["name"]
        return None
