# budget_manager/client/__init__.py
from .api import BudgetApiClient, ApiError
from .state import AppState
from .controller import PageController
