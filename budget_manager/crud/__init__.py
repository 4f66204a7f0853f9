# budget_manager/crud/__init__.py
from . import crud_category
from . import crud_transaction
from . import crud_budget
from . import crud_report
