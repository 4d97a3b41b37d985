"""Top-level package for the BudgetWise calculation engine.

The engine is a set of pure functions over plain records supplied by
the caller.  The primary modules are:

* ``models`` – input records (transactions, categories, goals, bills)
  and derived result records
* ``analytics`` – period windows, trends, spending insights,
  available-to-spend and chart series
* ``budget_calculator`` – per-category budget status, suggestions and
  overall budget health
* ``recurring`` – detection of unmarked recurring transactions
* ``bills``, ``filters`` and ``wallets`` – helpers over bills, transaction
  lists and per-wallet figures
* ``visualization`` – Plotly figures built from engine outputs

Nothing here performs I/O; callers fetch rows from storage, build
records with ``Transaction.from_dict`` and friends, and render results.
"""

import logging

from . import analytics  # noqa: F401  # re-exported for convenience
from . import bills  # noqa: F401  # re-exported for convenience
from . import budget_calculator  # noqa: F401  # re-exported for convenience
from . import filters  # noqa: F401  # re-exported for convenience
from . import recurring  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience
from . import wallets  # noqa: F401  # re-exported for convenience
from .models import (  # noqa: F401
    Bill,
    BudgetPeriod,
    BudgetStatus,
    Category,
    Goal,
    Period,
    RecurrencePattern,
    Transaction,
    TransactionType,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "analytics",
    "bills",
    "budget_calculator",
    "filters",
    "recurring",
    "visualization",
    "wallets",
    "Bill",
    "BudgetPeriod",
    "BudgetStatus",
    "Category",
    "Goal",
    "Period",
    "RecurrencePattern",
    "Transaction",
    "TransactionType",
]
