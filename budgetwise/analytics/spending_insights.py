"""Headline spending facts for a period.

Each fact is an independent reduction over the same expense list and is
``None`` when there is nothing to report, which callers must keep apart
from a zero value.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import pandas as pd

from ..frames import category_counts, category_totals, transactions_to_frame
from ..models import FrequentCategory, LargestExpense, SpendingInsights, TopCategory, Transaction
from .trends import total_amount

logger = logging.getLogger(__name__)

UNNAMED_EXPENSE = 'Unnamed'


def _top_category(frame: pd.DataFrame) -> Optional[TopCategory]:
    totals = category_totals(frame)
    if totals.empty:
        return None
    name = totals.idxmax()
    amount = float(totals[name])
    if amount <= 0:
        return None
    return TopCategory(name=str(name), amount=amount)


def _largest_expense(frame: pd.DataFrame) -> Optional[LargestExpense]:
    if frame.empty:
        return None
    row = frame.loc[frame['amount'].idxmax()]
    description = row['description'] if isinstance(row['description'], str) and row['description'] else UNNAMED_EXPENSE
    return LargestExpense(description=description, amount=float(row['amount']))


def _most_frequent_category(frame: pd.DataFrame) -> Optional[FrequentCategory]:
    counts = category_counts(frame)
    if counts.empty:
        return None
    name = counts.idxmax()
    return FrequentCategory(name=str(name), count=int(counts[name]))


def average_daily_spending(frame: pd.DataFrame) -> float:
    """Total spend divided by the number of distinct days with any expense.

    Days without spending do not count against the denominator; this
    measures intensity on active days, not a calendar average.
    """
    if frame.empty:
        return 0.0
    active_days = max(frame['date'].dt.normalize().nunique(), 1)
    return float(frame['amount'].sum()) / active_days


def calculate_spending_insights(
    expenses: Sequence[Transaction],
    income: Sequence[Transaction],
) -> SpendingInsights:
    """Summarize an expense list: top category, daily average, largest
    expense and most frequent category, plus expense and income totals."""
    frame = transactions_to_frame(expenses)
    logger.debug("Computing spending insights over %d expenses", len(frame))

    return SpendingInsights(
        top_category=_top_category(frame),
        average_daily_spending=average_daily_spending(frame),
        largest_expense=_largest_expense(frame),
        most_frequent_category=_most_frequent_category(frame),
        total_expenses=total_amount(expenses),
        total_income=total_amount(income),
    )
