"""Series shaped for spending charts."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..frames import category_totals, transactions_to_frame
from ..models import CategoryComparison, DailySpending, Transaction
from .periods import DateLike, start_of_day
from .trends import calculate_percentage_change


def get_daily_spending_data(
    expenses: Sequence[Transaction],
    start: DateLike,
    end: DateLike,
) -> List[DailySpending]:
    """Spending per calendar day from ``start`` through ``end``.

    Every day in the range is present, zero when nothing was spent.
    Expenses dated outside the range are ignored.
    """
    days = pd.date_range(start_of_day(start), start_of_day(end), freq='D')
    if days.empty:
        return []

    frame = transactions_to_frame(expenses)
    if frame.empty:
        daily = pd.Series(0.0, index=days)
    else:
        daily = (
            frame.groupby(frame['date'].dt.normalize())['amount']
            .sum()
            .reindex(days, fill_value=0.0)
        )

    return [DailySpending(date=day.date(), amount=float(amount)) for day, amount in daily.items()]


def get_category_comparison(
    current_expenses: Sequence[Transaction],
    previous_expenses: Sequence[Transaction],
) -> List[CategoryComparison]:
    """Per-category totals for two periods, largest current spend first."""
    current = category_totals(transactions_to_frame(current_expenses))
    previous = category_totals(transactions_to_frame(previous_expenses))

    names = list(current.index) + [name for name in previous.index if name not in current.index]
    rows = []
    for name in names:
        current_amount = float(current.get(name, 0.0))
        previous_amount = float(previous.get(name, 0.0))
        rows.append(CategoryComparison(
            category=str(name),
            current_amount=current_amount,
            previous_amount=previous_amount,
            change=calculate_percentage_change(current_amount, previous_amount),
        ))

    return sorted(rows, key=lambda row: row.current_amount, reverse=True)
