"""Period-over-period spending direction."""

from __future__ import annotations

from typing import Iterable

from ..models import TrendComparison, TrendDirection, Transaction

# Changes smaller than this many percent are reported as stable
STABLE_BAND_PERCENT = 5.0


def calculate_percentage_change(current: float, previous: float) -> float:
    """Relative change from ``previous`` to ``current`` in percent.

    When there was nothing to compare against, new spending counts as a
    full 100% swing and no spending as no change.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def classify_trend(percentage_change: float) -> TrendDirection:
    if abs(percentage_change) < STABLE_BAND_PERCENT:
        return TrendDirection.STABLE
    return TrendDirection.UP if percentage_change > 0 else TrendDirection.DOWN


def total_amount(transactions: Iterable[Transaction]) -> float:
    return float(sum(t.amount for t in transactions))


def calculate_trend_comparison(
    current_expenses: Iterable[Transaction],
    previous_expenses: Iterable[Transaction],
) -> TrendComparison:
    """Compare the totals of two expense collections."""
    current_total = total_amount(current_expenses)
    previous_total = total_amount(previous_expenses)
    change = calculate_percentage_change(current_total, previous_total)

    return TrendComparison(
        current_period_total=current_total,
        previous_period_total=previous_total,
        percentage_change=change,
        trend=classify_trend(change),
    )
