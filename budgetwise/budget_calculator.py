"""Budget versus actual spending for categories.

This module classifies how close each category is to its budget for the
category's own period, produces short comparison and suggestion texts,
and rolls per-category insights up into an overall health summary.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .analytics.periods import (
    DateLike,
    PeriodLike,
    as_period,
    days_remaining_in_period,
    get_period_range,
    get_previous_period_range,
    start_of_day,
)
from .analytics.trends import calculate_percentage_change
from .formatting import format_currency
from .frames import transactions_to_frame
from .models import (
    BudgetHealthSummary,
    BudgetInsight,
    BudgetStatus,
    Category,
    Period,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

# Lower bounds of each status band, in percent of budget used
WARNING_THRESHOLD = 70.0
CRITICAL_THRESHOLD = 90.0
EXCEEDED_THRESHOLD = 100.0

# Most urgent first
STATUS_PRIORITY: Dict[BudgetStatus, int] = {
    BudgetStatus.EXCEEDED: 0,
    BudgetStatus.CRITICAL: 1,
    BudgetStatus.WARNING: 2,
    BudgetStatus.OK: 3,
}

STATUS_COLORS: Dict[BudgetStatus, str] = {
    BudgetStatus.OK: '#22c55e',
    BudgetStatus.WARNING: '#f59e0b',
    BudgetStatus.CRITICAL: '#f97316',
    BudgetStatus.EXCEEDED: '#ef4444',
}

PREVIOUS_PERIOD_TEXT: Dict[Period, str] = {
    Period.DAILY: 'yesterday',
    Period.WEEKLY: 'last week',
    Period.MONTHLY: 'last month',
    Period.YEARLY: 'last year',
}

PERIOD_NOUNS: Dict[Period, str] = {
    Period.DAILY: 'day',
    Period.WEEKLY: 'week',
    Period.MONTHLY: 'month',
    Period.YEARLY: 'year',
}


def _round_half_up(value: float, decimals: int = 0) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def _whole_percent(value: float) -> str:
    return f"{_round_half_up(value):.0f}"


def _bound(value: DateLike) -> pd.Timestamp:
    if isinstance(value, datetime):
        return pd.Timestamp(value)
    return pd.Timestamp(start_of_day(value))


def _spending_in_range(frame: pd.DataFrame, category_id: Optional[str], start: DateLike, end: DateLike) -> float:
    if frame.empty:
        return 0.0
    if category_id is None:
        category_mask = frame['category_id'].isna()
    else:
        category_mask = frame['category_id'] == category_id
    mask = (
        (frame['type'] == TransactionType.EXPENSE.value)
        & category_mask
        & frame['date'].between(_bound(start), _bound(end))
    )
    return float(frame.loc[mask, 'amount'].sum())


def calculate_spending_in_range(
    transactions: Sequence[Transaction],
    category_id: Optional[str],
    start: DateLike,
    end: DateLike,
) -> float:
    """Calculate total expense spending for one category within a date range.

    Args:
        transactions: Transactions to scan; income is ignored
        category_id: Category to match
        start: Window start, inclusive
        end: Window end, inclusive

    Returns:
        Sum of matching expense amounts

    Example:
        >>> calculate_spending_in_range(txns, 'food', datetime(2024, 3, 1), datetime(2024, 3, 31))
        1200.0
    """
    return _spending_in_range(transactions_to_frame(transactions), category_id, start, end)


def calculate_utilization(spent: float, budget: float) -> float:
    """Percentage of ``budget`` used by ``spent``; a zero budget reports 0."""
    if budget == 0:
        return 0.0
    return spent / budget * 100


def get_budget_status(utilization: float) -> BudgetStatus:
    """Classify utilization: below 70 ok, below 90 warning, below 100 critical,
    exceeded from 100 up."""
    if utilization >= EXCEEDED_THRESHOLD:
        return BudgetStatus.EXCEEDED
    if utilization >= CRITICAL_THRESHOLD:
        return BudgetStatus.CRITICAL
    if utilization >= WARNING_THRESHOLD:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def get_status_color(status: BudgetStatus) -> str:
    return STATUS_COLORS[BudgetStatus(status)]


def get_progress_color(utilization: float) -> str:
    return STATUS_COLORS[get_budget_status(utilization)]


def generate_comparison_text(current: float, previous: float, period: PeriodLike) -> str:
    """Describe the change against the previous period.

    Example:
        >>> generate_comparison_text(120, 100, 'monthly')
        '↑ 20% vs last month'
    """
    change = calculate_percentage_change(current, previous)
    magnitude = abs(change)
    if magnitude < 1:
        return "No change"

    direction = "↑" if change > 0 else "↓"
    return f"{direction} {_whole_percent(magnitude)}% vs {PREVIOUS_PERIOD_TEXT[as_period(period)]}"


def generate_suggestion(
    category_name: str,
    utilization: float,
    amount_remaining: float,
    period: PeriodLike,
    change: float,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """Pick an actionable suggestion for a category, or ``None``.

    Rules are checked in order and the first match wins:

    1. over budget: report the excess
    2. at least 90% used: report what is left
    3. at least 70% used and spending up more than 20%: flag the trend
    4. under 50% used and spending down more than 20%: encourage
    5. under 70% used: suggest a daily allowance for the rest of the period
    """
    if utilization >= EXCEEDED_THRESHOLD:
        excess = abs(amount_remaining)
        return f"You've exceeded your {category_name} budget by {format_currency(excess)}. Consider reducing spending."

    if utilization >= CRITICAL_THRESHOLD:
        return f"Only {format_currency(amount_remaining)} left in your {category_name} budget. Spend carefully!"

    if utilization >= WARNING_THRESHOLD and change > 20:
        return f"{category_name} spending is up {_whole_percent(change)}%. Consider reviewing this category."

    if utilization < 50 and change < -20:
        return f"Great job! You're spending {_whole_percent(abs(change))}% less on {category_name}."

    if utilization < WARNING_THRESHOLD:
        days_remaining = days_remaining_in_period(period, now)
        daily_budget = amount_remaining / days_remaining
        if daily_budget > 0:
            return (
                f"You can spend {format_currency(daily_budget)} per day on {category_name} "
                f"for the rest of this {PERIOD_NOUNS[as_period(period)]}."
            )

    return None


def _insight_from_frame(category: Category, frame: pd.DataFrame, now: Optional[datetime]) -> BudgetInsight:
    period = category.budget_period
    current_range = get_period_range(period, now)
    previous_range = get_previous_period_range(period, now)

    current_spending = _spending_in_range(frame, category.id, current_range.start_date, current_range.end_date)
    previous_spending = _spending_in_range(frame, category.id, previous_range.start_date, previous_range.end_date)

    utilization = calculate_utilization(current_spending, category.budget_amount)
    amount_remaining = category.budget_amount - current_spending
    change = calculate_percentage_change(current_spending, previous_spending)

    return BudgetInsight(
        category_id=category.id,
        category_name=category.name,
        status=get_budget_status(utilization),
        utilization_percentage=_round_half_up(utilization, 1),
        amount_spent=current_spending,
        amount_remaining=amount_remaining,
        budget_amount=category.budget_amount,
        period=period,
        comparison_text=generate_comparison_text(current_spending, previous_spending, period),
        suggestion=generate_suggestion(category.name, utilization, amount_remaining, period, change, now),
    )


def calculate_budget_insight(
    category: Category,
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
) -> BudgetInsight:
    """Calculate the insight for one category over its own budget period.

    Args:
        category: Category with budget amount and period
        transactions: All transactions available for the comparison windows
        now: Reference time, defaults to the current time

    Returns:
        BudgetInsight with status, utilization (one decimal), spent and
        remaining amounts, comparison text and optional suggestion
    """
    return _insight_from_frame(category, transactions_to_frame(transactions), now)


def calculate_all_budget_insights(
    categories: Iterable[Category],
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
) -> List[BudgetInsight]:
    """Calculate insights for every active category with a budget.

    The result is ordered most urgent first (exceeded, critical, warning,
    ok); categories with the same status keep their input order.
    """
    budgeted = [c for c in categories if c.is_active and c.budget_amount > 0]
    frame = transactions_to_frame(transactions)
    insights = [_insight_from_frame(category, frame, now) for category in budgeted]
    logger.debug("Calculated %d budget insights from %d transactions", len(insights), len(frame))
    return sorted(insights, key=lambda insight: STATUS_PRIORITY[insight.status])


def calculate_budget_health(insights: Sequence[BudgetInsight]) -> BudgetHealthSummary:
    """Roll category insights up into overall totals and per-status counts."""
    total_budget = float(sum(i.budget_amount for i in insights))
    total_spent = float(sum(i.amount_spent for i in insights))
    counts = {status: 0 for status in BudgetStatus}
    for insight in insights:
        counts[insight.status] += 1

    return BudgetHealthSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        total_remaining=total_budget - total_spent,
        overall_utilization=calculate_utilization(total_spent, total_budget),
        categories_on_track=counts[BudgetStatus.OK],
        categories_warning=counts[BudgetStatus.WARNING],
        categories_critical=counts[BudgetStatus.CRITICAL],
        categories_exceeded=counts[BudgetStatus.EXCEEDED],
    )
