"""Discretionary spending room for a period."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional

from ..models import AvailableBreakdown, AvailableToSpend, Goal, Transaction
from .periods import ONE_DAY, PeriodLike, get_period_end, resolve_now
from .trends import total_amount


def calculate_goal_allocations(goals: Iterable[Goal]) -> float:
    """Money already set aside for active, unpaused goals."""
    return float(sum(g.current_amount for g in goals if g.is_allocating))


def calculate_available_to_spend(
    income: Iterable[Transaction],
    expenses: Iterable[Transaction],
    goals: Iterable[Goal],
    period: PeriodLike,
    upcoming_bills: float = 0.0,
    now: Optional[datetime] = None,
    period_end: Optional[datetime] = None,
) -> AvailableToSpend:
    """Estimate what is left to spend for the rest of ``period``.

    ``amount = income - expenses - goal allocations - upcoming bills``.
    Bills are not derived here; callers that track them pass the total in
    (see :func:`budgetwise.bills.calculate_upcoming_bills_total`).

    ``days_remaining`` counts from ``now`` to the end of the calendar
    period (or ``period_end`` when given) and is never below 1.  A
    negative ``amount`` and ``daily_amount`` signal overspending.
    """
    now = resolve_now(now)
    total_income = total_amount(income)
    total_expenses = total_amount(expenses)
    goal_allocations = calculate_goal_allocations(goals)
    bills = float(upcoming_bills)

    available = total_income - total_expenses - goal_allocations - bills

    end = period_end if period_end is not None else get_period_end(period, now)
    days_remaining = max(math.ceil((end - now) / ONE_DAY), 1)

    return AvailableToSpend(
        amount=available,
        daily_amount=available / days_remaining,
        days_remaining=days_remaining,
        breakdown=AvailableBreakdown(
            total_income=total_income,
            total_expenses=total_expenses,
            goal_allocations=goal_allocations,
            upcoming_bills=bills,
        ),
    )
