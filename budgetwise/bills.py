"""Pure helpers over bill records.

Nothing here reads or writes storage; callers pass the bills they have
already loaded.  :func:`calculate_upcoming_bills_total` is the value to
feed into the ``upcoming_bills`` argument of
:func:`budgetwise.analytics.calculate_available_to_spend`.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from .analytics.periods import DateLike, in_window, resolve_now
from .models import Bill, BillStatus, BillStatusLabel, RecurrencePattern
from .recurring import calculate_next_occurrence

# Bills due within this many days are highlighted
DUE_SOON_DAYS = 3


def calculate_next_due_date(due_date: date, pattern: RecurrencePattern) -> date:
    """Next due date of a recurring bill; see :func:`calculate_next_occurrence`."""
    return calculate_next_occurrence(due_date, pattern)


def _today(now: Optional[datetime]) -> date:
    return resolve_now(now).date()


def days_until_due(bill: Bill, now: Optional[datetime] = None) -> int:
    """Days from today to the due date; negative once the date has passed."""
    return (bill.due_date - _today(now)).days


def is_overdue(bill: Bill, now: Optional[datetime] = None) -> bool:
    if bill.status is BillStatus.PAID:
        return False
    return bill.status is BillStatus.OVERDUE or days_until_due(bill, now) < 0


def bills_due_within(bills: Iterable[Bill], days: int, now: Optional[datetime] = None) -> List[Bill]:
    """Unpaid bills due from today through ``days`` days ahead, soonest first."""
    today = _today(now)
    horizon = today + timedelta(days=days)
    due = [b for b in bills if b.status is not BillStatus.PAID and today <= b.due_date <= horizon]
    return sorted(due, key=lambda b: b.due_date)


def calculate_upcoming_bills_total(bills: Iterable[Bill], start: DateLike, end: DateLike) -> float:
    """Sum of unpaid bills due within ``[start, end]``."""
    return float(sum(
        b.amount for b in bills
        if b.status is not BillStatus.PAID and in_window(b.due_date, start, end)
    ))


def calculate_monthly_bill_total(bills: Iterable[Bill]) -> float:
    """Total monthly obligations from recurring monthly bills."""
    return float(sum(
        b.amount for b in bills
        if b.is_recurring and b.recurrence_pattern is RecurrencePattern.MONTHLY
    ))


def format_bill_status(bill: Bill, now: Optional[datetime] = None) -> BillStatusLabel:
    """Display label and variant for a bill's due state."""
    remaining = days_until_due(bill, now)

    if is_overdue(bill, now):
        return BillStatusLabel(label='Overdue', variant='destructive', days_until_due=remaining)
    if bill.status is BillStatus.PAID:
        return BillStatusLabel(label='Paid', variant='secondary', days_until_due=remaining)
    if remaining == 0:
        return BillStatusLabel(label='Due Today', variant='destructive', days_until_due=remaining)
    if remaining <= DUE_SOON_DAYS:
        plural = 's' if remaining > 1 else ''
        return BillStatusLabel(label=f'Due in {remaining} day{plural}', variant='outline', days_until_due=remaining)
    return BillStatusLabel(label=f'Due in {remaining} days', variant='default', days_until_due=remaining)
