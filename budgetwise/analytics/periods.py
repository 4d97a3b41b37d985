"""Calendar windows for reporting periods and budget periods.

Windows are inclusive on both ends.  The current window always ends at
the last instant of today; the previous window covers the same number of
calendar days immediately before it, so a seven day window is compared
with exactly the seven days that precede it.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Union

from ..models import BudgetPeriod, Period, PeriodRange, Transaction

PeriodLike = Union[Period, BudgetPeriod, str]
DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)
_LAST_INSTANT = timedelta(days=1) - timedelta(microseconds=1)

CURRENT_LABELS = {
    Period.DAILY: 'Today',
    Period.WEEKLY: 'Last 7 Days',
    Period.MONTHLY: 'This Month',
    Period.YEARLY: 'This Year',
}
PREVIOUS_LABELS = {
    Period.DAILY: 'Previous Day',
    Period.WEEKLY: 'Previous Week',
    Period.MONTHLY: 'Previous Month',
    Period.YEARLY: 'Previous Year',
}


def as_period(period: PeriodLike) -> Period:
    """Normalize a reporting or budget period to :class:`Period`."""
    return Period(getattr(period, 'value', period))


def resolve_now(now: Optional[datetime] = None) -> datetime:
    return now if now is not None else datetime.now()


def start_of_day(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time.min)
    return datetime.combine(value, time.min)


def end_of_day(value: DateLike) -> datetime:
    return start_of_day(value) + _LAST_INSTANT


def get_period_range(period: PeriodLike, now: Optional[datetime] = None) -> PeriodRange:
    """Get the current window for ``period``.

    * daily: today 00:00 through 23:59:59.999999
    * weekly: the trailing seven days, today included
    * monthly: the first of the month through today
    * yearly: January 1st through today
    """
    period = as_period(period)
    today = start_of_day(resolve_now(now))
    end = today + _LAST_INSTANT

    if period is Period.DAILY:
        start = today
    elif period is Period.WEEKLY:
        start = today - timedelta(days=6)
    elif period is Period.MONTHLY:
        start = today.replace(day=1)
    else:
        start = today.replace(month=1, day=1)

    return PeriodRange(start_date=start, end_date=end, label=CURRENT_LABELS[period])


def window_days(start: DateLike, end: DateLike) -> int:
    """Number of calendar days covered by an inclusive window."""
    return (start_of_day(end) - start_of_day(start)).days + 1


def get_previous_period_range(period: PeriodLike, now: Optional[datetime] = None) -> PeriodRange:
    """Get the window of equal length immediately before the current one.

    The shift is measured in days rather than calendar months, so the
    month-to-date on the 15th compares with the fifteen days before the 1st.
    """
    period = as_period(period)
    current = get_period_range(period, now)
    days = window_days(current.start_date, current.end_date)

    previous_end = current.start_date - timedelta(microseconds=1)
    previous_start = current.start_date - timedelta(days=days)
    return PeriodRange(start_date=previous_start, end_date=previous_end, label=PREVIOUS_LABELS[period])


def in_window(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """Boundary-inclusive membership test for a transaction date."""
    moment = value if isinstance(value, datetime) else start_of_day(value)
    lower = start if isinstance(start, datetime) else start_of_day(start)
    upper = end if isinstance(end, datetime) else start_of_day(end)
    return lower <= moment <= upper


def filter_transactions_by_period(
    transactions: Iterable[Transaction],
    start: DateLike,
    end: DateLike,
) -> List[Transaction]:
    """Return the transactions dated within ``[start, end]``, both ends included."""
    return [t for t in transactions if in_window(t.date, start, end)]


def get_period_end(period: PeriodLike, now: Optional[datetime] = None) -> datetime:
    """Last instant of the calendar period enclosing ``now``.

    Weeks run Monday through Sunday.
    """
    period = as_period(period)
    today = resolve_now(now).date()

    if period is Period.DAILY:
        last_day = today
    elif period is Period.WEEKLY:
        last_day = today + timedelta(days=6 - today.weekday())
    elif period is Period.MONTHLY:
        last_day = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    else:
        last_day = today.replace(month=12, day=31)

    return end_of_day(last_day)


def days_remaining_in_period(period: PeriodLike, now: Optional[datetime] = None) -> int:
    """Calendar days left in the enclosing period, today included (at least 1)."""
    today = resolve_now(now).date()
    last_day = get_period_end(period, now).date()
    return max((last_day - today).days + 1, 1)
