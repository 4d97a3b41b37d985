"""In-memory transaction filtering and sorting.

Mirrors the filter panel of the dashboard: a date range, category and
wallet selections, an amount range and a free-text description search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .analytics.periods import resolve_now
from .formatting import format_currency
from .frames import transactions_to_frame
from .models import Transaction, TransactionType

SORT_COLUMNS = {
    'date': 'date',
    'amount': 'amount',
    'category': 'category_name',
}

DATE_PRESET_LABELS: Dict[str, str] = {
    'today': 'Today',
    'last_7_days': 'Last 7 Days',
    'this_month': 'This Month',
    'last_month': 'Last Month',
    'this_year': 'This Year',
}


@dataclass(frozen=True)
class TransactionFilters:
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    category_ids: Tuple[str, ...] = field(default_factory=tuple)
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None
    wallet_ids: Tuple[str, ...] = field(default_factory=tuple)
    search_query: Optional[str] = None

    @property
    def search_text(self) -> str:
        return (self.search_query or '').strip()


@dataclass(frozen=True)
class TransactionSort:
    field: str = 'date'
    order: str = 'desc'

    def __post_init__(self) -> None:
        if self.field not in SORT_COLUMNS:
            raise ValueError(f"Unsupported sort field '{self.field}'")
        if self.order not in ('asc', 'desc'):
            raise ValueError(f"Unsupported sort order '{self.order}'")


def _filter_mask(frame: pd.DataFrame, filters: TransactionFilters) -> pd.Series:
    mask = pd.Series(True, index=frame.index)
    if filters.date_from:
        mask &= frame['date'] >= pd.Timestamp(filters.date_from)
    if filters.date_to:
        mask &= frame['date'] <= pd.Timestamp(filters.date_to)
    if filters.category_ids:
        mask &= frame['category_id'].isin(list(filters.category_ids))
    if filters.amount_min is not None:
        mask &= frame['amount'] >= filters.amount_min
    if filters.amount_max is not None:
        mask &= frame['amount'] <= filters.amount_max
    if filters.wallet_ids:
        mask &= frame['wallet_id'].isin(list(filters.wallet_ids))
    if filters.search_text:
        mask &= frame['description'].fillna('').str.contains(filters.search_text, case=False, regex=False)
    return mask


def apply_transaction_filters(
    transactions: Sequence[Transaction],
    transaction_type: TransactionType,
    filters: Optional[TransactionFilters] = None,
    sort: Optional[TransactionSort] = None,
    limit: Optional[int] = None,
) -> List[Transaction]:
    """Select transactions of one type matching ``filters``.

    Without an explicit sort the most recent transactions come first.
    Ties keep their input order.
    """
    frame = transactions_to_frame(transactions)
    if frame.empty:
        return []

    mask = frame['type'] == TransactionType(transaction_type).value
    if filters is not None:
        mask &= _filter_mask(frame, filters)
    selected = frame[mask]

    sort = sort or TransactionSort()
    selected = selected.sort_values(
        SORT_COLUMNS[sort.field],
        ascending=sort.order == 'asc',
        kind='stable',
        na_position='last',
    )
    if limit:
        selected = selected.head(limit)

    return [transactions[position] for position in selected.index]


def count_active_filters(filters: Optional[TransactionFilters]) -> int:
    if filters is None:
        return 0
    active = [
        filters.date_from,
        filters.date_to,
        filters.category_ids,
        filters.amount_min is not None,
        filters.amount_max is not None,
        filters.wallet_ids,
        filters.search_text,
    ]
    return sum(1 for item in active if item)


def describe_filters(filters: Optional[TransactionFilters]) -> List[str]:
    """Human-readable descriptions of the active filters."""
    if filters is None:
        return []

    descriptions = []
    if filters.date_from and filters.date_to:
        descriptions.append(f"Date: {filters.date_from} to {filters.date_to}")
    elif filters.date_from:
        descriptions.append(f"Date from: {filters.date_from}")
    elif filters.date_to:
        descriptions.append(f"Date to: {filters.date_to}")

    if filters.category_ids:
        descriptions.append(f"Categories: {len(filters.category_ids)} selected")

    if filters.amount_min is not None and filters.amount_max is not None:
        descriptions.append(f"Amount: {format_currency(filters.amount_min)} - {format_currency(filters.amount_max)}")
    elif filters.amount_min is not None:
        descriptions.append(f"Amount min: {format_currency(filters.amount_min)}")
    elif filters.amount_max is not None:
        descriptions.append(f"Amount max: {format_currency(filters.amount_max)}")

    if filters.wallet_ids:
        descriptions.append(f"Wallets: {len(filters.wallet_ids)} selected")

    if filters.search_text:
        descriptions.append(f'Search: "{filters.search_query}"')

    return descriptions


def date_preset_range(name: str, now: Optional[datetime] = None) -> Tuple[date, date]:
    """Return ``(date_from, date_to)`` for a named preset.

    Raises:
        KeyError: If ``name`` is not one of :data:`DATE_PRESET_LABELS`
    """
    if name not in DATE_PRESET_LABELS:
        raise KeyError(name)
    today = resolve_now(now).date()

    if name == 'today':
        return today, today
    if name == 'last_7_days':
        return today - timedelta(days=7), today
    if name == 'this_month':
        return today.replace(day=1), today
    if name == 'last_month':
        last_day = today.replace(day=1) - timedelta(days=1)
        return last_day.replace(day=1), last_day
    return today.replace(month=1, day=1), today
