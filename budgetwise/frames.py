"""Conversion between engine records and pandas DataFrames.

Aggregations in the engine (category totals, daily totals, distinct
active days) run as pandas group-bys over the frame produced by
:func:`transactions_to_frame`.  The ``*_from_frame`` helpers go the other
way and are used when transactions arrive as tabular exports.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from .models import Category, Goal, Transaction

TRANSACTION_COLUMNS = [
    'id',
    'type',
    'amount',
    'date',
    'category_id',
    'category_name',
    'description',
    'wallet_id',
    'is_recurring',
]

DEFAULT_CATEGORY_NAME = 'Other'
UNCATEGORIZED_NAME = 'Uncategorized'


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction, in input order.

    ``date`` is a ``datetime64`` column at midnight; ``type`` holds the raw
    string value so it can be compared against plain strings.
    """
    rows = [
        {
            'id': t.id,
            'type': t.type.value,
            'amount': float(t.amount),
            'date': pd.Timestamp(t.date),
            'category_id': t.category_id,
            'category_name': t.category_name,
            'description': t.description,
            'wallet_id': t.wallet_id,
            'is_recurring': t.is_recurring,
        }
        for t in transactions
    ]
    if not rows:
        frame = pd.DataFrame(columns=TRANSACTION_COLUMNS)
        frame['amount'] = frame['amount'].astype(float)
        frame['date'] = pd.to_datetime(frame['date'])
        return frame
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def category_names(frame: pd.DataFrame, default: str = DEFAULT_CATEGORY_NAME) -> pd.Series:
    """Category name per row, with missing or empty names replaced by ``default``."""
    names = frame['category_name']
    return names.mask(names == '').fillna(default)


def category_totals(frame: pd.DataFrame, default: str = DEFAULT_CATEGORY_NAME) -> pd.Series:
    """Sum ``amount`` per category name, keeping first-appearance order.

    Missing names fall back to ``default`` (``"Other"``).
    """
    if frame.empty:
        return pd.Series(dtype=float)
    return frame['amount'].groupby(category_names(frame, default), sort=False).sum()


def category_counts(frame: pd.DataFrame, default: str = DEFAULT_CATEGORY_NAME) -> pd.Series:
    """Count transactions per category name, keeping first-appearance order."""
    if frame.empty:
        return pd.Series(dtype=int)
    return frame.groupby(category_names(frame, default), sort=False).size()


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df is None or df.empty:
        return []
    clean = df.astype(object).where(pd.notna(df), None)
    return clean.to_dict(orient='records')


def transactions_from_frame(df: pd.DataFrame) -> List[Transaction]:
    """Build ``Transaction`` records from a DataFrame of storage rows."""
    return [Transaction.from_dict(row) for row in _records(df)]


def categories_from_frame(df: pd.DataFrame) -> List[Category]:
    """Build ``Category`` records from a DataFrame of storage rows."""
    return [Category.from_dict(row) for row in _records(df)]


def goals_from_frame(df: pd.DataFrame) -> List[Goal]:
    """Build ``Goal`` records from a DataFrame of storage rows."""
    return [Goal.from_dict(row) for row in _records(df)]
