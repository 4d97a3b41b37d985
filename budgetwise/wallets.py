"""Per-wallet reductions over already-fetched transactions.

A wallet's figures are derived only from the transactions tagged with its
``wallet_id``; stored wallet balances are never read or adjusted here.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from .analytics.periods import DateLike, start_of_day
from .frames import UNCATEGORIZED_NAME, category_totals, transactions_to_frame
from .models import (
    Transaction,
    TransactionType,
    WalletBalancePoint,
    WalletCategorySpending,
    WalletSummary,
)

logger = logging.getLogger(__name__)


def _bound(value: DateLike) -> pd.Timestamp:
    if isinstance(value, datetime):
        return pd.Timestamp(value)
    return pd.Timestamp(start_of_day(value))


def _wallet_frame(
    transactions: Sequence[Transaction],
    wallet_id: str,
    start: Optional[DateLike],
    end: Optional[DateLike],
) -> pd.DataFrame:
    frame = transactions_to_frame(transactions)
    if frame.empty:
        return frame
    mask = frame['wallet_id'] == wallet_id
    if start is not None:
        mask &= frame['date'] >= _bound(start)
    if end is not None:
        mask &= frame['date'] <= _bound(end)
    return frame[mask]


def wallet_transactions(
    transactions: Sequence[Transaction],
    wallet_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[Transaction]:
    """Transactions of one wallet within ``[start, end]``, oldest first.

    Transactions on the same day keep their input order.
    """
    frame = _wallet_frame(transactions, wallet_id, start, end)
    if frame.empty:
        return []
    ordered = frame.sort_values('date', kind='stable')
    return [transactions[position] for position in ordered.index]


def wallet_spending_by_category(
    transactions: Sequence[Transaction],
    wallet_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[WalletCategorySpending]:
    """Expense totals per category for one wallet, largest first.

    Expenses without a category name are grouped under ``"Uncategorized"``.

    Example:
        >>> wallet_spending_by_category(txns, 'gcash')
        [WalletCategorySpending(category='Food', amount=350.0), ...]
    """
    frame = _wallet_frame(transactions, wallet_id, start, end)
    if frame.empty:
        return []
    expenses = frame[frame['type'] == TransactionType.EXPENSE.value]
    totals = category_totals(expenses, default=UNCATEGORIZED_NAME)
    rows = [WalletCategorySpending(category=str(name), amount=float(amount)) for name, amount in totals.items()]
    return sorted(rows, key=lambda row: row.amount, reverse=True)


def wallet_summary(
    transactions: Sequence[Transaction],
    wallet_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> WalletSummary:
    """Income, expenses and net income for one wallet.

    ``transaction_count`` counts every transaction of the wallet in the
    window, whatever its type.
    """
    frame = _wallet_frame(transactions, wallet_id, start, end)
    if frame.empty:
        return WalletSummary(income=0.0, expenses=0.0, net_income=0.0, transaction_count=0)

    income = float(frame.loc[frame['type'] == TransactionType.INCOME.value, 'amount'].sum())
    expenses = float(frame.loc[frame['type'] == TransactionType.EXPENSE.value, 'amount'].sum())
    logger.debug("Wallet %s: %d transactions in window", wallet_id, len(frame))
    return WalletSummary(
        income=income,
        expenses=expenses,
        net_income=income - expenses,
        transaction_count=int(len(frame)),
    )


def wallet_balance_history(
    transactions: Sequence[Transaction],
    wallet_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[WalletBalancePoint]:
    """Running balance after each transaction, most recent first.

    The balance starts from zero at the beginning of the window: income
    adds and expenses subtract.
    """
    balance = 0.0
    history = []
    for transaction in wallet_transactions(transactions, wallet_id, start, end):
        if transaction.is_income:
            balance += transaction.amount
        else:
            balance -= transaction.amount
        history.append(WalletBalancePoint(date=transaction.date, balance=balance, transaction=transaction))
    history.reverse()
    return history
