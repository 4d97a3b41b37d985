from datetime import date, datetime

import pytest

from budgetwise.filters import (
    TransactionFilters,
    TransactionSort,
    apply_transaction_filters,
    count_active_filters,
    date_preset_range,
    describe_filters,
)
from budgetwise.models import Transaction, TransactionType


def _txn(txn_id, amount, day, category=None, wallet=None, description=None, type='expense'):
    return Transaction(
        id=txn_id,
        type=type,
        amount=amount,
        date=day,
        category_id=category,
        category_name=category.title() if category else None,
        description=description,
        wallet_id=wallet,
    )


@pytest.fixture
def transactions():
    return [
        _txn('a', 50, date(2024, 3, 1), 'food', 'w1', 'Jollibee lunch'),
        _txn('b', 200, date(2024, 3, 5), 'transport', 'w2', 'Grab ride'),
        _txn('c', 50, date(2024, 3, 10), 'food', 'w1'),
        _txn('d', 1000, date(2024, 3, 12), 'salary', 'w1', 'Payroll', type='income'),
        _txn('e', 75, date(2024, 2, 20), 'food', 'w2', 'Groceries'),
    ]


def _ids(rows):
    return [t.id for t in rows]


def test_default_sort_is_newest_first(transactions):
    rows = apply_transaction_filters(transactions, TransactionType.EXPENSE)
    assert _ids(rows) == ['c', 'b', 'a', 'e']


def test_income_only(transactions):
    assert _ids(apply_transaction_filters(transactions, 'income')) == ['d']


@pytest.mark.parametrize(
    'filters, expected',
    [
        (TransactionFilters(category_ids=('food',)), ['c', 'a', 'e']),
        (TransactionFilters(amount_min=60), ['b', 'e']),
        (TransactionFilters(amount_min=50, amount_max=75), ['c', 'a', 'e']),
        (TransactionFilters(search_query='GRAB'), ['b']),
        (TransactionFilters(date_from=date(2024, 3, 1), date_to=date(2024, 3, 5)), ['b', 'a']),
        (TransactionFilters(wallet_ids=('w1',)), ['c', 'a']),
    ],
)
def test_filters(transactions, filters, expected):
    assert _ids(apply_transaction_filters(transactions, 'expense', filters)) == expected


def test_sort_ties_keep_input_order(transactions):
    rows = apply_transaction_filters(transactions, 'expense', sort=TransactionSort('amount', 'asc'))
    assert _ids(rows) == ['a', 'c', 'e', 'b']


def test_sort_by_category_and_limit(transactions):
    rows = apply_transaction_filters(transactions, 'expense', sort=TransactionSort('category', 'desc'))
    assert _ids(rows)[0] == 'b'
    assert _ids(apply_transaction_filters(transactions, 'expense', limit=2)) == ['c', 'b']


def test_invalid_sort_rejected():
    with pytest.raises(ValueError):
        TransactionSort(field='merchant')
    with pytest.raises(ValueError):
        TransactionSort(order='up')


def test_empty_input():
    assert apply_transaction_filters([], 'expense', TransactionFilters(amount_min=1)) == []


def test_count_and_describe_filters():
    filters = TransactionFilters(date_from=date(2024, 3, 1), category_ids=('food',), search_query='  ')
    assert count_active_filters(filters) == 2
    assert count_active_filters(None) == 0

    described = describe_filters(
        TransactionFilters(amount_min=10, amount_max=500, wallet_ids=('w1',), search_query='grab')
    )
    assert described == ['Amount: ₱10.00 - ₱500.00', 'Wallets: 1 selected', 'Search: "grab"']


@pytest.mark.parametrize(
    'name, expected',
    [
        ('today', (date(2024, 3, 15), date(2024, 3, 15))),
        ('last_7_days', (date(2024, 3, 8), date(2024, 3, 15))),
        ('this_month', (date(2024, 3, 1), date(2024, 3, 15))),
        ('last_month', (date(2024, 2, 1), date(2024, 2, 29))),
        ('this_year', (date(2024, 1, 1), date(2024, 3, 15))),
    ],
)
def test_date_presets(name, expected):
    assert date_preset_range(name, now=datetime(2024, 3, 15, 9, 30)) == expected


def test_unknown_preset():
    with pytest.raises(KeyError):
        date_preset_range('last_decade')
