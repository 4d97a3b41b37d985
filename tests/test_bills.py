from datetime import date, datetime

import pytest

from budgetwise.bills import (
    bills_due_within,
    calculate_monthly_bill_total,
    calculate_next_due_date,
    calculate_upcoming_bills_total,
    days_until_due,
    format_bill_status,
    is_overdue,
)
from budgetwise.models import Bill

NOW = datetime(2024, 3, 15, 12, 0)


@pytest.fixture
def bills():
    return [
        Bill(id='internet', name='Internet', amount=1299, due_date=date(2024, 3, 20),
             is_recurring=True, recurrence_pattern='monthly'),
        Bill(id='water', name='Water', amount=400, due_date=date(2024, 3, 17)),
        Bill(id='rent', name='Rent', amount=8000, due_date=date(2024, 3, 15)),
        Bill(id='phone', name='Phone', amount=999, due_date=date(2024, 3, 10)),
        Bill(id='gym', name='Gym', amount=1500, due_date=date(2024, 3, 12), status='paid'),
        Bill(id='annual', name='Insurance', amount=5000, due_date=date(2024, 3, 16),
             is_recurring=True, recurrence_pattern='yearly'),
    ]


def _by_id(bills, bill_id):
    return next(b for b in bills if b.id == bill_id)


def test_days_until_due_and_overdue(bills):
    assert days_until_due(_by_id(bills, 'internet'), NOW) == 5
    assert days_until_due(_by_id(bills, 'phone'), NOW) == -5
    assert is_overdue(_by_id(bills, 'phone'), NOW)
    assert not is_overdue(_by_id(bills, 'gym'), NOW)
    assert not is_overdue(_by_id(bills, 'rent'), NOW)


def test_bills_due_within(bills):
    due = bills_due_within(bills, 3, now=NOW)
    assert [b.id for b in due] == ['rent', 'annual', 'water']


def test_upcoming_total_skips_paid_and_past(bills):
    total = calculate_upcoming_bills_total(bills, date(2024, 3, 15), date(2024, 3, 31))
    assert total == pytest.approx(1299 + 400 + 8000 + 5000)


def test_monthly_bill_total(bills):
    assert calculate_monthly_bill_total(bills) == pytest.approx(1299)


@pytest.mark.parametrize(
    'bill_id, label, variant',
    [
        ('internet', 'Due in 5 days', 'default'),
        ('water', 'Due in 2 days', 'outline'),
        ('annual', 'Due in 1 day', 'outline'),
        ('rent', 'Due Today', 'destructive'),
        ('phone', 'Overdue', 'destructive'),
        ('gym', 'Paid', 'secondary'),
    ],
)
def test_format_bill_status(bills, bill_id, label, variant):
    status = format_bill_status(_by_id(bills, bill_id), NOW)
    assert status.label == label
    assert status.variant == variant


def test_marked_overdue_wins_over_future_date():
    bill = Bill(id='x', name='Late fee', amount=10, due_date=date(2024, 4, 1), status='overdue')
    assert format_bill_status(bill, NOW).label == 'Overdue'


def test_next_due_date_clamps_month_end():
    assert calculate_next_due_date(date(2024, 1, 31), 'monthly') == date(2024, 2, 29)
