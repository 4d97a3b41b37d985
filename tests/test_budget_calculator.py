from datetime import date, datetime

import pytest

from budgetwise.budget_calculator import (
    calculate_all_budget_insights,
    calculate_budget_health,
    calculate_budget_insight,
    calculate_spending_in_range,
    calculate_utilization,
    generate_comparison_text,
    generate_suggestion,
    get_budget_status,
    get_progress_color,
    get_status_color,
)
from budgetwise.models import BudgetPeriod, BudgetStatus, Category, Transaction

NOW = datetime(2024, 3, 15, 12, 0)


def _expense(txn_id, amount, day, category='food'):
    return Transaction(id=txn_id, type='expense', amount=amount, date=day, category_id=category)


def _category(category_id, budget=100.0, period='monthly', **kwargs):
    return Category(id=category_id, name=category_id.title(), budget_amount=budget, budget_period=period, **kwargs)


def test_spending_in_range_ignores_income_and_other_categories():
    rows = [
        _expense('a', 40.0, date(2024, 3, 1)),
        _expense('b', 60.0, date(2024, 3, 15)),
        _expense('c', 500.0, date(2024, 3, 5), category='rent'),
        Transaction(id='d', type='income', amount=900.0, date=date(2024, 3, 5), category_id='food'),
        _expense('e', 70.0, date(2024, 2, 29)),
    ]
    spent = calculate_spending_in_range(rows, 'food', datetime(2024, 3, 1), datetime(2024, 3, 15, 23, 59))
    assert spent == pytest.approx(100.0)
    assert calculate_spending_in_range([], 'food', date(2024, 3, 1), date(2024, 3, 15)) == 0.0


def test_spending_in_range_matches_uncategorized():
    rows = [_expense('a', 25.0, date(2024, 3, 3), category=None), _expense('b', 5.0, date(2024, 3, 3))]
    assert calculate_spending_in_range(rows, None, date(2024, 3, 1), date(2024, 3, 31)) == 25.0


def test_zero_budget_has_no_utilization():
    assert calculate_utilization(500.0, 0) == 0
    assert calculate_utilization(0.0, 0) == 0
    assert calculate_utilization(50.0, 200.0) == 25.0


@pytest.mark.parametrize(
    'utilization, status',
    [
        (0, BudgetStatus.OK),
        (69.99, BudgetStatus.OK),
        (70, BudgetStatus.WARNING),
        (89.99, BudgetStatus.WARNING),
        (90, BudgetStatus.CRITICAL),
        (99.99, BudgetStatus.CRITICAL),
        (100, BudgetStatus.EXCEEDED),
        (250, BudgetStatus.EXCEEDED),
    ],
)
def test_budget_status_bands(utilization, status):
    assert get_budget_status(utilization) == status


def test_status_colors():
    assert get_status_color(BudgetStatus.OK) == '#22c55e'
    assert get_status_color('exceeded') == '#ef4444'
    assert get_progress_color(95) == '#f97316'
    assert get_progress_color(75) == '#f59e0b'


def test_comparison_text():
    assert generate_comparison_text(120, 100, 'monthly') == '↑ 20% vs last month'
    assert generate_comparison_text(50, 100, BudgetPeriod.WEEKLY) == '↓ 50% vs last week'
    assert generate_comparison_text(100.5, 100, 'yearly') == 'No change'
    assert generate_comparison_text(0, 0, 'monthly') == 'No change'
    assert generate_comparison_text(30, 0, 'yearly') == '↑ 100% vs last year'


def test_suggestion_decision_table():
    assert generate_suggestion('Food', 120, -200, 'monthly', 0, NOW) == (
        "You've exceeded your Food budget by ₱200.00. Consider reducing spending."
    )
    assert generate_suggestion('Food', 95, 50, 'monthly', 0, NOW) == (
        "Only ₱50.00 left in your Food budget. Spend carefully!"
    )
    assert generate_suggestion('Food', 75, 250, 'monthly', 30, NOW) == (
        "Food spending is up 30%. Consider reviewing this category."
    )
    assert generate_suggestion('Food', 40, 600, 'monthly', -30, NOW) == (
        "Great job! You're spending 30% less on Food."
    )
    # 170 left over the 17 remaining days of March
    assert generate_suggestion('Food', 40, 170, 'monthly', 0, NOW) == (
        "You can spend ₱10.00 per day on Food for the rest of this month."
    )


def test_suggestion_absent_when_no_rule_applies():
    assert generate_suggestion('Food', 75, 250, 'monthly', 10, NOW) is None
    assert generate_suggestion('Food', 60, 0, 'weekly', 0, NOW) is None


def test_budget_exceeded_scenario():
    category = _category('food', budget=1000.0)
    rows = [
        _expense('a', 700.0, date(2024, 3, 2)),
        _expense('b', 500.0, date(2024, 3, 10)),
        _expense('c', 1000.0, date(2024, 2, 20)),
    ]

    insight = calculate_budget_insight(category, rows, now=NOW)

    assert insight.utilization_percentage == 120
    assert insight.status == BudgetStatus.EXCEEDED
    assert insight.amount_spent == 1200
    assert insight.amount_remaining == -200
    assert insight.period == BudgetPeriod.MONTHLY
    assert '₱200.00' in insight.suggestion
    assert insight.comparison_text == '↑ 20% vs last month'


def test_insight_utilization_rounded_to_one_decimal():
    category = _category('food', budget=300.0, period='weekly')
    rows = [_expense('a', 100.0, date(2024, 3, 9))]
    insight = calculate_budget_insight(category, rows, now=NOW)
    assert insight.utilization_percentage == 33.3
    assert insight.status == BudgetStatus.OK


def test_insights_are_pure_for_fixed_now():
    category = _category('food', budget=500.0)
    rows = [_expense('a', 120.0, date(2024, 3, 3))]
    assert calculate_budget_insight(category, rows, NOW) == calculate_budget_insight(category, rows, NOW)


def test_all_insights_sorted_by_severity_and_stable():
    categories = [
        _category('alpha'),
        _category('bravo'),
        _category('charlie'),
        _category('delta'),
        _category('echo'),
        _category('foxtrot'),
        _category('inactive', is_active=False),
        _category('unbudgeted', budget=0.0),
    ]
    spend = {'alpha': 10, 'bravo': 150, 'charlie': 75, 'delta': 100, 'echo': 95, 'foxtrot': 20,
             'inactive': 500, 'unbudgeted': 500}
    rows = [_expense(name, amount, date(2024, 3, 5), category=name) for name, amount in spend.items()]

    insights = calculate_all_budget_insights(categories, rows, now=NOW)

    assert [i.category_id for i in insights] == ['bravo', 'delta', 'echo', 'charlie', 'alpha', 'foxtrot']
    assert [i.status for i in insights] == [
        BudgetStatus.EXCEEDED,
        BudgetStatus.EXCEEDED,
        BudgetStatus.CRITICAL,
        BudgetStatus.WARNING,
        BudgetStatus.OK,
        BudgetStatus.OK,
    ]


def test_budget_health_summary():
    categories = [_category('alpha'), _category('bravo', budget=200.0), _category('charlie')]
    rows = [
        _expense('a', 50.0, date(2024, 3, 5), category='alpha'),
        _expense('b', 250.0, date(2024, 3, 5), category='bravo'),
        _expense('c', 92.0, date(2024, 3, 5), category='charlie'),
    ]
    health = calculate_budget_health(calculate_all_budget_insights(categories, rows, now=NOW))

    assert health.total_budget == 400
    assert health.total_spent == 392
    assert health.total_remaining == 8
    assert health.overall_utilization == pytest.approx(98.0)
    assert (health.categories_on_track, health.categories_warning,
            health.categories_critical, health.categories_exceeded) == (1, 0, 1, 1)


def test_budget_health_of_nothing():
    health = calculate_budget_health([])
    assert health.total_budget == 0
    assert health.overall_utilization == 0
