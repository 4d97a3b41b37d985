#!/usr/bin/env python3
"""Print budget insights and recurring suggestions for exported CSV data."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budgetwise.budget_calculator import calculate_all_budget_insights, calculate_budget_health
from budgetwise.formatting import format_currency
from budgetwise.frames import categories_from_frame, transactions_from_frame
from budgetwise.logger import setup_logger
from budgetwise.recurring import format_recurring_suggestion, get_recurring_suggestions


def main(transactions_csv: Path, categories_csv: Optional[Path] = None, limit: int = 10) -> None:
    transactions = transactions_from_frame(pd.read_csv(transactions_csv))
    print(f"Loaded {len(transactions)} transactions")

    if categories_csv is not None:
        categories = categories_from_frame(pd.read_csv(categories_csv))
        insights = calculate_all_budget_insights(categories, transactions)
        health = calculate_budget_health(insights)

        print("\nBudget insights:")
        for insight in insights:
            print(
                f"  [{insight.status.value:>8}] {insight.category_name}: "
                f"{format_currency(insight.amount_spent)} of {format_currency(insight.budget_amount)} "
                f"({insight.utilization_percentage:.1f}%) {insight.comparison_text}"
            )
            if insight.suggestion:
                print(f"             {insight.suggestion}")

        print(
            f"\nOverall: {format_currency(health.total_spent)} of {format_currency(health.total_budget)} "
            f"({health.overall_utilization:.1f}%), {health.categories_exceeded} exceeded, "
            f"{health.categories_critical} critical, {health.categories_warning} warning"
        )

    patterns = get_recurring_suggestions(transactions)
    if not patterns:
        print("\nNo recurring patterns detected.")
        return
    print("\nRecurring suggestions:")
    for pattern in patterns[:limit]:
        print(f"  {format_recurring_suggestion(pattern)}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show budget insights for exported transactions.')
    parser.add_argument('transactions', type=Path, help='CSV export of transactions')
    parser.add_argument('--categories', type=Path, default=None, help='CSV export of categories')
    parser.add_argument('--limit', type=int, default=10, help='How many recurring suggestions to show')
    parser.add_argument('--verbose', action='store_true', help='Log engine debug output')
    args = parser.parse_args()
    if args.verbose:
        setup_logger('budgetwise', level='DEBUG')
    main(args.transactions, args.categories, limit=args.limit)
