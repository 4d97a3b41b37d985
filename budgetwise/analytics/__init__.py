"""Period analytics built on top of plain transaction lists.

This package provides:
- Period windows and boundary-inclusive filtering
- Trend comparison between consecutive periods
- Headline spending insights
- Available-to-spend projection
- Chart-ready daily and per-category series
"""

from .periods import (
    days_remaining_in_period,
    filter_transactions_by_period,
    get_period_end,
    get_period_range,
    get_previous_period_range,
)
from .trends import (
    calculate_percentage_change,
    calculate_trend_comparison,
)
from .spending_insights import (
    calculate_spending_insights,
)
from .available_to_spend import (
    calculate_available_to_spend,
    calculate_goal_allocations,
)
from .chart_data import (
    get_category_comparison,
    get_daily_spending_data,
)

__all__ = [
    # Periods
    'days_remaining_in_period',
    'filter_transactions_by_period',
    'get_period_end',
    'get_period_range',
    'get_previous_period_range',
    # Trends
    'calculate_percentage_change',
    'calculate_trend_comparison',
    # Insights
    'calculate_spending_insights',
    # Available to spend
    'calculate_available_to_spend',
    'calculate_goal_allocations',
    # Charts
    'get_category_comparison',
    'get_daily_spending_data',
]
