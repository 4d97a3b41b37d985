"""Value records consumed and produced by the budgeting engine.

Input records (``Transaction``, ``Category``, ``Goal``, ``Bill``) are
frozen dataclasses built by the caller from rows fetched out of storage.
``from_dict`` accepts those raw rows directly: dates may be ISO strings,
amounts numeric strings and enum fields plain strings.  Validation
happens here, once, so the calculation modules can trust their inputs.

Output records are plain dataclasses with a ``to_dict`` helper for
rendering or export layers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd


class TransactionType(str, Enum):
    INCOME = 'income'
    EXPENSE = 'expense'


class Period(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'


class BudgetPeriod(str, Enum):
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'


class BudgetStatus(str, Enum):
    OK = 'ok'
    WARNING = 'warning'
    CRITICAL = 'critical'
    EXCEEDED = 'exceeded'


class RecurrencePattern(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    BIWEEKLY = 'biweekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'


class GoalStatus(str, Enum):
    ACTIVE = 'active'
    PAUSED = 'paused'
    COMPLETED = 'completed'
    FAILED = 'failed'


class BillStatus(str, Enum):
    UNPAID = 'unpaid'
    PAID = 'paid'
    OVERDUE = 'overdue'


class TrendDirection(str, Enum):
    UP = 'up'
    DOWN = 'down'
    STABLE = 'stable'


def to_date(value: Any) -> date:
    """Coerce a date-like value (``date``, ``datetime``, ISO string) to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError('A date value is required')
    try:
        stamp = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date value: {value!r}") from exc
    if pd.isna(stamp):
        raise ValueError(f"Invalid date value: {value!r}")
    return stamp.date()


def _optional_date(value: Any) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_date(value)


def _amount(value: Any, name: str = 'amount') -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {name}: {value!r}") from exc
    if pd.isna(amount) or amount in (float('inf'), float('-inf')):
        raise ValueError(f"Invalid {name}: {value!r}")
    if amount < 0:
        raise ValueError(f"{name} must not be negative, got {amount}")
    return amount


def _flag(value: Any) -> bool:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return bool(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    text = str(value)
    return text or None


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transaction:
    id: str
    type: TransactionType
    amount: float
    date: date
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    description: Optional[str] = None
    wallet_id: Optional[str] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_end_date: Optional[date] = None
    parent_transaction_id: Optional[str] = None
    is_template: bool = False
    next_occurrence_date: Optional[date] = None
    recurrence_enabled: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'type', TransactionType(self.type))
        object.__setattr__(self, 'amount', _amount(self.amount))
        object.__setattr__(self, 'date', to_date(self.date))
        if self.recurrence_pattern is not None:
            object.__setattr__(self, 'recurrence_pattern', RecurrencePattern(self.recurrence_pattern))
        object.__setattr__(self, 'recurrence_end_date', _optional_date(self.recurrence_end_date))
        object.__setattr__(self, 'next_occurrence_date', _optional_date(self.next_occurrence_date))

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'Transaction':
        return cls(
            id=str(row['id']),
            type=row['type'],
            amount=row['amount'],
            date=row['date'],
            category_id=_optional_text(row.get('category_id')),
            category_name=_optional_text(row.get('category_name')),
            description=_optional_text(row.get('description')),
            wallet_id=_optional_text(row.get('wallet_id')),
            is_recurring=_flag(row.get('is_recurring')),
            recurrence_pattern=_optional_text(row.get('recurrence_pattern')),
            recurrence_end_date=row.get('recurrence_end_date'),
            parent_transaction_id=_optional_text(row.get('parent_transaction_id')),
            is_template=_flag(row.get('is_template')),
            next_occurrence_date=row.get('next_occurrence_date'),
            recurrence_enabled=_flag(row.get('recurrence_enabled')),
        )


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    budget_amount: float = 0.0
    budget_period: BudgetPeriod = BudgetPeriod.MONTHLY
    is_active: bool = True
    icon: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'budget_amount', _amount(self.budget_amount, 'budget_amount'))
        object.__setattr__(self, 'budget_period', BudgetPeriod(self.budget_period))

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'Category':
        is_active = row.get('is_active')
        return cls(
            id=str(row['id']),
            name=str(row['name']),
            budget_amount=row.get('budget_amount') or 0.0,
            budget_period=row.get('budget_period') or BudgetPeriod.MONTHLY,
            is_active=True if is_active is None else bool(is_active),
            icon=_optional_text(row.get('icon')),
            color=_optional_text(row.get('color')),
        )


@dataclass(frozen=True)
class Goal:
    id: str
    target_amount: float
    current_amount: float = 0.0
    status: GoalStatus = GoalStatus.ACTIVE
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    name: Optional[str] = None
    paused: bool = False
    archived: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'target_amount', _amount(self.target_amount, 'target_amount'))
        object.__setattr__(self, 'current_amount', _amount(self.current_amount, 'current_amount'))
        object.__setattr__(self, 'status', GoalStatus(self.status))
        object.__setattr__(self, 'start_date', _optional_date(self.start_date))
        object.__setattr__(self, 'end_date', _optional_date(self.end_date))

    @property
    def is_allocating(self) -> bool:
        """Whether money saved toward this goal is set aside from spending."""
        return self.status is GoalStatus.ACTIVE and not self.paused

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'Goal':
        return cls(
            id=str(row['id']),
            target_amount=row['target_amount'],
            current_amount=row.get('current_amount') or 0.0,
            status=row.get('status') or GoalStatus.ACTIVE,
            start_date=row.get('start_date'),
            end_date=row.get('end_date'),
            name=_optional_text(row.get('name')),
            paused=_flag(row.get('paused')),
            archived=_flag(row.get('archived')),
        )


@dataclass(frozen=True)
class Bill:
    id: str
    name: str
    amount: float
    due_date: date
    status: BillStatus = BillStatus.UNPAID
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    category_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'amount', _amount(self.amount))
        object.__setattr__(self, 'due_date', to_date(self.due_date))
        object.__setattr__(self, 'status', BillStatus(self.status))
        if self.recurrence_pattern is not None:
            object.__setattr__(self, 'recurrence_pattern', RecurrencePattern(self.recurrence_pattern))

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'Bill':
        return cls(
            id=str(row['id']),
            name=str(row['name']),
            amount=row['amount'],
            due_date=row['due_date'],
            status=row.get('status') or BillStatus.UNPAID,
            is_recurring=_flag(row.get('is_recurring')),
            recurrence_pattern=_optional_text(row.get('recurrence_pattern')),
            category_id=_optional_text(row.get('category_id')),
        )


# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------


class _Record:
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PeriodRange(_Record):
    start_date: datetime
    end_date: datetime
    label: str


@dataclass
class BudgetInsight(_Record):
    category_id: str
    category_name: str
    status: BudgetStatus
    utilization_percentage: float
    amount_spent: float
    amount_remaining: float
    budget_amount: float
    period: BudgetPeriod
    comparison_text: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class BudgetHealthSummary(_Record):
    total_budget: float
    total_spent: float
    total_remaining: float
    overall_utilization: float
    categories_on_track: int
    categories_warning: int
    categories_critical: int
    categories_exceeded: int


@dataclass
class AvailableBreakdown(_Record):
    total_income: float
    total_expenses: float
    goal_allocations: float
    upcoming_bills: float


@dataclass
class AvailableToSpend(_Record):
    amount: float
    daily_amount: float
    days_remaining: int
    breakdown: AvailableBreakdown


@dataclass
class TrendComparison(_Record):
    current_period_total: float
    previous_period_total: float
    percentage_change: float
    trend: TrendDirection


@dataclass
class TopCategory(_Record):
    name: str
    amount: float


@dataclass
class LargestExpense(_Record):
    description: str
    amount: float


@dataclass
class FrequentCategory(_Record):
    name: str
    count: int


@dataclass
class SpendingInsights(_Record):
    top_category: Optional[TopCategory]
    average_daily_spending: float
    largest_expense: Optional[LargestExpense]
    most_frequent_category: Optional[FrequentCategory]
    total_expenses: float
    total_income: float


@dataclass
class RecurringPattern(_Record):
    transactions: List[Transaction]
    pattern: RecurrencePattern
    confidence: int
    average_amount: float
    suggested_description: str
    category: Optional[str] = None
    next_expected_date: Optional[date] = None


@dataclass
class DailySpending(_Record):
    date: date
    amount: float


@dataclass
class CategoryComparison(_Record):
    category: str
    current_amount: float
    previous_amount: float
    change: float


@dataclass
class BillStatusLabel(_Record):
    label: str
    variant: str
    days_until_due: int = field(default=0)


@dataclass
class WalletCategorySpending(_Record):
    category: str
    amount: float


@dataclass
class WalletSummary(_Record):
    income: float
    expenses: float
    net_income: float
    transaction_count: int


@dataclass
class WalletBalancePoint(_Record):
    date: date
    balance: float
    transaction: Transaction
