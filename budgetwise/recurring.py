"""Helpers for spotting unmarked recurring transactions like subscriptions.

Transactions are grouped greedily by type, category and amount (within
5% of the first member), then each group's day gaps are matched against
the canonical cadences.  Only groups that fit a cadence cleanly produce a
pattern; nothing is guessed for irregular groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
import math
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from . import config
from .formatting import format_currency
from .models import RecurrencePattern, RecurringPattern, Transaction, to_date

logger = logging.getLogger(__name__)

MIN_OCCURRENCES = 3
AMOUNT_TOLERANCE = 0.05
DATE_TOLERANCE_DAYS = 3
YEARLY_TOLERANCE_DAYS = 10
CONSISTENCY_RATIO = 0.7

# Monthly gaps vary with month length, so they use a band instead
MONTHLY_AVERAGE_RANGE = (28, 31)
MONTHLY_EXPECTED_DAYS = 30

BASE_CONFIDENCE = 50
OCCURRENCE_BONUS = 5
MAX_OCCURRENCE_BONUS = 30
MAX_CONSISTENCY_BONUS = 20

DEFAULT_DESCRIPTION = 'Recurring transaction'

PATTERN_LABELS = {
    RecurrencePattern.DAILY: 'daily',
    RecurrencePattern.WEEKLY: 'every week',
    RecurrencePattern.BIWEEKLY: 'every 2 weeks',
    RecurrencePattern.MONTHLY: 'every month',
    RecurrencePattern.YEARLY: 'every year',
}

_PATTERN_OFFSETS = {
    RecurrencePattern.DAILY: pd.DateOffset(days=1),
    RecurrencePattern.WEEKLY: pd.DateOffset(days=7),
    RecurrencePattern.BIWEEKLY: pd.DateOffset(days=14),
    RecurrencePattern.MONTHLY: pd.DateOffset(months=1),
    RecurrencePattern.YEARLY: pd.DateOffset(years=1),
}


@dataclass
class IntervalStats:
    intervals: List[int]
    avg_days: float
    std_days: float


def calculate_next_occurrence(current: date, pattern: RecurrencePattern) -> date:
    """Advance ``current`` by one step of ``pattern``.

    Monthly and yearly steps keep the day of month, clamped to the last
    day of shorter months (Jan 31 -> Feb 29 in a leap year).
    """
    try:
        offset = _PATTERN_OFFSETS[RecurrencePattern(getattr(pattern, 'value', pattern))]
    except ValueError as exc:
        raise ValueError(f"Unknown recurrence pattern: {pattern}") from exc
    return (pd.Timestamp(to_date(current)) + offset).date()


def interval_stats(dates: Sequence[date]) -> IntervalStats:
    """Day gaps between consecutive dates, with their mean and population std."""
    ordered = sorted(dates)
    intervals = [abs((later - earlier).days) for earlier, later in zip(ordered, ordered[1:])]
    if not intervals:
        return IntervalStats([], 0.0, 0.0)
    values = np.asarray(intervals, dtype=float)
    return IntervalStats(intervals, float(values.mean()), float(values.std(ddof=0)))


class RecurringDetector:
    """Detect potential recurring transactions in a transaction history."""

    def __init__(
        self,
        min_occurrences: int = MIN_OCCURRENCES,
        amount_tolerance: float = AMOUNT_TOLERANCE,
        date_tolerance_days: int = DATE_TOLERANCE_DAYS,
    ) -> None:
        self.min_occurrences = min_occurrences
        self.amount_tolerance = amount_tolerance
        self.date_tolerance_days = date_tolerance_days

    def detect_patterns(self, transactions: Sequence[Transaction]) -> List[RecurringPattern]:
        """Return detected patterns, highest confidence first."""
        ordered = sorted(transactions, key=lambda t: t.date)
        groups = self.group_similar_transactions(ordered)

        patterns = []
        for group in groups:
            if len(group) < self.min_occurrences:
                continue
            detected = self.analyze_group(group)
            if detected is not None:
                patterns.append(detected)

        logger.debug(
            "Recurring detection: %d transactions, %d candidate groups, %d patterns",
            len(ordered), len(groups), len(patterns),
        )
        return sorted(patterns, key=lambda p: p.confidence, reverse=True)

    def is_similar(self, reference: Transaction, other: Transaction) -> bool:
        """Same type and category, amount within tolerance of ``reference``."""
        threshold = reference.amount * self.amount_tolerance
        return (
            abs(other.amount - reference.amount) <= threshold
            and other.category_id == reference.category_id
            and other.type == reference.type
        )

    def group_similar_transactions(self, transactions: Sequence[Transaction]) -> List[List[Transaction]]:
        """Greedily group transactions, in the given order.

        Each not-yet-grouped transaction collects every other unprocessed
        transaction similar to it; the group is kept, and its members
        marked processed, only when it reaches the minimum size.
        """
        groups: List[List[Transaction]] = []
        processed = set()

        for index, reference in enumerate(transactions):
            if index in processed:
                continue
            similar = [
                other_index
                for other_index, other in enumerate(transactions)
                if other_index != index
                and other_index not in processed
                and self.is_similar(reference, other)
            ]
            if len(similar) >= self.min_occurrences - 1:
                members = [index] + similar
                processed.update(members)
                groups.append([transactions[i] for i in members])

        return groups

    def analyze_group(self, transactions: Sequence[Transaction]) -> Optional[RecurringPattern]:
        ordered = sorted(transactions, key=lambda t: t.date)
        stats = interval_stats([t.date for t in ordered])
        pattern = self.determine_pattern(stats.intervals)
        if pattern is None:
            return None

        first = ordered[0]
        return RecurringPattern(
            transactions=list(ordered),
            pattern=pattern,
            confidence=self.calculate_confidence(stats.intervals, len(ordered)),
            average_amount=float(np.mean([t.amount for t in ordered])),
            suggested_description=first.description or DEFAULT_DESCRIPTION,
            category=first.category_name or None,
            next_expected_date=calculate_next_occurrence(ordered[-1].date, pattern),
        )

    def determine_pattern(self, intervals: Sequence[int]) -> Optional[RecurrencePattern]:
        """Match day gaps against daily, weekly, biweekly, monthly and yearly."""
        if not intervals:
            return None
        average = float(np.mean(intervals))

        if self.matches_interval(average, 1, intervals):
            return RecurrencePattern.DAILY
        if self.matches_interval(average, 7, intervals):
            return RecurrencePattern.WEEKLY
        if self.matches_interval(average, 14, intervals):
            return RecurrencePattern.BIWEEKLY

        low, high = MONTHLY_AVERAGE_RANGE
        if low <= average <= high:
            lower = low - self.date_tolerance_days
            upper = high + self.date_tolerance_days
            if all(lower <= gap <= upper for gap in intervals):
                return RecurrencePattern.MONTHLY

        if self.matches_interval(average, 365, intervals, YEARLY_TOLERANCE_DAYS):
            return RecurrencePattern.YEARLY
        return None

    def matches_interval(
        self,
        average: float,
        expected: int,
        intervals: Sequence[int],
        tolerance: Optional[int] = None,
    ) -> bool:
        """Average gap within tolerance and at least 70% of gaps within it too."""
        tolerance = tolerance or self.date_tolerance_days
        if abs(average - expected) > tolerance:
            return False
        matching = sum(1 for gap in intervals if abs(gap - expected) <= tolerance)
        return matching / len(intervals) >= CONSISTENCY_RATIO

    @staticmethod
    def calculate_confidence(intervals: Sequence[int], occurrences: int) -> int:
        """Score 0-100: base 50, +5 per occurrence (max +30), and up to +20
        for steady gaps (20 minus the gap standard deviation)."""
        confidence = float(BASE_CONFIDENCE)
        confidence += min(occurrences * OCCURRENCE_BONUS, MAX_OCCURRENCE_BONUS)

        std = float(np.std(intervals)) if len(intervals) else 0.0
        confidence += max(0.0, MAX_CONSISTENCY_BONUS - std)

        # Half-up rounding, matching stored scores
        return min(int(math.floor(confidence + 0.5)), 100)


def detect_recurring_patterns(transactions: Sequence[Transaction]) -> List[RecurringPattern]:
    """Run :class:`RecurringDetector` with the default thresholds."""
    return RecurringDetector().detect_patterns(transactions)


def get_recurring_suggestions(
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    lookback_months: Optional[int] = None,
) -> List[RecurringPattern]:
    """Detect patterns among recent transactions not already marked recurring."""
    months = lookback_months if lookback_months is not None else config.RECURRING_LOOKBACK_MONTHS
    reference = pd.Timestamp(now if now is not None else datetime.now()).normalize()
    cutoff = (reference - pd.DateOffset(months=months)).date()

    candidates = [t for t in transactions if not t.is_recurring and t.date >= cutoff]
    return detect_recurring_patterns(candidates)


def format_recurring_suggestion(pattern: RecurringPattern) -> str:
    """Human-readable prompt offering to turn a pattern into a recurring transaction."""
    amount = format_currency(pattern.average_amount)
    label = PATTERN_LABELS[pattern.pattern]
    description = pattern.suggested_description or 'transaction'
    return f'We noticed {amount} {label} for "{description}". Make this recurring? ({pattern.confidence}% confidence)'
