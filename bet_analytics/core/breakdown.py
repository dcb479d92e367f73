"""Per-category re-aggregation of performance metrics.

Each group is handed to :func:`compute_performance_metrics` on its own, so
a category row carries exactly the same fields (and the same stake
semantics) as the overall row.  Groups are emitted in the order their first
record appears in the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from bet_analytics.core.metrics import PerformanceMetrics, compute_performance_metrics
from bet_analytics.core.records import BetRecord, category_label

CategoryKey = Callable[[BetRecord], Optional[str]]


@dataclass(frozen=True, slots=True)
class CategoryBreakdown:
    category: str
    metrics: PerformanceMetrics


def by_sport(record: BetRecord) -> Optional[str]:
    return record.sport


def by_bet_type(record: BetRecord) -> Optional[str]:
    return record.bet_type


def by_sportsbook(record: BetRecord) -> Optional[str]:
    return record.sportsbook


def group_records(records: Iterable[BetRecord], key: CategoryKey) -> Dict[str, List[BetRecord]]:
    groups: Dict[str, List[BetRecord]] = {}
    for record in records:
        groups.setdefault(category_label(key(record)), []).append(record)
    return groups


def breakdown_by(records: Iterable[BetRecord], key: CategoryKey) -> Tuple[CategoryBreakdown, ...]:
    return tuple(
        CategoryBreakdown(category=label, metrics=compute_performance_metrics(group))
        for label, group in group_records(records, key).items()
    )
