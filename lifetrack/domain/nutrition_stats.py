"""Aggregated nutrition figures over a time window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AggregationType(str, Enum):
    """How consumption records are summed up."""

    TOTAL = "total"
    BY_DAY = "by_day"


@dataclass(kw_only=True)
class NutritionStatsFilter:
    """Which records to aggregate and how."""

    user_id: int = 0
    start: datetime | None = None
    end: datetime | None = None
    aggregation: AggregationType | str = AggregationType.TOTAL


@dataclass(kw_only=True)
class NutritionStats:
    """Summed nutrients and weight for one period."""

    period_start: datetime | None = None
    period_end: datetime | None = None
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_fat: float = 0.0
    total_carbs: float = 0.0
    total_weight: float = 0.0

    def is_empty(self) -> bool:
        """True when every total is zero."""
        return not any(
            (
                self.total_calories,
                self.total_protein,
                self.total_fat,
                self.total_carbs,
                self.total_weight,
            )
        )