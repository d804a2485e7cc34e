import pytest

from lifetrack.domain.nutrition_stats import (
    AggregationType,
    NutritionStats,
    NutritionStatsFilter,
)


def test_aggregation_values_match_names():
    assert AggregationType.TOTAL.value == "total"
    assert AggregationType("by_day") is AggregationType.BY_DAY


def test_unknown_aggregation_is_rejected():
    with pytest.raises(ValueError):
        AggregationType("weekly")


def test_default_stats_are_empty():
    assert NutritionStats().is_empty() is True


@pytest.mark.parametrize(
    "field_name",
    ["total_calories", "total_protein", "total_fat", "total_carbs", "total_weight"],
)
def test_any_nonzero_total_is_not_empty(field_name):
    stats = NutritionStats(**{field_name: 0.5})
    assert stats.is_empty() is False


def test_filter_keeps_given_values():
    stats_filter = NutritionStatsFilter(user_id=7, aggregation=AggregationType.BY_DAY)
    assert stats_filter.user_id == 7
    assert stats_filter.aggregation is AggregationType.BY_DAY