"""Storage of foods and consumption records in PostgreSQL."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from lifetrack.domain.food import (
    ConsumptionLog,
    Food,
    FoodComponent,
    FoodFilter,
    FoodStats,
    Nutrients,
    decode_food_components,
    encode_food_components,
)
from lifetrack.domain.nutrition_stats import (
    AggregationType,
    NutritionStats,
    NutritionStatsFilter,
)
from lifetrack.gateways.db.postgres import RepositoryBase, select

_FOOD_COLUMNS = (
    "id",
    "name",
    "user_id",
    "description",
    "barcode",
    "food_type",
    "is_archived",
    "serving_size_g",
    "serving_name",
    "nutrients",
    "food_composition",
    "created_at",
    "updated_at",
)

_INSERT_FOOD = """
    INSERT INTO food (name, user_id, description, barcode, food_type, is_archived,
                     serving_size_g, serving_name, nutrients, food_composition,
                     created_at, updated_at)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
    RETURNING id"""

_SELECT_FOOD = f"""
    SELECT {", ".join(_FOOD_COLUMNS)}
    FROM food
    WHERE id = $1"""

_INSERT_LOG = """
    INSERT INTO consumption_log (user_id, consumed_at, food_id, food_name, amount_g, meal_type, note, nutrients)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)"""

_LOG_COLUMNS = "user_id, consumed_at, food_id, food_name, amount_g, meal_type, note, nutrients"

_SELECT_LOG = f"""
    SELECT {_LOG_COLUMNS}
    FROM consumption_log
    WHERE user_id = $1 AND consumed_at = $2"""

_SELECT_LOGS_BY_USER = f"""
    SELECT {_LOG_COLUMNS}
    FROM consumption_log
    WHERE user_id = $1
    ORDER BY consumed_at DESC"""

_SELECT_LAST_CONSUMPTION = """
    SELECT consumed_at
    FROM consumption_log
    WHERE user_id = $1
    ORDER BY consumed_at DESC
    LIMIT 1"""

_SELECT_TOP_PRODUCTS = """
    SELECT cl.food_id,
           f.name as food_name,
           COALESCE(f.serving_name, '') as serving_name,
           COUNT(*) as log_count
    FROM consumption_log cl
    JOIN food f ON cl.food_id = f.id
    WHERE cl.user_id = $1
      AND cl.consumed_at >= $2
      AND cl.consumed_at <= $3
      AND cl.food_id IS NOT NULL
    GROUP BY cl.food_id, f.name, f.serving_name
    ORDER BY log_count DESC, cl.food_id ASC
    LIMIT $4"""

_STATS_TOTALS = (
    "COALESCE(SUM((nutrients->>'calories')::numeric), 0) as total_calories",
    "COALESCE(SUM((nutrients->>'protein_g')::numeric), 0) as total_protein",
    "COALESCE(SUM((nutrients->>'total_fat_g')::numeric), 0) as total_fat",
    "COALESCE(SUM((nutrients->>'carbohydrates_g')::numeric), 0) as total_carbs",
    "COALESCE(SUM(amount_g), 0) as total_weight",
)


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def _decode_nutrients(value: Any) -> Nutrients | None:
    if value is None:
        return None
    if isinstance(value, Nutrients):
        return value
    if isinstance(value, dict):
        return Nutrients.from_dict(value)
    return Nutrients.from_json(value)


def _decode_components(value: Any) -> list[FoodComponent] | None:
    if value is None:
        return None
    if isinstance(value, list):
        return [
            item
            if isinstance(item, FoodComponent)
            else FoodComponent(
                food_id=int(item.get("food_id", 0)),
                amount_g=float(item.get("amount_g", 0.0)),
            )
            for item in value
        ]
    return decode_food_components(value)


def _encode_nutrients(nutrients: Nutrients | None) -> str | None:
    return None if nutrients is None else nutrients.to_json()


def _food_from_row(row: Sequence[Any]) -> Food:
    (
        food_id,
        name,
        user_id,
        description,
        barcode,
        food_type,
        is_archived,
        serving_size_g,
        serving_name,
        nutrients,
        composition,
        created_at,
        updated_at,
    ) = row
    return Food(
        id=food_id,
        name=name,
        user_id=user_id,
        description=description,
        barcode=barcode,
        food_type=food_type,
        is_archived=bool(is_archived),
        serving_size_g=None if serving_size_g is None else float(serving_size_g),
        serving_name=serving_name,
        nutrients=_decode_nutrients(nutrients),
        food_composition=_decode_components(composition),
        created_at=created_at,
        updated_at=updated_at,
    )


def _log_from_row(row: Sequence[Any]) -> ConsumptionLog:
    user_id, consumed_at, food_id, food_name, amount_g, meal_type, note, nutrients = row
    return ConsumptionLog(
        user_id=user_id,
        consumed_at=consumed_at,
        food_id=food_id,
        food_name=food_name,
        amount_g=_to_float(amount_g),
        meal_type=meal_type,
        note=note,
        nutrients=_decode_nutrients(nutrients),
    )


class FoodRepository(RepositoryBase):
    """Foods, what was eaten, and figures derived from it."""

    def create_food(self, food: Food) -> int:
        """Store a food, stamping its creation and update times; return its id."""
        now = datetime.now(timezone.utc)
        food.created_at = now
        food.updated_at = now
        row = self.connection.query_row(
            _INSERT_FOOD,
            food.name,
            food.user_id,
            food.description,
            food.barcode,
            food.food_type,
            food.is_archived,
            food.serving_size_g,
            food.serving_name,
            _encode_nutrients(food.nutrients),
            encode_food_components(food.food_composition),
            food.created_at,
            food.updated_at,
        )
        return int(row[0])

    def get_food(self, food_id: int) -> Food:
        """Fetch a food by id; raises NoRowsError when it does not exist."""
        return _food_from_row(self.connection.query_row(_SELECT_FOOD, food_id))

    def add_consumption_log(self, log: ConsumptionLog) -> None:
        """Record an eaten portion."""
        self.connection.execute(
            _INSERT_LOG,
            log.user_id,
            log.consumed_at,
            log.food_id,
            log.food_name,
            log.amount_g,
            log.meal_type,
            log.note,
            _encode_nutrients(log.nutrients),
        )

    def search_food(self, food_filter: FoodFilter) -> list[Food]:
        """Foods matching every given criterion, ordered by name."""
        query = select(*_FOOD_COLUMNS).from_table("food")
        if food_filter.ids:
            query = query.where_eq("id", list(food_filter.ids))
        if food_filter.name:
            query = query.where(
                "LOWER(name) LIKE LOWER('%' || ? || '%')", food_filter.name
            )
        if food_filter.barcode:
            query = query.where_eq("barcode", food_filter.barcode)
        sql, args = query.order_by("name ASC").to_sql()
        return [_food_from_row(row) for row in self.connection.query(sql, *args)]

    def get_consumption_log(
        self, user_id: int, consumed_at: datetime
    ) -> ConsumptionLog:
        """The record made at the given moment; raises NoRowsError if missing."""
        return _log_from_row(
            self.connection.query_row(_SELECT_LOG, user_id, consumed_at)
        )

    def get_consumption_logs_by_user(self, user_id: int) -> list[ConsumptionLog]:
        """All records of a user, newest first."""
        return [
            _log_from_row(row)
            for row in self.connection.query(_SELECT_LOGS_BY_USER, user_id)
        ]

    def get_last_consumption_time(self, user_id: int) -> datetime | None:
        """When the user last ate, or None when nothing was recorded."""
        row = self._fetch_one_or_none(_SELECT_LAST_CONSUMPTION, user_id)
        return None if row is None else row[0]

    def get_nutrition_stats(
        self, stats_filter: NutritionStatsFilter
    ) -> list[NutritionStats]:
        """Summed nutrition over the window, in total or per day.

        Periods whose totals are all zero are left out.
        """
        try:
            aggregation = AggregationType(stats_filter.aggregation)
        except ValueError:
            raise ValueError(
                f"unknown aggregation type: {stats_filter.aggregation}"
            ) from None

        query = (
            select(*_STATS_TOTALS)
            .from_table("consumption_log")
            .where_eq("user_id", stats_filter.user_id)
            .where_gte("consumed_at", stats_filter.start)
            .where_lte("consumed_at", stats_filter.end)
        )
        if aggregation is AggregationType.TOTAL:
            query = query.column("min(consumed_at) as period_start").column(
                "max(consumed_at) as period_end"
            )
        else:
            query = (
                query.column("date_trunc('day', consumed_at) as period_start")
                .column(
                    "(date_trunc('day', consumed_at) + "
                    "(INTERVAL '1 day' - INTERVAL '1 second')) as period_end"
                )
                .group_by("period_start", "period_end")
                .order_by("period_start ASC")
            )

        sql, args = query.to_sql()
        results = []
        for row in self.connection.query(sql, *args):
            calories, protein, fat, carbs, weight, period_start, period_end = row
            stats = NutritionStats(
                period_start=period_start,
                period_end=period_end,
                total_calories=_to_float(calories),
                total_protein=_to_float(protein),
                total_fat=_to_float(fat),
                total_carbs=_to_float(carbs),
                total_weight=_to_float(weight),
            )
            if not stats.is_empty():
                results.append(stats)
        return results

    def get_top_products(
        self, user_id: int, start: datetime, end: datetime, limit: int
    ) -> list[FoodStats]:
        """Foods logged most often in the window, ties broken by food id."""
        return [
            FoodStats(
                food_id=food_id,
                food_name=food_name,
                serving_name=serving_name or "",
                log_count=int(log_count),
            )
            for food_id, food_name, serving_name, log_count in self.connection.query(
                _SELECT_TOP_PRODUCTS, user_id, start, end, limit
            )
        ]