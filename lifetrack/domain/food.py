"""Foods, nutrients and consumption records."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

_INT_FIELDS = frozenset({"glycemic_index"})


def _decode_json(value: Any, target: str) -> Any:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if not isinstance(value, str):
        raise TypeError(f"cannot scan {type(value).__name__} into {target}")
    return json.loads(value)


def _coerce_number(name: str, raw: Any) -> float | int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{name}: expected a number, got {raw!r}")
    if name in _INT_FIELDS:
        if isinstance(raw, float) and not raw.is_integer():
            raise ValueError(f"{name}: expected an integer, got {raw!r}")
        return int(raw)
    return float(raw)


@dataclass(kw_only=True)
class Nutrients:
    """Nutrient amounts per 100 g of product; None means unknown."""

    # Macronutrients
    calories: float | None = None
    protein_g: float | None = None
    total_fat_g: float | None = None
    carbohydrates_g: float | None = None
    dietary_fiber_g: float | None = None
    total_sugars_g: float | None = None
    added_sugars_g: float | None = None
    water_g: float | None = None

    # Fats, grams
    saturated_fats_g: float | None = None
    monounsaturated_fats_g: float | None = None
    polyunsaturated_fats_g: float | None = None
    trans_fats_g: float | None = None

    # Fatty acids, milligrams
    omega_3_mg: float | None = None
    omega_6_mg: float | None = None
    omega_9_mg: float | None = None
    alpha_linolenic_acid_mg: float | None = None
    linoleic_acid_mg: float | None = None
    eicosapentaenoic_acid_mg: float | None = None
    docosahexaenoic_acid_mg: float | None = None

    cholesterol_mg: float | None = None

    # Vitamins
    vitamin_a_mcg: float | None = None
    vitamin_c_mg: float | None = None
    vitamin_d_mcg: float | None = None
    vitamin_e_mg: float | None = None
    vitamin_k_mcg: float | None = None
    vitamin_b1_mg: float | None = None
    vitamin_b2_mg: float | None = None
    vitamin_b3_mg: float | None = None
    vitamin_b5_mg: float | None = None
    vitamin_b6_mg: float | None = None
    vitamin_b7_mcg: float | None = None
    vitamin_b9_mcg: float | None = None
    vitamin_b12_mcg: float | None = None
    folate_dfe_mcg: float | None = None
    choline_mg: float | None = None

    # Minerals
    calcium_mg: float | None = None
    iron_mg: float | None = None
    magnesium_mg: float | None = None
    phosphorus_mg: float | None = None
    potassium_mg: float | None = None
    sodium_mg: float | None = None
    zinc_mg: float | None = None
    copper_mg: float | None = None
    manganese_mg: float | None = None
    selenium_mcg: float | None = None
    iodine_mcg: float | None = None

    # Amino acids, milligrams
    lysine_mg: float | None = None
    methionine_mg: float | None = None
    cysteine_mg: float | None = None
    phenylalanine_mg: float | None = None
    tyrosine_mg: float | None = None
    threonine_mg: float | None = None
    tryptophan_mg: float | None = None
    valine_mg: float | None = None
    histidine_mg: float | None = None
    leucine_mg: float | None = None
    isoleucine_mg: float | None = None

    # Special substances
    caffeine_mg: float | None = None
    ethyl_alcohol_g: float | None = None

    glycemic_index: int | None = None
    glycemic_load: float | None = None

    def to_dict(self) -> dict[str, float | int]:
        """Known values keyed by their JSON names; unknown ones are left out."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Nutrients:
        """Build from a JSON object, ignoring keys that are not nutrients."""
        names = {f.name for f in fields(cls)}
        return cls(
            **{
                key: _coerce_number(key, raw)
                for key, raw in data.items()
                if key in names
            }
        )

    def to_json(self) -> str:
        """Encode as a JSON document for storage."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, value: str | bytes | None) -> Nutrients:
        """Decode a stored JSON document; NULL gives empty nutrients."""
        if value is None:
            return cls()
        data = _decode_json(value, "Nutrients")
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Nutrients must be a JSON object")
        return cls.from_dict(data)


@dataclass(kw_only=True)
class BasicNutrients:
    """Main nutrients per 100 g, with zero standing for absent."""

    calories: float = 0.0
    protein_g: float = 0.0
    total_fat_g: float = 0.0
    carbohydrates_g: float = 0.0
    dietary_fiber_g: float = 0.0
    total_sugars_g: float = 0.0
    added_sugars_g: float = 0.0
    water_g: float = 0.0

    def to_full(self) -> Nutrients:
        """Convert to full nutrients with all eight values set."""
        return Nutrients(
            calories=self.calories,
            protein_g=self.protein_g,
            total_fat_g=self.total_fat_g,
            carbohydrates_g=self.carbohydrates_g,
            dietary_fiber_g=self.dietary_fiber_g,
            total_sugars_g=self.total_sugars_g,
            added_sugars_g=self.added_sugars_g,
            water_g=self.water_g,
        )


@dataclass(kw_only=True)
class FoodComponent:
    food_id: int
    amount_g: float


def encode_food_components(components: list[FoodComponent] | None) -> str | None:
    """Encode a recipe's components as JSON; None stays None."""
    if components is None:
        return None
    return json.dumps(
        [{"food_id": c.food_id, "amount_g": c.amount_g} for c in components]
    )


def decode_food_components(value: str | bytes | None) -> list[FoodComponent] | None:
    """Decode stored recipe components; NULL gives None."""
    if value is None:
        return None
    data = _decode_json(value, "FoodComponentList")
    if data is None:
        return None
    if not isinstance(data, list):
        raise ValueError("FoodComponentList must be a JSON array")
    return [
        FoodComponent(
            food_id=int(item.get("food_id", 0)),
            amount_g=float(item.get("amount_g", 0.0)),
        )
        for item in data
    ]


@dataclass(kw_only=True)
class Food:
    id: int = 0
    name: str = ""
    user_id: int = 0
    description: str | None = None
    barcode: str | None = None
    food_type: str = ""
    is_archived: bool = False
    serving_size_g: float | None = None
    serving_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    nutrients: Nutrients | None = None
    food_composition: list[FoodComponent] | None = None


@dataclass(kw_only=True)
class FoodFilter:
    ids: list[int] = field(default_factory=list)
    name: str | None = None
    barcode: str | None = None


@dataclass(kw_only=True)
class ConsumptionLog:
    """One eaten portion; food_id is None for entries not in the food table."""

    user_id: int = 0
    consumed_at: datetime | None = None
    food_id: int | None = None
    food_name: str = ""
    amount_g: float = 0.0
    meal_type: str | None = None
    note: str | None = None
    nutrients: Nutrients | None = None


@dataclass(kw_only=True)
class FoodStats:
    """How often a food was logged."""

    food_id: int = 0
    food_name: str = ""
    serving_name: str = ""
    log_count: int = 0