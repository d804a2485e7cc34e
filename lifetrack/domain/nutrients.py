"""Scaling nutrient values to an eaten amount."""

from __future__ import annotations

import math
from dataclasses import fields

from lifetrack.domain.food import Nutrients

_WHOLE_NUMBER_FIELDS = frozenset({"glycemic_index"})


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    whole = math.trunc(value)
    if abs(value - whole) >= 0.5:
        whole += math.copysign(1.0, value)
    return float(whole)


def round_to_3_decimals(value: float) -> float:
    """Round a value to three decimal places."""
    return _round_half_away(value * 1000) / 1000


def calculate_proportional_nutrients(base: Nutrients, amount_g: float) -> Nutrients:
    """Scale per-100 g nutrients to the given amount in grams.

    Unknown values stay unknown; whole-number values are rounded to integers,
    the others to three decimals.
    """
    ratio = amount_g / 100.0
    scaled: dict[str, float | int] = {}
    for name, value in base.to_dict().items():
        if name in _WHOLE_NUMBER_FIELDS:
            scaled[name] = int(_round_half_away(value * ratio))
        else:
            scaled[name] = round_to_3_decimals(value * ratio)
    return Nutrients(**scaled)


def add_proportional_nutrients(
    total: Nutrients, component: Nutrients, amount_g: float
) -> None:
    """Add the component's nutrients, scaled to amount_g, into total in place."""
    portion = calculate_proportional_nutrients(component, amount_g)
    for f in fields(portion):
        addition = getattr(portion, f.name)
        if addition is None:
            continue
        current = getattr(total, f.name)
        if current is None:
            setattr(total, f.name, addition)
        elif f.name in _WHOLE_NUMBER_FIELDS:
            setattr(total, f.name, current + addition)
        else:
            setattr(total, f.name, round_to_3_decimals(current + addition))