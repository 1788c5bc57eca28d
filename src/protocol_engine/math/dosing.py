"""Dosing calculator — per-athlete nutrition and hydration quantities.

Every dose is a fixed per-kilogram coefficient times body weight, rounded
half-up to the nearest gram/ml/mg. Coefficients are editorial constants
scaled from a 75 kg reference athlete (see models/enums.py).

Carbohydrate targets follow the usual sports-nutrition ranges:
0.6-1.0 g/kg/hr intra-session (capped at 60/90 g/hr), 0.8 g/kg refeed,
7-8 g/kg/day carbohydrate loading.
"""

from __future__ import annotations

from dataclasses import dataclass

from protocol_engine.math.clock import round_half_up
from protocol_engine.models.enums import (
    CARB_LOAD_HIGH_G_PER_KG,
    CARB_LOAD_LOW_G_PER_KG,
    FAST_CARBS_G_PER_KG,
    INTRA_CARB_HIGH_CAP_G_HR,
    INTRA_CARB_HIGH_G_PER_KG_HR,
    INTRA_CARB_STD_CAP_G_HR,
    INTRA_CARB_STD_G_PER_KG_HR,
    MEAT_G_PER_KG,
    MEAT_SMALL_G_PER_KG,
    POTATOES_G_PER_KG,
    PROTEIN_POWDER_G_PER_KG,
    PROTEIN_POWDER_MIN_G,
    REFEED_CARB_G_PER_KG,
    REFEED_PROTEIN_G_PER_KG,
    REFEED_PROTEIN_MIN_G,
    RICE_G_PER_KG,
    SODIUM_MG_PER_KG,
    WAKE_SODIUM_FRACTION,
    WATER_LARGE_ML_PER_KG,
    WATER_STD_ML_PER_KG,
    Intensity,
)


@dataclass(frozen=True)
class Portions:
    """Meal-plan portions for one athlete, all integers."""

    rice_g: int
    potatoes_g: int
    meat_g: int
    meat_small_g: int
    protein_powder_g: int
    fast_carbs_g: int
    water_large_ml: int
    water_std_ml: int
    sodium_mg: int

    @property
    def wake_sodium_mg(self) -> int:
        """Sodium for the T-48h wake-up drink (~70% of the standard dose)."""
        return round_half_up(self.sodium_mg * WAKE_SODIUM_FRACTION)


def carb_dose(weight_kg: float, per_kg: float) -> int:
    return round_half_up(weight_kg * per_kg)


def protein_dose(weight_kg: float, per_kg: float) -> int:
    return round_half_up(weight_kg * per_kg)


def calculate_portions(weight_kg: float) -> Portions:
    """Scale every meal-plan portion to *weight_kg*."""
    return Portions(
        rice_g=round_half_up(weight_kg * RICE_G_PER_KG),
        potatoes_g=round_half_up(weight_kg * POTATOES_G_PER_KG),
        meat_g=round_half_up(weight_kg * MEAT_G_PER_KG),
        meat_small_g=round_half_up(weight_kg * MEAT_SMALL_G_PER_KG),
        protein_powder_g=max(
            round_half_up(weight_kg * PROTEIN_POWDER_G_PER_KG), PROTEIN_POWDER_MIN_G
        ),
        fast_carbs_g=round_half_up(weight_kg * FAST_CARBS_G_PER_KG),
        water_large_ml=round_half_up(weight_kg * WATER_LARGE_ML_PER_KG),
        water_std_ml=round_half_up(weight_kg * WATER_STD_ML_PER_KG),
        sodium_mg=round_half_up(weight_kg * SODIUM_MG_PER_KG),
    )


def intra_workout_carbs(weight_kg: float, intensity: Intensity) -> int:
    """Carbohydrate target in g/hr during the session.

    Max-effort sessions use ~1 g/kg/hr capped at 90 g/hr; everything
    else ~0.6 g/kg/hr capped at 60 g/hr.
    """
    if intensity == Intensity.MAX_EFFORT:
        return min(carb_dose(weight_kg, INTRA_CARB_HIGH_G_PER_KG_HR), INTRA_CARB_HIGH_CAP_G_HR)
    return min(carb_dose(weight_kg, INTRA_CARB_STD_G_PER_KG_HR), INTRA_CARB_STD_CAP_G_HR)


def refeed_protein(weight_kg: float) -> int:
    """Immediate post-session protein, never below 20 g."""
    return max(protein_dose(weight_kg, REFEED_PROTEIN_G_PER_KG), REFEED_PROTEIN_MIN_G)


def refeed_carbs(weight_kg: float) -> int:
    return carb_dose(weight_kg, REFEED_CARB_G_PER_KG)


def carb_loading_range(weight_kg: float) -> tuple[int, int]:
    """Daily carbohydrate-loading target (low, high) in grams."""
    return (
        carb_dose(weight_kg, CARB_LOAD_LOW_G_PER_KG),
        carb_dose(weight_kg, CARB_LOAD_HIGH_G_PER_KG),
    )


def format_weight(weight_kg: float) -> str:
    """Render body weight without a trailing ``.0``, e.g. 70.0 -> "70"."""
    return f"{weight_kg:g}"
