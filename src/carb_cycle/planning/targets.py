"""Daily macro targets for a body profile and carb day type."""

from carb_cycle.domain.cycle import CarbDayType
from carb_cycle.domain.models import Gender, UserBodyProfile
from carb_cycle.domain.nutrition import NutritionTargets
from carb_cycle.planning.allocation import round_half_up

CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_FAT = 9

# grams per kg of lean mass
CARB_MULTIPLIERS: dict[CarbDayType, float] = {
    CarbDayType.LOW: 1,
    CarbDayType.MEDIUM: 2,
    CarbDayType.HIGH: 3,
}
FAT_MULTIPLIERS: dict[CarbDayType, float] = {
    CarbDayType.LOW: 0.8,
    CarbDayType.MEDIUM: 0.5,
    CarbDayType.HIGH: 0.3,
}

HIGH_BODY_FAT = 0.30
MODERATE_BODY_FAT = 0.25
LOW_BODY_FAT = 0.20

HEAVY_WEIGHT_KG = 85
WATER_ML_HEAVY = 4500
WATER_ML_DEFAULT = 4000


def lean_mass_kg(profile: UserBodyProfile) -> float:
    """Return body weight minus fat mass."""
    return profile.weight_kg * (1 - profile.body_fat_fraction)


def protein_multiplier(body_fat_fraction: float, gender: Gender) -> float:
    """Return grams of protein per kg of total body weight."""
    if body_fat_fraction >= HIGH_BODY_FAT:
        return 0.75 if gender == Gender.FEMALE else 1.0
    if body_fat_fraction >= MODERATE_BODY_FAT:
        return 1.5
    if body_fat_fraction >= LOW_BODY_FAT:
        return 2.0
    return 2.5


def calories_from_macros(carbs_g: float, protein_g: float, fat_g: float) -> int:
    """Return rounded kcal for the given macro grams."""
    return round_half_up(
        carbs_g * CALORIES_PER_GRAM_CARBS
        + protein_g * CALORIES_PER_GRAM_PROTEIN
        + fat_g * CALORIES_PER_GRAM_FAT
    )


def water_target_ml(weight_kg: float) -> int:
    """Return the daily water target, independent of carb day type."""
    return WATER_ML_HEAVY if weight_kg >= HEAVY_WEIGHT_KG else WATER_ML_DEFAULT


def compute_targets(
    profile: UserBodyProfile, carb_day_type: CarbDayType
) -> NutritionTargets:
    """Compute carbs, protein, fat, calories and water for one day.

    Carbs and fat scale with lean mass; protein scales with total weight
    using a body-fat bracket. Calories are always derived from the macros.
    """
    lean_mass = lean_mass_kg(profile)
    carbs = round_half_up(lean_mass * CARB_MULTIPLIERS[carb_day_type])
    protein = round_half_up(
        profile.weight_kg
        * protein_multiplier(profile.body_fat_fraction, profile.gender)
    )
    fat = round_half_up(lean_mass * FAT_MULTIPLIERS[carb_day_type])
    return NutritionTargets(
        carbs_grams=carbs,
        protein_grams=protein,
        fat_grams=fat,
        calories_kcal=calories_from_macros(carbs, protein, fat),
        water_ml=water_target_ml(profile.weight_kg),
    )
