"""Nutrition domain models."""

from dataclasses import dataclass
from enum import StrEnum

from carb_cycle.domain.cycle import CarbDayType


class ProteinSource(StrEnum):
    """Protein foods assigned by the plan generator."""

    CHICKEN = "CHICKEN"
    BEEF = "BEEF"
    SHRIMP = "SHRIMP"


class MealName(StrEnum):
    """The four daily meals, in order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"


class CarbSource(StrEnum):
    """Carbohydrate food served with a meal."""

    OATMEAL = "oatmeal"
    RICE = "rice"
    NONE = "none"


@dataclass(frozen=True)
class NutritionTargets:
    """Daily macro, energy and water targets."""

    carbs_grams: int
    protein_grams: int
    fat_grams: int
    calories_kcal: int
    water_ml: int


@dataclass(frozen=True)
class MealPortion:
    """Prescribed portion for one meal of a generated plan."""

    meal_number: int
    meal_name: MealName
    carb_source: CarbSource
    carb_grams: int
    carb_food_grams: int
    protein_source: ProteinSource
    protein_grams: int
    protein_food_grams: int
    allow_oil: bool
    allow_whole_egg: bool


@dataclass(frozen=True)
class FoodRestrictions:
    """Foods to avoid on a given day."""

    no_fruit: bool
    no_white_sugar: bool
    no_white_flour: bool
    no_egg_yolk: bool
    no_oil: bool


@dataclass(frozen=True)
class DailyNutritionPlan:
    """Fixed prescription for one day of a cycle."""

    carb_day_type: CarbDayType
    total_carbs: int
    total_protein: int
    total_fat: int
    total_calories: int
    meals: tuple[MealPortion, ...]
    water_target_ml: int
    olive_oil_ml: int
    restrictions: FoodRestrictions


@dataclass(frozen=True)
class ReferencePortions:
    """Suggested portions shown before the user logs intake."""

    oatmeal_grams: int
    whole_eggs: int
    white_only_eggs: int
    lunch_rice_grams: int
    lunch_meat_grams: int
    snack_rice_grams: int
    snack_meat_grams: int
    dinner_rice_grams: int
    dinner_meat_grams: int
    olive_oil_ml: int
    strength_minutes_min: int
    strength_minutes_max: int
    cardio_minutes_min: int
    cardio_minutes_max: int


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient amounts with derived calories."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class MealIntake:
    """Food actually eaten at one meal."""

    oatmeal_grams: float = 0
    whole_eggs: int = 0
    white_only_eggs: int = 0
    rice_grams: float = 0
    meat_type: str | None = None
    meat_grams: float = 0
    olive_oil_ml: float = 0


@dataclass(frozen=True)
class DailyIntake:
    """Food actually eaten across the four meals."""

    breakfast: MealIntake
    lunch: MealIntake
    snack: MealIntake
    dinner: MealIntake


@dataclass(frozen=True)
class FoodSearchResult:
    """A food match from FoodData Central with macros per 100g."""

    fdc_id: int
    food_name: str
    brand_name: str | None
    data_type: str | None
    macros: MacroProfile


@dataclass(frozen=True)
class FoodSearchPage:
    """Filtered search matches with the upstream hit count."""

    query: str
    total_hits: int
    results: list[FoodSearchResult]
