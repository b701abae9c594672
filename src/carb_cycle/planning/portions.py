"""Translate macro targets into food portions and daily meal plans.

Two density tables live here and are intentionally kept apart:

* ``GENERATION_DENSITY`` drives whole-day plan generation.
* ``REFERENCE_NUTRITION_PER_100G`` drives suggested portions and the
  nutrition estimate of logged intake. Its meat values are lower than the
  generation table's.
"""

import random
from dataclasses import dataclass

from carb_cycle.domain.cycle import CarbDayType
from carb_cycle.domain.errors import ConfigurationError
from carb_cycle.domain.models import UserBodyProfile
from carb_cycle.domain.nutrition import (
    CarbSource,
    DailyIntake,
    DailyNutritionPlan,
    FoodRestrictions,
    MacroProfile,
    MealIntake,
    MealName,
    MealPortion,
    ProteinSource,
    ReferencePortions,
)
from carb_cycle.domain.plans import DailyMealPlanRecord
from carb_cycle.planning.allocation import (
    distribute_evenly,
    round_half_up,
    round_to_tenth,
)
from carb_cycle.planning.targets import calories_from_macros, compute_targets

PROTEIN_SOURCES: tuple[ProteinSource, ...] = (
    ProteinSource.CHICKEN,
    ProteinSource.BEEF,
    ProteinSource.SHRIMP,
)


@dataclass(frozen=True)
class DensityTable:
    """Grams of nutrient per gram (or ml) of food."""

    carbs: dict[CarbSource, float]
    protein: dict[ProteinSource, float]
    olive_oil_fat_per_ml: float

    def __post_init__(self) -> None:
        densities = {
            **{f"carbs:{key}": value for key, value in self.carbs.items()},
            **{f"protein:{key}": value for key, value in self.protein.items()},
            "olive_oil": self.olive_oil_fat_per_ml,
        }
        for name, value in densities.items():
            if value <= 0:
                raise ConfigurationError(
                    f"Nutrient density for {name} must be positive, got {value}"
                )


GENERATION_DENSITY = DensityTable(
    carbs={CarbSource.OATMEAL: 0.66, CarbSource.RICE: 0.28},
    protein={
        ProteinSource.CHICKEN: 0.31,
        ProteinSource.BEEF: 0.26,
        ProteinSource.SHRIMP: 0.24,
    },
    olive_oil_fat_per_ml=1.0,
)


@dataclass(frozen=True)
class NutrientsPer100g:
    """Reference macro content per 100g of food."""

    protein: float
    fat: float
    carbs: float


# raw weight unless noted
REFERENCE_NUTRITION_PER_100G: dict[str, NutrientsPer100g] = {
    "oatmeal": NutrientsPer100g(protein=15, fat=6.9, carbs=66),
    "beef": NutrientsPer100g(protein=21, fat=2.5, carbs=0),
    "chicken": NutrientsPer100g(protein=23, fat=1.2, carbs=0),
    "shrimp": NutrientsPer100g(protein=18.6, fat=0.8, carbs=0),
    "fish": NutrientsPer100g(protein=18, fat=3, carbs=0),
    "rice": NutrientsPer100g(protein=2.6, fat=0.3, carbs=28),  # cooked
    "protein_powder": NutrientsPer100g(protein=78, fat=4, carbs=7),
}

# per egg
WHOLE_EGG = NutrientsPer100g(protein=6, fat=5, carbs=0)
EGG_WHITE = NutrientsPer100g(protein=3.6, fat=0, carbs=0)

INTAKE_OLIVE_OIL_FAT_PER_ML = 0.9


@dataclass(frozen=True)
class CarbSplit:
    """Carb grams per carb-bearing meal."""

    breakfast: int
    lunch: int
    dinner: int

    @property
    def total(self) -> int:
        return self.breakfast + self.lunch + self.dinner


@dataclass(frozen=True)
class ProteinSplit:
    """Protein grams for each of the four meals."""

    meal1: int
    meal2: int
    meal3: int
    meal4: int

    @property
    def total(self) -> int:
        return self.meal1 + self.meal2 + self.meal3 + self.meal4

    def as_list(self) -> list[int]:
        return [self.meal1, self.meal2, self.meal3, self.meal4]


def carbs_to_food_grams(
    carb_grams: float,
    source: CarbSource,
    table: DensityTable = GENERATION_DENSITY,
) -> int:
    """Return grams of oatmeal or cooked rice providing carb_grams."""
    if carb_grams <= 0 or source == CarbSource.NONE:
        return 0
    return round_half_up(carb_grams / table.carbs[source])


def protein_to_food_grams(
    protein_grams: float,
    source: ProteinSource,
    table: DensityTable = GENERATION_DENSITY,
) -> int:
    """Return grams of raw meat or seafood providing protein_grams."""
    if protein_grams <= 0:
        return 0
    return round_half_up(protein_grams / table.protein[source])


def fat_to_oil_ml(fat_grams: float, table: DensityTable = GENERATION_DENSITY) -> int:
    """Return ml of olive oil providing fat_grams."""
    if fat_grams <= 0:
        return 0
    return round_half_up(fat_grams / table.olive_oil_fat_per_ml)


def distribute_carbs_across_meals(total_carbs: int) -> CarbSplit:
    """Split carbs over breakfast, lunch and dinner; dinner takes the rest."""
    breakfast, lunch, dinner = distribute_evenly(total_carbs, 3)
    return CarbSplit(breakfast=breakfast, lunch=lunch, dinner=dinner)


def distribute_protein_across_meals(total_protein: int) -> ProteinSplit:
    """Split protein over the four meals; the last meal takes the rest."""
    meal1, meal2, meal3, meal4 = distribute_evenly(total_protein, 4)
    return ProteinSplit(meal1=meal1, meal2=meal2, meal3=meal3, meal4=meal4)


def food_restrictions(carb_day_type: CarbDayType) -> FoodRestrictions:
    """Return the restriction flags for a day."""
    high = carb_day_type == CarbDayType.HIGH
    return FoodRestrictions(
        no_fruit=True,
        no_white_sugar=True,
        no_white_flour=True,
        no_egg_yolk=high,
        no_oil=high,
    )


def random_protein_source(rng: random.Random) -> ProteinSource:
    """Pick a protein source uniformly."""
    return rng.choice(PROTEIN_SOURCES)


@dataclass(frozen=True)
class _MealSlot:
    name: MealName
    carb_source: CarbSource


_MEAL_SLOTS = (
    _MealSlot(MealName.BREAKFAST, CarbSource.OATMEAL),
    _MealSlot(MealName.LUNCH, CarbSource.RICE),
    _MealSlot(MealName.SNACK, CarbSource.NONE),
    _MealSlot(MealName.DINNER, CarbSource.RICE),
)


def generate_daily_plan(
    profile: UserBodyProfile,
    carb_day_type: CarbDayType,
    rng: random.Random,
    table: DensityTable = GENERATION_DENSITY,
) -> DailyNutritionPlan:
    """Build the four-meal prescription for one day.

    Each meal's protein source is drawn independently from rng.
    """
    targets = compute_targets(profile, carb_day_type)
    carb_split = distribute_carbs_across_meals(targets.carbs_grams)
    protein_split = distribute_protein_across_meals(targets.protein_grams)
    carbs_by_meal = {
        MealName.BREAKFAST: carb_split.breakfast,
        MealName.LUNCH: carb_split.lunch,
        MealName.SNACK: 0,
        MealName.DINNER: carb_split.dinner,
    }
    restrictions = food_restrictions(carb_day_type)

    meals = []
    for number, (slot, protein_grams) in enumerate(
        zip(_MEAL_SLOTS, protein_split.as_list(), strict=True), start=1
    ):
        source = random_protein_source(rng)
        carb_grams = carbs_by_meal[slot.name]
        meals.append(
            MealPortion(
                meal_number=number,
                meal_name=slot.name,
                carb_source=slot.carb_source,
                carb_grams=carb_grams,
                carb_food_grams=carbs_to_food_grams(
                    carb_grams, slot.carb_source, table
                ),
                protein_source=source,
                protein_grams=protein_grams,
                protein_food_grams=protein_to_food_grams(protein_grams, source, table),
                allow_oil=not restrictions.no_oil,
                allow_whole_egg=not restrictions.no_egg_yolk,
            )
        )

    return DailyNutritionPlan(
        carb_day_type=carb_day_type,
        total_carbs=targets.carbs_grams,
        total_protein=targets.protein_grams,
        total_fat=targets.fat_grams,
        total_calories=targets.calories_kcal,
        meals=tuple(meals),
        water_target_ml=targets.water_ml,
        olive_oil_ml=fat_to_oil_ml(targets.fat_grams, table),
        restrictions=restrictions,
    )


@dataclass(frozen=True)
class _DayReference:
    lunch_rice_grams: int
    snack_rice_grams: int
    dinner_rice_grams: int
    olive_oil_ml: int
    strength_minutes: tuple[int, int]
    cardio_minutes: tuple[int, int]


_REFERENCE_BY_DAY: dict[CarbDayType, _DayReference] = {
    CarbDayType.LOW: _DayReference(
        lunch_rice_grams=80,
        snack_rice_grams=40,
        dinner_rice_grams=60,
        olive_oil_ml=40,
        strength_minutes=(40, 50),
        cardio_minutes=(20, 30),
    ),
    CarbDayType.MEDIUM: _DayReference(
        lunch_rice_grams=150,
        snack_rice_grams=50,
        dinner_rice_grams=100,
        olive_oil_ml=25,
        strength_minutes=(45, 60),
        cardio_minutes=(30, 30),
    ),
    CarbDayType.HIGH: _DayReference(
        lunch_rice_grams=220,
        snack_rice_grams=0,
        dinner_rice_grams=180,
        olive_oil_ml=0,
        strength_minutes=(60, 60),
        cardio_minutes=(30, 45),
    ),
}


REFERENCE_OATMEAL_GRAMS = 40
REFERENCE_WHOLE_EGGS = 2
REFERENCE_WHITE_ONLY_EGGS = 1
REFERENCE_MEAT_GRAMS = 100


def reference_portions(carb_day_type: CarbDayType) -> ReferencePortions:
    """Return the fixed suggested portions for a carb day type.

    These are hand-tuned and independent of ``generate_daily_plan``.
    """
    day = _REFERENCE_BY_DAY[carb_day_type]
    return ReferencePortions(
        oatmeal_grams=REFERENCE_OATMEAL_GRAMS,
        whole_eggs=REFERENCE_WHOLE_EGGS,
        white_only_eggs=REFERENCE_WHITE_ONLY_EGGS,
        lunch_rice_grams=day.lunch_rice_grams,
        lunch_meat_grams=REFERENCE_MEAT_GRAMS,
        snack_rice_grams=day.snack_rice_grams,
        snack_meat_grams=REFERENCE_MEAT_GRAMS,
        dinner_rice_grams=day.dinner_rice_grams,
        dinner_meat_grams=REFERENCE_MEAT_GRAMS,
        olive_oil_ml=day.olive_oil_ml,
        strength_minutes_min=day.strength_minutes[0],
        strength_minutes_max=day.strength_minutes[1],
        cardio_minutes_min=day.cardio_minutes[0],
        cardio_minutes_max=day.cardio_minutes[1],
    )


def food_nutrition(food: str, grams: float) -> MacroProfile:
    """Estimate macros of a logged food from the reference table."""
    data = REFERENCE_NUTRITION_PER_100G.get(food)
    if data is None or grams <= 0:
        return MacroProfile(calories=0, protein_g=0, fat_g=0, carbs_g=0)
    ratio = grams / 100
    return _macro_profile(
        round_to_tenth(data.protein * ratio),
        round_to_tenth(data.fat * ratio),
        round_to_tenth(data.carbs * ratio),
    )


def eggs_nutrition(whole_eggs: int, white_only_eggs: int) -> MacroProfile:
    """Estimate macros of whole eggs and egg whites."""
    protein = round_to_tenth(
        WHOLE_EGG.protein * whole_eggs + EGG_WHITE.protein * white_only_eggs
    )
    fat = round_to_tenth(WHOLE_EGG.fat * whole_eggs + EGG_WHITE.fat * white_only_eggs)
    return _macro_profile(protein, fat, 0)


def meal_nutrition(meal: MealIntake) -> MacroProfile:
    """Estimate macros of everything eaten at one meal."""
    parts = [
        food_nutrition("oatmeal", meal.oatmeal_grams),
        eggs_nutrition(meal.whole_eggs, meal.white_only_eggs),
        food_nutrition("rice", meal.rice_grams),
    ]
    if meal.meat_type:
        parts.append(food_nutrition(meal.meat_type, meal.meat_grams))
    protein = sum(part.protein_g for part in parts)
    fat = sum(part.fat_g for part in parts)
    carbs = sum(part.carbs_g for part in parts)
    if meal.olive_oil_ml > 0:
        fat += meal.olive_oil_ml * INTAKE_OLIVE_OIL_FAT_PER_ML
    return MacroProfile(
        calories=calories_from_macros(carbs, protein, fat),
        protein_g=round_to_tenth(protein),
        fat_g=round_to_tenth(fat),
        carbs_g=round_to_tenth(carbs),
    )


def daily_nutrition(intake: DailyIntake) -> MacroProfile:
    """Estimate macros eaten across the whole day."""
    meals = [
        meal_nutrition(intake.breakfast),
        meal_nutrition(intake.lunch),
        meal_nutrition(intake.snack),
        meal_nutrition(intake.dinner),
    ]
    protein = sum(meal.protein_g for meal in meals)
    fat = sum(meal.fat_g for meal in meals)
    carbs = sum(meal.carbs_g for meal in meals)
    return MacroProfile(
        calories=calories_from_macros(carbs, protein, fat),
        protein_g=round_to_tenth(protein),
        fat_g=round_to_tenth(fat),
        carbs_g=round_to_tenth(carbs),
    )


def _macro_profile(protein: float, fat: float, carbs: float) -> MacroProfile:
    return MacroProfile(
        calories=calories_from_macros(carbs, protein, fat),
        protein_g=protein,
        fat_g=fat,
        carbs_g=carbs,
    )


def logged_intake(
    meal_plan: DailyMealPlanRecord, items: dict[str, bool]
) -> DailyIntake:
    """Return the food eaten on a day, counting only checked-off portions."""

    def eaten(key: str, grams: float) -> float:
        return grams if items.get(key) else 0

    def meat(meal: int) -> tuple[str, float]:
        source = getattr(meal_plan, f"protein_source_meal_{meal}")
        grams = getattr(meal_plan, f"protein_grams_meal_{meal}")
        return source.value.lower(), eaten(f"protein_{meal}_completed", grams)

    meats = {meal: meat(meal) for meal in (1, 2, 3, 4)}
    return DailyIntake(
        breakfast=MealIntake(
            oatmeal_grams=eaten("oatmeal_completed", meal_plan.oatmeal_grams),
            meat_type=meats[1][0],
            meat_grams=meats[1][1],
        ),
        lunch=MealIntake(
            rice_grams=eaten("rice_lunch_completed", meal_plan.rice_grams_lunch),
            meat_type=meats[2][0],
            meat_grams=meats[2][1],
        ),
        snack=MealIntake(meat_type=meats[3][0], meat_grams=meats[3][1]),
        dinner=MealIntake(
            rice_grams=eaten("rice_dinner_completed", meal_plan.rice_grams_dinner),
            meat_type=meats[4][0],
            meat_grams=meats[4][1],
        ),
    )
