"""Typed Meal Plan Schemas.

These are the only shapes that leave the pipeline. Raw model text never does.
All models are frozen: a GeneratedPlan is built once by the result assembler
and is immutable from then on (callers copy it for presentation).
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from mealgen.planning.invariants import DEFAULT_MACRO_PERCENTAGES


class NutrientTotals(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)


class MacroGoals(BaseModel):
    """Daily calorie target and macro split (percent of calories)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    daily_calories: float = Field(0.0, ge=0)
    protein_percentage: int = Field(DEFAULT_MACRO_PERCENTAGES["protein"], ge=0)
    carb_percentage: int = Field(DEFAULT_MACRO_PERCENTAGES["carbs"], ge=0)
    fat_percentage: int = Field(DEFAULT_MACRO_PERCENTAGES["fat"], ge=0)


class MealSlot(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    description: str = ""

    calories: float = Field(0.0, ge=0)
    protein_grams: float = Field(0.0, ge=0)
    carb_grams: float = Field(0.0, ge=0)
    fat_grams: float = Field(0.0, ge=0)
    fiber_grams: float = Field(0.0, ge=0)

    prep_minutes: int = Field(0, ge=0)
    cook_minutes: int = Field(0, ge=0)

    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class DayPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_number: int = Field(..., ge=1)
    calendar_date: date

    breakfast: MealSlot
    lunch: MealSlot
    dinner: MealSlot
    snacks: list[MealSlot] = Field(default_factory=list)

    totals: NutrientTotals

    def meal_slots(self) -> list[MealSlot]:
        """Return every meal of the day, main slots first."""
        return [self.breakfast, self.lunch, self.dinner, *self.snacks]


class GeneratedPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    requested_duration_days: int = Field(..., gt=0)

    days: list[DayPlan] = Field(..., min_length=1)

    shopping_list: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    nutrition_summary: NutrientTotals  # per-day average
    nutritional_goals: MacroGoals = Field(default_factory=MacroGoals)

    is_approximate: bool = Field(False, description="True when recovered by field scavenging")

    @property
    def start_date(self) -> date:
        return self.days[0].calendar_date


def sum_meal_nutrients(meals: list[MealSlot]) -> NutrientTotals:
    """Sum the nutrients of a set of meal slots."""
    return NutrientTotals(
        calories=sum(m.calories for m in meals),
        protein=sum(m.protein_grams for m in meals),
        carbs=sum(m.carb_grams for m in meals),
        fat=sum(m.fat_grams for m in meals),
        fiber=sum(m.fiber_grams for m in meals),
    )


def average_day_totals(days: list[DayPlan]) -> NutrientTotals:
    """Compute the per-day average of day totals.

    Args:
        days: Non-empty list of day plans

    Returns:
        NutrientTotals with each field averaged over the days
    """
    count = len(days)
    return NutrientTotals(
        calories=round(sum(d.totals.calories for d in days) / count, 1),
        protein=round(sum(d.totals.protein for d in days) / count, 1),
        carbs=round(sum(d.totals.carbs for d in days) / count, 1),
        fat=round(sum(d.totals.fat for d in days) / count, 1),
        fiber=round(sum(d.totals.fiber for d in days) / count, 1),
    )
