"""Structural Validator.

Checks a parsed value against the required plan shape, independent of which
stage (strict parse or a repair strategy) produced it, then builds the typed
GeneratedPlan.

Checks, in order:
- top level is an object with "name" and "days"
- "days" is a non-empty list
- every day is an object with "meals" holding breakfast, lunch and dinner

Missing "snacks" is tolerated and normalized to an empty list. The first
failure raises StructuralValidationError naming the missing field; it is not
retried here.
"""

import math
import re
from datetime import date, timedelta
from typing import Any

from loguru import logger

from mealgen.planning.errors import StructuralValidationError
from mealgen.planning.invariants import (
    DEFAULT_MACRO_PERCENTAGES,
    MACRO_PERCENTAGE_TOLERANCE,
    MAX_NUTRIENT_VALUE,
    REQUIRED_MEAL_SLOTS,
)
from mealgen.planning.schema.meal_plan import (
    DayPlan,
    GeneratedPlan,
    MacroGoals,
    MealSlot,
    NutrientTotals,
    average_day_totals,
    sum_meal_nutrients,
)

_NUMBER_RE = re.compile(r"-?\d+(?:[.,]\d+)?")

_SLOT_TITLES = {"breakfast": "Breakfast", "lunch": "Lunch", "dinner": "Dinner", "snacks": "Snack"}

# Day-level totals as the model writes them, keyed by NutrientTotals field
_TOTAL_KEYS: dict[str, tuple[str, ...]] = {
    "calories": ("totalCalories", "total_calories"),
    "protein": ("totalProtein", "total_protein"),
    "carbs": ("totalCarbs", "total_carbs"),
    "fat": ("totalFat", "total_fat"),
    "fiber": ("totalFiber", "total_fiber"),
}


def _first(raw: dict, *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _number(value: Any) -> float:
    """Coerce a model-supplied number ("25", "25g", 25.0) to a float in [0, MAX_NUTRIENT_VALUE].

    Non-finite or out-of-range values count as absent (0).
    """
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, int | float):
            number = float(value)
        elif isinstance(value, str) and (match := _NUMBER_RE.search(value)):
            number = float(match.group(0).replace(",", "."))
        else:
            return 0.0
    except OverflowError:
        return 0.0
    if not math.isfinite(number) or number > MAX_NUTRIENT_VALUE:
        return 0.0
    return max(0.0, number)


def _text(value: Any) -> str:
    if value is None or isinstance(value, dict | list):
        return ""
    return str(value).strip()


def _unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        key = item.casefold()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def _text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for item in value:
        if isinstance(item, dict):
            text = " ".join(part for part in (_text(item.get("quantity")), _text(item.get("name"))) if part)
        else:
            text = _text(item)
        if text:
            items.append(text)
    return items


def _is_meal(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, dict)


def check_structure(value: Any) -> None:
    """Raise StructuralValidationError for the first missing required field."""
    if not isinstance(value, dict) or not _text(value.get("name")):
        raise StructuralValidationError("name")

    days = value.get("days")
    if not isinstance(days, list) or not days:
        raise StructuralValidationError("days")

    for index, day in enumerate(days):
        if not isinstance(day, dict):
            raise StructuralValidationError(f"days[{index}]")
        meals = day.get("meals")
        if not isinstance(meals, dict):
            raise StructuralValidationError(f"days[{index}].meals")
        for slot in REQUIRED_MEAL_SLOTS:
            if not _is_meal(meals.get(slot)):
                raise StructuralValidationError(f"days[{index}].meals.{slot}")


def build_meal(raw: Any, slot: str) -> MealSlot:
    """Build a MealSlot from a meal object or a bare meal name."""
    if isinstance(raw, str):
        return MealSlot(name=raw.strip())

    return MealSlot(
        name=_text(_first(raw, "name", "title")) or _SLOT_TITLES[slot],
        description=_text(raw.get("description")),
        calories=_number(raw.get("calories")),
        protein_grams=_number(_first(raw, "protein", "proteinGrams", "protein_grams")),
        carb_grams=_number(_first(raw, "carbs", "carbohydrates", "carbGrams", "carb_grams")),
        fat_grams=_number(_first(raw, "fat", "fatGrams", "fat_grams")),
        fiber_grams=_number(_first(raw, "fiber", "fiberGrams", "fiber_grams")),
        prep_minutes=round(_number(_first(raw, "prepTime", "prepMinutes", "prep_time", "prep_minutes"))),
        cook_minutes=round(_number(_first(raw, "cookTime", "cookMinutes", "cook_time", "cook_minutes"))),
        ingredients=_text_list(raw.get("ingredients")),
        steps=_text_list(_first(raw, "instructions", "steps")),
        tags=_unique(_text_list(raw.get("tags"))),
    )


def _build_snacks(day: dict) -> list[MealSlot]:
    raw_snacks = _first(day["meals"], "snacks", "snack")
    if raw_snacks is None:
        raw_snacks = _first(day, "snacks", "snack")
    if raw_snacks is None:
        return []
    if not isinstance(raw_snacks, list):
        raw_snacks = [raw_snacks]
    return [build_meal(snack, "snacks") for snack in raw_snacks if _is_meal(snack)]


def _build_totals(day: dict, meals: list[MealSlot]) -> NutrientTotals:
    derived = sum_meal_nutrients(meals)
    given = day.get("totals") if isinstance(day.get("totals"), dict) else {}
    values: dict[str, float] = {}
    for field, keys in _TOTAL_KEYS.items():
        raw = _first(given, field, *keys) if given else None
        if raw is None:
            raw = _first(day, *keys)
        values[field] = _number(raw) if raw is not None else getattr(derived, field)
    return NutrientTotals(**values)


def build_day(raw: dict, index: int, start_date: date) -> DayPlan:
    meals = raw["meals"]
    breakfast = build_meal(meals["breakfast"], "breakfast")
    lunch = build_meal(meals["lunch"], "lunch")
    dinner = build_meal(meals["dinner"], "dinner")
    snacks = _build_snacks(raw)

    return DayPlan(
        day_number=index + 1,
        calendar_date=start_date + timedelta(days=index),
        breakfast=breakfast,
        lunch=lunch,
        dinner=dinner,
        snacks=snacks,
        totals=_build_totals(raw, [breakfast, lunch, dinner, *snacks]),
    )


def _percentage(stated: dict, macro: str, keys: tuple[str, ...]) -> int:
    raw = _first(stated, *keys)
    if raw is None:
        return DEFAULT_MACRO_PERCENTAGES[macro]
    return round(_number(raw))


def build_nutritional_goals(value: dict, summary: NutrientTotals) -> MacroGoals:
    """Read the stated daily target and macro split, cross-checked against the days.

    Stated percentages ("25%" or 25) fall back to DEFAULT_MACRO_PERCENTAGES
    when absent.
    When the stated protein share is more than MACRO_PERCENTAGE_TOLERANCE
    points away from the share computed from the per-day averages, the whole
    computed split replaces the stated one.

    Args:
        value: Parsed plan document
        summary: Per-day average nutrients of the validated days

    Returns:
        MacroGoals for the plan
    """
    stated = value.get("nutritionSummary")
    if not isinstance(stated, dict):
        stated = {}
    protein = _percentage(stated, "protein", ("protein", "proteinPercentage"))
    carbs = _percentage(stated, "carbs", ("carbohydrates", "carbs", "carbPercentage"))
    fat = _percentage(stated, "fat", ("fat", "fatPercentage"))

    if summary.calories > 0 and summary.protein > 0:
        computed_protein = round(summary.protein * 4 / summary.calories * 100)
        if abs(computed_protein - protein) > MACRO_PERCENTAGE_TOLERANCE:
            computed_carbs = round(summary.carbs * 4 / summary.calories * 100)
            computed_fat = round(summary.fat * 9 / summary.calories * 100)
            logger.warning(
                "validate_plan: Stated macro split disagrees with meals, using computed split",
                stated=(protein, carbs, fat),
                computed=(computed_protein, computed_carbs, computed_fat),
            )
            protein, carbs, fat = computed_protein, computed_carbs, computed_fat

    return MacroGoals(
        daily_calories=_number(value.get("averageCaloriesPerDay")) or summary.calories,
        protein_percentage=protein,
        carb_percentage=carbs,
        fat_percentage=fat,
    )


def validate_plan_structure(value: Any, requested_days: int, start_date: date) -> GeneratedPlan:
    """Validate a parsed document and build a typed plan.

    Day numbers are reassigned 1..n by position and calendar dates run from
    start_date, so both stay contiguous whatever the model wrote. The plan may
    hold fewer days than requested; the extender pads it afterwards.

    Args:
        value: Parsed JSON value
        requested_days: Day count the caller asked for
        start_date: Calendar date of day 1

    Returns:
        GeneratedPlan built from the document

    Raises:
        StructuralValidationError: If a required field is missing
    """
    check_structure(value)

    days = [build_day(raw_day, index, start_date) for index, raw_day in enumerate(value["days"])]

    shopping_list = _text_list(_first(value, "shoppingList", "shopping_list"))
    if not shopping_list:
        shopping_list = [ingredient for day in days for meal in day.meal_slots() for ingredient in meal.ingredients]

    nutrition_summary = average_day_totals(days)

    return GeneratedPlan(
        name=_text(value["name"]),
        description=_text(value.get("description")),
        requested_duration_days=requested_days,
        days=days,
        shopping_list=_unique(shopping_list),
        notes=_text_list(value.get("notes")),
        nutrition_summary=nutrition_summary,
        nutritional_goals=build_nutritional_goals(value, nutrition_summary),
        is_approximate=value.get("approximate") is True,
    )
