"""Field-scavenging fallback.

Last strategy in the chain. When structural repair cannot converge, pull out
whatever scalar fields can be found anywhere in the text and synthesize a
minimal one-day document around them. The result is flagged approximate.
"""

import json
import re

from mealgen.planning.invariants import (
    DEFAULT_MEAL_MACROS,
    DEFAULT_PLAN_NAME,
    DEFAULT_TARGET_CALORIES,
    MAX_NUTRIENT_VALUE,
    MEAL_CALORIE_SPLIT,
    REQUIRED_MEAL_SLOTS,
)
from mealgen.planning.repair.types import RepairAttempt, inapplicable, reparse

SCAVENGE = "field_scavenging"

_STRING_VALUE = r'"((?:[^"\\]|\\.)*)"'
_NAME_RE = re.compile(r'"name"\s*:\s*' + _STRING_VALUE)
_DESCRIPTION_RE = re.compile(r'"description"\s*:\s*' + _STRING_VALUE)
# Checked in order: plan-level targets first, then any per-day total
_CALORIE_RES = (
    re.compile(r'"averageCaloriesPerDay"\s*:\s*(\d+(?:\.\d+)?)'),
    re.compile(r'"targetCalories"\s*:\s*(\d+(?:\.\d+)?)'),
    re.compile(r'"totalCalories"\s*:\s*(\d+(?:\.\d+)?)'),
)
_MEAL_NAME_RES = {
    slot: re.compile(r'"' + slot + r'"\s*:\s*\{[^{}]*?"name"\s*:\s*' + _STRING_VALUE)
    for slot in REQUIRED_MEAL_SLOTS
}

_SLOT_TITLES = {"breakfast": "Breakfast", "lunch": "Lunch", "dinner": "Dinner"}


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except json.JSONDecodeError:
        return value


def _find_string(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if match is None:
        return None
    value = _unescape(match.group(1)).strip()
    return value or None


def _find_target_calories(text: str) -> float | None:
    for pattern in _CALORIE_RES:
        match = pattern.search(text)
        if match is not None and 0 < float(match.group(1)) <= MAX_NUTRIENT_VALUE:
            return float(match.group(1))
    return None


def _placeholder_meal(slot: str, name: str | None, target_calories: float) -> dict:
    macros = DEFAULT_MEAL_MACROS[slot]
    return {
        "name": name or _SLOT_TITLES[slot],
        "description": "Recovered from an incomplete response",
        "calories": round(target_calories * MEAL_CALORIE_SPLIT[slot]),
        "protein": macros["protein"],
        "carbs": macros["carbs"],
        "fat": macros["fat"],
        "fiber": macros["fiber"],
        "prepTime": 10,
        "cookTime": 10,
        "ingredients": ["Seasonal vegetables", "Whole grains", "Lean protein"],
        "instructions": ["Prepare the ingredients", "Cook and serve"],
        "tags": [slot, "approximate"],
    }


def scavenge_fields(span: str) -> RepairAttempt:
    """Synthesize a one-day plan from fields found anywhere in the span.

    Args:
        span: Candidate document text

    Returns:
        RepairAttempt with an approximate document, or inapplicable when no
        field at all can be found
    """
    name = _find_string(_NAME_RE, span)
    description = _find_string(_DESCRIPTION_RE, span)
    calories = _find_target_calories(span)
    meal_names = {slot: _find_string(pattern, span) for slot, pattern in _MEAL_NAME_RES.items()}

    if name is None and description is None and calories is None and not any(meal_names.values()):
        return inapplicable(SCAVENGE)

    target = calories or DEFAULT_TARGET_CALORIES
    # The first "name" in a plan document is the plan's own name, unless it
    # belongs to the first meal.
    if name is not None and name in meal_names.values():
        name = None

    document = {
        "name": name or DEFAULT_PLAN_NAME,
        "description": description or "",
        "approximate": True,
        "averageCaloriesPerDay": target,
        "days": [
            {
                "day": 1,
                "meals": {
                    **{slot: _placeholder_meal(slot, meal_names[slot], target) for slot in REQUIRED_MEAL_SLOTS},
                    "snacks": [],
                },
            }
        ],
        "notes": ["Approximate plan recovered from a malformed response"],
    }
    return reparse(SCAVENGE, span, json.dumps(document, ensure_ascii=False))
