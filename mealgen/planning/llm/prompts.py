"""Prompt Bounder.

Keeps each model request small enough that the response fits inside the
model's output token budget, and spells out the exact JSON shape expected.
The plan extender fills any remaining days after parsing.
"""

import json

from mealgen.planning.invariants import (
    DEFAULT_MACRO_PERCENTAGES,
    DEFAULT_MEAL_MACROS,
    DEFAULT_TARGET_CALORIES,
    MAX_BATCH_DAYS,
    MEAL_CALORIE_SPLIT,
)
from mealgen.planning.safety import sanitize_prompt_text
from mealgen.planning.schema.plan_request import PlanRequest

SYSTEM_PROMPT = """You are a registered dietitian writing meal plans.

Rules:
- You must output ONLY valid JSON.
- You must NOT wrap the JSON in Markdown or add any prose around it.
- You must follow the given JSON structure exactly.
- Every day must contain breakfast, lunch and dinner.
- Keep ingredient and instruction lists short.
"""


def compute_batch_days(requested_days: int) -> int:
    """Number of days to request from the model in one call."""
    return min(requested_days, MAX_BATCH_DAYS)


def _skeleton_meal(slot: str, target_calories: int) -> dict:
    macros = DEFAULT_MEAL_MACROS[slot]
    return {
        "name": "...",
        "description": "...",
        "calories": round(target_calories * MEAL_CALORIE_SPLIT[slot]),
        "protein": macros["protein"],
        "carbs": macros["carbs"],
        "fat": macros["fat"],
        "fiber": macros["fiber"],
        "prepTime": 10,
        "cookTime": 10,
        "ingredients": ["..."],
        "instructions": ["..."],
        "tags": [slot],
    }


def build_schema_skeleton(batch_days: int, target_calories: int | None = None) -> str:
    """Render the expected document shape for batch_days days.

    Args:
        batch_days: Number of day objects in the skeleton
        target_calories: Daily calorie target (defaults to DEFAULT_TARGET_CALORIES)

    Returns:
        Indented JSON skeleton with "..." placeholders for free text
    """
    calories = target_calories or DEFAULT_TARGET_CALORIES
    days = [
        {
            "day": day,
            "meals": {
                "breakfast": _skeleton_meal("breakfast", calories),
                "lunch": _skeleton_meal("lunch", calories),
                "dinner": _skeleton_meal("dinner", calories),
                "snacks": [_skeleton_meal("snack", calories)],
            },
            "totalCalories": calories,
        }
        for day in range(1, batch_days + 1)
    ]
    skeleton = {
        "name": f"{batch_days}-day meal plan",
        "description": "...",
        "totalDays": batch_days,
        "averageCaloriesPerDay": calories,
        "nutritionSummary": {
            "protein": f"{DEFAULT_MACRO_PERCENTAGES['protein']}%",
            "carbohydrates": f"{DEFAULT_MACRO_PERCENTAGES['carbs']}%",
            "fat": f"{DEFAULT_MACRO_PERCENTAGES['fat']}%",
        },
        "days": days,
        "shoppingList": ["..."],
        "notes": ["..."],
    }
    return json.dumps(skeleton, indent=2, ensure_ascii=False)


def _constraint_lines(request: PlanRequest) -> list[str]:
    lines: list[str] = []
    if request.diet_style:
        lines.append(f"Diet style: {sanitize_prompt_text(request.diet_style)}")
    if request.restrictions:
        lines.append(f"Restrictions: {', '.join(sorted(sanitize_prompt_text(item) for item in request.restrictions))}")
    return lines


def build_meal_plan_prompt(request: PlanRequest) -> str:
    """Build the user prompt for a meal plan request.

    The caller's brief is sanitized before it is embedded. A request with
    render_prompt=False carries a pre-filled prompt, which is returned
    verbatim.

    Args:
        request: Plan request

    Returns:
        Prompt text
    """
    if not request.render_prompt:
        return request.prompt_text

    batch_days = compute_batch_days(request.requested_duration_days)
    calories = request.target_calories_per_day or DEFAULT_TARGET_CALORIES

    prompt_parts = [f"Generate a meal plan in JSON for {batch_days} days."]
    brief = sanitize_prompt_text(request.prompt_text)
    if brief:
        prompt_parts.append("")
        prompt_parts.append(brief)

    prompt_parts.append("")
    prompt_parts.append(f"Target: {calories} calories per day")
    prompt_parts.extend(_constraint_lines(request))

    prompt_parts.append("")
    prompt_parts.append("EXACT JSON format (replace every ... with real values):")
    prompt_parts.append(build_schema_skeleton(batch_days, calories))

    prompt_parts.append("")
    prompt_parts.append(f"Return exactly {batch_days} days, varying the meals from day to day.")
    prompt_parts.append("Output the JSON only, with no text before or after it.")

    return "\n".join(prompt_parts)
