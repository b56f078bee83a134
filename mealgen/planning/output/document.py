"""Plan document serializer.

Renders a GeneratedPlan in the same camelCase wire shape the prompt asks the
model for, so a serialized plan re-enters the strict parser and the validator
with no repair.
"""

import json

from mealgen.planning.schema.meal_plan import DayPlan, GeneratedPlan, MealSlot


def meal_to_document(meal: MealSlot) -> dict:
    return {
        "name": meal.name,
        "description": meal.description,
        "calories": meal.calories,
        "protein": meal.protein_grams,
        "carbs": meal.carb_grams,
        "fat": meal.fat_grams,
        "fiber": meal.fiber_grams,
        "prepTime": meal.prep_minutes,
        "cookTime": meal.cook_minutes,
        "ingredients": list(meal.ingredients),
        "instructions": list(meal.steps),
        "tags": list(meal.tags),
    }


def day_to_document(day: DayPlan) -> dict:
    return {
        "day": day.day_number,
        "date": day.calendar_date.isoformat(),
        "meals": {
            "breakfast": meal_to_document(day.breakfast),
            "lunch": meal_to_document(day.lunch),
            "dinner": meal_to_document(day.dinner),
            "snacks": [meal_to_document(snack) for snack in day.snacks],
        },
        "totalCalories": day.totals.calories,
        "totalProtein": day.totals.protein,
        "totalCarbs": day.totals.carbs,
        "totalFat": day.totals.fat,
        "totalFiber": day.totals.fiber,
    }


def plan_to_document(plan: GeneratedPlan) -> dict:
    """Convert a plan to its JSON document form."""
    goals = plan.nutritional_goals
    document = {
        "name": plan.name,
        "description": plan.description,
        "totalDays": plan.requested_duration_days,
        "averageCaloriesPerDay": goals.daily_calories,
        "nutritionSummary": {
            "protein": f"{goals.protein_percentage}%",
            "carbohydrates": f"{goals.carb_percentage}%",
            "fat": f"{goals.fat_percentage}%",
        },
        "days": [day_to_document(day) for day in plan.days],
        "shoppingList": list(plan.shopping_list),
        "notes": list(plan.notes),
    }
    if plan.is_approximate:
        document["approximate"] = True
    return document


def dump_plan(plan: GeneratedPlan, indent: int | None = 2) -> str:
    """Serialize a plan to JSON text."""
    return json.dumps(plan_to_document(plan), indent=indent, ensure_ascii=False)
