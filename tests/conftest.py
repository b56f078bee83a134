"""Root conftest for all tests.

Shared builders for meal plan documents as a model would return them, and
request fixtures with a fixed start date so calendar dates are stable.
"""

import json
from datetime import date

import pytest

from mealgen.planning.schema.plan_request import PlanRequest

START_DATE = date(2025, 3, 3)


def build_meal(name: str, calories: float, ingredients: list[str]) -> dict:
    return {
        "name": name,
        "description": f"{name} description",
        "calories": calories,
        "protein": 20,
        "carbs": 50,
        "fat": 10,
        "fiber": 5,
        "prepTime": 10,
        "cookTime": 15,
        "ingredients": ingredients,
        "instructions": ["Prepare", "Serve"],
        "tags": ["healthy"],
    }


def build_day(day: int) -> dict:
    return {
        "day": day,
        "meals": {
            "breakfast": build_meal(f"Oatmeal {day}", 500, ["100g oats", "200ml milk"]),
            "lunch": build_meal(f"Quinoa bowl {day}", 700, ["100g quinoa", "150g vegetables"]),
            "dinner": build_meal(f"Grilled fish {day}", 600, ["120g fish", "200g vegetables"]),
            "snacks": [build_meal(f"Yogurt {day}", 200, ["150g yogurt"])],
        },
        "totalCalories": 2000,
    }


def build_plan_document(days: int = 3) -> dict:
    return {
        "name": "Balanced plan",
        "description": "Plan around 2000 calories",
        "totalDays": days,
        "averageCaloriesPerDay": 2000,
        "days": [build_day(day) for day in range(1, days + 1)],
    }


def build_plan_json(days: int = 3) -> str:
    return json.dumps(build_plan_document(days))


@pytest.fixture
def start_date() -> date:
    return START_DATE


@pytest.fixture
def make_request():
    """Factory for PlanRequests with a fixed start date."""

    def _make(days: int = 3, **kwargs) -> PlanRequest:
        return PlanRequest(
            prompt_text=kwargs.pop("prompt_text", "Balanced meals for a busy week"),
            requested_duration_days=days,
            start_date=kwargs.pop("start_date", START_DATE),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_plan_document():
    """Factory for plan documents shaped like the prompt skeleton."""
    return build_plan_document


@pytest.fixture
def make_plan_json():
    """Factory for plan documents serialized as model output text."""
    return build_plan_json
