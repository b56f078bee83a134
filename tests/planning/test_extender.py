"""Tests for the plan extender."""

from datetime import date

import pytest

from mealgen.planning.extender import extend_plan, variation_label
from mealgen.planning.validate_plan import validate_plan_structure


@pytest.fixture
def make_plan(make_plan_document, start_date):
    def _make(days: int, requested: int = 7):
        return validate_plan_structure(make_plan_document(days), requested, start_date)

    return _make


def test_variation_labels_cycle_by_index():
    assert [variation_label(i) for i in range(6)] == [
        "Variation",
        "Revisited",
        "Twist",
        "Seasonal",
        "Chef's Choice",
        "Variation",
    ]


def test_extends_single_day_to_week(make_plan):
    plan = extend_plan(make_plan(1), 7)

    assert len(plan.days) == 7
    assert [day.day_number for day in plan.days] == list(range(1, 8))
    assert plan.days[-1].calendar_date == date(2025, 3, 9)
    assert [day.breakfast.name for day in plan.days] == [
        "Oatmeal 1",
        "Oatmeal 1 (Variation)",
        "Oatmeal 1 (Revisited)",
        "Oatmeal 1 (Twist)",
        "Oatmeal 1 (Seasonal)",
        "Oatmeal 1 (Chef's Choice)",
        "Oatmeal 1 (Variation)",
    ]


def test_cycles_over_original_days_only(make_plan):
    plan = extend_plan(make_plan(2), 5)

    assert [day.breakfast.name for day in plan.days] == [
        "Oatmeal 1",
        "Oatmeal 2",
        "Oatmeal 1 (Variation)",
        "Oatmeal 2 (Revisited)",
        "Oatmeal 1 (Twist)",
    ]
    assert plan.days[2].lunch.name == "Quinoa bowl 1 (Variation)"
    assert plan.days[2].dinner.name == "Grilled fish 1 (Variation)"


def test_snacks_and_totals_are_copied(make_plan):
    plan = extend_plan(make_plan(1), 2)

    assert plan.days[1].snacks == plan.days[0].snacks
    assert plan.days[1].totals == plan.days[0].totals
    assert plan.nutrition_summary.calories == 2000


def test_source_days_are_not_modified(make_plan):
    original = make_plan(1)

    extend_plan(original, 3)

    assert len(original.days) == 1
    assert original.days[0].breakfast.name == "Oatmeal 1"


def test_extension_is_idempotent(make_plan):
    plan = make_plan(3, requested=3)

    assert extend_plan(plan, 3) is plan
    assert extend_plan(plan, 2) is plan

    extended = extend_plan(make_plan(1), 4)
    assert extend_plan(extended, 4) is extended
