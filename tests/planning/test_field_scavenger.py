"""Tests for the field-scavenging fallback."""

from mealgen.planning.invariants import DEFAULT_PLAN_NAME
from mealgen.planning.repair.field_scavenger import SCAVENGE, scavenge_fields

GARBLED = (
    '{"name": "Veggie week", "description": "Plant based", "averageCaloriesPerDay": 1800, '
    '"days": [{"day": 1, "meals": {"breakfast": {"name": "Avocado toast", "calories": 400 '
    '"ingredients": [[[[[[[[ "bread"'
)


def test_scavenges_plan_fields_and_meal_names():
    attempt = scavenge_fields(GARBLED)

    assert attempt.succeeded
    assert attempt.strategy_id == SCAVENGE
    document = attempt.produced_value
    assert document["name"] == "Veggie week"
    assert document["description"] == "Plant based"
    assert document["approximate"] is True
    assert len(document["days"]) == 1

    meals = document["days"][0]["meals"]
    assert meals["breakfast"]["name"] == "Avocado toast"
    assert meals["breakfast"]["calories"] == 450
    assert meals["lunch"]["name"] == "Lunch"
    assert meals["dinner"]["name"] == "Dinner"
    assert meals["snacks"] == []


def test_meal_name_is_not_taken_as_plan_name():
    attempt = scavenge_fields('{"days": [{"meals": {"breakfast": {"name": "Avocado toast", "cal')

    assert attempt.succeeded
    assert attempt.produced_value["name"] == DEFAULT_PLAN_NAME
    assert attempt.produced_value["days"][0]["meals"]["breakfast"]["name"] == "Avocado toast"


def test_default_calories_when_no_target_found():
    attempt = scavenge_fields('{"name": "Quick plan", "days": [')

    meals = attempt.produced_value["days"][0]["meals"]
    assert attempt.produced_value["averageCaloriesPerDay"] == 2000
    assert meals["lunch"]["calories"] == 700


def test_placeholders_carry_nonzero_content():
    meal = scavenge_fields(GARBLED).produced_value["days"][0]["meals"]["dinner"]

    assert meal["ingredients"]
    assert meal["instructions"]
    assert "approximate" in meal["tags"]


def test_inapplicable_when_nothing_is_found():
    attempt = scavenge_fields("{ this is not json at all }")
    assert not attempt.succeeded
    assert attempt.produced_value is None


def test_implausible_calorie_target_is_ignored():
    attempt = scavenge_fields('{"name": "Big plan", "averageCaloriesPerDay": 1' + "0" * 400 + ', "days": [')

    meals = attempt.produced_value["days"][0]["meals"]
    assert attempt.produced_value["averageCaloriesPerDay"] == 2000
    assert meals["breakfast"]["calories"] == 500
