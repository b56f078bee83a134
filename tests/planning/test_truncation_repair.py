"""Tests for truncation repair."""

import json

from mealgen.planning.repair.truncation_repair import TRUNCATION, repair_truncation


def test_partial_array_element_after_comma_is_cut():
    span = '{"name": "Plan", "days": [{"day": 1, "meals": {"breakfast": {"name": "Oats", "ingredients": ["50g oats", "200ml mi'

    attempt = repair_truncation(span)

    assert attempt.succeeded
    assert attempt.strategy_id == TRUNCATION
    assert attempt.repaired_text.endswith('["50g oats"]}}}]}')
    breakfast = attempt.produced_value["days"][0]["meals"]["breakfast"]
    assert breakfast == {"name": "Oats", "ingredients": ["50g oats"]}


def test_partial_value_after_colon_becomes_null():
    attempt = repair_truncation('{"name": "Plan", "description": "Bal')
    assert attempt.succeeded
    assert attempt.produced_value == {"name": "Plan", "description": None}


def test_partial_string_opening_container_is_cut():
    attempt = repair_truncation('{"name": "Plan", "tags": ["a')
    assert attempt.succeeded
    assert attempt.produced_value == {"name": "Plan", "tags": []}


def test_partial_key_after_comma_is_cut():
    attempt = repair_truncation('{"name": "Plan", "desc')
    assert attempt.succeeded
    assert attempt.produced_value == {"name": "Plan"}


def test_key_without_value_is_dropped():
    attempt = repair_truncation('{"name": "Plan", "days"')
    assert attempt.succeeded
    assert attempt.produced_value == {"name": "Plan"}


def test_dangling_colon_gets_null():
    attempt = repair_truncation('{"a": 1, "b":')
    assert attempt.succeeded
    assert attempt.produced_value == {"a": 1, "b": None}


def test_partial_literal_gets_null():
    attempt = repair_truncation('{"a": tru')
    assert attempt.succeeded
    assert attempt.produced_value == {"a": None}


def test_balanced_but_malformed_text_is_inapplicable():
    attempt = repair_truncation('{"a": 1,}')
    assert not attempt.succeeded


def test_closing_is_capped_at_five_per_bracket_kind():
    assert repair_truncation('{"a": [[[[[1').succeeded
    assert not repair_truncation('{"a": [[[[[[1').succeeded


def test_incomplete_trailing_day_is_dropped(make_plan_document):
    text = json.dumps(make_plan_document(2))
    cut = text.rfind("Grilled fish 2") + len("Grilled fi")

    attempt = repair_truncation(text[:cut])

    assert attempt.succeeded
    assert len(attempt.produced_value["days"]) == 1
    assert attempt.produced_value["days"][0]["day"] == 1


def test_lone_incomplete_day_is_kept(make_plan_document):
    text = json.dumps(make_plan_document(1))
    cut = text.rfind("Grilled fish 1") + len("Grilled fi")

    attempt = repair_truncation(text[:cut])

    assert attempt.succeeded
    assert attempt.produced_value["days"][0]["meals"]["dinner"] == {"name": None}


def test_repair_is_deterministic(make_plan_json):
    text = make_plan_json(3)
    span = text[: text.rfind("200g vegetables") + 4]

    first = repair_truncation(span)
    second = repair_truncation(span)

    assert first.repaired_text == second.repaired_text
    assert first.produced_value == second.produced_value
