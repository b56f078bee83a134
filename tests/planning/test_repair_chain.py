"""Tests for the repair chain driver."""

import pytest

from mealgen.planning.errors import UnrecoverableMalformedResponseError
from mealgen.planning.repair.chain import REPAIR_STRATEGIES, run_repair_chain
from mealgen.planning.repair.field_scavenger import SCAVENGE
from mealgen.planning.repair.syntax_repair import KEYS_AND_QUOTES, TRAILING_COMMAS
from mealgen.planning.repair.truncation_repair import TRUNCATION
from mealgen.planning.repair.types import RepairAttempt, inapplicable


def test_strategies_run_in_fixed_order():
    ids = [strategy("").strategy_id for strategy in REPAIR_STRATEGIES]
    assert ids == [TRAILING_COMMAS, KEYS_AND_QUOTES, TRUNCATION, SCAVENGE]


def test_first_success_wins():
    calls: list[str] = []

    def failing(span: str) -> RepairAttempt:
        calls.append("failing")
        return inapplicable("failing")

    def winning(span: str) -> RepairAttempt:
        calls.append("winning")
        return RepairAttempt(strategy_id="winning", succeeded=True, produced_value={"ok": 1}, repaired_text="{}")

    def never(span: str) -> RepairAttempt:
        calls.append("never")
        return inapplicable("never")

    attempt = run_repair_chain("{", strategies=(failing, winning, never))

    assert attempt.strategy_id == "winning"
    assert calls == ["failing", "winning"]


def test_each_strategy_sees_the_original_span():
    seen: list[str] = []

    def record(span: str) -> RepairAttempt:
        seen.append(span)
        return inapplicable("record")

    with pytest.raises(UnrecoverableMalformedResponseError):
        run_repair_chain('{"a": 1,', strategies=(record, record))

    assert seen == ['{"a": 1,', '{"a": 1,']


def test_trailing_comma_input_is_fixed_by_first_strategy():
    attempt = run_repair_chain('{"name": "Plan", "days": [1, 2,],}')
    assert attempt.strategy_id == TRAILING_COMMAS
    assert attempt.produced_value == {"name": "Plan", "days": [1, 2]}


def test_truncated_input_is_fixed_by_truncation_strategy():
    attempt = run_repair_chain('{"name": "Plan", "days": [{"day": 1')
    assert attempt.strategy_id == TRUNCATION
    assert attempt.produced_value == {"name": "Plan", "days": [{"day": 1}]}


def test_raises_when_every_strategy_fails():
    with pytest.raises(UnrecoverableMalformedResponseError) as exc_info:
        run_repair_chain("{ not json }")

    assert exc_info.value.code == "UNRECOVERABLE_MALFORMED_RESPONSE"
    assert exc_info.value.user_action == "regenerate"
    assert "truncation" in exc_info.value.details[0]


def test_repair_is_deterministic(make_plan_json):
    span = make_plan_json(2).replace("}", ",}")

    first = run_repair_chain(span)
    second = run_repair_chain(span)

    assert first.repaired_text == second.repaired_text
