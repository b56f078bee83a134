"""Truncation repair strategy.

Model output is cut off when it hits the output token budget. This strategy
trims the span back to the last complete token, then closes every container
still open. Closing is capped at MAX_CLOSING_BRACKETS per bracket kind; past
that the strategy gives up and leaves recovery to field scavenging.
"""

from typing import Any

from mealgen.planning.invariants import MAX_CLOSING_BRACKETS, REQUIRED_MEAL_SLOTS
from mealgen.planning.parsing.scanner import Token, is_complete_literal, open_containers, tokenize
from mealgen.planning.repair.types import RepairAttempt, inapplicable, reparse

TRUNCATION = "truncation"

_CLOSERS = {"{": "}", "[": "]"}


def _cut_unterminated_string(text: str, tokens: list[Token]) -> str:
    """Apply the ordered end-of-input checks for a string cut mid-way.

    (a) string opening a container slot -> cut back to the last complete token
    (b) dangling comma followed by a partial string -> cut before the comma
    (c) colon followed by a partial string value -> replace the value with null
    """
    last = tokens[-1]
    if last.kind != "string" or last.terminated:
        return text

    prev = tokens[-2] if len(tokens) > 1 else None
    if prev is None or prev.kind not in (",", ":"):
        return text[: last.start]
    if prev.kind == ",":
        return text[: prev.start]
    return text[: last.start] + "null"


def _is_dangling_key(tokens: list[Token]) -> bool:
    if len(tokens) < 2:
        return False
    last, prev = tokens[-1], tokens[-2]
    if last.kind != "string" or prev.kind not in ("{", ","):
        return False
    stack = open_containers(tokens[:-1])
    return bool(stack) and stack[-1] == "{"


def _strip_dangling_tail(text: str) -> str:
    """Remove trailing commas, keys without values and partial literals."""
    while True:
        tokens = tokenize(text)
        if not tokens:
            return text
        last = tokens[-1]
        prev = tokens[-2] if len(tokens) > 1 else None

        if last.kind == ",":
            text = text[: last.start]
        elif last.kind == ":":
            text = text[: last.end] + " null"
        elif _is_dangling_key(tokens):
            text = text[: last.start]
        elif last.kind == "literal" and not is_complete_literal(text[last.start : last.end]):
            if prev is not None and prev.kind == ":":
                text = text[: last.start] + "null"
            else:
                text = text[: last.start]
        else:
            return text


def _closing_sequence(stack: list[str]) -> str | None:
    if stack.count("{") > MAX_CLOSING_BRACKETS or stack.count("[") > MAX_CLOSING_BRACKETS:
        return None
    return "".join(_CLOSERS[opener] for opener in reversed(stack))


def _meal_is_complete(meal: Any) -> bool:
    if isinstance(meal, str):
        return bool(meal.strip())
    return isinstance(meal, dict) and bool(meal.get("name"))


def _day_is_complete(day: Any) -> bool:
    if not isinstance(day, dict):
        return False
    meals = day.get("meals")
    if not isinstance(meals, dict):
        return False
    return all(_meal_is_complete(meals.get(slot)) for slot in REQUIRED_MEAL_SLOTS)


def _drop_incomplete_tail_day(value: Any) -> Any:
    """Drop a final day the cut left without a mandatory meal.

    A lone day is kept so validation can name the missing field.
    """
    if not isinstance(value, dict):
        return value
    days = value.get("days")
    if not isinstance(days, list) or len(days) < 2 or _day_is_complete(days[-1]):
        return value
    return {**value, "days": days[:-1]}


def repair_truncation(span: str) -> RepairAttempt:
    """Trim a cut-off span to its last complete token and close it.

    Args:
        span: Candidate document text

    Returns:
        RepairAttempt with the closed document, or inapplicable
    """
    tokens = tokenize(span)
    if not tokens:
        return inapplicable(TRUNCATION)

    text = _cut_unterminated_string(span, tokens)
    text = _strip_dangling_tail(text).rstrip()

    stack = open_containers(tokenize(text))
    if not stack:
        return inapplicable(TRUNCATION)

    closers = _closing_sequence(stack)
    if closers is None:
        return inapplicable(TRUNCATION)

    attempt = reparse(TRUNCATION, span, text + closers)
    if not attempt.succeeded:
        return attempt

    return RepairAttempt(
        strategy_id=TRUNCATION,
        succeeded=True,
        produced_value=_drop_incomplete_tail_day(attempt.produced_value),
        repaired_text=attempt.repaired_text,
    )
