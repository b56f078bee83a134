"""Repair Attempt Values.

Strategies report success or "not applicable" through RepairAttempt values.
No exceptions are used for this expected control flow.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mealgen.planning.parsing.strict import strict_parse


@dataclass(frozen=True)
class RepairAttempt:
    """Outcome of one repair strategy.

    Attributes:
        strategy_id: Strategy identifier (e.g., "trailing_commas")
        succeeded: True if the strategy produced a parseable value
        produced_value: Parsed value on success
        repaired_text: Text that parsed on success
    """

    strategy_id: str
    succeeded: bool
    produced_value: Any = None
    repaired_text: str | None = None


RepairStrategy = Callable[[str], RepairAttempt]


def inapplicable(strategy_id: str) -> RepairAttempt:
    return RepairAttempt(strategy_id=strategy_id, succeeded=False)


def reparse(strategy_id: str, original: str, repaired: str) -> RepairAttempt:
    """Strictly parse repaired text.

    Returns inapplicable when the strategy changed nothing or the result
    still does not parse.
    """
    if repaired == original:
        return inapplicable(strategy_id)
    outcome = strict_parse(repaired)
    if not outcome.ok:
        return inapplicable(strategy_id)
    return RepairAttempt(
        strategy_id=strategy_id,
        succeeded=True,
        produced_value=outcome.value,
        repaired_text=repaired,
    )
