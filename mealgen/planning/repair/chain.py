"""Repair Chain driver.

Strategies run in a fixed order, each on the ORIGINAL span (they are
independent, not composed). The first success wins.
"""

from loguru import logger

from mealgen.planning.errors import UnrecoverableMalformedResponseError
from mealgen.planning.repair.field_scavenger import scavenge_fields
from mealgen.planning.repair.syntax_repair import normalize_keys_and_quotes, remove_trailing_commas
from mealgen.planning.repair.truncation_repair import repair_truncation
from mealgen.planning.repair.types import RepairAttempt, RepairStrategy

REPAIR_STRATEGIES: tuple[RepairStrategy, ...] = (
    remove_trailing_commas,
    normalize_keys_and_quotes,
    repair_truncation,
    scavenge_fields,
)


def run_repair_chain(span: str, strategies: tuple[RepairStrategy, ...] = REPAIR_STRATEGIES) -> RepairAttempt:
    """Run repair strategies until one produces a parseable value.

    Args:
        span: Candidate document text that failed strict parsing
        strategies: Ordered strategies (default: REPAIR_STRATEGIES)

    Returns:
        The first successful RepairAttempt

    Raises:
        UnrecoverableMalformedResponseError: If every strategy is inapplicable
    """
    tried: list[str] = []
    for strategy in strategies:
        attempt = strategy(span)
        tried.append(attempt.strategy_id)
        if attempt.succeeded:
            logger.info(
                "repair_chain: Strategy succeeded",
                strategy_id=attempt.strategy_id,
                strategies_tried=len(tried),
            )
            return attempt
        logger.debug("repair_chain: Strategy inapplicable", strategy_id=attempt.strategy_id)

    raise UnrecoverableMalformedResponseError([f"All repair strategies failed: {', '.join(tried)}"])
