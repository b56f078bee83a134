"""Plan Extender - Deterministic Core.

Pads a plan that came back shorter than requested by cyclically duplicating
its original days. Variation labels are picked by index, never at random, so
the same plan always extends to the same result.
"""

from datetime import timedelta

from loguru import logger

from mealgen.planning.invariants import VARIATION_LABELS
from mealgen.planning.schema.meal_plan import DayPlan, GeneratedPlan, MealSlot, average_day_totals


def variation_label(repeat_index: int) -> str:
    """Label for the repeat_index-th duplicated day (0-based)."""
    return VARIATION_LABELS[repeat_index % len(VARIATION_LABELS)]


def _relabel(meal: MealSlot, label: str) -> MealSlot:
    return meal.model_copy(update={"name": f"{meal.name} ({label})"}, deep=True)


def _repeat_day(source: DayPlan, day_number: int, plan: GeneratedPlan, label: str) -> DayPlan:
    return source.model_copy(
        update={
            "day_number": day_number,
            "calendar_date": plan.start_date + timedelta(days=day_number - 1),
            "breakfast": _relabel(source.breakfast, label),
            "lunch": _relabel(source.lunch, label),
            "dinner": _relabel(source.dinner, label),
        },
        deep=True,
    )


def extend_plan(plan: GeneratedPlan, target_days: int) -> GeneratedPlan:
    """Extend a plan to target_days by cycling over its original days.

    Rules:
    - len(days) >= target_days -> the plan is returned unchanged
    - source day = days[len(days) % original_length], over the ORIGINAL days
      only, so repeats never compound
    - each copy gets the next day number, the next calendar date and a
      variation suffix on breakfast, lunch and dinner names

    Args:
        plan: Validated plan (non-empty)
        target_days: Day count to reach

    Returns:
        Plan with exactly max(len(plan.days), target_days) days
    """
    if len(plan.days) >= target_days:
        return plan

    original = list(plan.days)
    original_length = len(original)
    days = list(original)
    while len(days) < target_days:
        source = original[len(days) % original_length]
        label = variation_label(len(days) - original_length)
        days.append(_repeat_day(source, len(days) + 1, plan, label))

    logger.info(
        "plan_extender: Extended plan",
        original_days=original_length,
        target_days=target_days,
    )

    return plan.model_copy(
        update={
            "days": days,
            "nutrition_summary": average_day_totals(days),
        }
    )
