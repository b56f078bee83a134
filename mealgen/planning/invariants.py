"""Plan Generation Constants - Single Source of Truth.

Bounds and defaults shared by the prompt bounder, repair chain, validator and
extender. Every stage imports from here - nowhere else.
"""

# Largest number of days requested from the model in a single call.
# Chosen empirically so the response fits the model's output token budget.
MAX_BATCH_DAYS = 3

# Truncation repair closes at most this many '{' and this many '['
MAX_CLOSING_BRACKETS = 5

# Meal slots every day must carry
REQUIRED_MEAL_SLOTS: tuple[str, ...] = ("breakfast", "lunch", "dinner")

# Share of the daily calorie target per slot
MEAL_CALORIE_SPLIT: dict[str, float] = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snack": 0.10,
}

DEFAULT_TARGET_CALORIES = 2000

# Macro defaults (grams) used in prompt skeletons and scavenged plans
DEFAULT_MEAL_MACROS: dict[str, dict[str, float]] = {
    "breakfast": {"protein": 17, "carbs": 62, "fat": 15, "fiber": 5},
    "lunch": {"protein": 32, "carbs": 79, "fat": 21, "fiber": 8},
    "dinner": {"protein": 34, "carbs": 61, "fat": 18, "fiber": 6},
    "snack": {"protein": 9, "carbs": 27, "fat": 4, "fiber": 3},
}

# Suffixes appended to repeated meal names, selected by index (never randomly)
VARIATION_LABELS: tuple[str, ...] = (
    "Variation",
    "Revisited",
    "Twist",
    "Seasonal",
    "Chef's Choice",
)

DEFAULT_PLAN_NAME = "Recovered meal plan"

# Upper bound for any single nutrient, calorie or minute value read from a
# response; larger or non-finite values are treated as absent (0)
MAX_NUTRIENT_VALUE = 100_000

# Macro split (percent of calories) used when the response states none
DEFAULT_MACRO_PERCENTAGES: dict[str, int] = {"protein": 25, "carbs": 45, "fat": 30}

# Stated protein share may differ from the computed share by this many points
# before the computed split replaces the stated one
MACRO_PERCENTAGE_TOLERANCE = 10
