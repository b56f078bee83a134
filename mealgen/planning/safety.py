"""Prompt and response content checks.

The caller's free-text brief is embedded in the model prompt, so instructions
aimed at the model itself ("ignore previous instructions", "reveal the system
prompt") are filtered out before rendering. The parsed plan is checked the
other way round: a response that talks about prompts, keys or scripts is not
a meal plan, whatever its shape.
"""

import re

from mealgen.planning.errors import SuspiciousResponseError
from mealgen.planning.schema.meal_plan import GeneratedPlan

FILTERED_MARKER = "[FILTERED]"

PROMPT_INJECTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bignore\s+(?:all\s+)?(?:the\s+)?(?:previous|prior|above)\s+instructions?\b",
        r"\bforget\s+(?:everything|all|your\s+instructions?)\b",
        r"\boverride\s+(?:the\s+|your\s+)?instructions?\b",
        r"\bsystem\s+prompt\b",
        r"\bapi[\s_-]?keys?\b",
        r"\bpasswords?\b",
        r"\bexecute\s+(?:\w+\s+)?code\b",
        r"\b(?:run|execute)\s+(?:an?\s+)?sql\b",
        r"<\s*script\b[^>]*>",
    )
)

# Matched against every text field of a parsed plan
SUSPICIOUS_RESPONSE_PATTERNS: dict[str, re.Pattern[str]] = {
    "system prompt": re.compile(r"\bsystem\s+prompt\b", re.IGNORECASE),
    "previous instructions": re.compile(r"\b(?:previous|prior)\s+instructions?\b", re.IGNORECASE),
    "api key": re.compile(r"\bapi[\s_-]?keys?\b", re.IGNORECASE),
    "password": re.compile(r"\bpasswords?\b", re.IGNORECASE),
    "script tag": re.compile(r"<\s*script\b", re.IGNORECASE),
    "javascript url": re.compile(r"javascript\s*:", re.IGNORECASE),
}

# Literal "\n" sequences typed into a form arrive as two characters
_ESCAPED_WHITESPACE_RE = re.compile(r"\\[nrt]")
_WHITESPACE_RE = re.compile(r"\s+")


def contains_malicious_content(text: str) -> bool:
    """Return True if the text matches a prompt-injection pattern."""
    return any(pattern.search(text) for pattern in PROMPT_INJECTION_PATTERNS)


def sanitize_prompt_text(text: str) -> str:
    """Filter injection patterns out of a caller's brief and normalize whitespace.

    Args:
        text: Free-text brief from the caller

    Returns:
        Brief with each injection match replaced by FILTERED_MARKER, on one line
    """
    for pattern in PROMPT_INJECTION_PATTERNS:
        text = pattern.sub(FILTERED_MARKER, text)
    text = _ESCAPED_WHITESPACE_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _plan_texts(plan: GeneratedPlan) -> list[str]:
    texts = [plan.name, plan.description, *plan.notes, *plan.shopping_list]
    for day in plan.days:
        for meal in day.meal_slots():
            texts.extend([meal.name, meal.description, *meal.ingredients, *meal.steps, *meal.tags])
    return texts


def find_suspicious_content(plan: GeneratedPlan) -> str | None:
    """Return the first suspicious-content reason found in a plan, or None."""
    for text in _plan_texts(plan):
        for reason, pattern in SUSPICIOUS_RESPONSE_PATTERNS.items():
            if pattern.search(text):
                return reason
    return None


def check_response_content(plan: GeneratedPlan) -> None:
    """Raise SuspiciousResponseError if any text field of the plan is suspicious."""
    reason = find_suspicious_content(plan)
    if reason is not None:
        raise SuspiciousResponseError(reason)
