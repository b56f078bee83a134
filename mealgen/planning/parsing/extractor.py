"""Response Extractor.

Strips formatting noise around the model's JSON payload and isolates the
candidate document span. Pure: no logging, no state.
"""

from mealgen.planning.errors import EmptyOrNonStructuredResponseError
from mealgen.planning.parsing.scanner import tokenize

# Stripped as literal substrings, longest first
WRAPPER_MARKERS: tuple[str, ...] = ("```json", "```JSON", "```")


def strip_wrappers(raw_text: str) -> str:
    """Remove fenced code markers and surrounding whitespace."""
    text = raw_text
    for marker in WRAPPER_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def extract_document_span(raw_text: str) -> str:
    """Isolate the outermost balanced-brace span of a model response.

    The span starts at the first '{'. It ends at the '}' that brings the brace
    depth back to zero, ignoring braces inside string literals. When the
    braces never balance (the response was cut off) the span runs to the end
    of the text so truncation repair can see where it stopped.

    Args:
        raw_text: Raw model response

    Returns:
        Candidate document text

    Raises:
        EmptyOrNonStructuredResponseError: If the response contains no '{'
    """
    text = strip_wrappers(raw_text)
    start = text.find("{")
    if start == -1:
        raise EmptyOrNonStructuredResponseError(
            [f"No JSON object found in response ({len(raw_text)} chars)"]
        )

    candidate = text[start:]
    depth = 0
    for token in tokenize(candidate):
        if token.kind == "{":
            depth += 1
        elif token.kind == "}":
            depth -= 1
            if depth == 0:
                return candidate[: token.end]

    return candidate.rstrip()
