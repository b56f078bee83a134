"""Strict Parser.

One direct parse of the isolated span with no leniency. Malformed input is
reported as a value, never raised, so the repair chain can take over.
"""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParseError:
    """Why a strict parse failed.

    Attributes:
        message: Decoder message
        offset: Byte offset (UTF-8) of the failure in the span
    """

    message: str
    offset: int


@dataclass(frozen=True)
class ParseOutcome:
    value: Any = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class _NonStandardConstantError(ValueError):
    def __init__(self, constant: str):
        self.constant = constant
        super().__init__(f"Non-standard constant: {constant}")


def _reject_constant(constant: str) -> Any:
    raise _NonStandardConstantError(constant)


def _byte_offset(text: str, char_index: int) -> int:
    return len(text[:char_index].encode("utf-8"))


def strict_parse(span: str) -> ParseOutcome:
    """Parse a span as standard JSON.

    NaN, Infinity and -Infinity are rejected. Nesting past the interpreter's
    recursion limit is reported as a parse error.

    Args:
        span: Candidate document text

    Returns:
        ParseOutcome with the parsed value, or with a ParseError
    """
    try:
        value = json.loads(span, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        return ParseOutcome(error=ParseError(e.msg, _byte_offset(span, e.pos)))
    except _NonStandardConstantError as e:
        return ParseOutcome(error=ParseError(str(e), _byte_offset(span, max(span.find(e.constant), 0))))
    except RecursionError:
        return ParseOutcome(error=ParseError("Document nested too deeply", 0))
    except ValueError as e:
        # e.g. integers past the interpreter's digit limit
        return ParseOutcome(error=ParseError(str(e), 0))
    return ParseOutcome(value=value)
