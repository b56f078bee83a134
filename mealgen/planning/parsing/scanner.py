"""Lenient JSON token scanner.

Splits text into structural tokens without validating grammar, so repair
strategies can reason about where a document was cut off. String literals are
escape-aware; a string still open at end of input is reported as unterminated.
"""

import re
from dataclasses import dataclass

STRUCTURAL_CHARS = frozenset("{}[]:,")

_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_KEYWORDS = frozenset({"true", "false", "null"})


@dataclass(frozen=True)
class Token:
    """A scanned token.

    Attributes:
        kind: One of "{", "}", "[", "]", ":", ",", "string", "literal"
        start: Index of the first character
        end: Index one past the last character
        terminated: False only for a string cut off by end of input
    """

    kind: str
    start: int
    end: int
    terminated: bool = True


def scan_string(text: str, start: int, quote: str = '"') -> tuple[int, bool]:
    """Scan a string literal opened at text[start].

    Returns:
        (index just past the closing quote, True) or (len(text), False) when
        the string is never closed
    """
    i = start + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1, True
        i += 1
    return length, False


def tokenize(text: str) -> list[Token]:
    """Scan text into tokens.

    Args:
        text: Candidate document text (may be malformed or truncated)

    Returns:
        Tokens in order of appearance
    """
    tokens: list[Token] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char.isspace():
            i += 1
        elif char in STRUCTURAL_CHARS:
            tokens.append(Token(char, i, i + 1))
            i += 1
        elif char == '"':
            end, closed = scan_string(text, i)
            tokens.append(Token("string", i, end, closed))
            i = end
        else:
            start = i
            while i < length and not text[i].isspace() and text[i] not in STRUCTURAL_CHARS and text[i] != '"':
                i += 1
            tokens.append(Token("literal", start, i))
    return tokens


def is_complete_literal(literal: str) -> bool:
    """Return True if the literal is a full JSON keyword or number."""
    return literal in _KEYWORDS or _NUMBER_RE.fullmatch(literal) is not None


def open_containers(tokens: list[Token]) -> list[str]:
    """Return the stack of containers still open after the tokens ("{" or "[")."""
    stack: list[str] = []
    for token in tokens:
        if token.kind in ("{", "["):
            stack.append(token.kind)
        elif token.kind in ("}", "]") and stack:
            stack.pop()
    return stack
