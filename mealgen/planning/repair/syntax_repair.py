"""Syntax repair strategies.

Both strategies rewrite the span outside string literals only and then
re-parse it strictly.
"""

from mealgen.planning.parsing.scanner import scan_string
from mealgen.planning.repair.types import RepairAttempt, reparse

TRAILING_COMMAS = "trailing_commas"
KEYS_AND_QUOTES = "keys_and_quotes"

_PYTHON_LITERALS = {"True": "true", "False": "false", "None": "null"}


def _strip_comments(text: str) -> str:
    parts: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            end, _ = scan_string(text, i)
            parts.append(text[i:end])
            i = end
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = length if close == -1 else close + 2
        else:
            parts.append(char)
            i += 1
    return "".join(parts)


def _drop_trailing_commas(text: str) -> str:
    parts: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            end, _ = scan_string(text, i)
            parts.append(text[i:end])
            i = end
            continue
        if char == ",":
            j = i + 1
            while j < length and text[j].isspace():
                j += 1
            if j < length and text[j] in "}]":
                i += 1
                continue
        parts.append(char)
        i += 1
    return "".join(parts)


def remove_trailing_commas(span: str) -> RepairAttempt:
    """Delete commas directly before '}' or ']' and strip JS-style comments."""
    repaired = _drop_trailing_commas(_strip_comments(span))
    return reparse(TRAILING_COMMAS, span, repaired)


def _single_to_double_quoted(inner: str) -> str:
    parts: list[str] = []
    i = 0
    while i < len(inner):
        char = inner[i]
        if char == "\\" and i + 1 < len(inner):
            nxt = inner[i + 1]
            parts.append("'" if nxt == "'" else char + nxt)
            i += 2
            continue
        parts.append('\\"' if char == '"' else char)
        i += 1
    return '"' + "".join(parts) + '"'


def _previous_significant(parts: list[str]) -> str:
    for part in reversed(parts):
        stripped = part.rstrip()
        if stripped:
            return stripped[-1]
    return ""


def _normalize(text: str) -> str:
    parts: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            end, _ = scan_string(text, i)
            parts.append(text[i:end])
            i = end
        elif char == "'":
            end, closed = scan_string(text, i, quote="'")
            inner = text[i + 1 : end - 1] if closed else text[i + 1 : end]
            parts.append(_single_to_double_quoted(inner))
            i = end
        elif char.isdigit() or char == "-":
            start = i
            while i < length and (text[i].isalnum() or text[i] in "+-."):
                i += 1
            parts.append(text[start:i])
        elif char.isalpha() or char == "_":
            start = i
            while i < length and (text[i].isalnum() or text[i] in "_-"):
                i += 1
            word = text[start:i]
            j = i
            while j < length and text[j].isspace():
                j += 1
            if j < length and text[j] == ":" and _previous_significant(parts) in ("{", ","):
                parts.append(f'"{word}"')
            else:
                parts.append(_PYTHON_LITERALS.get(word, word))
        else:
            parts.append(char)
            i += 1
    return "".join(parts)


def normalize_keys_and_quotes(span: str) -> RepairAttempt:
    """Quote bare keys, convert single-quoted strings and Python literals."""
    return reparse(KEYS_AND_QUOTES, span, _normalize(span))
