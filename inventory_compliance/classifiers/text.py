from __future__ import annotations

import re

"""Text cleanup shared by the component classifiers."""

__all__ = [
    "collapse_whitespace",
    "parse_decimal",
    "strip_annotations",
]

_PARENTHESES = re.compile(r"\(.*?\)")
_BRACKETS = re.compile(r"\[.*?\]")
_WHITESPACE = re.compile(r"\s+")


def strip_annotations(text: str) -> str:
    """Remove parenthetical and bracketed text ("Intel(R)", "[x64]")."""
    text = _BRACKETS.sub(" ", text)
    return _PARENTHESES.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def parse_decimal(token: str) -> float:
    """Parse a number that may use a decimal comma ("2,5" -> 2.5)."""
    return float(token.replace(",", "."))
