"""Fixed vocabularies of the conditional-rule language.

A rule line reads ``<action> if <condition>;`` where the condition is built
from atomic triples ``<element> <operator> <predicate>`` joined by ``&``/``|``
and grouped with parentheses.
"""

import math
import re
from typing import Any

ALLOWED_OPERATORS: tuple[str, ...] = ("==", "!=", ">=", "<=")

ALLOWED_PROPERTIES: tuple[str, ...] = ("enabled", "visible", "selected", "checked")

ALLOWED_ACTIONS: tuple[str, ...] = (
    "enable",
    "disable",
    "show",
    "hide",
    "select",
    "unselect",
    "check",
    "uncheck",
)

CONNECTIVES: tuple[str, ...] = ("&", "|")

GROUPING: tuple[str, ...] = ("(", ")")

RESERVED_WORD = "if"
TERMINATOR = ";"

# Anything that looks like a comparison, legal or not
COMPARISON_LIKE = re.compile(r"^(==|!=|>=|<=|=|<|>)$")

IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Shape accepted by the expression parser for the subject of an atom
WORD = re.compile(r"^[a-zA-Z0-9_]+$")

# A leading (optionally signed) integer prefix is enough, e.g. "12" or "3px"
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?\d")


def possible_numeric(value: Any) -> bool:
    """Return True when ``value`` is a number or a string that starts like one.

    Real numbers must be finite. Strings only need a leading integer part,
    so ``"10"``, ``"2.5"`` and ``"3px"`` all qualify while ``"abc"`` and
    ``"_1"`` do not.
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        return _NUMERIC_PREFIX.match(value) is not None
    return False


def is_allowed_predicate(value: Any) -> bool:
    """Predicate side of an atom: a known property name or a numeric value."""
    return value in ALLOWED_PROPERTIES or possible_numeric(value)
