"""Tokenizer for condition expressions.

Lexing is deliberately permissive: the tokenizer never fails. Characters
that match no pattern are skipped, and symbols such as ``+`` are kept as
tokens only so that validation can reject them later.

Tokens are plain strings. Nothing is attached to them at lex time; consumers
that need a kind can ask :func:`classify_token`.
"""

import re
from enum import Enum, auto

from dialogrules.conditions.vocabulary import (
    ALLOWED_OPERATORS,
    CONNECTIVES,
    GROUPING,
    IDENTIFIER,
    RESERVED_WORD,
    TERMINATOR,
    possible_numeric,
)


class TokenKind(Enum):
    """Kinds a token can be classified as after lexing."""

    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()     # == != >= <=
    CONNECTIVE = auto()   # & |
    LPAREN = auto()       # (
    RPAREN = auto()       # )
    RESERVED = auto()     # if
    TERMINATOR = auto()   # ;
    OTHER = auto()        # anything else, e.g. +


# Order matters: earlier alternatives win at the same position
TOKEN_PATTERNS = [
    r"[()&|+]",
    r"==",
    r"!=",
    r">=",
    r"<=",
    r"if\b",
    r";",
    r"[a-zA-Z0-9_]+",
]

_TOKEN_RE = re.compile(r"\s*(" + "|".join(TOKEN_PATTERNS) + r")\s*")


def tokenize(expression: str) -> list[str]:
    """Split a condition expression into tokens, left to right.

    Example:
        >>> tokenize("(A == enabled) & B != 3")
        ['(', 'A', '==', 'enabled', ')', '&', 'B', '!=', '3']
    """
    return [match.group(1) for match in _TOKEN_RE.finditer(expression)]


def classify_token(token: str) -> TokenKind:
    """Infer the kind of a token produced by :func:`tokenize`."""
    if token in ALLOWED_OPERATORS:
        return TokenKind.OPERATOR
    if token in CONNECTIVES:
        return TokenKind.CONNECTIVE
    if token == GROUPING[0]:
        return TokenKind.LPAREN
    if token == GROUPING[1]:
        return TokenKind.RPAREN
    if token == RESERVED_WORD:
        return TokenKind.RESERVED
    if token == TERMINATOR:
        return TokenKind.TERMINATOR
    if IDENTIFIER.match(token):
        return TokenKind.IDENTIFIER
    if possible_numeric(token):
        return TokenKind.NUMBER
    return TokenKind.OTHER
