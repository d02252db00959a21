"""Strict validation of condition rule documents.

Each line must read ``<action> if <condition>;``. Checks run in a fixed
order and only the first failure of a line is reported. Validation of a
document stops at the first failing line.

Usage:
    from dialogrules.conditions.validator import validate

    message = validate("show if checkbox1 == checked;", {"checkbox1"})
    if message:
        print(message)

Validation never raises; every problem comes back as a message string and
an empty string means the input was accepted.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from dialogrules.conditions.parser import (
    ConditionParseError,
    ExpressionNode,
    iter_atoms,
    parse_expression,
)
from dialogrules.conditions.tokenizer import tokenize
from dialogrules.conditions.vocabulary import (
    ALLOWED_ACTIONS,
    ALLOWED_OPERATORS,
    COMPARISON_LIKE,
    CONNECTIVES,
    GROUPING,
    IDENTIFIER,
    is_allowed_predicate,
    possible_numeric,
)

logger = logging.getLogger(__name__)

STATEMENT = re.compile(r"^(\w+)\s+if\s+(.+);$", re.ASCII)

MISSING_TERMINATOR = "Each expression must end with a semicolon."
MALFORMED_STATEMENT = "Expression must be in the format: <action> if <condition>;"
UNBALANCED_PARENTHESES = "Parentheses are not balanced."
PARSE_FAILURE = "Error parsing condition expression."


@dataclass(frozen=True)
class DocumentValidation:
    """Outcome of validating a whole rule document.

    Attributes:
        message: First error found, or "" when the document is valid
        line_number: 1-indexed line of the document that failed, or None
            when valid
        line: The failing line (stripped), or None when valid
    """

    message: str = ""
    line_number: int | None = None
    line: str | None = None

    @property
    def ok(self) -> bool:
        return not self.message

    def __str__(self) -> str:
        if self.ok:
            return "OK"
        return f"line {self.line_number}: {self.message}"


def rule_lines(document: str) -> list[str]:
    """Split a document into stripped, non-blank lines."""
    return [line.strip() for line in document.split("\n") if line.strip()]


def strip_terminator(expression: str) -> str:
    """Drop one trailing ";" left over from a doubled terminator."""
    return expression[:-1] if expression.endswith(";") else expression


def _parentheses_balanced(expression: str) -> bool:
    balance = 0
    for char in expression:
        if char == "(":
            balance += 1
        elif char == ")":
            balance -= 1
    return balance == 0


def _is_allowed_token(token: str) -> bool:
    return (
        token in ALLOWED_OPERATORS
        or token in CONNECTIVES
        or token in GROUPING
        or IDENTIFIER.match(token) is not None
        or possible_numeric(token)
    )


def _missing_elements_message(missing: list[str]) -> str:
    if len(missing) == 1:
        return f"Element {missing[0]} does not exist."
    return f"Elements {', '.join(missing)} do not exist."


def _recheck_triples(tokens: list[str]) -> str:
    """Re-scan adjacent tokens for illegal operators and predicates."""
    for i, token in enumerate(tokens):
        if COMPARISON_LIKE.match(token) and token not in ALLOWED_OPERATORS:
            return f"Operator '{token}' is not allowed."
        if i + 2 < len(tokens) and tokens[i + 1] in ALLOWED_OPERATORS:
            if not is_allowed_predicate(tokens[i + 2]):
                return f"Property or value '{tokens[i + 2]}' is not allowed."
    return ""


def _check_atoms(node: ExpressionNode) -> str:
    """Apply the parser's operator and predicate rules to every parsed atom."""
    for atom in iter_atoms(node):
        if atom.operator not in ALLOWED_OPERATORS:
            return f"Operator '{atom.operator}' is not allowed."
        if not is_allowed_predicate(atom.predicate):
            return f"Property or value '{atom.predicate}' is not allowed."
    return ""


def validate_line(line: str, known_elements: Iterable[str]) -> str:
    """Validate a single rule line against the known element names.

    Returns:
        "" if the line is valid, otherwise the first error message.
    """
    line = line.strip()

    if not line.endswith(";"):
        return MISSING_TERMINATOR

    match = STATEMENT.match(line)
    if not match:
        return MALFORMED_STATEMENT

    action, expression = match.group(1), match.group(2)
    if action not in ALLOWED_ACTIONS:
        return f"Action type '{action}' is not allowed."

    if not _parentheses_balanced(expression):
        return UNBALANCED_PARENTHESES

    tokens = tokenize(strip_terminator(expression))
    for token in tokens:
        if not _is_allowed_token(token):
            return f"Token or operator '{token}' is not allowed."

    referenced: dict[str, None] = {}
    try:
        # Warnings are not wanted here; the strict checks below cover them
        node = parse_expression(list(tokens), referenced, report=lambda message: None)
    except (ConditionParseError, RecursionError) as e:
        logger.debug("Failed to parse %r: %s", expression, e)
        return PARSE_FAILURE

    known = set(known_elements)
    missing = [name for name in referenced if name not in known]
    if missing:
        return _missing_elements_message(missing)

    return _recheck_triples(tokens) or _check_atoms(node)


def validate_document(document: str, known_elements: Iterable[str]) -> DocumentValidation:
    """Validate every non-blank line of a rule document, stopping at the first error."""
    known = set(known_elements)
    for number, line in enumerate(document.split("\n"), 1):
        line = line.strip()
        if not line:
            continue
        message = validate_line(line, known)
        if message:
            logger.debug("Rejected line %d %r: %s", number, line, message)
            return DocumentValidation(message=message, line_number=number, line=line)
    return DocumentValidation()


def validate(document: str, known_elements: Iterable[str]) -> str:
    """Validate a rule document.

    Returns:
        "" if every line is valid, otherwise the first failing line's message.
    """
    return validate_document(document, known_elements).message
