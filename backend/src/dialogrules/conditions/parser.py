"""Parser for condition expressions.

Turns the token list produced by the tokenizer into an expression tree.
Uses recursive descent over a mutable token list that is consumed from the
front.

The tree is intentionally flat: connectives carry no precedence and are
stored in the order they appear, interleaved with their operands.
Parentheses are the only nesting mechanism.

    A == enabled & (B == checked | C >= 2)

parses to::

    ConditionSequence((
        AtomicCondition("A", "==", "enabled"),
        Connective.AND,
        ConditionSequence((
            AtomicCondition("B", "==", "checked"),
            Connective.OR,
            AtomicCondition("C", ">=", "2"),
        )),
    ))

The parser is lenient: a malformed atom (unknown operator or predicate) is
reported to a diagnostic sink and kept as-is. Strict acceptance is the
validator's job.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from dialogrules.conditions.tokenizer import tokenize
from dialogrules.conditions.vocabulary import (
    ALLOWED_OPERATORS,
    CONNECTIVES,
    WORD,
    is_allowed_predicate,
)

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]


# -----------------------------------------------------------------------------
# Expression Node Types
# -----------------------------------------------------------------------------


class AtomicCondition(NamedTuple):
    """A single comparison, e.g. ``checkbox1 == checked``."""

    subject: str
    operator: str
    predicate: str


class Connective(str, Enum):
    """Logical connective between two operands at the same nesting level."""

    AND = "&"
    OR = "|"


@dataclass(frozen=True)
class ConditionSequence:
    """Flat, ordered mix of operands and connectives.

    Operands are atomic conditions or nested sequences (parenthesized
    groups). A well-formed sequence alternates operand / connective /
    operand, but the parser does not enforce it.
    """

    items: tuple["AtomicCondition | Connective | ConditionSequence", ...] = ()

    def __iter__(self) -> Iterator["AtomicCondition | Connective | ConditionSequence"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "AtomicCondition | Connective | ConditionSequence":
        return self.items[index]


ExpressionNode = Union[AtomicCondition, ConditionSequence]


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------


class ConditionParseError(Exception):
    """Error while parsing a condition expression."""


class IncompleteConditionError(ConditionParseError):
    """Fewer than three tokens were left for an atomic condition."""

    def __init__(self, tokens: list[str]):
        self.tokens = list(tokens)
        super().__init__(
            f"Incomplete condition: expected <element> <operator> <predicate>, "
            f"got {self.tokens!r}"
        )


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def _log_diagnostic(message: str) -> None:
    logger.warning("%s", message)


def parse_atomic(tokens: list[str], report: DiagnosticSink | None = None) -> AtomicCondition:
    """Consume the first three tokens as ``(subject, operator, predicate)``.

    An operator outside the allowed set, or a predicate that is neither a
    known property nor numeric, is sent to ``report`` (the module logger by
    default) and the triple is returned unchanged.

    Raises:
        IncompleteConditionError: If fewer than three tokens remain. Nothing
            is consumed in that case.
    """
    if len(tokens) < 3:
        raise IncompleteConditionError(tokens)

    report = report or _log_diagnostic
    subject, operator, predicate = tokens[:3]
    del tokens[:3]

    if operator not in ALLOWED_OPERATORS:
        report(f"Invalid operator: {operator}")
    if not is_allowed_predicate(predicate):
        report(f"Invalid property: {predicate}")

    return AtomicCondition(subject, operator, predicate)


def parse_expression(
    tokens: list[str],
    elements: dict[str, None],
    report: DiagnosticSink | None = None,
) -> ExpressionNode:
    """Consume tokens into an expression node.

    Every subject of a parsed atom is added to ``elements``, an ordered set
    keyed by name that keeps the order of first appearance. Parsing stops
    at the end of the tokens or at a ``)``, which is left for the caller.

    Returns:
        An empty :class:`ConditionSequence` when nothing was parsed, the
        single parsed node itself when there is exactly one, otherwise a
        :class:`ConditionSequence` of everything parsed at this level.
    """
    stack: list[AtomicCondition | Connective | ConditionSequence] = []

    while tokens:
        token = tokens[0]
        if token == "(":
            tokens.pop(0)
            stack.append(parse_expression(tokens, elements, report))
            # A missing ")" is tolerated
            if tokens and tokens[0] == ")":
                tokens.pop(0)
        elif token == ")":
            break
        elif token in CONNECTIVES:
            stack.append(Connective(tokens.pop(0)))
        elif WORD.match(token):
            atomic = parse_atomic(tokens, report)
            stack.append(atomic)
            elements.setdefault(atomic.subject)
        else:
            tokens.pop(0)

    if not stack:
        return ConditionSequence()
    if len(stack) == 1:
        return stack[0]
    return ConditionSequence(tuple(stack))


def parse_condition(
    expression: str, report: DiagnosticSink | None = None
) -> tuple[ExpressionNode, list[str]]:
    """Tokenize and parse a condition expression.

    Returns:
        The expression node and the element names it references, in order
        of first appearance.
    """
    elements: dict[str, None] = {}
    node = parse_expression(tokenize(expression), elements, report)
    return node, list(elements)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def to_json(node: "ExpressionNode | Connective") -> str | list:
    """Convert a node to plain nested lists of strings.

    ``AtomicCondition("A", "==", "enabled")`` becomes ``["A", "==", "enabled"]``
    and a sequence becomes a list of converted items.
    """
    if isinstance(node, Connective):
        return node.value
    if isinstance(node, AtomicCondition):
        return list(node)
    return [to_json(item) for item in node]


def iter_atoms(node: "ExpressionNode | Connective") -> Iterator[AtomicCondition]:
    """Yield every atomic condition in ``node``, left to right."""
    if isinstance(node, Connective):
        return
    if isinstance(node, AtomicCondition):
        yield node
        return
    for item in node:
        yield from iter_atoms(item)


def referenced_elements(node: "ExpressionNode | Connective") -> set[str]:
    """Collect the subject of every atom in ``node``."""
    return {atom.subject for atom in iter_atoms(node)}
