"""Compile a rule document into a rule set.

The compiler does no validation of its own: lines that are not shaped like
``<action> if <condition>;`` are skipped silently. Run
:func:`dialogrules.conditions.validator.validate` first when rejection is
wanted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from dialogrules.conditions.parser import (
    DiagnosticSink,
    ExpressionNode,
    parse_expression,
    to_json,
)
from dialogrules.conditions.tokenizer import tokenize
from dialogrules.conditions.validator import STATEMENT, rule_lines, strip_terminator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSet:
    """Compiled rules of one document.

    Attributes:
        elements: Every element name referenced by any line, in order of first
            appearance
        result: Expression governing each action. When an action appears on
            several lines the last one wins.
    """

    elements: tuple[str, ...] = ()
    result: dict[str, ExpressionNode] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "elements": list(self.elements),
            "result": {action: to_json(node) for action, node in self.result.items()},
        }


def compile_rules(document: str, report: DiagnosticSink | None = None) -> RuleSet:
    """Parse every rule line of ``document`` into a :class:`RuleSet`.

    Args:
        document: Multi-line rule document
        report: Sink for malformed-atom warnings (module logger by default)
    """
    result: dict[str, ExpressionNode] = {}
    elements: dict[str, None] = {}

    for line in rule_lines(document):
        match = STATEMENT.match(line)
        if not match:
            logger.debug("Skipping line that is not a rule: %r", line)
            continue
        action, expression = match.group(1), match.group(2)
        tokens = tokenize(strip_terminator(expression))
        result[action] = parse_expression(tokens, elements, report)

    return RuleSet(elements=tuple(elements), result=result)
