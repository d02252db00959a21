"""Editor-side bundle for the conditions of one dialog element."""

from dataclasses import dataclass, field
from typing import Any

from dialogrules.conditions.compiler import RuleSet, compile_rules
from dialogrules.conditions.parser import DiagnosticSink
from dialogrules.conditions.validator import DocumentValidation, validate_document


@dataclass
class ConditionsInfo:
    """Conditions attached to one element of a dialog.

    Attributes:
        name: Name of the element the conditions belong to
        conditions: The rule document, one ``<action> if <condition>;`` per line
        elements: Names of all elements in the dialog, used for reference checks
        selected: Id of the selected element in the editor
    """

    name: str
    conditions: str = ""
    elements: list[str] = field(default_factory=list)
    selected: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConditionsInfo":
        return cls(
            name=str(data.get("name", "")),
            conditions=data.get("conditions") or "",
            elements=[str(e) for e in data.get("elements") or []],
            selected=str(data.get("selected", "")),
        )

    def validate(self) -> DocumentValidation:
        return validate_document(self.conditions, self.elements)

    def compile(self, report: DiagnosticSink | None = None) -> RuleSet:
        return compile_rules(self.conditions, report)
