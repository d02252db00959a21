"""
layout/loader.py: load dialog layouts from YAML files.

A layout lists the elements of one dialog. Element names are the known
elements that condition documents may reference, and each element can carry
its own condition document:

    name: Settings
    elements:
      - name: useProxy
        type: Checkbox
      - name: proxyHost
        type: Input
        conditions: |
          enable if useProxy == checked;

Usage:
    from dialogrules.layout.loader import load_layout

    layout = load_layout(Path("settings.yaml"))
    for name, result in layout.check().items():
        print(name, result)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from dialogrules.conditions import ConditionsInfo, DocumentValidation, RuleSet

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "layout.schema.json"


class LayoutError(Exception):
    """A layout file could not be loaded."""

    def __init__(self, path: Path | None, message: str):
        self.path = path
        self.message = message
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{message}")


@dataclass
class DialogElement:
    name: str
    type: str
    conditions: str = ""
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class DialogLayout:
    """Elements of one dialog, in declared order."""

    name: str
    elements: list[DialogElement] = field(default_factory=list)
    description: str = ""

    def element_names(self) -> list[str]:
        return [element.name for element in self.elements]

    def get_element(self, name: str) -> DialogElement | None:
        for element in self.elements:
            if element.name == name:
                return element
        return None

    def conditions_info(self, name: str) -> ConditionsInfo:
        """Bundle an element's conditions with the names of its siblings."""
        element = self.get_element(name)
        if element is None:
            raise KeyError(f"Element '{name}' not found in layout '{self.name}'")
        return ConditionsInfo(
            name=element.name,
            conditions=element.conditions,
            elements=self.element_names(),
            selected=element.name,
        )

    def check(self) -> dict[str, DocumentValidation]:
        """Validate every element's conditions; returns only the failures."""
        failures: dict[str, DocumentValidation] = {}
        for element in self.elements:
            if not element.conditions.strip():
                continue
            result = self.conditions_info(element.name).validate()
            if not result.ok:
                failures[element.name] = result
        return failures

    def compile(self) -> dict[str, RuleSet]:
        """Compile the conditions of every element that has any."""
        return {
            element.name: self.conditions_info(element.name).compile()
            for element in self.elements
            if element.conditions.strip()
        }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _location(error: ValidationError) -> str:
    """Render where in the layout an error sits, e.g. ``elements[0]/type``."""
    return "".join(
        f"[{part}]" if isinstance(part, int) else f"/{part}" for part in error.absolute_path
    ).lstrip("/")


def _parse_element(raw: dict[str, Any]) -> DialogElement:
    return DialogElement(
        name=raw["name"],
        type=raw["type"],
        conditions=raw.get("conditions") or "",
        properties=raw.get("properties") or {},
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def schema_issues(data: Any) -> list[str]:
    """Check raw layout data against the layout JSON Schema.

    Returns:
        One message per violation, prefixed with its location. Empty on success.
    """
    validator = Draft202012Validator(_load_schema())
    issues = []
    for error in sorted(validator.iter_errors(data), key=_location):
        location = _location(error)
        issues.append(f"{location}: {error.message}" if location else error.message)
    return issues


def layout_from_dict(data: Any, path: Path | None = None) -> DialogLayout:
    """Build a layout from already-parsed data.

    Raises:
        LayoutError: On schema violations or duplicate element names.
    """
    issues = schema_issues(data)
    if issues:
        raise LayoutError(path, "; ".join(issues))

    elements = [_parse_element(raw) for raw in data["elements"]]

    seen: set[str] = set()
    for element in elements:
        if element.name in seen:
            raise LayoutError(path, f"Duplicate element name '{element.name}'")
        seen.add(element.name)

    layout = DialogLayout(
        name=data["name"],
        elements=elements,
        description=data.get("description", ""),
    )
    logger.debug("Loaded layout '%s' with %d elements", layout.name, len(elements))
    return layout


def load_layout(path: Path) -> DialogLayout:
    """Load and validate a layout YAML file.

    Raises:
        LayoutError: If the file is missing, is not valid YAML, is empty,
            or does not match the layout schema.
    """
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise LayoutError(path, f"Cannot read file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise LayoutError(path, f"YAML parse error: {exc}") from exc

    if raw is None:
        raise LayoutError(path, "File is empty or contains only whitespace")

    return layout_from_dict(raw, path)
