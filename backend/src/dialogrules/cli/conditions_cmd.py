"""Condition commands: validate and compile rule documents."""

import json
from pathlib import Path

import click

from dialogrules.conditions import compile_rules, validate_document
from dialogrules.config import Settings
from dialogrules.layout.loader import LayoutError, load_layout


def _known_elements(settings: Settings, elements: tuple[str, ...], layout_path: Path | None) -> list[str]:
    """Merge --element names with the element names of a layout file."""
    known = list(elements)
    layout_path = layout_path or settings.layout_path
    if layout_path is not None:
        try:
            known.extend(load_layout(layout_path).element_names())
        except LayoutError as e:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
            raise SystemExit(1)
    return known


def _check(document: str, known: list[str]) -> None:
    result = validate_document(document, known)
    if not result.ok:
        click.echo(click.style(str(result), fg="red"), err=True)
        raise SystemExit(1)


_element_option = click.option(
    "--element",
    "-e",
    "elements",
    multiple=True,
    help="Name of a known element. Repeat for several.",
)
_layout_option = click.option(
    "--layout",
    "layout_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Layout YAML file supplying the known element names.",
)


@click.group()
def conditions():
    """Condition rule commands."""
    pass


@conditions.command()
@click.argument("document", type=click.File("r"))
@_element_option
@_layout_option
@click.pass_obj
def validate(settings: Settings, document, elements: tuple[str, ...], layout_path: Path | None):
    """Validate a rule document, stopping at the first invalid line."""
    known = _known_elements(settings, elements, layout_path)
    _check(document.read(), known)
    click.echo(click.style("All conditions are valid.", fg="green", bold=True))


@conditions.command("compile")
@click.argument("document", type=click.File("r"))
@_element_option
@_layout_option
@click.pass_obj
def compile_cmd(settings: Settings, document, elements: tuple[str, ...], layout_path: Path | None):
    """Validate a rule document and print the compiled rule set as JSON."""
    known = _known_elements(settings, elements, layout_path)
    text = document.read()
    _check(text, known)
    click.echo(json.dumps(compile_rules(text).to_dict(), indent=2))
