"""Layout commands: check and compile the conditions of a whole dialog."""

import json
from pathlib import Path

import click

from dialogrules.config import Settings
from dialogrules.layout.loader import DialogLayout, LayoutError, load_layout


def _load(settings: Settings, path: Path | None) -> DialogLayout:
    path = path or settings.layout_path
    if path is None:
        click.echo("Error: no layout given and DIALOGRULES_LAYOUT is not set", err=True)
        raise SystemExit(1)
    try:
        return load_layout(path)
    except LayoutError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)


_path_argument = click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.group()
def layout():
    """Dialog layout commands."""
    pass


@layout.command()
@_path_argument
@click.pass_obj
def check(settings: Settings, path: Path | None):
    """Validate the conditions of every element in a layout."""
    dialog = _load(settings, path)
    failures = dialog.check()

    with_conditions = [e for e in dialog.elements if e.conditions.strip()]
    for element in with_conditions:
        failure = failures.get(element.name)
        if failure is None:
            click.echo(f"  ✓ {element.name}")
        else:
            click.echo(click.style(f"  ✗ {element.name}: {failure}", fg="red"))

    if failures:
        click.echo(
            click.style(
                f"\n{len(failures)} element(s) with invalid conditions",
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    click.echo(
        click.style(
            f"\nAll conditions in '{dialog.name}' are valid "
            f"({len(with_conditions)} element(s) checked).",
            fg="green",
            bold=True,
        )
    )


@layout.command("compile")
@_path_argument
@click.pass_obj
def compile_cmd(settings: Settings, path: Path | None):
    """Print the compiled rule set of every element that has conditions."""
    dialog = _load(settings, path)
    failures = dialog.check()
    if failures:
        for name, failure in failures.items():
            click.echo(click.style(f"{name}: {failure}", fg="red"), err=True)
        raise SystemExit(1)

    compiled = {name: rules.to_dict() for name, rules in dialog.compile().items()}
    click.echo(json.dumps(compiled, indent=2))
