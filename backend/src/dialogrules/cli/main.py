"""dialogrules CLI entry point."""

import click

from dialogrules.config import Settings


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override DIALOGRULES_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """dialogrules: conditional rules for dialog elements."""
    try:
        settings = Settings.from_env(log_level)
    except ValueError as e:
        raise click.UsageError(str(e))
    settings.configure_logging()
    ctx.obj = settings


# Register subcommand groups
from dialogrules.cli.conditions_cmd import conditions  # noqa: E402
from dialogrules.cli.layout_cmd import layout  # noqa: E402

cli.add_command(conditions)
cli.add_command(layout)
