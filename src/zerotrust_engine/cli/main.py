"""Main CLI entry point for zerotrust-engine.

Defines the CLI group and registers all subcommands.

Commands:
    evaluate    - Evaluate an access request (prints AccessDecision)
    score       - Calculate the trust score for a context
    compliance  - Check a live session context for violations
    policy      - Policy inspection commands
        validate - Validate a policy file
        defaults - Print the built-in seed policies
        path     - Show default policy file path

Usage:
    zerotrust-engine -h, --help      Show help message
    zerotrust-engine -v, --version   Show version
    zerotrust-engine evaluate -c context.json [-p policies.json]
    zerotrust-engine score -c context.json
    zerotrust-engine compliance -c context.json [-p policies.json]
    zerotrust-engine policy validate -p policies.json

Subcommand help:
    zerotrust-engine COMMAND -h      Show help for a specific command
"""

import sys

import click

from zerotrust_engine import __version__
from zerotrust_engine.utils.logging import setup_logging

from .commands.evaluate import compliance, evaluate, score
from .commands.policy import policy


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  zerotrust-engine policy defaults > policies.json
  zerotrust-engine evaluate --context context.json --policies policies.json

Evaluate exit codes:
  0  allow
  2  conditional (see "conditions" in the output)
  3  deny
  1  input or evaluation error
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING"], case_sensitive=False),
    default=None,
    help="Log level for engine logs (JSON lines on stderr). Overrides logging.log_level from the engine config",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, log_level: str | None) -> None:
    """zerotrust-engine: Zero Trust access decision engine."""
    if version:
        click.echo(f"zerotrust-engine {__version__}")
        sys.exit(0)

    # Without --log-level, commands that load an engine config use its logging.log_level
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper() if log_level else None
    setup_logging(ctx.obj["log_level"] or "WARNING")
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(evaluate)
cli.add_command(score)
cli.add_command(compliance)
cli.add_command(policy)


def main() -> None:
    """CLI entry point."""
    cli()
