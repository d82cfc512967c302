"""Policy command group for zerotrust-engine CLI.

Provides policy inspection subcommands.
"""

import json
import sys
from pathlib import Path

import click

from zerotrust_engine.pdp import PolicySet, create_default_policies
from zerotrust_engine.utils.policy import get_policy_path, load_policy_set


@click.group()
def policy() -> None:
    """Policy inspection commands."""
    pass


@policy.command("validate")
@click.option(
    "--path",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to policy file (default: OS config location)",
)
def policy_validate(path: Path | None) -> None:
    """Validate policy file.

    Checks the policy file for:
    - Valid JSON syntax
    - Schema validation (categories, conditions, actions)
    - Unique policy ids

    Exit codes:
        0: Policy file is valid
        1: Policy file is invalid or not found
    """
    policy_path = path or get_policy_path()

    try:
        policy_set = load_policy_set(policy_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    total = len(policy_set.policies)
    active = sum(1 for p in policy_set.policies if p.active)
    click.echo(f"✓ Policy file valid: {policy_path}")
    click.echo(f"  {total} polic{'ies' if total != 1 else 'y'} defined ({active} active)")
    click.echo(f"  Version: {policy_set.version}")


@policy.command("defaults")
def policy_defaults() -> None:
    """Print the built-in seed policies as a policy file.

    The output can be saved and edited as a starting point:
        zerotrust-engine policy defaults > policies.json
    """
    policy_set = PolicySet(policies=create_default_policies())
    click.echo(json.dumps(policy_set.model_dump(mode="json", exclude_none=True), indent=2))


@policy.command("path")
def policy_path_cmd() -> None:
    """Show policy file path.

    Displays the OS-appropriate default policy file location.
    """
    path = get_policy_path()
    click.echo(str(path))

    if not path.exists():
        click.echo("(file does not exist - run 'zerotrust-engine policy defaults' for a template)", err=True)
