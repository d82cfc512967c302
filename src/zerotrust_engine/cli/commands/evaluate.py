"""Evaluation commands for zerotrust-engine CLI.

Run the engine over JSON files: a context snapshot, optionally a policy
file and an engine config. Results are printed as JSON on stdout.
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from zerotrust_engine.config import EngineConfig, get_config_path
from zerotrust_engine.context import Context, load_context
from zerotrust_engine.exceptions import PolicyEvaluationFailure
from zerotrust_engine.pdp import (
    Decision,
    Policy,
    calculate_trust_score,
    create_default_policies,
    evaluate_access,
    perform_continuous_compliance,
)
from zerotrust_engine.utils.logging import setup_logging
from zerotrust_engine.utils.policy import load_policies

# Exit codes for `evaluate`, one per decision
DECISION_EXIT_CODES: dict[Decision, int] = {
    Decision.ALLOW: 0,
    Decision.CONDITIONAL: 2,
    Decision.DENY: 3,
}

_existing_file = click.Path(exists=True, dir_okay=False, path_type=Path)

context_option = click.option(
    "--context",
    "-c",
    "context_path",
    type=_existing_file,
    required=True,
    help="Path to context snapshot JSON",
)
policies_option = click.option(
    "--policies",
    "-p",
    "policies_path",
    type=_existing_file,
    help="Path to policy file (default: built-in seed policies)",
)
config_option = click.option(
    "--config",
    "config_path",
    type=_existing_file,
    help="Path to engine config JSON (default: OS config location, if present)",
)


def _fail(message: str) -> NoReturn:
    click.echo(f"✗ {message}", err=True)
    sys.exit(1)


def _load_context(path: Path) -> Context:
    try:
        return load_context(path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _load_policies(path: Path | None) -> list[Policy]:
    if path is None:
        return create_default_policies()
    try:
        return load_policies(path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _load_config(path: Path | None) -> EngineConfig:
    if path is None:
        default_path = get_config_path()
        if not default_path.exists():
            return EngineConfig()
        path = default_path
    try:
        return EngineConfig.load_from_file(path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _apply_log_level(config: EngineConfig) -> None:
    """Use the config's log level unless --log-level was given."""
    ctx = click.get_current_context()
    if (ctx.find_root().obj or {}).get("log_level") is None:
        setup_logging(config.logging.log_level)


@click.command("evaluate")
@context_option
@policies_option
@config_option
def evaluate(context_path: Path, policies_path: Path | None, config_path: Path | None) -> None:
    """Evaluate an access request.

    Prints the access decision as JSON.

    Exit codes:
        0: allow
        1: input could not be loaded, or evaluation failed
        2: conditional
        3: deny
    """
    context = _load_context(context_path)
    policies = _load_policies(policies_path)
    config = _load_config(config_path)
    _apply_log_level(config)

    try:
        decision = evaluate_access(context, policies, config=config)
    except PolicyEvaluationFailure as e:
        _fail(str(e))

    click.echo(decision.model_dump_json(indent=2))
    sys.exit(DECISION_EXIT_CODES[decision.decision])


@click.command("score")
@context_option
@config_option
def score(context_path: Path, config_path: Path | None) -> None:
    """Calculate the trust score for a context.

    Prints the overall score, the four sub-scores and the factor breakdown
    as JSON.
    """
    context = _load_context(context_path)
    config = _load_config(config_path)
    _apply_log_level(config)

    trust_score = calculate_trust_score(context, config=config)
    click.echo(trust_score.model_dump_json(indent=2))


@click.command("compliance")
@context_option
@policies_option
def compliance(context_path: Path, policies_path: Path | None) -> None:
    """Check a live session context for policy violations.

    Exit codes:
        0: Compliant
        1: Violations found, or input could not be loaded
    """
    context = _load_context(context_path)
    policies = _load_policies(policies_path)

    result = perform_continuous_compliance(context, policies)
    click.echo(result.model_dump_json(indent=2))
    if not result.compliant:
        sys.exit(1)
