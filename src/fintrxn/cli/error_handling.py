"""Rendering of domain errors on the command line."""

import click

from fintrxn.domain.errors import DomainError, PersistenceFailure
from fintrxn.logging_setup import get_logger

logger = get_logger("fintrxn.cli")


def format_domain_error(error: DomainError) -> str:
    """One-line description of a domain error, naming the case it failed in."""
    if error.case is None:
        return f"Error: {error}"
    case = getattr(error.case, "value", error.case)
    return f"Error in {case} of contribution {error.subject_id}: {error}"


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit with failure.

    A persistence failure exits with 2, every other domain error with 1.
    """
    logger.debug("Command failed", exc_info=error)
    click.echo(format_domain_error(error), err=True)
    ctx.exit(2 if isinstance(error, PersistenceFailure) else 1)
