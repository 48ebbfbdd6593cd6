"""Posting (financial transaction) commands."""

import click
from fintrxn.cli.error_handling import handle_domain_error
from fintrxn.domain.batch import BatchService
from fintrxn.domain.errors import DomainError


@click.group()
def posting_group():
    """Inspect generated financial transactions."""
    pass


@posting_group.command("list")
@click.option("--contribution", "contribution_id", type=int, help="Only postings of this contribution")
@click.option("--batch", "batch_id", type=int, help="Only postings in this batch")
@click.pass_context
def list_postings(ctx, contribution_id: int | None, batch_id: int | None):
    """List financial transactions."""
    db = ctx.obj["db"]

    postings = db.list_financial_transactions(contribution_id=contribution_id)
    if batch_id is not None:
        try:
            in_batch = set(BatchService(db, batch_id).get_financial_transaction_ids())
        except DomainError as e:
            handle_domain_error(ctx, e)
        postings = [p for p in postings if p.id in in_batch]

    if not postings:
        click.echo("No financial transactions found.")
        return

    click.echo("\nFinancial transactions:")
    click.echo("-" * 72)
    for p in postings:
        amount = f"{p.total_amount} {p.currency or ''}".strip()
        click.echo(
            f"ID: {p.id:3d} | Contribution: {p.contribution_id} | "
            f"{p.from_account_id} -> {p.to_account_id} | {amount}"
        )


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(posting_group, name="posting")
