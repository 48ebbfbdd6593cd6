"""Accounting batch commands."""

import click
from fintrxn.cli.error_handling import handle_domain_error
from fintrxn.domain.batch import BatchService
from fintrxn.domain.errors import DomainError


@click.group()
def batch_group():
    """Group financial transactions into accounting batches."""
    pass


@batch_group.command("create")
@click.argument("title", metavar="TITLE")
@click.pass_context
def create_batch(ctx, title: str):
    """Create an accounting batch."""
    db = ctx.obj["db"]
    batch_id = db.create_batch(title)
    click.echo(f"Created batch '{title}' (ID: {batch_id})")


@batch_group.command("add")
@click.argument("batch_id", type=int)
@click.argument("trxn_ids", type=int, nargs=-1, required=True)
@click.pass_context
def add_to_batch(ctx, batch_id: int, trxn_ids: tuple[int, ...]):
    """Add financial transactions to a batch."""
    db = ctx.obj["db"]
    try:
        service = BatchService(db, batch_id)
        for trxn_id in trxn_ids:
            service.add_financial_transaction(trxn_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added {len(trxn_ids)} financial transaction(s) to batch {batch_id}")


@batch_group.command("show")
@click.argument("batch_id", type=int)
@click.pass_context
def show_batch(ctx, batch_id: int):
    """Show the financial transactions of a batch."""
    db = ctx.obj["db"]
    try:
        trxn_ids = BatchService(db, batch_id).get_financial_transaction_ids()
    except DomainError as e:
        handle_domain_error(ctx, e)

    batch = db.get_batch(batch_id)
    click.echo(f"Batch {batch.id}: {batch.title}")
    if not trxn_ids:
        click.echo("No financial transactions in this batch.")
        return
    click.echo(f"Financial transactions: {', '.join(str(i) for i in trxn_ids)}")


def register_commands(cli):
    """Register batch commands with main CLI."""
    cli.add_command(batch_group, name="batch")
