"""Contribution commands.

These record contributions like a host application would, so every change
runs through financial transaction generation.
"""

import click
from fintrxn.cli.error_handling import handle_domain_error
from fintrxn.domain.contribution import ContributionService, create_generator
from fintrxn.domain.errors import DomainError
from fintrxn.domain.generator import GenerationResult
from fintrxn.utils.amount_parser import parse_amount
from fintrxn.utils.date_parser import parse_date


def _service(ctx) -> ContributionService:
    db = ctx.obj["db"]
    return ContributionService(db, create_generator(db, ctx.obj["config"]))


def _echo_result(result: GenerationResult) -> None:
    if not result.cases:
        click.echo("No financial transactions needed.")
        return
    click.echo(f"Cases: {', '.join(c.value for c in result.cases)}")
    for trxn_id in result.posting_ids:
        click.echo(f"Wrote financial transaction {trxn_id}")
    for failure in result.failures:
        label = "Not supported" if failure.unsupported else "Failed"
        click.echo(f"{label}: {failure.case.value}: {failure.error}", err=True)


@click.group()
def contribution_group():
    """Record contributions and generate their financial transactions."""
    pass


@contribution_group.command("create")
@click.option("--status", required=True, help="Contribution status ID (1 = completed)")
@click.option("--amount", required=True, help="Total amount (e.g., 100.00)")
@click.option("--fee", help="Fee amount")
@click.option("--currency", default="EUR", show_default=True, help="Currency code")
@click.option("--campaign", "campaign_id", type=int, help="Campaign ID")
@click.option("--receive-date", help="Receive date (YYYY-MM-DD or 'today')")
@click.option("--incoming-iban", help="Bank account the money arrived on")
@click.option("--refund-iban", help="Bank account refunds are paid to")
@click.option("--trxn-id", help="External transaction ID")
@click.pass_context
def create_contribution(
    ctx,
    status: str,
    amount: str,
    fee: str | None,
    currency: str,
    campaign_id: int | None,
    receive_date: str | None,
    incoming_iban: str | None,
    refund_iban: str | None,
    trxn_id: str | None,
):
    """Create a contribution.

    Examples:
        fintrxn contribution create --status 1 --amount 100 --campaign 1 --incoming-iban BE68539007547034
    """
    config = ctx.obj["config"]
    try:
        values = {
            "contribution_status_id": status,
            "total_amount": parse_amount(amount),
            "fee_amount": parse_amount(fee) if fee else None,
            "currency": currency,
            "campaign_id": campaign_id,
            "receive_date": parse_date(receive_date) if receive_date else None,
            config.incoming_bank_account_field: incoming_iban,
            config.refund_bank_account_field: refund_iban,
            "trxn_id": trxn_id,
        }
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    values = {k: v for k, v in values.items() if v is not None}
    try:
        contribution_id, result = _service(ctx).create_contribution(values)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created contribution {contribution_id}")
    _echo_result(result)


@contribution_group.command("edit")
@click.argument("contribution_id", type=int)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    required=True,
    metavar="FIELD=VALUE",
    help="Field to change, may be repeated",
)
@click.pass_context
def edit_contribution(ctx, contribution_id: int, assignments: tuple[str, ...]):
    """Change fields of a contribution.

    Examples:
        fintrxn contribution edit 3 --set campaign_id=2
        fintrxn contribution edit 3 --set contribution_status_id=7 --set refund_bank_account=BE71096123456769
    """
    values = {}
    for assignment in assignments:
        field, sep, value = assignment.partition("=")
        if not sep or not field.strip():
            click.echo(f"Error: Expected FIELD=VALUE, got '{assignment}'", err=True)
            ctx.exit(1)
        values[field.strip()] = value.strip()

    try:
        result = _service(ctx).update_contribution(contribution_id, values)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated contribution {contribution_id}")
    _echo_result(result)


def register_commands(cli):
    """Register contribution commands with main CLI."""
    cli.add_command(contribution_group, name="contribution")
