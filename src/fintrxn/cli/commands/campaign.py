"""Campaign management commands."""

import click
from fintrxn.utils.date_parser import parse_date


@click.group()
def campaign_group():
    """Manage campaigns and their accounting codes."""
    pass


@campaign_group.command("create")
@click.argument("title", metavar="TITLE")
@click.option("--acquisition-code", required=True, help="Accounting code in the acquisition year")
@click.option("--follow-code", required=True, help="Accounting code in following years")
@click.option("--profit-loss-code", help="Profit/loss accounting code")
@click.option("--start-date", help="Campaign start date, its year is the acquisition year")
@click.pass_context
def create_campaign(
    ctx,
    title: str,
    acquisition_code: str,
    follow_code: str,
    profit_loss_code: str | None,
    start_date: str | None,
):
    """Create a campaign.

    Examples:
        fintrxn campaign create "Spring mailing" --acquisition-code 7300 --follow-code 7310
    """
    db = ctx.obj["db"]

    parsed_start = None
    if start_date:
        try:
            parsed_start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    campaign_id = db.create_campaign(
        title=title,
        cocoa_code_acquisition=acquisition_code,
        cocoa_code_follow=follow_code,
        cocoa_profit_loss=profit_loss_code,
        start_date=parsed_start,
    )
    click.echo(f"Created campaign '{title}' (ID: {campaign_id})")


@campaign_group.command("list")
@click.pass_context
def list_campaigns(ctx):
    """List all campaigns."""
    db = ctx.obj["db"]

    campaigns = db.list_campaigns()
    if not campaigns:
        click.echo("No campaigns found.")
        return

    click.echo("\nCampaigns:")
    click.echo("-" * 60)
    for c in campaigns:
        start = c.start_date.isoformat() if c.start_date else "-"
        click.echo(
            f"ID: {c.id:3d} | {c.title:20s} | Start: {start} | "
            f"Codes: {c.cocoa_code_acquisition}/{c.cocoa_code_follow}"
        )


def register_commands(cli):
    """Register campaign commands with main CLI."""
    cli.add_command(campaign_group, name="campaign")
