"""Financial account management commands."""

import click


@click.group()
def account_group():
    """Manage financial accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--code", "accounting_code", help="Accounting code the account books under")
@click.option("--type", "account_type_code", help="Account type code (e.g. INC)")
@click.pass_context
def create_account(ctx, name: str, accounting_code: str | None, account_type_code: str | None):
    """Create a financial account.

    NAME is the IBAN for bank accounts, or a label for ledger accounts.

    Examples:
        fintrxn account create BE68539007547034 --type INC
        fintrxn account create "Donations 2024" --code 7300
    """
    db = ctx.obj["db"]
    account_id = db.create_financial_account(
        name=name, accounting_code=accounting_code, account_type_code=account_type_code
    )
    click.echo(f"Created financial account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all financial accounts."""
    db = ctx.obj["db"]

    accounts = db.list_financial_accounts()
    if not accounts:
        click.echo("No financial accounts found.")
        return

    click.echo("\nFinancial accounts:")
    click.echo("-" * 60)
    for acc in accounts:
        code = acc.accounting_code or "-"
        click.echo(f"ID: {acc.id:3d} | {acc.name:24s} | Code: {code}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
