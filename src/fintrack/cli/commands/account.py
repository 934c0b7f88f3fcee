"""Account management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.input_parsing import parse_amount_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.entities import AccountType


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType]),
    default=AccountType.BANK.value,
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Opening balance (amount owed for credit cards)")
@click.option("--institution", help="Bank or card issuer")
@click.option("--last4", help="Last four digits of the account or card number")
@click.pass_context
def create_account(
    ctx, name: str, account_type: str, balance: str, institution: str | None, last4: str | None
):
    """Create a new account.

    Examples:
        fintrack account create "Checking" --balance 1000.00 --institution "Chase"
        fintrack account create "Visa" --type credit_card --last4 4242
        fintrack account create "Pocket" --type cash --balance 50
    """
    service = AccountService(ctx.obj["db"])

    opening = parse_amount_or_exit(ctx, balance, "balance")

    try:
        account_id = service.create_account(
            user_id=ctx.obj["user_id"],
            name=name,
            type=account_type,
            balance=opening,
            institution=institution,
            last4=last4,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name}' (ID: {account_id})")
    click.echo(f"  Type: {account_type}")
    click.echo(f"  Balance: {opening:,.2f}")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    service = AccountService(ctx.obj["db"])

    try:
        accounts = service.list_accounts(ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        label = "Owed" if acc.type.is_credit else "Balance"
        card = f" ****{acc.last4}" if acc.last4 else ""
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:11s} | "
            f"{label}: {acc.balance:>12,.2f}{card}"
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--institution", help="New bank or card issuer (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, institution: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        fintrack account rename "Checking" "Main Checking"
        fintrack account rename 1 "Visa Gold" --institution "Chase"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.update_account(
            account_id, ctx.obj["user_id"], name=new_name, institution=institution
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renamed account to '{new_name}'")
    if institution is not None:
        click.echo(f"Institution updated to '{institution}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no expenses are linked to it. Delete
    them or move them to another account first.
    """
    service = AccountService(ctx.obj["db"])
    user_id = ctx.obj["user_id"]
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id, user_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
