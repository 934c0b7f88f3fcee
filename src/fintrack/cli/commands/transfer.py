"""Transfer command."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.input_parsing import parse_amount_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.transfer import TransferService


@click.command("transfer")
@click.argument("source", metavar="FROM")
@click.argument("destination", metavar="TO")
@click.argument("amount")
@click.pass_context
def transfer(ctx, source: str, destination: str, amount: str):
    """Move AMOUNT from account FROM to account TO.

    Transferring into a credit card pays it down; transferring out of one is
    a cash advance and adds to what it owes.

    Examples:
        fintrack transfer Checking Savings 250
        fintrack transfer Checking Visa 500.00
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    transfer_service = TransferService(db)

    from_id = resolve_account_or_exit(ctx, account_service, source)
    to_id = resolve_account_or_exit(ctx, account_service, destination)

    transfer_amount = parse_amount_or_exit(ctx, amount)

    try:
        result = transfer_service.transfer(ctx.obj["user_id"], from_id, to_id, transfer_amount)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transferred {transfer_amount:,.2f} from '{source}' to '{destination}'")
    click.echo(f"  {source}: {result.from_balance:,.2f}")
    click.echo(f"  {destination}: {result.to_balance:,.2f}")


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer)
