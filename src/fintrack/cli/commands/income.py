"""Income commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from fintrack.domain.income import IncomeService


@click.group()
def income_group():
    """Record money coming in."""
    pass


@income_group.command("add")
@click.option("--amount", required=True, help="Amount received (e.g., 2500.00)")
@click.option("--description", required=True, help="Where the money came from")
@click.option("--category", required=True, help="Income category (e.g., Salary)")
@click.option("--date", default="today", show_default=True, help="Date received (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--invoice", "invoice_number", help="Invoice or receipt number")
@click.pass_context
def add_income(
    ctx, amount: str, description: str, category: str, date: str, invoice_number: str | None
):
    """Record income.

    Income counts towards the summary's net balance. It does not change any
    account balance; use 'fintrack transfer' to move money between accounts.

    Examples:
        fintrack income add --amount 2500 --description "March salary" --category Salary
        fintrack income add --amount 400 --description "Logo design" --category Freelance --invoice INV-042
    """
    service = IncomeService(ctx.obj["db"])

    income_date = parse_date_or_exit(ctx, date)
    income_amount = parse_amount_or_exit(ctx, amount)

    try:
        income = service.create_income(
            user_id=ctx.obj["user_id"],
            amount=income_amount,
            description=description,
            category=category,
            date=income_date,
            invoice_number=invoice_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded income {income.id}")
    click.echo(f"  Date: {income.date}")
    click.echo(f"  Amount: {income.amount:,.2f}")
    click.echo(f"  Description: {income.description}")
    click.echo(f"  Category: {income.category}")
    if income.invoice_number:
        click.echo(f"  Invoice: {income.invoice_number}")


@income_group.command("list")
@click.option("--from", "start_date", help="Start date (inclusive)")
@click.option("--to", "end_date", help="End date (inclusive)")
@click.pass_context
def list_income(ctx, start_date: str | None, end_date: str | None):
    """List income, newest first."""
    service = IncomeService(ctx.obj["db"])

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    entries = service.list_income(ctx.obj["user_id"], start_date=start, end_date=end)
    if not entries:
        click.echo("No income found.")
        return

    click.echo(f"{'ID':>4} | {'Date':10} | {'Amount':>10} | {'Category':15} | {'Invoice':12} | Description")
    click.echo("-" * 80)
    for inc in entries:
        invoice = inc.invoice_number or ""
        click.echo(
            f"{inc.id:>4} | {inc.date.isoformat():10} | {inc.amount:>10,.2f} | "
            f"{inc.category[:15]:15} | {invoice[:12]:12} | {inc.description}"
        )


@income_group.command("update")
@click.argument("income_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--category", help="New category")
@click.option("--date", help="New date")
@click.option("--invoice", "invoice_number", help="New invoice number")
@click.pass_context
def update_income(
    ctx,
    income_id: int,
    amount: str | None,
    description: str | None,
    category: str | None,
    date: str | None,
    invoice_number: str | None,
) -> None:
    """Update an income entry. Only the provided fields change."""
    service = IncomeService(ctx.obj["db"])

    new_date = parse_date_or_exit(ctx, date) if date is not None else None
    new_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        income = service.update_income(
            income_id,
            ctx.obj["user_id"],
            amount=new_amount,
            description=description,
            category=category,
            date=new_date,
            invoice_number=invoice_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated income {income.id}")
    click.echo(f"  Amount: {income.amount:,.2f}")


@income_group.command("delete")
@click.argument("income_id", type=int)
@click.pass_context
def delete_income(ctx, income_id: int) -> None:
    """Delete an income entry."""
    service = IncomeService(ctx.obj["db"])

    if not service.delete_income(income_id, ctx.obj["user_id"]):
        click.echo(f"Error: Income {income_id} not found", err=True)
        ctx.exit(1)
    click.echo(f"Deleted income {income_id}")


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
