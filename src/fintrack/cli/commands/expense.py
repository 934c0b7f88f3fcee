"""Expense commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.expense import ExpenseService


def _show_balance(ctx, account_service: AccountService, account_id: int | None) -> None:
    if account_id is None:
        return
    acc = account_service.get_account(account_id, ctx.obj["user_id"])
    if acc is not None:
        label = "Owed" if acc.type.is_credit else "Balance"
        click.echo(f"  {acc.name} {label.lower()}: {acc.balance:,.2f}")


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.option("--amount", required=True, help="Expense amount (e.g., 123.45)")
@click.option("--description", required=True, help="What the money was spent on")
@click.option("--category", required=True, help="Expense category")
@click.option("--date", default="today", show_default=True, help="Expense date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--account", help="Account name or ID the expense was paid from")
@click.pass_context
def add_expense(
    ctx, amount: str, description: str, category: str, date: str, account: str | None
):
    """Add an expense.

    When --account is given the amount is spent from that account: its
    balance drops, or for a credit card the amount owed grows.

    Examples:
        fintrack expense add --amount 300 --description "Rent" --category Housing --account Checking
        fintrack expense add --amount 12.50 --description "Lunch" --category Food
    """
    db = ctx.obj["db"]
    expense_service = ExpenseService(db)
    account_service = AccountService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)
    expense_date = parse_date_or_exit(ctx, date)
    expense_amount = parse_amount_or_exit(ctx, amount)

    try:
        expense = expense_service.create_expense(
            user_id=ctx.obj["user_id"],
            amount=expense_amount,
            description=description,
            category=category,
            date=expense_date,
            account_id=account_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense {expense.id}")
    click.echo(f"  Date: {expense.date}")
    click.echo(f"  Amount: {expense.amount:,.2f}")
    click.echo(f"  Description: {expense.description}")
    click.echo(f"  Category: {expense.category}")
    _show_balance(ctx, account_service, expense.account_id)


@expense_group.command("list")
@click.option("--account", help="Only expenses paid from this account (name or ID)")
@click.option("--from", "start_date", help="Start date (inclusive)")
@click.option("--to", "end_date", help="End date (inclusive)")
@click.pass_context
def list_expenses(ctx, account: str | None, start_date: str | None, end_date: str | None):
    """List expenses, newest first."""
    db = ctx.obj["db"]
    expense_service = ExpenseService(db)
    account_service = AccountService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    expenses = expense_service.list_expenses(
        ctx.obj["user_id"], account_id=account_id, start_date=start, end_date=end
    )
    if not expenses:
        click.echo("No expenses found.")
        return

    names = {}
    if any(exp.account_id is not None for exp in expenses):
        names = {acc.id: acc.name for acc in account_service.list_accounts(ctx.obj["user_id"])}

    click.echo(f"{'ID':>4} | {'Date':10} | {'Amount':>10} | {'Category':15} | {'Account':15} | Description")
    click.echo("-" * 80)
    for exp in expenses:
        account_name = names.get(exp.account_id, "") if exp.account_id is not None else ""
        click.echo(
            f"{exp.id:>4} | {exp.date.isoformat():10} | {exp.amount:>10,.2f} | "
            f"{exp.category[:15]:15} | {account_name[:15]:15} | {exp.description}"
        )


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--category", help="New category")
@click.option("--date", help="New date")
@click.option("--account", help="Move the expense to this account (name or ID)")
@click.option("--no-account", is_flag=True, help="Unlink the expense from its account")
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    amount: str | None,
    description: str | None,
    category: str | None,
    date: str | None,
    account: str | None,
    no_account: bool,
) -> None:
    """Update an expense.

    Updates only the fields that are provided. Changing the amount or the
    account moves the balance effect along with it.

    Examples:
        fintrack expense update 1 --amount 450
        fintrack expense update 1 --account Visa
        fintrack expense update 1 --no-account
    """
    db = ctx.obj["db"]
    expense_service = ExpenseService(db)
    account_service = AccountService(db)

    if account is not None and no_account:
        click.echo("Error: Cannot use --account together with --no-account", err=True)
        ctx.exit(1)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)
    new_date = parse_date_or_exit(ctx, date) if date is not None else None
    new_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        expense = expense_service.update_expense(
            expense_id,
            ctx.obj["user_id"],
            amount=new_amount,
            description=description,
            category=category,
            date=new_date,
            account_id=account_id,
            clear_account=no_account,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated expense {expense.id}")
    click.echo(f"  Amount: {expense.amount:,.2f}")
    _show_balance(ctx, account_service, expense.account_id)


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_context
def delete_expense(ctx, expense_id: int) -> None:
    """Delete an expense and return its amount to the linked account."""
    expense_service = ExpenseService(ctx.obj["db"])

    try:
        deleted = expense_service.delete_expense(expense_id, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not deleted:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
