"""Summary command."""

import click
from fintrack.domain.summary import SummaryService


@click.command("summary")
@click.pass_context
def show_summary(ctx):
    """Show income, spending and account positions."""
    summary = SummaryService(ctx.obj["db"]).get_summary(ctx.obj["user_id"])

    click.echo("\nSummary:")
    click.echo("-" * 40)
    click.echo(f"Income:        {summary.total_income:>14,.2f}")
    click.echo(f"Expenses:      {summary.total_expenses:>14,.2f} ({summary.expense_count} recorded)")
    click.echo(f"Net balance:   {summary.net_balance:>14,.2f}")
    click.echo(f"Funds held:    {summary.total_funds:>14,.2f}")
    click.echo(f"Card balances: {summary.total_owed:>14,.2f}")
    click.echo(f"Net position:  {summary.net_position:>14,.2f}")

    if summary.accounts:
        click.echo("\nAccounts:")
        for acc in summary.accounts:
            click.echo(f"  {acc.name:20s} {acc.type.value:11s} {acc.balance:>14,.2f}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(show_summary)
