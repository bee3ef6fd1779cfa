"""Transaction listing and deletion commands."""

import click
from finrecon.cli.date_filters import date_range_options, pop_period_flags, resolve_cli_date_range
from finrecon.cli.error_handling import handle_domain_error
from finrecon.cli.formatting import echo_transactions
from finrecon.domain.entities import FilterType
from finrecon.domain.errors import DomainError
from finrecon.domain.pagination import DEFAULT_PAGE_SIZE
from finrecon.domain.transaction import TransactionService


@click.command("list")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option(
    "--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True, help="Transactions per page"
)
@click.option("--category", help="Only transactions in this category ('All' for every category)")
@click.option(
    "--type",
    "filter_type",
    type=click.Choice([t.value for t in FilterType]),
    default=FilterType.BOTH.value,
    show_default=True,
    help="expense (debits), income (credits) or both",
)
@date_range_options
@click.pass_context
def list_transactions(
    ctx,
    page: int,
    page_size: int,
    category: str | None,
    filter_type: str,
    start_date: str | None,
    end_date: str | None,
    **kwargs,
) -> None:
    """List transactions, newest first.

    Examples:
        finrecon list
        finrecon list --page 2 --page-size 20
        finrecon list --category Food --this-month
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    transaction_service = TransactionService(ctx.obj["db"])
    try:
        result = transaction_service.list_transactions(
            page=page,
            page_size=page_size,
            start_date=start,
            end_date=end,
            category=category,
            type=filter_type,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    if result.total_count == 0:
        click.echo("No transactions found.")
        return
    echo_transactions(result.items, result.window)


@click.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction.

    Examples:
        finrecon delete 12
    """
    transaction_service = TransactionService(ctx.obj["db"])
    try:
        transaction_service.delete_transaction(transaction_id)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(list_transactions)
    cli.add_command(delete_transaction)
