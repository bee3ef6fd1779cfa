"""Add transaction command."""

import click
from finrecon.cli.error_handling import handle_domain_error
from finrecon.domain.budget import BudgetService
from finrecon.domain.entities import SubCategory, TransactionSource, TransactionType
from finrecon.domain.errors import DomainError
from finrecon.domain.transaction import TransactionService
from finrecon.utils.amount_parser import parse_amount, parse_split
from finrecon.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    default=TransactionType.DEBIT.value,
    show_default=True,
    help="debit (expense) or credit (income)",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--category", help="Category label (e.g., 'Food')")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Transaction description")
@click.option("--account", default="", help="Account reference")
@click.option(
    "--source",
    type=click.Choice([s.value for s in TransactionSource]),
    default=TransactionSource.MANUAL.value,
    show_default=True,
    help="Where the transaction came from",
)
@click.option(
    "--split",
    "splits",
    multiple=True,
    help="Category slice as CATEGORY=AMOUNT (repeatable)",
)
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    category: str | None,
    date: str,
    description: str | None,
    account: str,
    source: str,
    splits: tuple[str, ...],
):
    """Add a transaction manually.

    Expenses are checked against matching expense budgets first; a warning
    is printed for each budget the new expense would exceed.

    Examples:
        finrecon add --amount 50.00 --category Food --description "Grocery store"
        finrecon add --type credit --amount 1000.00 --category Salary
        finrecon add --amount 80 --split Food=50 --split Household=30
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    budget_service = BudgetService(db)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
        sub_categories = [
            SubCategory(category=label, amount=value)
            for label, value in map(parse_split, splits)
        ]
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        alerts = []
        if txn_type == TransactionType.DEBIT.value:
            slices = sub_categories or [SubCategory(category=category, amount=txn_amount)]
            for sub in slices:
                if sub.category and sub.amount and sub.amount > 0:
                    alerts.extend(
                        budget_service.check_new_expense(sub.category, sub.amount, txn_date)
                    )

        transaction_id = transaction_service.create_transaction(
            type=txn_type,
            amount=txn_amount,
            category=category,
            date=txn_date,
            account_ref=account,
            description=description,
            source=source,
            sub_categories=sub_categories or None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Amount: {txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}")
    for sub in txn.sub_categories or ():
        click.echo(f"    {sub.category}: {sub.amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")

    for alert in alerts:
        click.echo(f"Warning: {alert.message}", err=True)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
