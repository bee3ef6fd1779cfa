"""Budget management commands."""

import click
from finrecon.cli.error_handling import handle_domain_error
from finrecon.cli.formatting import format_amount
from finrecon.domain.budget import BudgetService
from finrecon.domain.entities import BudgetPeriod, BudgetType
from finrecon.domain.errors import DomainError
from finrecon.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage budgets and income goals."""
    pass


@budget_group.command("add")
@click.option("--category", required=True, help="Category the budget applies to")
@click.option("--amount", required=True, help="Budgeted amount (e.g., 1000.00)")
@click.option(
    "--type",
    "budget_type",
    type=click.Choice([t.value for t in BudgetType]),
    default=BudgetType.EXPENSE.value,
    show_default=True,
    help="expense (spending cap) or income (goal)",
)
@click.option(
    "--period",
    type=click.Choice([p.value for p in BudgetPeriod], case_sensitive=False),
    help="Budget period; budgets without one apply to every date range",
)
@click.pass_context
def add_budget(ctx, category: str, amount: str, budget_type: str, period: str | None) -> None:
    """Create a budget.

    Examples:
        finrecon budget add --category Food --amount 1000 --period Monthly
        finrecon budget add --category Salary --amount 5000 --type income
    """
    budget_service = BudgetService(ctx.obj["db"])

    try:
        budget_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        budget_id = budget_service.create_budget(
            category=category, type=budget_type, amount=budget_amount, period=period
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    budget = budget_service.get_budget(budget_id)
    click.echo(f"Created {budget.type.value} budget {budget_id}")
    click.echo(f"  Category: {budget.category}")
    click.echo(f"  Amount: {format_amount(budget.amount)}")
    if budget.period:
        click.echo(f"  Period: {budget.period.value}")


@budget_group.command("list")
@click.option(
    "--type",
    "budget_type",
    type=click.Choice([t.value for t in BudgetType]),
    help="Only list budgets of this type",
)
@click.pass_context
def list_budgets(ctx, budget_type: str | None) -> None:
    """List budgets."""
    budget_service = BudgetService(ctx.obj["db"])
    budgets = budget_service.list_budgets(budget_type)

    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo(f"{'ID':<6} {'Type':<8} {'Category':<30} {'Amount':>14}  {'Period':<10}")
    click.echo("-" * 72)
    for budget in budgets:
        period = budget.period.value if budget.period else "-"
        click.echo(
            f"{budget.id:<6} {budget.type.value:<8} {budget.category[:30]:<30} "
            f"{format_amount(budget.amount):>14}  {period:<10}"
        )


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_context
def delete_budget(ctx, budget_id: int) -> None:
    """Delete a budget."""
    budget_service = BudgetService(ctx.obj["db"])
    try:
        budget_service.delete_budget(budget_id)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted budget {budget_id}")


def register_commands(cli: click.Group) -> None:
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
