"""CLI helpers for date range resolution."""

from datetime import date

import click

from finrecon.utils.date_parser import PERIODS, get_date_range, parse_date


def date_range_options(func):
    """Add --start-date, --end-date and one flag per named period."""
    for period in reversed(PERIODS):
        label = period.replace("-", " ")
        func = click.option(
            f"--{period}", "period_" + period.replace("-", "_"), is_flag=True,
            help=f"Filter to {label}",
        )(func)
    func = click.option(
        "--end-date", help="End date (YYYY-MM-DD or relative like 'today')"
    )(func)
    func = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')"
    )(func)
    return func


def pop_period_flags(kwargs: dict) -> dict[str, bool]:
    """Remove period flag values added by date_range_options from kwargs."""
    return {
        period: bool(kwargs.pop("period_" + period.replace("-", "_"), False))
        for period in PERIODS
    }


def _parse_bound(ctx, label: str, value: str | None) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve the requested date range from a period flag or explicit dates.

    At most one period flag may be set, and never together with explicit
    dates. default_range applies only when nothing at all was requested.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        flag_names = ", ".join(f"--{period}" for period in PERIODS)
        click.echo(
            f"Error: Only one period option ({flag_names}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --last-quarter, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = _parse_bound(ctx, "start", start_date)
    end = _parse_bound(ctx, "end", end_date)
    if start is None and end is None and default_range is not None:
        return default_range
    return start, end
