"""DRE report command."""

from decimal import Decimal
from typing import Sequence

import click
from dre_engine.cli.error_handling import handle_domain_error
from dre_engine.domain.entities import Period, ReportLine
from dre_engine.domain.errors import DomainError
from dre_engine.domain.periods import DEFAULT_WINDOW_LENGTH, current_period
from dre_engine.domain.report import DreReportService
from dre_engine.utils.company_resolver import resolve_company

INDENT_SIZE = 4
NAME_WIDTH = 44
AMOUNT_WIDTH = 16


def format_amount(value: Decimal) -> str:
    """Format a monetary value with thousands separators and two decimals."""
    return f"{value:,.2f}"


def _display_lines(
    lines: Sequence[ReportLine], columns: Sequence[Period], indent: int = 0
) -> None:
    """Recursively display report lines with one amount per column plus the 12-month total."""
    for line in lines:
        indent_str = " " * (INDENT_SIZE * indent)
        label = f"{indent_str}{line.sign.value} {line.name}"
        amounts = "".join(
            f"{format_amount(line.value_for(period)):>{AMOUNT_WIDTH}}" for period in columns
        )
        total = f"{format_amount(line.trailing_12_month_total):>{AMOUNT_WIDTH}}"
        click.echo(f"{label:<{NAME_WIDTH}}{amounts}{total}")
        if line.children:
            _display_lines(line.children, columns, indent + 1)


@click.command("report")
@click.argument("company", metavar="COMPANY")
@click.option("--month", type=click.IntRange(1, 12), help="Report month (defaults to current month)")
@click.option("--year", type=int, help="Report year (defaults to current year)")
@click.option(
    "--months",
    type=click.IntRange(min=1),
    default=DEFAULT_WINDOW_LENGTH,
    show_default=True,
    help="Number of months in the rolling window, report month included",
)
@click.option("--all-periods", is_flag=True, help="Show one column per period of the window")
@click.option("--include-hidden", is_flag=True, help="Include accounts marked as not visible")
@click.option("--search", help="Only show root lines whose subtree matches this name")
@click.pass_context
def report(
    ctx,
    company: str,
    month: int | None,
    year: int | None,
    months: int,
    all_periods: bool,
    include_hidden: bool,
    search: str | None,
):
    """Show the DRE of a company.

    COMPANY can be a company name or ID. Values are shown for the report
    month together with the trailing 12-month total (the 12 most recent
    periods of the window).

    Examples:
        dre report "Acme Ltda" --month 3 --year 2024
        dre report 1 --all-periods
    """
    db = ctx.obj["db"]
    service = DreReportService(db)

    today = current_period()
    month = month if month is not None else today.month
    year = year if year is not None else today.year

    try:
        company_id = resolve_company(db, company)
        result = service.compute_report(
            company_id=company_id,
            month=month,
            year=year,
            months=months,
            include_hidden=include_hidden,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    lines = result.filter_by_name(search) if search else result.lines
    if not lines:
        if search:
            click.echo(f"No accounts matching '{search}'.")
        else:
            click.echo("No accounts configured for this company. Run 'init-chart' to create the default chart.")
        return

    company_obj = db.get_company(company_id)
    columns = result.periods if all_periods else result.periods[-1:]
    header = "".join(f"{period.label:>{AMOUNT_WIDTH}}" for period in columns)
    width = NAME_WIDTH + AMOUNT_WIDTH * (len(columns) + 1)

    click.echo(f"\nDRE - {company_obj.name} - {month:02d}/{year}")
    click.echo("-" * width)
    click.echo(f"{'Account':<{NAME_WIDTH}}{header}{'12 months':>{AMOUNT_WIDTH}}")
    click.echo("-" * width)
    _display_lines(lines, columns)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
