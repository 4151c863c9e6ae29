"""Rolling period window used by multi-month DRE reports."""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from dateutil.relativedelta import relativedelta

from dre_engine.domain.entities import Period
from dre_engine.domain.errors import ValidationError, invalid_month

# Report month plus the twelve months before it.
DEFAULT_WINDOW_LENGTH = 13

# Months summed into the trailing total of a report line.
TRAILING_MONTHS = 12


def validate_period(month: int, year: int) -> None:
    """Raise ValidationError unless month is within 1..12 and year is positive."""
    if not 1 <= month <= 12:
        raise ValidationError(invalid_month(month))
    if year < 1:
        raise ValidationError(f"Invalid year {year}")


def build_window(month: int, year: int, length: int = DEFAULT_WINDOW_LENGTH) -> tuple[Period, ...]:
    """Build the chronological window of periods ending at (month, year).

    The first period is ``length - 1`` months before the report month, so
    with the default length the window runs from the same month of the
    previous year up to and including the report month.

    Args:
        month: Report month (1-12)
        year: Report year
        length: Number of periods in the window

    Returns:
        Tuple of periods, oldest first

    Raises:
        ValidationError: If month is out of range or length is not positive
    """
    validate_period(month, year)
    if length < 1:
        raise ValidationError(f"Window length must be positive, got {length}")

    end = date(year, month, 1)
    start = end - relativedelta(months=length - 1)
    periods = []
    for offset in range(length):
        current = start + relativedelta(months=offset)
        periods.append(Period(year=current.year, month=current.month))
    return tuple(periods)


def trailing_total(values_by_period: Mapping[str, Decimal], periods: Sequence[Period]) -> Decimal:
    """Sum the most recent TRAILING_MONTHS periods of the window.

    With the default 13-period window this skips only the oldest period.
    Shorter windows are summed in full.
    """
    return sum(
        (values_by_period.get(period.key, Decimal("0")) for period in periods[-TRAILING_MONTHS:]),
        Decimal("0"),
    )


def current_period(today: Optional[date] = None) -> Period:
    """Return the period containing today."""
    today = today or date.today()
    return Period(year=today.year, month=today.month)
