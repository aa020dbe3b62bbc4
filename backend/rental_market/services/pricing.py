"""Rental price computation."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def rental_days(start_date: date, end_date: date) -> int:
    """Inclusive day count: the same start and end date is one day."""
    if end_date < start_date:
        raise ValueError("end_date must not be before start_date")
    return (end_date - start_date).days + 1


def compute_total(price_per_day: Decimal, start_date: date, end_date: date) -> Decimal:
    """Return price_per_day * inclusive days, quantized to cents."""
    days = rental_days(start_date, end_date)
    total = Decimal(str(price_per_day)) * days
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)
