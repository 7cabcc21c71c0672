"""Helpers for Decimal normalization and cents conversion."""

from decimal import Decimal

CENTS_PER_UNIT = Decimal("100")


def cents_to_major(cents: int) -> Decimal:
    """Convert integer cents to major units (12345 -> Decimal("123.45"))."""
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


def format_major(cents: int) -> str:
    """Format cents as a plain major-unit amount with two decimals."""
    return f"{cents_to_major(cents):,.2f}"


__all__ = [
    "CENTS_PER_UNIT",
    "cents_to_major",
    "format_major",
]
