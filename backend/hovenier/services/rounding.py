"""Rounding policy for quote lines: quarter hours and cents, half rounds up."""
import math


def round_to_quarter(hours: float) -> float:
    """Nearest 0.25; exact halves (x.125, x.375, ...) round up."""
    return math.floor(hours * 4 + 0.5) / 4


def round_money(amount: float) -> float:
    """Nearest 0.01; exact halves round up."""
    return math.floor(amount * 100 + 0.5) / 100
