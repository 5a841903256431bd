"""
Rate-table lookups and correction-factor composition.

Activity and product names are matched by case-insensitive substring and the
first matching row in table order wins, so one normuur row such as
"ontgraven standaard (machinaal)" serves the lookup "ontgraven standaard".
"""
from typing import Iterable, Optional

from hovenier.models.quote import CalculationContext
from hovenier.models.rates import CorrectionFactor, Product, StandardHoursEntry


def resolve_correction_factor(
    factors: Iterable[CorrectionFactor], factor_type: str, value: Optional[str]
) -> float:
    """Return the factor for an exact ``(type, value)`` pair, else 1.0."""
    if value is None:
        return 1.0
    for cf in factors:
        if cf.type == factor_type and cf.value == value:
            return cf.factor
    return 1.0


def accessibility_factor(ctx: CalculationContext) -> float:
    return resolve_correction_factor(ctx.correction_factors, "bereikbaarheid", ctx.accessibility)


def backlog_factor(ctx: CalculationContext) -> float:
    """Achterstalligheid factor; 1.0 when the request states no backlog."""
    return resolve_correction_factor(
        ctx.correction_factors, "achterstalligheid", ctx.backlog_severity
    )


def find_standard_hours(
    entries: Iterable[StandardHoursEntry], scope: str, activity: str
) -> Optional[StandardHoursEntry]:
    needle = activity.lower()
    for entry in entries:
        if entry.scope == scope and needle in entry.activity.lower():
            return entry
    return None


def find_product(products: Iterable[Product], search_term: str) -> Optional[Product]:
    needle = search_term.lower()
    for product in products:
        if needle in product.name.lower():
            return product
    return None


def compose_multiplicative(*factors: float) -> float:
    """Product of all factors (accessibility, cutting, backlog, height, species, ...)."""
    result = 1.0
    for f in factors:
        result *= f
    return result


def compose_additive_percent(*points: float) -> float:
    """
    Surcharges expressed as percentage points are summed, not compounded:
    +20 and +15 give 1.35, not 1.38.
    """
    return 1.0 + sum(points) / 100.0
