from hovenier.models.pricing_constants import PricingConstants
from hovenier.models.quote import (
    CalculationContext,
    CalculationInput,
    LineItem,
    Totals,
)
from hovenier.models.rates import (
    CorrectionFactor,
    Product,
    RateTables,
    Settings,
    StandardHoursEntry,
)

__all__ = [
    "CalculationContext",
    "CalculationInput",
    "CorrectionFactor",
    "LineItem",
    "PricingConstants",
    "Product",
    "RateTables",
    "Settings",
    "StandardHoursEntry",
    "Totals",
]
