"""
Line item factories.

Every quote row is built here so the rounding invariants hold in one place:
labor quantities are whole quarter hours, material quantities carry wastage
and are rounded to cents before pricing, and ``total`` is always
``round_money(quantity * unit_price)``.
"""
import logging
import uuid
from typing import Optional

from hovenier.models.pricing_constants import PricingConstants
from hovenier.models.quote import CalculationContext, LineItem, LineKind
from hovenier.services.lookups import find_product, find_standard_hours
from hovenier.services.rounding import round_money, round_to_quarter

logger = logging.getLogger("hovenier.engine")


def new_line_id() -> str:
    return f"regel_{uuid.uuid4().hex[:12]}"


def labor_line(
    scope: str,
    description: str,
    hours: float,
    hourly_rate: float,
    margin_override_percent: Optional[float] = None,
) -> LineItem:
    quantity = round_to_quarter(hours)
    return LineItem(
        id=new_line_id(),
        scope=scope,
        description=description,
        unit="uur",
        quantity=quantity,
        unit_price=hourly_rate,
        total=round_money(quantity * hourly_rate),
        kind="arbeid",
        margin_override_percent=margin_override_percent,
    )


def material_line(
    scope: str,
    description: str,
    quantity: float,
    unit: str,
    unit_price: float,
    wastage_percent: float = 0.0,
    margin_override_percent: Optional[float] = None,
) -> LineItem:
    """Wastage inflates the quantity; the rounded quantity is what gets priced."""
    with_wastage = round_money(quantity * (1 + wastage_percent / 100))
    return LineItem(
        id=new_line_id(),
        scope=scope,
        description=description,
        unit=unit,
        quantity=with_wastage,
        unit_price=unit_price,
        total=round_money(with_wastage * unit_price),
        kind="materiaal",
        margin_override_percent=margin_override_percent,
    )


def machine_line(
    scope: str, description: str, days: float, day_rate: float, unit: str = "dag"
) -> LineItem:
    return fixed_line(scope, description, unit, days, day_rate, "machine")


def fixed_line(
    scope: str,
    description: str,
    unit: str,
    quantity: float,
    unit_price: float,
    kind: LineKind,
    margin_override_percent: Optional[float] = None,
) -> LineItem:
    """Line with a caller-fixed quantity: rentals, inspections, packages, memo rows."""
    return LineItem(
        id=new_line_id(),
        scope=scope,
        description=description,
        unit=unit,
        quantity=quantity,
        unit_price=unit_price,
        total=round_money(quantity * unit_price),
        kind=kind,
        margin_override_percent=margin_override_percent,
    )


def quote_overhead_line(constants: Optional[PricingConstants] = None) -> LineItem:
    """Flat preparation and administration charge, once per quote."""
    constants = constants or PricingConstants()
    return fixed_line(
        "algemeen",
        "Offerte voorbereiding & administratie",
        "vast",
        1,
        constants.quote_overhead,
        "arbeid",
    )


def warranty_package_line(package_name: str, price: float) -> LineItem:
    return fixed_line(
        "garantie",
        f"Garantiepakket: {package_name}",
        "pakket",
        1,
        price,
        "materiaal",
    )


# ---------------------------------------------------------------------------
# Rate-table backed helpers used by the scope calculators
# ---------------------------------------------------------------------------

def labor_from_standard_hours(
    ctx: CalculationContext,
    normuren_scope: str,
    activity: str,
    quantity: float,
    line_scope: str,
    description: str,
    factor: float = 1.0,
) -> Optional[LineItem]:
    """
    ``quantity × hours_per_unit × factor`` hours for the first normuur whose
    activity contains ``activity``. Returns None (line omitted) on a miss.
    """
    entry = find_standard_hours(ctx.standard_hours, normuren_scope, activity)
    if entry is None:
        logger.debug(
            "normuur not found, line omitted",
            extra={"scope_id": normuren_scope, "activity": activity},
        )
        return None
    hours = quantity * entry.hours_per_unit * factor
    return labor_line(line_scope, description, hours, ctx.settings.hourly_rate)


def material_from_product(
    ctx: CalculationContext,
    search_term: str,
    quantity: float,
    unit: str,
    line_scope: str,
    description: str,
) -> Optional[LineItem]:
    """Material line priced from the first product whose name contains ``search_term``."""
    product = find_product(ctx.products, search_term)
    if product is None:
        logger.debug(
            "product not found, line omitted",
            extra={"scope_id": line_scope, "product": search_term},
        )
        return None
    return material_line(
        line_scope,
        description,
        quantity,
        unit,
        product.sell_price,
        product.wastage_percent,
    )
