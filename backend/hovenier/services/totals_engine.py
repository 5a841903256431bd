"""
Totals aggregation for a list of quote lines.

Margin is taken per line with the precedence line override, then the
scope margin map, then the global margin. Machine rental counts towards
labor cost (arbeidskosten). All currency figures are rounded to cents and
the hours total to a quarter hour.
"""
from typing import Dict, Iterable, Optional

from hovenier.models.quote import LineItem, Totals
from hovenier.services.rounding import round_money, round_to_quarter


def effective_margin_percent(
    line: LineItem,
    global_margin_percent: float,
    scope_margins: Optional[Dict[str, float]] = None,
) -> float:
    if line.margin_override_percent is not None:
        return line.margin_override_percent
    if scope_margins:
        scope_margin = scope_margins.get(line.scope)
        if scope_margin is not None:
            return scope_margin
    return global_margin_percent


def aggregate_totals(
    lines: Iterable[LineItem],
    global_margin_percent: float,
    vat_percent: float,
    scope_margins: Optional[Dict[str, float]] = None,
) -> Totals:
    material = 0.0
    labor = 0.0
    hours = 0.0
    margin_sum = 0.0

    for line in lines:
        margin_sum += line.total * effective_margin_percent(
            line, global_margin_percent, scope_margins
        ) / 100
        if line.kind == "materiaal":
            material += line.total
        else:
            labor += line.total
            # Hours are summed from "uur" lines only. The quantity of a flat
            # "vast" row (1) or a per-tree inspection row counts trees, not
            # hours, so arbeid lines in other units are left out on purpose.
            if line.kind == "arbeid" and line.unit == "uur":
                hours += line.quantity

    material_cost = round_money(material)
    labor_cost = round_money(labor)
    subtotal = round_money(material_cost + labor_cost)
    margin = round_money(margin_sum)
    ex_vat = round_money(subtotal + margin)
    vat = round_money(ex_vat * vat_percent / 100)

    if subtotal > 0:
        margin_percent = round_money(margin / subtotal * 100)
    else:
        margin_percent = global_margin_percent

    return Totals(
        material_cost=material_cost,
        labor_cost=labor_cost,
        total_hours=round_to_quarter(hours),
        subtotal=subtotal,
        margin=margin,
        effective_margin_percent=margin_percent,
        ex_vat=ex_vat,
        vat=vat,
        incl_vat=round_money(ex_vat + vat),
    )
