"""
QuoteEngine — turns a calculation request into a flat list of quote lines.

Covers:
  - Dispatch of each requested scope to its registered calculator
  - Parsing raw scope mappings into their typed records
  - Per-call context carrying the request's accessibility and backlog
  - Optional quote-wide rows (preparation overhead, warranty package)

Scopes without data and unknown ``(quote_type, scope_id)`` pairs are skipped.
Output order is request order across scopes and calculator order within a
scope. The caller's context is never modified.
"""
import logging
from typing import List, Optional

# Imported for their registrations
from hovenier.services import aanleg_calculators  # noqa: F401
from hovenier.services import onderhoud_calculators  # noqa: F401

from hovenier.models.pricing_constants import PricingConstants
from hovenier.models.quote import CalculationContext, CalculationInput, LineItem
from hovenier.models.rates import RateTables
from hovenier.services.line_items import quote_overhead_line, warranty_package_line
from hovenier.services.scope_registry import get_calculator

logger = logging.getLogger("hovenier.engine")


def generate_line_items(request: CalculationInput, context: CalculationContext) -> List[LineItem]:
    """
    Run every requested scope through its calculator.

    Raises pydantic ``ValidationError`` when a scope mapping cannot be parsed
    into its record.
    """
    ctx = context.model_copy(update={
        "accessibility": request.accessibility,
        "backlog_severity": request.backlog_severity,
    })

    lines: List[LineItem] = []
    for scope_id in request.scope_ids:
        raw = request.scope_data.get(scope_id)
        if not raw:
            continue

        calculator = get_calculator(request.quote_type, scope_id)
        if calculator is None:
            logger.debug(
                "no calculator registered, scope skipped",
                extra={"quote_type": request.quote_type, "scope_id": scope_id},
            )
            continue

        scope_lines = calculator.calculate(calculator.parse(raw), ctx)
        logger.debug(
            "scope calculated",
            extra={"scope_id": scope_id, "line_count": len(scope_lines)},
        )
        lines.extend(scope_lines)

    logger.info(
        "quote lines generated",
        extra={
            "quote_type": request.quote_type,
            "scope_count": len(request.scope_ids),
            "line_count": len(lines),
        },
    )
    return lines


class QuoteEngine:
    """
    Holds a set of rate tables and pricing constants so one loaded rate set
    can price many requests.
    """

    def __init__(
        self,
        tables: RateTables,
        constants: Optional[PricingConstants] = None,
    ) -> None:
        self.context = CalculationContext.from_rate_tables(tables, constants)

    @property
    def constants(self) -> PricingConstants:
        return self.context.constants

    def generate(
        self,
        request: CalculationInput,
        include_overhead: bool = False,
        warranty_package: Optional[str] = None,
        warranty_price: float = 0.0,
    ) -> List[LineItem]:
        """Scope lines, then the overhead row, then the warranty row when requested."""
        lines = generate_line_items(request, self.context)
        if include_overhead:
            lines.append(quote_overhead_line(self.constants))
        if warranty_package:
            lines.append(warranty_package_line(warranty_package, warranty_price))
        return lines
