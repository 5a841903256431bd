"""
Quote records: the calculation request, the per-call context, the generated
line items and the aggregated totals.
"""
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from hovenier.models.pricing_constants import PricingConstants
from hovenier.models.rates import (
    CorrectionFactor,
    Product,
    RateTables,
    Settings,
    StandardHoursEntry,
)


QuoteType = Literal["aanleg", "onderhoud"]
Accessibility = Literal["goed", "beperkt", "slecht"]
BacklogSeverity = Literal["laag", "gemiddeld", "hoog"]
LineKind = Literal["arbeid", "materiaal", "machine"]


class LineItem(BaseModel):
    """One priced row on a quote (offerteregel)."""
    id: str
    scope: str
    description: str
    unit: str
    quantity: float
    unit_price: float
    total: float
    kind: LineKind
    margin_override_percent: Optional[float] = None


class CalculationInput(BaseModel):
    quote_type: QuoteType
    scope_ids: List[str] = Field(default_factory=list)
    # Scope id → parsed scope record or raw mapping from the wizard
    scope_data: Dict[str, Any] = Field(default_factory=dict)
    accessibility: Accessibility = "goed"
    backlog_severity: Optional[BacklogSeverity] = None


class CalculationContext(BaseModel):
    """
    Everything a scope calculator reads besides its own scope record.

    The rate tables are treated as read-only; the dispatcher derives a copy
    per call carrying the request's accessibility and backlog severity.
    """
    standard_hours: List[StandardHoursEntry] = Field(default_factory=list)
    correction_factors: List[CorrectionFactor] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    settings: Settings
    accessibility: Accessibility = "goed"
    backlog_severity: Optional[BacklogSeverity] = None
    constants: PricingConstants = Field(default_factory=PricingConstants)

    @classmethod
    def from_rate_tables(
        cls,
        tables: RateTables,
        constants: Optional[PricingConstants] = None,
    ) -> "CalculationContext":
        return cls(
            standard_hours=tables.standard_hours,
            correction_factors=tables.correction_factors,
            products=tables.products,
            settings=tables.settings,
            constants=constants or PricingConstants(),
        )


class Totals(BaseModel):
    material_cost: float
    labor_cost: float          # arbeidskosten: labor plus machine rental
    total_hours: float
    subtotal: float
    margin: float
    effective_margin_percent: float
    ex_vat: float
    vat: float
    incl_vat: float
