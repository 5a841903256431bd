"""
Reference rate tables consumed by the quote engine.

These records are owned by the rates catalog / settings page of the
surrounding application. The engine only reads them; every table must be
fully loaded before a calculation is started.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class StandardHoursEntry(BaseModel):
    """Normuur: labor hours per unit of work for a named activity within a scope."""
    scope: str = Field(..., description="Normuren scope key, e.g. grondwerk, heggen_onderhoud")
    activity: str = Field(..., description="e.g. 'ontgraven standaard'")
    hours_per_unit: float
    unit: str = Field(..., description="m2, m, m3, stuk")
    description: Optional[str] = None


class CorrectionFactor(BaseModel):
    """Correctiefactor: multiplier keyed by category and selected value."""
    type: str          # bereikbaarheid, snijwerk, achterstalligheid, ...
    value: str         # goed, beperkt, slecht, ...
    factor: float
    description: Optional[str] = None


class Product(BaseModel):
    """Priced material from the price book."""
    name: str
    sell_price: float
    unit: str
    wastage_percent: float = 0.0   # inflates quantity before pricing
    category: Optional[str] = None
    purchase_price: Optional[float] = None


class Settings(BaseModel):
    hourly_rate: float
    default_margin_percent: float
    vat_percent: float
    # Per-scope margin overrides, keyed by line scope (e.g. "bestrating": 25.0)
    scope_margins: Dict[str, float] = Field(default_factory=dict)


class RateTables(BaseModel):
    """The four reference tables bundled for transport."""
    standard_hours: List[StandardHoursEntry] = Field(default_factory=list)
    correction_factors: List[CorrectionFactor] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    settings: Settings
