"""
Quote routes — stateless access to the line-item engine.

POST /api/quotes/calculate — scope data + rate tables → quote lines and totals
POST /api/quotes/totals    — re-aggregate an (edited) list of lines
POST /api/quotes/planning  — hours per scope and project duration
GET  /api/quotes/scopes    — registered (quote_type, scope_id) pairs

The caller sends the rate tables with every request; nothing is stored.
"""
import json
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError

from hovenier.config import DEFAULT_CORRECTION_FACTORS, get_pricing_constants
from hovenier.models.quote import CalculationInput, LineItem, Totals
from hovenier.models.rates import CorrectionFactor, Product, RateTables, Settings, StandardHoursEntry
from hovenier.services.planning_engine import (
    estimate_project_duration,
    format_days,
    format_hours,
    hours_per_scope,
)
from hovenier.services.quote_engine import QuoteEngine
from hovenier.services.scope_registry import registered_scopes
from hovenier.services.totals_engine import aggregate_totals

router = APIRouter(prefix="/api/quotes", tags=["Quotes"])
logger = logging.getLogger("hovenier-api")


# ─── Pydantic schemas ────────────────────────────────────────────────────────

class RatesPayload(BaseModel):
    standard_hours: List[StandardHoursEntry] = Field(default_factory=list)
    # Omitted → the built-in seed table; an explicit [] disables all factors
    correction_factors: Optional[List[CorrectionFactor]] = None
    products: List[Product] = Field(default_factory=list)
    settings: Settings


class WarrantyPackage(BaseModel):
    name: str
    price: float = Field(..., ge=0)


class CalculateRequest(BaseModel):
    input: CalculationInput
    rates: RatesPayload
    scope_margins: Optional[Dict[str, float]] = Field(
        None, description="Per-scope margins; falls back to settings.scope_margins"
    )
    include_overhead: bool = False
    warranty_package: Optional[WarrantyPackage] = None


class CalculateResponse(BaseModel):
    lines: List[LineItem]
    totals: Totals


class TotalsRequest(BaseModel):
    lines: List[LineItem]
    margin_percent: float
    vat_percent: float
    scope_margins: Optional[Dict[str, float]] = None


class PlanningRequest(BaseModel):
    lines: List[LineItem]
    team_size: int
    effective_hours_per_day: float = 7.0
    buffer_percent: float = 10.0


# ─── Routes ──────────────────────────────────────────────────────────────────

@router.post("/calculate", response_model=CalculateResponse)
async def calculate_quote(body: CalculateRequest, request: Request):
    """Generate all quote lines for the requested scopes and aggregate them."""
    # Picked up by RequestTimingMiddleware for the request log line
    request.state.quote_type = body.input.quote_type
    request.state.scope_count = len(body.input.scope_ids)
    rates = body.rates
    tables = RateTables(
        standard_hours=rates.standard_hours,
        correction_factors=(
            rates.correction_factors
            if rates.correction_factors is not None
            else DEFAULT_CORRECTION_FACTORS
        ),
        products=rates.products,
        settings=rates.settings,
    )
    engine = QuoteEngine(tables, get_pricing_constants())

    warranty = body.warranty_package
    try:
        lines = engine.generate(
            body.input,
            include_overhead=body.include_overhead,
            warranty_package=warranty.name if warranty else None,
            warranty_price=warranty.price if warranty else 0.0,
        )
    except ValidationError as e:
        logger.warning(
            f"Scope data rejected: {e.error_count()} error(s)",
            extra={"quote_type": body.input.quote_type},
        )
        raise HTTPException(status_code=422, detail=json.loads(e.json()))
    request.state.line_count = len(lines)

    scope_margins = body.scope_margins if body.scope_margins is not None else rates.settings.scope_margins
    totals = aggregate_totals(
        lines,
        rates.settings.default_margin_percent,
        rates.settings.vat_percent,
        scope_margins,
    )
    return CalculateResponse(lines=lines, totals=totals)


@router.post("/totals", response_model=Totals)
async def calculate_totals(body: TotalsRequest):
    return aggregate_totals(body.lines, body.margin_percent, body.vat_percent, body.scope_margins)


@router.post("/planning")
async def plan_project(body: PlanningRequest):
    """Hours per scope from the labor lines plus a duration estimate for the crew."""
    hours = hours_per_scope(body.lines)
    try:
        duration = estimate_project_duration(
            hours["total_hours"],
            body.team_size,
            effective_hours_per_day=body.effective_hours_per_day,
            buffer_percent=body.buffer_percent,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        **hours,
        "duration": duration,
        "display": {
            "total_hours": format_hours(hours["total_hours"]),
            "estimated_days": format_days(duration["estimated_days"]),
            "estimated_days_with_buffer": format_days(duration["estimated_days_with_buffer"]),
        },
    }


@router.get("/scopes")
async def list_scopes():
    return {
        "scopes": [
            {"quote_type": quote_type, "scope_id": scope_id}
            for quote_type, scope_id in registered_scopes()
        ]
    }
