"""
Onderhoud (maintenance) scope calculators.

Covers:
  - Gras / borders: mowing, edging, scarifying, weeding, pruning (backlog-sensitive)
  - Heggen: volume-based pruning, basic and extended (species, substrate,
    annual frequency, lift rental)
  - Bomen: per-tree pruning, basic and extended (height classes, additive
    safety surcharges, inspections, crown-based waste removal)
  - Reiniging: terrace cleaning, leaf clearing, weeds in paving, algae
  - Bemesting: fertilizer rounds with a fixed 70 % line margin
  - Gazonanalyse: lawn assessment and repair actions
  - Mollenbestrijding: service packages and add-ons
  - Overig: flat-rate odd jobs and free hours

Line scopes are the short quote scopes (``gras``, ``heggen``, ``bomen`` ...),
while normuren are looked up under their ``*_onderhoud`` table scope.
"""
import math
from typing import List, Optional

from hovenier.models.quote import CalculationContext, LineItem
from hovenier.models.scope_data import (
    BemestingOnderhoudData,
    BomenOnderhoudData,
    BomenOnderhoudExtendedData,
    BordersOnderhoudData,
    GazonanalyseOnderhoudData,
    GrasOnderhoudData,
    HeggenOnderhoudData,
    HeggenOnderhoudExtendedData,
    MollenbestrijdingOnderhoudData,
    OverigOnderhoudData,
    ReinigingOnderhoudData,
)
from hovenier.services.line_items import (
    fixed_line,
    labor_from_standard_hours,
    labor_line,
    machine_line,
    material_line,
)
from hovenier.services.lookups import (
    accessibility_factor,
    backlog_factor,
    compose_additive_percent,
    compose_multiplicative,
    find_standard_hours,
)
from hovenier.services.scope_registry import register_calculator


def _add(lines: List[LineItem], line: Optional[LineItem]) -> None:
    if line is not None:
        lines.append(line)


def _days_label(days: int) -> str:
    return f"{days} dag" if days == 1 else f"{days} dagen"


# ---------------------------------------------------------------------------
# Gras & borders
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "gras", GrasOnderhoudData)
def calculate_gras_onderhoud(data: GrasOnderhoudData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if not data.grass_present or data.area <= 0:
        return lines

    access = accessibility_factor(ctx)
    backlog = backlog_factor(ctx)

    if data.mowing:
        _add(lines, labor_from_standard_hours(
            ctx, "gras_onderhoud", "maaien", data.area, "gras", "Gras maaien",
            compose_multiplicative(access, backlog),
        ))
    if data.edging:
        edge_m = 4 * math.sqrt(data.area)
        _add(lines, labor_from_standard_hours(
            ctx, "gras_onderhoud", "kanten", edge_m, "gras", "Kanten steken",
            compose_multiplicative(access, backlog),
        ))
    if data.scarifying:
        _add(lines, labor_from_standard_hours(
            ctx, "gras_onderhoud", "verticuteren", data.area, "gras", "Verticuteren", access,
        ))
    return lines


@register_calculator("onderhoud", "borders", BordersOnderhoudData)
def calculate_borders_onderhoud(
    data: BordersOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.area <= 0:
        return lines

    factor = compose_multiplicative(accessibility_factor(ctx), backlog_factor(ctx))

    if data.weeding:
        intensity = data.maintenance_intensity
        _add(lines, labor_from_standard_hours(
            ctx, "borders_onderhoud", f"wieden {intensity}", data.area,
            "borders", f"Wieden ({intensity})", factor,
        ))
    if data.pruning != "geen":
        _add(lines, labor_from_standard_hours(
            ctx, "borders_onderhoud", f"snoei {data.pruning}", data.area,
            "borders", f"Snoei borders ({data.pruning})", factor,
        ))
    return lines


# ---------------------------------------------------------------------------
# Heggen
# ---------------------------------------------------------------------------

def _hedge_height_factor(height: float, ctx: CalculationContext) -> float:
    c = ctx.constants
    return c.height_surcharge_factor if height > c.height_threshold_m else 1.0


@register_calculator("onderhoud", "heggen", HeggenOnderhoudData)
def calculate_heggen_onderhoud(
    data: HeggenOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    volume = data.length * data.height * data.breadth
    if min(data.length, data.height, data.breadth) <= 0:
        return lines

    access = accessibility_factor(ctx)
    _add(lines, labor_from_standard_hours(
        ctx, "heggen_onderhoud", "heg snoeien", volume, "heggen", "Heg snoeien",
        compose_multiplicative(access, _hedge_height_factor(data.height, ctx), backlog_factor(ctx)),
    ))
    if data.haul_away:
        _add(lines, labor_from_standard_hours(
            ctx, "heggen_onderhoud", "snoeisel afvoeren",
            volume * ctx.constants.prune_waste_volume_factor,
            "heggen", "Snoeisel afvoeren", access,
        ))
    return lines


@register_calculator("onderhoud", "heggen_extended", HeggenOnderhoudExtendedData)
def calculate_heggen_onderhoud_extended(
    data: HeggenOnderhoudExtendedData, ctx: CalculationContext
) -> List[LineItem]:
    """
    Basic hedge pruning plus species, substrate and annual frequency.

    Hours are per pruning round and multiplied by ``frequency``; a lift is
    rented when the hedge is taller than the lift threshold or when the
    client asks for one, ``ceil(length / meters_per_day)`` days per round.
    """
    lines: List[LineItem] = []
    volume = data.length * data.height * data.breadth
    if min(data.length, data.height, data.breadth) <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)
    species = c.hedge_species_factors.get(data.species, 1.0) if data.species else 1.0
    substrate = c.hedge_substrate_factors.get(data.substrate, 1.0) if data.substrate else 1.0
    frequency = data.frequency

    per_round = compose_multiplicative(
        access,
        _hedge_height_factor(data.height, ctx),
        species,
        substrate,
        backlog_factor(ctx),
    )
    label = f"Heg snoeien ({frequency}x per jaar)" if frequency > 1 else "Heg snoeien"
    _add(lines, labor_from_standard_hours(
        ctx, "heggen_onderhoud", "heg snoeien", volume, "heggen", label, per_round * frequency,
    ))

    if data.haul_away:
        _add(lines, labor_from_standard_hours(
            ctx, "heggen_onderhoud", "snoeisel afvoeren",
            volume * c.prune_waste_volume_factor,
            "heggen", "Snoeisel afvoeren", access * frequency,
        ))

    if data.lift_required or data.height > c.lift_height_threshold_m:
        days = math.ceil(data.length / c.lift_meters_per_day) * frequency
        lines.append(machine_line(
            "heggen", f"Hoogwerker huur ({_days_label(days)})", days, c.lift_day_rate,
        ))

    return lines


# ---------------------------------------------------------------------------
# Bomen
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "bomen", BomenOnderhoudData)
def calculate_bomen_onderhoud(data: BomenOnderhoudData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.tree_count <= 0:
        return lines

    height = ctx.constants.height_surcharge_factor if data.height_class == "hoog" else 1.0
    _add(lines, labor_from_standard_hours(
        ctx, "bomen_onderhoud", f"boom snoeien {data.pruning}", data.tree_count,
        "bomen", f"Bomen snoeien ({data.pruning})",
        compose_multiplicative(accessibility_factor(ctx), height, backlog_factor(ctx)),
    ))
    return lines


def _tree_height_factor(data: BomenOnderhoudExtendedData, ctx: CalculationContext) -> float:
    c = ctx.constants
    height_m = data.height_m
    if data.height_class == "zeer_hoog" or (
        height_m is not None and height_m > c.tree_very_high_threshold_m
    ):
        return c.tree_very_high_factor
    if data.height_class == "hoog" or (height_m is not None and height_m > c.tree_high_threshold_m):
        return c.tree_high_factor
    return 1.0


def _tree_safety_factor(data: BomenOnderhoudExtendedData, ctx: CalculationContext) -> float:
    c = ctx.constants
    points = []
    if data.near_street:
        points.append(c.tree_near_street_percent)
    if data.near_building:
        points.append(c.tree_near_building_percent)
    if data.near_cables:
        points.append(c.tree_near_cables_percent)
    return compose_additive_percent(*points)


@register_calculator("onderhoud", "bomen_extended", BomenOnderhoudExtendedData)
def calculate_bomen_onderhoud_extended(
    data: BomenOnderhoudExtendedData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    trees = data.tree_count
    if trees <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate

    # Multiplicative block first, then the additive safety block
    factor = compose_multiplicative(
        access, _tree_height_factor(data, ctx), backlog_factor(ctx)
    ) * _tree_safety_factor(data, ctx)
    _add(lines, labor_from_standard_hours(
        ctx, "bomen_onderhoud", f"boom snoeien {data.pruning}", trees,
        "bomen", f"Bomen snoeien ({data.pruning})", factor,
    ))

    if data.inspection == "visueel":
        lines.append(labor_line(
            "bomen", "Boominspectie (visueel)",
            c.tree_visual_inspection_hours * trees * access, hourly_rate,
        ))
    elif data.inspection == "gecertificeerd":
        lines.append(fixed_line(
            "bomen", "Boominspectie (gecertificeerd)", "boom", trees,
            c.tree_certified_inspection_price, "arbeid",
        ))

    if data.haul_away:
        crown = data.crown_diameter_m
        if crown is None:
            crown = c.tree_default_crown_diameter_m
        waste_hours = crown * crown * c.tree_waste_hours_factor * trees
        entry = find_standard_hours(ctx.standard_hours, "bomen_onderhoud", "afvoer")
        if entry is not None:
            waste_hours *= entry.hours_per_unit
        lines.append(labor_line("bomen", "Snoeihout afvoeren", waste_hours * access, hourly_rate))

    return lines


# ---------------------------------------------------------------------------
# Reiniging
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "reiniging", ReinigingOnderhoudData)
def calculate_reiniging_onderhoud(
    data: ReinigingOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate

    if data.terrace_cleaning and data.terrace_area > 0:
        area = data.terrace_area
        type_factor = c.terrace_type_factors.get(data.terrace_type, 1.0) if data.terrace_type else 1.0
        entry = find_standard_hours(ctx.standard_hours, "overig_onderhoud", "terras reinigen")
        per_m2 = entry.hours_per_unit if entry is not None else c.terrace_cleaning_hours_per_m2
        label = f"Terras reinigen ({data.terrace_type})" if data.terrace_type else "Terras reinigen"
        lines.append(labor_line("reiniging", label, area * per_m2 * type_factor * access, hourly_rate))
        lines.append(material_line(
            "reiniging", "Reinigingsmiddel", area, "m²", c.detergent_price_per_m2, 0,
        ))

    if data.leaf_clearing and data.leaf_area > 0:
        area = data.leaf_area
        seasonal = data.leaf_frequency == "seizoen"
        rounds = c.seasonal_leaf_rounds if seasonal else 1
        label = f"Bladruimen ({rounds} beurten)" if seasonal else "Bladruimen (eenmalig)"
        lines.append(labor_line(
            "reiniging", label, area * c.leaf_clearing_hours_per_m2 * rounds * access, hourly_rate,
        ))
        lines.append(labor_line(
            "reiniging", "Blad afvoeren",
            area * c.leaf_removal_hours_per_m2 * rounds * access, hourly_rate,
        ))

    method = c.weed_methods.get(data.weed_method)
    if data.paving_weeds and data.weed_area > 0 and method is not None:
        area = data.weed_area
        lines.append(labor_line(
            "reiniging", f"Onkruid bestrating ({method.label})",
            area * method.hours_per_m2 * access, hourly_rate,
        ))
        if method.machine_price > 0:
            lines.append(machine_line("reiniging", method.machine_description, 1, method.machine_price))
        if method.material_price_per_m2 > 0:
            lines.append(material_line(
                "reiniging", "Onkruidbestrijdingsmiddel", area, "m²",
                method.material_price_per_m2, 0,
            ))

    if data.algae_cleaning and data.algae_area > 0:
        area = data.algae_area
        lines.append(labor_line(
            "reiniging", "Algereiniging", area * c.algae_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "reiniging", "Anti-alg middel", area, "m²", c.anti_algae_price_per_m2, 0,
        ))

    return lines


# ---------------------------------------------------------------------------
# Bemesting
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "bemesting", BemestingOnderhoudData)
def calculate_bemesting_onderhoud(
    data: BemestingOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    """Every fertilization line carries the fixed fertilization margin."""
    lines: List[LineItem] = []
    area = data.area
    if area <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate
    margin = c.fertilization_margin_percent
    product = data.product_type
    frequency = data.frequency
    discount = c.fertilizer_repeat_discount_factor if frequency >= 2 else 1.0

    label = f"Bemesting aanbrengen ({product})"
    if frequency > 1:
        label += f" ({frequency}x per jaar)"
    hours = area * c.fertilizer_hours_per_m2 * frequency * discount
    lines.append(labor_line("bemesting", label, hours * access, hourly_rate, margin))

    price = c.fertilizer_prices.get(product, c.fertilizer_prices.get("basis", 0.0))
    lines.append(material_line(
        "bemesting", f"Bemestingsproduct ({product})", area * frequency, "m²", price, 0, margin,
    ))

    if data.lime_treatment:
        lines.append(labor_line(
            "bemesting", "Kalkbehandeling", area * c.lime_hours_per_m2 * access, hourly_rate, margin,
        ))
        lines.append(material_line(
            "bemesting", "Kalk", area, "m²", c.lime_price_per_m2, 0, margin,
        ))

    if data.soil_analysis:
        lines.append(fixed_line(
            "bemesting", "Grondanalyse", "analyse", 1, c.soil_analysis_price, "materiaal", margin,
        ))

    return lines


# ---------------------------------------------------------------------------
# Gazonanalyse
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "gazonanalyse", GazonanalyseOnderhoudData)
def calculate_gazonanalyse_onderhoud(
    data: GazonanalyseOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    area = data.area
    if area <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate
    actions = data.repair_actions

    # On-site assessment is a flat visit, independent of accessibility
    lines.append(labor_line(
        "gazonanalyse", "Gazonbeoordeling ter plaatse", c.lawn_assessment_hours, hourly_rate,
    ))

    if actions.scarify:
        lines.append(labor_line(
            "gazonanalyse", "Verticuteren", area * c.scarify_hours_per_m2 * access, hourly_rate,
        ))
        days = max(1, math.ceil(area / c.scarifier_m2_per_day))
        lines.append(machine_line(
            "gazonanalyse", f"Verticuteer-machine huur ({_days_label(days)})",
            days, c.scarifier_day_rate,
        ))

    if actions.overseed:
        lines.append(labor_line(
            "gazonanalyse", "Doorzaaien", area * c.overseed_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "gazonanalyse", "Graszaad (doorzaaien)", area, "m²", c.overseed_price_per_m2, 0,
        ))

    if actions.new_sod:
        lines.append(labor_line(
            "gazonanalyse", "Nieuwe grasmat leggen",
            area * c.new_sod_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "gazonanalyse", "Graszoden", area, "m²",
            c.new_sod_price_per_m2, c.new_sod_wastage_percent,
        ))

    if actions.strip:
        lines.append(labor_line(
            "gazonanalyse", "Plaggen (zode verwijderen)",
            area * c.strip_hours_per_m2 * access, hourly_rate,
        ))
        waste_m3 = area * c.strip_waste_m3_per_m2
        lines.append(labor_line(
            "gazonanalyse", "Plagsel afvoeren",
            waste_m3 * c.strip_waste_hours_per_m3 * access, hourly_rate,
        ))

    if actions.reseed_bare_patches:
        patch_m2 = actions.bare_patch_area
        if patch_m2 is None:
            patch_m2 = math.ceil(area * c.bare_patch_ratio)
        lines.append(labor_line(
            "gazonanalyse", "Bijzaaien kale plekken",
            patch_m2 * c.bare_patch_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "gazonanalyse", "Graszaad (kale plekken)", patch_m2, "m²",
            c.bare_patch_seed_price_per_m2, 0,
        ))

    if data.liming:
        lines.append(labor_line(
            "gazonanalyse", "Bekalken gazon", area * c.lawn_lime_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "gazonanalyse", "Kalk (gazon)", area, "m²", c.lawn_lime_price_per_m2, 0,
        ))

    if data.drainage:
        # Drainage is priced through the aanleg gras scope; leave a memo row
        lines.append(fixed_line(
            "gazonanalyse",
            "OPMERKING: Drainage — zie aanleg calculator voor gedetailleerde berekening",
            "p.m.", 1, 0.0, "arbeid",
        ))

    return lines


# ---------------------------------------------------------------------------
# Mollenbestrijding
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "mollenbestrijding", MollenbestrijdingOnderhoudData)
def calculate_mollenbestrijding_onderhoud(
    data: MollenbestrijdingOnderhoudData, ctx: CalculationContext
) -> List[LineItem]:
    lines: List[LineItem] = []
    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate

    package = c.mole_packages.get(data.package)
    if package is not None:
        lines.append(labor_line(
            "mollenbestrijding", package.visit_description,
            package.visits * package.hours_per_visit * access, hourly_rate,
        ))
        lines.append(material_line(
            "mollenbestrijding", package.kit_description, 1, "set", package.kit_price, 0,
        ))
        lines.append(labor_line(
            "mollenbestrijding", package.check_description,
            package.checks * package.hours_per_check * access, hourly_rate,
        ))

    add_ons = data.add_ons
    if add_ons.lawn_repair and add_ons.repair_area > 0:
        lines.append(labor_line(
            "mollenbestrijding", "Gazonherstel na mollenschade",
            add_ons.repair_area * c.mole_repair_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "mollenbestrijding", "Graszaad (mollenherstel)", add_ons.repair_area, "m²",
            c.mole_repair_seed_price_per_m2, 0,
        ))
    if add_ons.preventive_mesh and add_ons.mesh_area > 0:
        lines.append(labor_line(
            "mollenbestrijding", "Preventiefgaas aanbrengen",
            add_ons.mesh_area * c.mole_mesh_hours_per_m2 * access, hourly_rate,
        ))
        lines.append(material_line(
            "mollenbestrijding", "Mollenwerend gaas", add_ons.mesh_area, "m²",
            c.mole_mesh_price_per_m2, 0,
        ))
    if add_ons.return_check:
        lines.append(labor_line(
            "mollenbestrijding", "Terugkeer-check (1 bezoek)",
            c.mole_return_check_hours * access, hourly_rate,
        ))

    return lines


# ---------------------------------------------------------------------------
# Overig
# ---------------------------------------------------------------------------

@register_calculator("onderhoud", "overig", OverigOnderhoudData)
def calculate_overig_onderhoud(data: OverigOnderhoudData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate

    if data.leaf_clearing:
        lines.append(labor_line("overig", "Bladruimen", c.leaf_clearing_hours_default * access, hourly_rate))
    if data.terrace_cleaning and data.terrace_area > 0:
        lines.append(labor_line(
            "overig", "Terras reinigen",
            data.terrace_area * c.terrace_cleaning_hours_per_m2 * access, hourly_rate,
        ))
    if data.paving_weeds and data.paving_area > 0:
        lines.append(labor_line(
            "overig", "Onkruid bestrating verwijderen",
            data.paving_area * c.paving_weeding_hours_per_m2 * access, hourly_rate,
        ))
    if data.drain_check and data.drain_points > 0:
        lines.append(labor_line(
            "overig", "Afwatering controleren",
            data.drain_points * c.drain_check_hours_per_point * access, hourly_rate,
        ))
    if data.extra_hours > 0:
        lines.append(labor_line(
            "overig", data.extra_notes or "Overige werkzaamheden",
            data.extra_hours * access, hourly_rate,
        ))
    return lines
