"""
Aanleg (garden construction) scope calculators.

Covers:
  - Grondwerk: excavation by depth class, optional haul-away
  - Bestrating: paving by material, sand bed, edging, foundation profiles and zones
  - Borders: soil work, planting by intensity, ground cover, bark finish, soil improvement
  - Gras: sub-soil, sod or seed, artificial turf, drainage, edging
  - Houtwerk: fence, deck, pergola and their foundation points
  - Water & elektra: trenches, cable, light fixtures
  - Specials: fixed install hours per item

Each calculator is a pure function ``(data, ctx) -> List[LineItem]`` and
returns an empty list when its primary quantity is zero or negative. A row
whose normuur or product is missing from the rate tables is left out.
"""
import logging
import math
from typing import List, Optional

from hovenier.models.quote import CalculationContext, LineItem
from hovenier.models.scope_data import (
    BestratingData,
    BordersData,
    GrasData,
    GrondwerkData,
    HoutwerkData,
    SpecialsData,
    WaterElektraData,
)
from hovenier.services.line_items import (
    labor_from_standard_hours,
    labor_line,
    material_from_product,
    material_line,
)
from hovenier.services.lookups import (
    accessibility_factor,
    compose_multiplicative,
    find_product,
    resolve_correction_factor,
)
from hovenier.services.scope_registry import register_calculator

logger = logging.getLogger("hovenier.engine")

_PAVING_ACTIVITY = {
    "tegel": ("tegels leggen", "Tegels"),
    "klinker": ("klinkers leggen", "Klinkers"),
    "natuursteen": ("natuursteen leggen", "Natuursteen"),
}

# Border planting normuren are keyed laag / gemiddeld / hoog
_PLANTING_LEVEL = {"weinig": "laag", "gemiddeld": "gemiddeld", "veel": "hoog"}


def _add(lines: List[LineItem], line: Optional[LineItem]) -> None:
    if line is not None:
        lines.append(line)


def _cm(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Grondwerk
# ---------------------------------------------------------------------------

@register_calculator("aanleg", "grondwerk", GrondwerkData)
def calculate_grondwerk(data: GrondwerkData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.area <= 0:
        return lines

    access = accessibility_factor(ctx)
    _add(lines, labor_from_standard_hours(
        ctx, "grondwerk", f"ontgraven {data.depth}", data.area,
        "grondwerk", f"Ontgraven {data.depth}", access,
    ))

    if data.haul_away:
        # Depth only drives the haul-away volume; dig labor is per m²
        volume_m3 = data.area * ctx.constants.depth_meters.get(data.depth, 0.0)
        _add(lines, labor_from_standard_hours(
            ctx, "grondwerk", "afvoeren", volume_m3, "grondwerk", "Grond afvoeren", access,
        ))
        disposal = find_product(ctx.products, "afvoer grond")
        if disposal is not None:
            lines.append(material_line(
                "grondwerk", "Afvoer grond (stort)", volume_m3, "m³", disposal.sell_price, 0,
            ))

    return lines


# ---------------------------------------------------------------------------
# Bestrating
# ---------------------------------------------------------------------------

def _foundation_lines(
    ctx: CalculationContext, profile_name: str, area: float, prefix: str = ""
) -> List[LineItem]:
    """Layer build-up for one foundation profile over ``area`` m²."""
    c = ctx.constants
    profile = c.foundation_profiles.get(profile_name)
    if profile is None:
        logger.debug("unknown foundation profile", extra={"profile": profile_name})
        return []

    prices = c.foundation_prices
    wastage = c.foundation_wastage_percent
    lines: List[LineItem] = []

    if profile.crushed_rubble_cm:
        lines.append(material_line(
            "bestrating",
            f"{prefix}Gebroken puin ({_cm(profile.crushed_rubble_cm)} cm)",
            area * profile.crushed_rubble_cm / 100, "m³", prices.crushed_rubble, wastage,
        ))
    if profile.sand_cm:
        lines.append(material_line(
            "bestrating",
            f"{prefix}Straatzand ({_cm(profile.sand_cm)} cm)",
            area * profile.sand_cm / 100, "m³", prices.sand, wastage,
        ))
    if profile.crusher_sand_cm:
        lines.append(material_line(
            "bestrating",
            f"{prefix}Brekerszand ({_cm(profile.crusher_sand_cm)} cm)",
            area * profile.crusher_sand_cm / 100, "m³", prices.crusher_sand, wastage,
        ))
    if profile.stabiliser:
        lines.append(material_line(
            "bestrating",
            f"{prefix}Stabiliser (cement)",
            area * c.stabiliser_layer_m, "m³", prices.stabiliser, 0,
        ))
    return lines


@register_calculator("aanleg", "bestrating", BestratingData)
def calculate_bestrating(data: BestratingData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.area <= 0:
        return lines

    access = accessibility_factor(ctx)
    cutting = resolve_correction_factor(ctx.correction_factors, "snijwerk", data.cutting)
    activity, label = _PAVING_ACTIVITY[data.paving_type]

    _add(lines, labor_from_standard_hours(
        ctx, "bestrating", activity, data.area, "bestrating", f"{label} leggen",
        compose_multiplicative(access, cutting),
    ))
    _add(lines, labor_from_standard_hours(
        ctx, "bestrating", "zandbed", data.area, "bestrating", "Zandbed aanbrengen", access,
    ))
    _add(lines, material_from_product(
        ctx, "straatzand", data.area * ctx.constants.sand_m3_per_m2, "m³",
        "bestrating", "Straatzand",
    ))

    if data.sub_base is not None and data.sub_base.edging:
        # Perimeter estimated as that of a square with the same area
        perimeter = 4 * math.sqrt(data.area)
        _add(lines, labor_from_standard_hours(
            ctx, "bestrating", "opsluitbanden", perimeter,
            "bestrating", "Opsluitbanden plaatsen", access,
        ))
        _add(lines, material_from_product(
            ctx, "opsluitband", perimeter, "stuk", "bestrating", "Opsluitband 100x20x6",
        ))

    if data.foundation_profile:
        lines.extend(_foundation_lines(ctx, data.foundation_profile, data.area))

    for zone in data.zones:
        if zone.area <= 0:
            continue
        lines.extend(_foundation_lines(ctx, zone.type, zone.area, f"Zone {zone.type}: "))

    return lines


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------

@register_calculator("aanleg", "borders", BordersData)
def calculate_borders(data: BordersData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.area <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)
    intensity = data.planting_intensity

    _add(lines, labor_from_standard_hours(
        ctx, "borders", "grondbewerking", data.area, "borders", "Grondbewerking border", access,
    ))
    _add(lines, labor_from_standard_hours(
        ctx, "borders", f"planten {_PLANTING_LEVEL[intensity]}", data.area,
        "borders", f"Beplanten ({intensity} intensiteit)", access,
    ))
    _add(lines, material_from_product(
        ctx, "bodembedekker", data.area * c.plants_per_m2.get(intensity, 0), "stuk",
        "borders", "Bodembedekker (pot 9cm)",
    ))

    if data.finish in ("schors", "grind"):
        _add(lines, labor_from_standard_hours(
            ctx, "borders", "schors", data.area, "borders", "Schors aanbrengen", access,
        ))
        _add(lines, material_from_product(
            ctx, "boomschors", data.area * c.bark_m3_per_m2, "m³",
            "borders", "Boomschors 10-40mm",
        ))

    # Soil improvement is only priced once a replacement mix has been chosen
    if data.soil_improvement and data.soil_mix is not None:
        lines.append(material_line(
            "borders", "Bodemverbetering (nieuwe grondmix)",
            data.area * c.soil_improvement_depth_m, "m³",
            c.soil_improvement_price_per_m3, 0,
        ))

    return lines


# ---------------------------------------------------------------------------
# Gras
# ---------------------------------------------------------------------------

@register_calculator("aanleg", "gras", GrasData)
def calculate_gras(data: GrasData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.area <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)

    _add(lines, labor_from_standard_hours(
        ctx, "gras", "ondergrond", data.area, "gras", "Ondergrond bewerken", access,
    ))

    if data.lawn_type == "graszoden":
        _add(lines, labor_from_standard_hours(
            ctx, "gras", "graszoden", data.area, "gras", "Graszoden leggen", access,
        ))
        _add(lines, material_from_product(
            ctx, "graszoden", data.area, "m²", "gras", "Graszoden",
        ))
    else:
        _add(lines, labor_from_standard_hours(
            ctx, "gras", "zaaien", data.area, "gras", "Gras zaaien", access,
        ))
        _add(lines, material_from_product(
            ctx, "graszaad", data.area * c.grass_seed_kg_per_m2, "kg", "gras", "Graszaad",
        ))

    if data.artificial_turf:
        lines.append(material_line(
            "gras", "Kunstgras", data.area, "m²",
            c.artificial_turf_price_per_m2, c.artificial_turf_wastage_percent,
        ))
        _add(lines, labor_from_standard_hours(
            ctx, "gras", "kunstgras", data.area, "gras", "Kunstgras leggen", access,
        ))

    if data.drainage and data.drainage_meters > 0:
        lines.append(material_line(
            "gras", "PVC drainagebuis", data.drainage_meters, "m",
            c.drainage_pvc_price_per_m, c.drainage_wastage_percent,
        ))
        lines.append(material_line(
            "gras", "Kokos omhulsel", data.drainage_meters, "m",
            c.drainage_coconut_price_per_m, c.drainage_wastage_percent,
        ))

    if data.edging and data.edging_meters > 0:
        lines.append(material_line(
            "gras", "Opsluitbanden", data.edging_meters, "m",
            c.edging_price_per_m, c.edging_wastage_percent,
        ))

    return lines


# ---------------------------------------------------------------------------
# Houtwerk
# ---------------------------------------------------------------------------

def _foundation_points(data: HoutwerkData, ctx: CalculationContext) -> int:
    c = ctx.constants
    if data.woodwork_type == "schutting":
        return math.ceil(data.size / c.post_spacing_m) + 1
    if data.woodwork_type == "vlonder":
        return math.ceil(data.size / c.post_spacing_m) + c.deck_extra_foundation_points
    return c.pergola_foundation_points


@register_calculator("aanleg", "houtwerk", HoutwerkData)
def calculate_houtwerk(data: HoutwerkData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    if data.size <= 0:
        return lines

    c = ctx.constants
    access = accessibility_factor(ctx)

    if data.woodwork_type == "schutting":
        # size is the fence length in metres
        _add(lines, labor_from_standard_hours(
            ctx, "houtwerk", "schutting", data.size, "houtwerk", "Schutting plaatsen", access,
        ))
        _add(lines, material_from_product(
            ctx, "schuttingplank", data.size * c.fence_planks_per_meter, "stuk",
            "houtwerk", "Schuttingplank 180x15cm",
        ))
        _add(lines, material_from_product(
            ctx, "schuttingpaal", math.ceil(data.size / c.post_spacing_m) + 1, "stuk",
            "houtwerk", "Schuttingpaal 7x7x270cm",
        ))
    elif data.woodwork_type == "vlonder":
        _add(lines, labor_from_standard_hours(
            ctx, "houtwerk", "vlonder", data.size, "houtwerk", "Vlonder leggen", access,
        ))
        _add(lines, material_from_product(
            ctx, "vlonderdeel", data.size * c.deck_boards_per_m2, "m",
            "houtwerk", "Vlonderdeel hardhout 21x145mm",
        ))
    else:
        _add(lines, labor_from_standard_hours(
            ctx, "houtwerk", "pergola", data.size, "houtwerk", "Pergola bouwen", access,
        ))

    points = _foundation_points(data, ctx)
    if points > 0:
        _add(lines, labor_from_standard_hours(
            ctx, "houtwerk", f"fundering {data.foundation}", points,
            "houtwerk", f"Fundering plaatsen ({data.foundation})", access,
        ))
        _add(lines, material_from_product(
            ctx, "betonpoer", points, "stuk", "houtwerk", "Betonpoer 30x30x30cm",
        ))

    return lines


# ---------------------------------------------------------------------------
# Water & elektra
# ---------------------------------------------------------------------------

@register_calculator("aanleg", "water_elektra", WaterElektraData)
def calculate_water_elektra(data: WaterElektraData, ctx: CalculationContext) -> List[LineItem]:
    lines: List[LineItem] = []
    points = data.light_points
    if data.lighting == "geen" or points <= 0:
        return lines

    access = accessibility_factor(ctx)
    trench_m = points * ctx.constants.trench_length_per_light_point_m if data.trenches_needed else 0

    if trench_m > 0:
        for activity, description in (
            ("sleuf graven", "Sleuf graven"),
            ("kabel leggen", "Kabel leggen"),
            ("sleuf herstellen", "Sleuf herstellen"),
        ):
            _add(lines, labor_from_standard_hours(
                ctx, "water_elektra", activity, trench_m, "water_elektra", description, access,
            ))
        _add(lines, material_from_product(
            ctx, "kabel", trench_m, "m", "water_elektra", "Kabel 3x1,5 grond",
        ))

    _add(lines, labor_from_standard_hours(
        ctx, "water_elektra", "armatuur", points, "water_elektra", "Armaturen plaatsen", access,
    ))
    _add(lines, material_from_product(
        ctx, "grondspot", points, "stuk", "water_elektra", "Grondspot LED",
    ))
    _add(lines, material_from_product(
        ctx, "lasdoos", points, "stuk", "water_elektra", "Lasdoos waterdicht",
    ))

    return lines


# ---------------------------------------------------------------------------
# Specials
# ---------------------------------------------------------------------------

@register_calculator("aanleg", "specials", SpecialsData)
def calculate_specials(data: SpecialsData, ctx: CalculationContext) -> List[LineItem]:
    c = ctx.constants
    access = accessibility_factor(ctx)
    hourly_rate = ctx.settings.hourly_rate

    lines: List[LineItem] = []
    for item in data.items:
        hours = c.install_hours.get(item.type, c.install_hours_default)
        description = item.description or f"{item.type} plaatsen"
        lines.append(labor_line("specials", description, hours * access, hourly_rate))
    return lines
