"""
PricingConstants — the fixed numeric tables behind the scope calculators.

Layer thicknesses, consumption ratios, package bundles, rental day rates and
flat prices used to live as literals next to the calculations. They are
collected here as one injectable model so a rate set can be swapped per
tenant, per test, or loaded from a JSON file maintained by office staff
(see ``hovenier.config.load_pricing_constants``).

All prices are in EUR excluding VAT.
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field


class FoundationPrices(BaseModel):
    """Foundation material prices per m³."""
    crushed_rubble: float = 25.0    # gebroken puin
    sand: float = 18.0              # straatzand
    crusher_sand: float = 35.0      # brekerszand
    stabiliser: float = 45.0        # cement stabilisation


class FoundationProfile(BaseModel):
    """Layer build-up for one paving profile, thicknesses in cm."""
    crushed_rubble_cm: float
    sand_cm: Optional[float] = None
    crusher_sand_cm: Optional[float] = None
    stabiliser: bool = False


class WeedMethod(BaseModel):
    """Weed removal in paving: labor rate plus optional rental or product."""
    label: str
    hours_per_m2: float
    machine_price: float = 0.0
    machine_description: str = ""
    material_price_per_m2: float = 0.0


class MolePackage(BaseModel):
    """Fixed mole-control service bundle."""
    visits: int
    hours_per_visit: float
    kit_price: float
    checks: int
    hours_per_check: float = 0.5
    visit_description: str
    kit_description: str
    check_description: str


def _default_foundation_profiles() -> Dict[str, FoundationProfile]:
    return {
        "pad": FoundationProfile(crushed_rubble_cm=10, sand_cm=5),
        "oprit": FoundationProfile(crushed_rubble_cm=20, crusher_sand_cm=5),
        "terrein": FoundationProfile(crushed_rubble_cm=35, crusher_sand_cm=5, stabiliser=True),
    }


def _default_weed_methods() -> Dict[str, WeedMethod]:
    return {
        "handmatig": WeedMethod(label="handmatig", hours_per_m2=0.04),
        "branden": WeedMethod(
            label="branden", hours_per_m2=0.02,
            machine_price=45.0, machine_description="Onkruidbrander huur",
        ),
        "heet_water": WeedMethod(
            label="heet water", hours_per_m2=0.015,
            machine_price=65.0, machine_description="Heetwater-apparaat huur",
        ),
        "chemisch": WeedMethod(label="chemisch", hours_per_m2=0.01, material_price_per_m2=3.0),
    }


def _default_mole_packages() -> Dict[str, MolePackage]:
    return {
        "basis": MolePackage(
            visits=1, hours_per_visit=2.0, kit_price=35.0, checks=1,
            visit_description="Klemmen plaatsen & ophalen (1 bezoek)",
            kit_description="Mollenval klemmen (basis)",
            check_description="Tussentijdse controle (1x)",
        ),
        "premium": MolePackage(
            visits=3, hours_per_visit=1.5, kit_price=75.0, checks=3,
            visit_description="Klemmen plaatsen & verplaatsen (3 bezoeken)",
            kit_description="Mollenval klemmen + preventie (premium)",
            check_description="Tussentijdse controles (3x)",
        ),
        "premium_plus": MolePackage(
            visits=6, hours_per_visit=1.0, kit_price=120.0, checks=6,
            visit_description="Klemmen plaatsen & beheer (6 bezoeken)",
            kit_description="Mollenval klemmen + preventie + monitoring (premium plus)",
            check_description="Controles (6x, onbeperkt pakket)",
        ),
    }


class PricingConstants(BaseModel):
    # ── Grondwerk ────────────────────────────────────────────────────────────
    # Depth class → metres; only used to estimate haul-away volume
    depth_meters: Dict[str, float] = Field(
        default_factory=lambda: {"licht": 0.2, "standaard": 0.4, "zwaar": 0.6}
    )

    # ── Bestrating ───────────────────────────────────────────────────────────
    sand_m3_per_m2: float = 0.05
    foundation_prices: FoundationPrices = Field(default_factory=FoundationPrices)
    foundation_profiles: Dict[str, FoundationProfile] = Field(
        default_factory=_default_foundation_profiles
    )
    foundation_wastage_percent: float = 5.0
    stabiliser_layer_m: float = 0.05

    # ── Borders ──────────────────────────────────────────────────────────────
    bark_m3_per_m2: float = 0.05
    plants_per_m2: Dict[str, float] = Field(
        default_factory=lambda: {"weinig": 3, "gemiddeld": 6, "veel": 10}
    )
    soil_improvement_price_per_m3: float = 35.0
    soil_improvement_depth_m: float = 0.3

    # ── Gras (aanleg) ────────────────────────────────────────────────────────
    grass_seed_kg_per_m2: float = 0.035
    artificial_turf_price_per_m2: float = 45.0
    artificial_turf_wastage_percent: float = 5.0
    drainage_pvc_price_per_m: float = 12.0
    drainage_coconut_price_per_m: float = 8.0
    drainage_wastage_percent: float = 5.0
    edging_price_per_m: float = 15.0
    edging_wastage_percent: float = 5.0

    # ── Houtwerk ─────────────────────────────────────────────────────────────
    fence_planks_per_meter: float = 6
    post_spacing_m: float = 2
    deck_boards_per_m2: float = 7
    deck_extra_foundation_points: int = 4
    pergola_foundation_points: int = 4

    # ── Water & elektra ──────────────────────────────────────────────────────
    trench_length_per_light_point_m: float = 5

    # ── Specials ─────────────────────────────────────────────────────────────
    install_hours: Dict[str, float] = Field(
        default_factory=lambda: {"jacuzzi": 8, "sauna": 6, "prefab": 4}
    )
    install_hours_default: float = 4

    # ── Heggen ───────────────────────────────────────────────────────────────
    prune_waste_volume_factor: float = 0.3
    height_surcharge_factor: float = 1.3
    height_threshold_m: float = 2
    hedge_species_factors: Dict[str, float] = Field(
        default_factory=lambda: {
            "liguster": 1.0, "beuk": 1.0, "taxus": 1.3, "conifeer": 1.4, "buxus": 0.8,
        }
    )
    hedge_substrate_factors: Dict[str, float] = Field(
        default_factory=lambda: {"bestrating": 1.15, "border": 1.05}
    )
    lift_day_rate: float = 185.0
    lift_height_threshold_m: float = 4
    lift_meters_per_day: float = 10

    # ── Bomen ────────────────────────────────────────────────────────────────
    tree_high_factor: float = 1.5
    tree_high_threshold_m: float = 4
    tree_very_high_factor: float = 2.5
    tree_very_high_threshold_m: float = 10
    # Safety surcharges are percentage points, summed before applying
    tree_near_street_percent: float = 20
    tree_near_building_percent: float = 10
    tree_near_cables_percent: float = 15
    tree_visual_inspection_hours: float = 0.5
    tree_certified_inspection_price: float = 200.0
    tree_default_crown_diameter_m: float = 3
    tree_waste_hours_factor: float = 0.1

    # ── Reiniging ────────────────────────────────────────────────────────────
    terrace_type_factors: Dict[str, float] = Field(
        default_factory=lambda: {
            "keramisch": 1.2, "beton": 1.0, "klinkers": 1.1, "natuursteen": 1.5, "hout": 1.3,
        }
    )
    detergent_price_per_m2: float = 2.0
    leaf_clearing_hours_per_m2: float = 0.02
    leaf_removal_hours_per_m2: float = 0.005
    seasonal_leaf_rounds: int = 4
    weed_methods: Dict[str, WeedMethod] = Field(default_factory=_default_weed_methods)
    algae_hours_per_m2: float = 0.03
    anti_algae_price_per_m2: float = 1.5

    # ── Bemesting ────────────────────────────────────────────────────────────
    fertilizer_prices: Dict[str, float] = Field(
        default_factory=lambda: {"basis": 0.80, "premium": 1.50, "bio": 2.00}
    )
    fertilizer_hours_per_m2: float = 0.005
    fertilizer_repeat_discount_factor: float = 0.90
    lime_price_per_m2: float = 0.50
    lime_hours_per_m2: float = 0.003
    soil_analysis_price: float = 49.0
    fertilization_margin_percent: float = 70.0

    # ── Gazonanalyse ─────────────────────────────────────────────────────────
    lawn_assessment_hours: float = 0.5
    scarify_hours_per_m2: float = 0.01
    scarifier_day_rate: float = 80.0
    scarifier_m2_per_day: float = 500
    overseed_hours_per_m2: float = 0.005
    overseed_price_per_m2: float = 3.0
    new_sod_hours_per_m2: float = 0.02
    new_sod_price_per_m2: float = 12.0
    new_sod_wastage_percent: float = 5.0
    strip_hours_per_m2: float = 0.025
    strip_waste_m3_per_m2: float = 0.05
    strip_waste_hours_per_m3: float = 0.1
    bare_patch_ratio: float = 0.1
    bare_patch_hours_per_m2: float = 0.01
    bare_patch_seed_price_per_m2: float = 5.0
    lawn_lime_price_per_m2: float = 0.50
    lawn_lime_hours_per_m2: float = 0.003

    # ── Mollenbestrijding ────────────────────────────────────────────────────
    mole_packages: Dict[str, MolePackage] = Field(default_factory=_default_mole_packages)
    mole_repair_hours_per_m2: float = 0.02
    mole_repair_seed_price_per_m2: float = 5.0
    mole_mesh_hours_per_m2: float = 0.05
    mole_mesh_price_per_m2: float = 4.0
    mole_return_check_hours: float = 1.0

    # ── Overig onderhoud ─────────────────────────────────────────────────────
    leaf_clearing_hours_default: float = 2
    terrace_cleaning_hours_per_m2: float = 0.05
    paving_weeding_hours_per_m2: float = 0.03
    drain_check_hours_per_point: float = 0.25

    # ── Offerte-wide ─────────────────────────────────────────────────────────
    quote_overhead: float = 200.0
