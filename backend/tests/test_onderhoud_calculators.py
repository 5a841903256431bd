"""
test_onderhoud_calculators.py — Unit tests for the maintenance scope calculators.

Tests cover:
  - Gras / borders: backlog factor on mowing, edging, weeding and pruning
  - Heggen: height surcharge, haul-away, extended species/substrate/frequency/lift
  - Bomen: height classes, additive safety surcharges, inspections, waste removal
  - Reiniging, bemesting, gazonanalyse, mollenbestrijding, overig
"""

import pytest

from hovenier.models.pricing_constants import PricingConstants
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
from hovenier.models.rates import StandardHoursEntry
from hovenier.services.onderhoud_calculators import (
    calculate_bemesting_onderhoud,
    calculate_bomen_onderhoud,
    calculate_bomen_onderhoud_extended,
    calculate_borders_onderhoud,
    calculate_gazonanalyse_onderhoud,
    calculate_gras_onderhoud,
    calculate_heggen_onderhoud,
    calculate_heggen_onderhoud_extended,
    calculate_mollenbestrijding_onderhoud,
    calculate_overig_onderhoud,
    calculate_reiniging_onderhoud,
)
from hovenier.services.rounding import round_to_quarter


# ===========================================================================
# Class 1: Gras & borders
# ===========================================================================

class TestGrasBordersOnderhoud:

    def test_lawn_with_backlog(self, make_context, find_line):
        ctx = make_context(backlog_severity="gemiddeld")
        lines = calculate_gras_onderhoud(
            GrasOnderhoudData(area=100, mowing=True, edging=True, scarifying=True), ctx
        )
        assert all(line.scope == "gras" for line in lines)
        assert find_line(lines, "Gras maaien").quantity == 2.5       # 2 h × 1.3
        assert find_line(lines, "Kanten steken").quantity == 2.5     # 40 m × 0.05 × 1.3
        # Scarifying is not backlog-sensitive
        assert find_line(lines, "Verticuteren").quantity == 3.0

    def test_no_grass_present(self, context):
        data = GrasOnderhoudData(grass_present=False, area=100, mowing=True)
        assert calculate_gras_onderhoud(data, context) == []

    def test_borders_weeding_and_pruning(self, make_context, find_line):
        ctx = make_context(backlog_severity="hoog")
        lines = calculate_borders_onderhoud(
            BordersOnderhoudData(
                area=20, maintenance_intensity="veel", weeding=True, pruning="zwaar"
            ),
            ctx,
        )
        assert find_line(lines, "Wieden (veel)").quantity == 6.5         # 4 h × 1.6
        assert find_line(lines, "Snoei borders (zwaar)").quantity == 4.75  # 3 h × 1.6
        assert all(line.scope == "borders" for line in lines)

    def test_borders_nothing_selected(self, context):
        assert calculate_borders_onderhoud(BordersOnderhoudData(area=20), context) == []


# ===========================================================================
# Class 2: Heggen
# ===========================================================================

class TestHeggen:

    def test_tall_hedge_surcharge_and_haul_away(self, context, find_line):
        lines = calculate_heggen_onderhoud(
            HeggenOnderhoudData(length=10, height=3, breadth=1, haul_away=True), context
        )
        assert find_line(lines, "Heg snoeien").quantity == round_to_quarter(30 * 0.15 * 1.3)
        assert find_line(lines, "Snoeisel afvoeren").quantity == 1.0   # 9 m³ × 0.1

    def test_threshold_height_has_no_surcharge(self, context):
        lines = calculate_heggen_onderhoud(
            HeggenOnderhoudData(length=10, height=2, breadth=1), context
        )
        assert lines[0].quantity == 3.0

    def test_zero_volume(self, context):
        data = HeggenOnderhoudData(length=10, height=0, breadth=1)
        assert calculate_heggen_onderhoud(data, context) == []

    @pytest.mark.parametrize("length, height, breadth", [
        (-10, -3, 1),
        (10, -3, -1),
        (-10, 3, -1),
    ])
    def test_negative_dimensions_yield_nothing(self, context, length, height, breadth):
        # Two negative dimensions give a positive volume but no real hedge
        basic = HeggenOnderhoudData(length=length, height=height, breadth=breadth, haul_away=True)
        extended = HeggenOnderhoudExtendedData(
            length=length, height=height, breadth=breadth, haul_away=True, lift_required=True,
        )
        assert calculate_heggen_onderhoud(basic, context) == []
        assert calculate_heggen_onderhoud_extended(extended, context) == []

    def test_extended_matches_basic_without_extras(self, context):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(length=10, height=3, breadth=1), context
        )
        assert len(lines) == 1
        assert lines[0].description == "Heg snoeien"
        assert lines[0].quantity == round_to_quarter(30 * 0.15 * 1.3)

    def test_extended_species_substrate_frequency(self, context, find_line):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(
                length=10, height=3, breadth=1, species="taxus", substrate="bestrating",
                frequency=2, haul_away=True,
            ),
            context,
        )
        # 4.5 h × 1.3 height × 1.3 taxus × 1.15 bestrating × 2 rounds = 17.49
        assert find_line(lines, "Heg snoeien (2x per jaar)").quantity == 17.5
        assert find_line(lines, "Snoeisel afvoeren").quantity == 1.75

    def test_lift_on_request(self, context, find_line):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(
                length=10, height=3, breadth=1, lift_required=True, frequency=2
            ),
            context,
        )
        lift = find_line(lines, "Hoogwerker huur (2 dagen)")
        assert lift.kind == "machine"
        assert lift.quantity == 2
        assert lift.total == 370.0

    def test_lift_forced_above_threshold(self, context, find_line):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(length=25, height=5, breadth=1), context
        )
        assert find_line(lines, "Hoogwerker huur (3 dagen)").unit_price == 185.0

    def test_single_lift_day_label(self, context, find_line):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(length=8, height=4.5, breadth=1), context
        )
        find_line(lines, "Hoogwerker huur (1 dag)")

    def test_no_lift_below_threshold(self, context):
        lines = calculate_heggen_onderhoud_extended(
            HeggenOnderhoudExtendedData(length=10, height=3, breadth=1), context
        )
        assert not any(line.kind == "machine" for line in lines)

    @pytest.mark.parametrize("frequency", [0, 4])
    def test_frequency_bounds(self, frequency):
        with pytest.raises(ValueError):
            HeggenOnderhoudExtendedData(length=1, height=1, breadth=1, frequency=frequency)


# ===========================================================================
# Class 3: Bomen
# ===========================================================================

class TestBomen:

    def test_basic_high_trees(self, context):
        lines = calculate_bomen_onderhoud(
            BomenOnderhoudData(tree_count=4, pruning="zwaar", height_class="hoog"), context
        )
        assert lines[0].description == "Bomen snoeien (zwaar)"
        assert lines[0].quantity == 7.75     # 4 × 1.5 × 1.3 = 7.8

    def test_basic_no_trees(self, context):
        assert calculate_bomen_onderhoud(BomenOnderhoudData(tree_count=0), context) == []

    def test_safety_surcharges_are_additive(self, context):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(
                tree_count=10, pruning="zwaar",
                near_street=True, near_building=True, near_cables=True,
            ),
            context,
        )
        # 15 h × (1 + 0.20 + 0.10 + 0.15); compounding would give 22.75
        assert lines[0].quantity == 21.75

    def test_measured_height_inspection_and_waste(self, context, find_line):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(
                tree_count=3, height_m=12, near_street=True, near_cables=True,
                inspection="gecertificeerd", haul_away=True, crown_diameter_m=4,
            ),
            context,
        )
        # 1.5 h × 2.5 very high × 1.35 safety = 5.06
        assert find_line(lines, "Bomen snoeien (licht)").quantity == 5.0

        inspection = find_line(lines, "Boominspectie (gecertificeerd)")
        assert inspection.unit == "boom"
        assert inspection.kind == "arbeid"
        assert inspection.total == 600.0

        # 4² × 0.1 × 3 trees = 4.8 h
        assert find_line(lines, "Snoeihout afvoeren").quantity == 4.75

    def test_explicit_zero_crown_keeps_zero(self, context, find_line):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(tree_count=2, haul_away=True, crown_diameter_m=0), context
        )
        waste = find_line(lines, "Snoeihout afvoeren")
        assert waste.quantity == 0.0
        assert waste.total == 0.0

    def test_missing_crown_uses_default(self, context, find_line):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(tree_count=2, haul_away=True), context
        )
        # 3² × 0.1 × 2 trees = 1.8 h
        assert find_line(lines, "Snoeihout afvoeren").quantity == 1.75

    def test_height_class_hoog(self, context):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(tree_count=2, height_class="hoog"), context
        )
        assert lines[0].quantity == 1.5

    def test_visual_inspection(self, context, find_line):
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(tree_count=3, inspection="visueel"), context
        )
        visual = find_line(lines, "Boominspectie (visueel)")
        assert visual.unit == "uur"
        assert visual.quantity == 1.5

    def test_afvoer_normuur_scales_waste(self, make_context, standard_hours, find_line):
        hours = standard_hours + [
            StandardHoursEntry(scope="bomen_onderhoud", activity="afvoer snoeihout",
                               hours_per_unit=2.0, unit="m3"),
        ]
        ctx = make_context(standard_hours=hours)
        lines = calculate_bomen_onderhoud_extended(
            BomenOnderhoudExtendedData(tree_count=1, haul_away=True), ctx
        )
        # default crown 3 m: 9 × 0.1 × 2.0 = 1.8 h
        assert find_line(lines, "Snoeihout afvoeren").quantity == 1.75


# ===========================================================================
# Class 4: Reiniging
# ===========================================================================

class TestReiniging:

    def test_natural_stone_terrace(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(terrace_cleaning=True, terrace_area=20, terrace_type="natuursteen"),
            context,
        )
        assert find_line(lines, "Terras reinigen (natuursteen)").quantity == 1.5
        assert find_line(lines, "Reinigingsmiddel").total == 40.0

    def test_terrace_normuur_overrides_default(self, make_context, standard_hours, find_line):
        hours = standard_hours + [
            StandardHoursEntry(scope="overig_onderhoud", activity="terras reinigen",
                               hours_per_unit=0.1, unit="m2"),
        ]
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(terrace_cleaning=True, terrace_area=20),
            make_context(standard_hours=hours),
        )
        assert find_line(lines, "Terras reinigen").quantity == 2.0

    def test_seasonal_leaf_clearing(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(leaf_clearing=True, leaf_area=100, leaf_frequency="seizoen"),
            context,
        )
        assert find_line(lines, "Bladruimen (4 beurten)").quantity == 8.0
        assert find_line(lines, "Blad afvoeren").quantity == 2.0

    def test_one_off_leaf_clearing(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(leaf_clearing=True, leaf_area=100), context
        )
        assert find_line(lines, "Bladruimen (eenmalig)").quantity == 2.0

    def test_weed_burning_rents_machine(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(paving_weeds=True, weed_area=50, weed_method="branden"),
            context,
        )
        assert find_line(lines, "Onkruid bestrating (branden)").quantity == 1.0
        burner = find_line(lines, "Onkruidbrander huur")
        assert burner.kind == "machine"
        assert burner.total == 45.0

    def test_chemical_weeding_uses_product(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(paving_weeds=True, weed_area=50, weed_method="chemisch"),
            context,
        )
        assert find_line(lines, "Onkruidbestrijdingsmiddel").total == 150.0
        assert not any(line.kind == "machine" for line in lines)

    def test_algae(self, context, find_line):
        lines = calculate_reiniging_onderhoud(
            ReinigingOnderhoudData(algae_cleaning=True, algae_area=10), context
        )
        assert find_line(lines, "Algereiniging").quantity == 0.25
        assert find_line(lines, "Anti-alg middel").total == 15.0

    def test_nothing_selected(self, context):
        assert calculate_reiniging_onderhoud(ReinigingOnderhoudData(), context) == []


# ===========================================================================
# Class 5: Bemesting
# ===========================================================================

class TestBemesting:

    def test_premium_twice_a_year(self, context, find_line):
        lines = calculate_bemesting_onderhoud(
            BemestingOnderhoudData(
                area=100, product_type="premium", frequency=2,
                lime_treatment=True, soil_analysis=True,
            ),
            context,
        )
        # 100 × 0.005 × 2 × 0.9 = 0.9 h
        assert find_line(lines, "Bemesting aanbrengen (premium) (2x per jaar)").quantity == 1.0
        product = find_line(lines, "Bemestingsproduct (premium)")
        assert product.quantity == 200.0
        assert product.total == 300.0
        assert find_line(lines, "Kalkbehandeling").quantity == 0.25
        assert find_line(lines, "Kalk").total == 50.0
        assert find_line(lines, "Grondanalyse").total == 49.0

    def test_every_line_carries_fertilization_margin(self, context):
        lines = calculate_bemesting_onderhoud(
            BemestingOnderhoudData(area=250, lime_treatment=True, soil_analysis=True), context
        )
        assert len(lines) == 5
        assert all(line.margin_override_percent == 70.0 for line in lines)

    def test_single_round_label(self, context):
        lines = calculate_bemesting_onderhoud(BemestingOnderhoudData(area=100), context)
        assert lines[0].description == "Bemesting aanbrengen (basis)"

    def test_zero_area(self, context):
        assert calculate_bemesting_onderhoud(BemestingOnderhoudData(area=0), context) == []


# ===========================================================================
# Class 6: Gazonanalyse
# ===========================================================================

class TestGazonanalyse:

    def test_assessment_always_present(self, make_context, find_line):
        ctx = make_context(accessibility="slecht")
        lines = calculate_gazonanalyse_onderhoud(GazonanalyseOnderhoudData(area=100), ctx)
        assert len(lines) == 1
        assert find_line(lines, "Gazonbeoordeling ter plaatse").quantity == 0.5

    def test_scarifier_days(self, context, find_line):
        lines = calculate_gazonanalyse_onderhoud(
            GazonanalyseOnderhoudData(area=1200, repair_actions={"scarify": True}), context
        )
        assert find_line(lines, "Verticuteren").quantity == 12.0
        machine = find_line(lines, "Verticuteer-machine huur (3 dagen)")
        assert machine.total == 240.0

    def test_small_lawn_single_day(self, context, find_line):
        lines = calculate_gazonanalyse_onderhoud(
            GazonanalyseOnderhoudData(area=100, repair_actions={"scarify": True}), context
        )
        assert find_line(lines, "Verticuteer-machine huur (1 dag)").quantity == 1

    def test_bare_patches_default_ratio(self, context, find_line):
        lines = calculate_gazonanalyse_onderhoud(
            GazonanalyseOnderhoudData(area=95, repair_actions={"reseed_bare_patches": True}),
            context,
        )
        seed = find_line(lines, "Graszaad (kale plekken)")
        assert seed.quantity == 10.0     # ceil(9.5)
        assert seed.total == 50.0

    def test_bare_patches_explicit_area(self, context, find_line):
        lines = calculate_gazonanalyse_onderhoud(
            GazonanalyseOnderhoudData(
                area=95, repair_actions={"reseed_bare_patches": True, "bare_patch_area": 4},
            ),
            context,
        )
        assert find_line(lines, "Graszaad (kale plekken)").quantity == 4.0

    def test_drainage_memo_line(self, context):
        lines = calculate_gazonanalyse_onderhoud(
            GazonanalyseOnderhoudData(area=100, drainage=True), context
        )
        memo = lines[-1]
        assert memo.unit == "p.m."
        assert memo.total == 0.0
        assert memo.description.startswith("OPMERKING: Drainage")


# ===========================================================================
# Class 7: Mollenbestrijding
# ===========================================================================

class TestMollenbestrijding:

    def test_premium_with_add_ons(self, context, find_line):
        lines = calculate_mollenbestrijding_onderhoud(
            MollenbestrijdingOnderhoudData(
                package="premium",
                add_ons={
                    "lawn_repair": True, "repair_area": 50,
                    "preventive_mesh": True, "mesh_area": 20,
                    "return_check": True,
                },
            ),
            context,
        )
        assert find_line(lines, "Klemmen plaatsen & verplaatsen (3 bezoeken)").quantity == 4.5
        kit = find_line(lines, "Mollenval klemmen + preventie (premium)")
        assert kit.unit == "set"
        assert kit.total == 75.0
        assert find_line(lines, "Tussentijdse controles (3x)").quantity == 1.5
        assert find_line(lines, "Gazonherstel na mollenschade").quantity == 1.0
        assert find_line(lines, "Graszaad (mollenherstel)").total == 250.0
        assert find_line(lines, "Preventiefgaas aanbrengen").quantity == 1.0
        assert find_line(lines, "Mollenwerend gaas").total == 80.0
        assert find_line(lines, "Terugkeer-check (1 bezoek)").quantity == 1.0

    def test_basis_with_accessibility(self, make_context):
        ctx = make_context(accessibility="beperkt")
        lines = calculate_mollenbestrijding_onderhoud(MollenbestrijdingOnderhoudData(), ctx)
        assert len(lines) == 3
        assert lines[0].quantity == 2.5      # 2 h × 1.2 = 2.4

    def test_package_missing_from_constants(self, make_context):
        constants = PricingConstants(mole_packages={})
        ctx = make_context(constants=constants)
        data = MollenbestrijdingOnderhoudData(add_ons={"return_check": True})
        lines = calculate_mollenbestrijding_onderhoud(data, ctx)
        assert [line.description for line in lines] == ["Terugkeer-check (1 bezoek)"]


# ===========================================================================
# Class 8: Overig
# ===========================================================================

class TestOverig:

    def test_all_jobs(self, context, find_line):
        lines = calculate_overig_onderhoud(
            OverigOnderhoudData(
                leaf_clearing=True,
                terrace_cleaning=True, terrace_area=40,
                paving_weeds=True, paving_area=100,
                drain_check=True, drain_points=4,
                extra_hours=1.5, extra_notes="Snoeien klimop",
            ),
            context,
        )
        assert find_line(lines, "Bladruimen").quantity == 2.0
        assert find_line(lines, "Terras reinigen").quantity == 2.0
        assert find_line(lines, "Onkruid bestrating verwijderen").quantity == 3.0
        assert find_line(lines, "Afwatering controleren").quantity == 1.0
        assert find_line(lines, "Snoeien klimop").quantity == 1.5
        assert all(line.scope == "overig" for line in lines)

    def test_extra_hours_default_description(self, context):
        lines = calculate_overig_onderhoud(OverigOnderhoudData(extra_hours=2), context)
        assert lines[0].description == "Overige werkzaamheden"

    def test_nothing_selected(self, context):
        assert calculate_overig_onderhoud(OverigOnderhoudData(), context) == []
