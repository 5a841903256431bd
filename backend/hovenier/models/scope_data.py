"""
Scope data records — one model per (quote type, scope id).

Each record is flat apart from one level of nesting (paving sub-base and
zones, specials items, lawn-analysis repair actions, mole-control add-ons).
Enum values are the Dutch option keys used by the wizard and by the rate
tables, so they can be spliced straight into activity lookups.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


Intensity = Literal["weinig", "gemiddeld", "veel"]
Severity = Literal["laag", "gemiddeld", "hoog"]
FoundationProfileName = Literal["pad", "oprit", "terrein"]


class ScopeData(BaseModel):
    """Base for all scope records; unknown wizard fields are ignored."""
    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Aanleg
# ---------------------------------------------------------------------------

class GrondwerkData(ScopeData):
    area: float = 0.0
    depth: Literal["licht", "standaard", "zwaar"] = "standaard"
    haul_away: bool = False


class PavingSubBase(BaseModel):
    type: Literal["zandbed", "zand_fundering", "zware_fundering"] = "zandbed"
    thickness_cm: float = 5.0
    edging: bool = False   # opsluitbanden


class PavingZone(BaseModel):
    id: Optional[str] = None
    type: FoundationProfileName
    area: float = 0.0
    material: Optional[str] = None


class BestratingData(ScopeData):
    area: float = 0.0
    paving_type: Literal["tegel", "klinker", "natuursteen"] = "tegel"
    cutting: Severity = "laag"   # snijwerk
    sub_base: Optional[PavingSubBase] = None
    foundation_profile: Optional[FoundationProfileName] = None
    zones: List[PavingZone] = Field(default_factory=list)


class SoilMix(BaseModel):
    sand_percent: float = 0.0
    compost_percent: float = 0.0
    topsoil_percent: float = 0.0


class BordersData(ScopeData):
    area: float = 0.0
    planting_intensity: Intensity = "gemiddeld"
    soil_improvement: bool = False
    finish: Literal["geen", "schors", "grind"] = "geen"
    orientation: Optional[str] = None
    soil_mix: Optional[SoilMix] = None


class GrasData(ScopeData):
    area: float = 0.0
    lawn_type: Literal["zaaien", "graszoden"] = "zaaien"
    subsoil: Literal["bestaand", "nieuw"] = "nieuw"
    artificial_turf: bool = False
    drainage: bool = False
    drainage_meters: float = 0.0
    edging: bool = False
    edging_meters: float = 0.0


class HoutwerkData(ScopeData):
    woodwork_type: Literal["schutting", "vlonder", "pergola"] = "schutting"
    size: float = 0.0   # metres for a fence, m² for deck and pergola
    foundation: Literal["standaard", "zwaar"] = "standaard"


class WaterElektraData(ScopeData):
    lighting: Literal["geen", "basis", "uitgebreid"] = "geen"
    light_points: int = 0
    trenches_needed: bool = False


class SpecialItem(BaseModel):
    type: str   # jacuzzi | sauna | prefab
    description: Optional[str] = None


class SpecialsData(ScopeData):
    items: List[SpecialItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Onderhoud
# ---------------------------------------------------------------------------

class GrasOnderhoudData(ScopeData):
    grass_present: bool = True
    area: float = 0.0
    mowing: bool = False
    edging: bool = False
    scarifying: bool = False
    remove_clippings: bool = False


class BordersOnderhoudData(ScopeData):
    area: float = 0.0
    maintenance_intensity: Intensity = "gemiddeld"
    weeding: bool = False
    pruning: Literal["geen", "licht", "zwaar"] = "geen"
    soil: Literal["open", "bedekt"] = "open"
    remove_green_waste: bool = False


class HeggenOnderhoudData(ScopeData):
    length: float = 0.0
    height: float = 0.0
    breadth: float = 0.0
    pruning: Literal["zijkanten", "bovenkant", "beide"] = "beide"
    haul_away: bool = False


class HeggenOnderhoudExtendedData(HeggenOnderhoudData):
    species: Optional[str] = None      # liguster, beuk, taxus, conifeer, buxus
    lift_required: bool = False
    frequency: int = Field(1, ge=1, le=3)   # prunings per year
    substrate: Optional[str] = None    # bestrating, gras, grind, border


class BomenOnderhoudData(ScopeData):
    tree_count: int = 0
    pruning: Literal["licht", "zwaar"] = "licht"
    height_class: Literal["laag", "middel", "hoog"] = "laag"
    haul_away: bool = False


class BomenOnderhoudExtendedData(ScopeData):
    tree_count: int = 0
    pruning: Literal["licht", "zwaar"] = "licht"
    height_class: Literal["laag", "middel", "hoog", "zeer_hoog"] = "laag"
    height_m: Optional[float] = None
    haul_away: bool = False
    crown_diameter_m: Optional[float] = None
    inspection: Literal["geen", "visueel", "gecertificeerd"] = "geen"
    near_street: bool = False
    near_building: bool = False
    near_cables: bool = False


class ReinigingOnderhoudData(ScopeData):
    terrace_cleaning: bool = False
    terrace_area: float = 0.0
    terrace_type: Optional[str] = None   # keramisch, beton, klinkers, natuursteen, hout
    leaf_clearing: bool = False
    leaf_area: float = 0.0
    leaf_frequency: Literal["eenmalig", "seizoen"] = "eenmalig"
    paving_weeds: bool = False
    weed_area: float = 0.0
    weed_method: Literal["handmatig", "branden", "heet_water", "chemisch"] = "handmatig"
    algae_cleaning: bool = False
    algae_area: float = 0.0


class BemestingOnderhoudData(ScopeData):
    area: float = 0.0
    product_type: Literal["basis", "premium", "bio"] = "basis"
    frequency: int = Field(1, ge=1, le=3)
    lime_treatment: bool = False
    soil_analysis: bool = False


class LawnRepairActions(BaseModel):
    scarify: bool = False
    overseed: bool = False
    new_sod: bool = False
    strip: bool = False
    reseed_bare_patches: bool = False
    bare_patch_area: Optional[float] = None


class GazonanalyseOnderhoudData(ScopeData):
    area: float = 0.0
    repair_actions: LawnRepairActions = Field(default_factory=LawnRepairActions)
    liming: bool = False
    drainage: bool = False


class MoleAddOns(BaseModel):
    lawn_repair: bool = False
    repair_area: float = 0.0
    preventive_mesh: bool = False
    mesh_area: float = 0.0
    return_check: bool = False


class MollenbestrijdingOnderhoudData(ScopeData):
    package: Literal["basis", "premium", "premium_plus"] = "basis"
    add_ons: MoleAddOns = Field(default_factory=MoleAddOns)


class OverigOnderhoudData(ScopeData):
    leaf_clearing: bool = False
    terrace_cleaning: bool = False
    terrace_area: float = 0.0
    paving_weeds: bool = False
    paving_area: float = 0.0
    drain_check: bool = False
    drain_points: int = 0
    extra_hours: float = 0.0
    extra_notes: Optional[str] = None
