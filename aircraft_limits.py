# aircraft_limits.py — v1.1.0-limits
# Certified structural limits (MTOW / MLW) by engine variant and model.
# All values in kilograms. Operator tables can be loaded from CSV via
# data_loaders.load_limits_csv(); this table is the built-in default.

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

VARIANTS = ("CEO", "NEO")
MODELS = ("A320", "A321")

# Limit tables written in tons (77.0) instead of kg (77000).
LIMIT_TON_THRESHOLD = 1000.0
KG_PER_TON = 1000.0


def normalize_limit_to_kg(value: float) -> float:
    """Limits below 1000 are tons; anything else is already kg."""
    if value < LIMIT_TON_THRESHOLD:
        return value * KG_PER_TON
    return value


@dataclass(frozen=True)
class AircraftLimits:
    mtow: float  # Maximum Takeoff Weight (kg, or tons if < 1000)
    mlw: float   # Maximum Landing Weight (kg, or tons if < 1000)

    def __post_init__(self):
        # invariant holds on the values the evaluator will actually compare
        mtow_kg = normalize_limit_to_kg(self.mtow)
        mlw_kg = normalize_limit_to_kg(self.mlw)
        if not mlw_kg < mtow_kg:
            raise ValueError(f"MLW ({mlw_kg:.0f} kg) must be below MTOW ({mtow_kg:.0f} kg)")


LimitsTable = Mapping[str, Mapping[str, AircraftLimits]]

AIRCRAFT_DATA: Dict[str, Dict[str, AircraftLimits]] = {
    "CEO": {
        "A320": AircraftLimits(mtow=77000, mlw=66000),
        "A321": AircraftLimits(mtow=93500, mlw=77800),
    },
    "NEO": {
        "A320": AircraftLimits(mtow=79000, mlw=67400),
        "A321": AircraftLimits(mtow=97000, mlw=79200),
    },
}


def canonical_variant(variant: str) -> str:
    v = str(variant).strip().upper()
    if v not in VARIANTS:
        raise KeyError(f"Unknown engine variant: {variant!r} (expected one of {VARIANTS})")
    return v


def canonical_model(model: str) -> str:
    m = str(model).strip().upper()
    if m not in MODELS:
        raise KeyError(f"Unknown aircraft model: {model!r} (expected one of {MODELS})")
    return m


def get_limits(variant: str, model: str, table: Optional[LimitsTable] = None) -> AircraftLimits:
    """Row lookup; `table` defaults to the built-in AIRCRAFT_DATA."""
    src = AIRCRAFT_DATA if table is None else table
    return src[canonical_variant(variant)][canonical_model(model)]


def limits_for_variant(variant: str, table: Optional[LimitsTable] = None) -> Dict[str, AircraftLimits]:
    """The selected variant applies to both panels at once."""
    return {m: get_limits(variant, m, table) for m in MODELS}
