# tanker_core.py — v1.1.0
# Fuel tankering & weight core for the A320/A321 panels.
# Pipeline (one way, no state kept between calls):
#   raw strings -> unit normalization -> tanker/TOW/LWG -> limit evaluation
#
# Rounding is "half up" at every stage, matching the operators' spreadsheet,
# so intermediate rounding is part of the reproducible result.
# Malformed text is treated as "not entered yet" (0); the core never raises
# for operator input. Exceedances are returned as flags only.

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Mapping

from aircraft_limits import (
    AircraftLimits, LimitsTable, KG_PER_TON, get_limits, normalize_limit_to_kg,
)

__version__ = "v1.1.0"

log = logging.getLogger(__name__)

# Taxi fuel is conventionally entered in tons (0.2), everything else in kg.
TAXI_TON_THRESHOLD = 10.0

INPUT_FIELDS = ("taxi", "sector4", "sector3", "sector2", "sector1", "zfw", "trip_plus_taxi")

# Alternate field names used by load sheets and form exports
FIELD_ALIASES = {
    "tripPlusTaxi": "trip_plus_taxi",
    "trip+taxi": "trip_plus_taxi",
    "sec4": "sector4", "sec3": "sector3", "sec2": "sector2", "sec1": "sector1",
}

TAXI_HINT = "Input Taxi in Tons (e.g. 0.2), others in KG"
EXCEEDS_TEXT = "EXCEEDS LIMIT!"

# Leading numeric prefix, the way a lenient float parser reads "12.5kg"
_NUM_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


# ---------------------------------------------------------------------------
# Unit normalization
# ---------------------------------------------------------------------------
def parse_decimal(text: Any) -> float:
    """Parse a free-form decimal string; comma or dot separator.

    Empty, None or unparsable input yields 0.0 (never an error).
    Only the first comma is treated as the decimal separator.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        v = float(text)
        return v if math.isfinite(v) else 0.0
    s = str(text).replace(",", ".", 1)
    m = _NUM_PREFIX.match(s)
    if not m:
        return 0.0
    try:
        v = float(m.group(0))
    except ValueError:
        return 0.0
    return v if math.isfinite(v) else 0.0


def normalize_taxi_to_kg(value: float) -> float:
    """0 < value < 10 is tons; 0, negatives and >= 10 are already kg."""
    if 0.0 < value < TAXI_TON_THRESHOLD:
        return value * KG_PER_TON
    return value


def normalize_limits(limits: AircraftLimits) -> AircraftLimits:
    return AircraftLimits(mtow=normalize_limit_to_kg(limits.mtow),
                          mlw=normalize_limit_to_kg(limits.mlw))


def round_kg(x: float) -> int:
    """Nearest whole kilogram, halves rounded up (toward +inf)."""
    return int(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CalculatorInput:
    taxi: str = ""
    sector4: str = ""
    sector3: str = ""
    sector2: str = ""
    sector1: str = ""
    zfw: str = ""
    trip_plus_taxi: str = ""  # "Sector 1 trip + taxi"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CalculatorInput":
        """Build from a dict using snake_case or camelCase keys. Unknown keys are ignored."""
        values: Dict[str, str] = {}
        for key, raw in data.items():
            name = FIELD_ALIASES.get(str(key), str(key))
            if name in INPUT_FIELDS:
                values[name] = "" if raw is None else str(raw)
        return cls(**values)


@dataclass(frozen=True)
class NormalizedInput:
    taxi_kg: float
    sector4: float
    sector3: float
    sector2: float
    sector1: float
    zfw: float
    trip_plus_taxi: float


@dataclass(frozen=True)
class WeightResult:
    tanker_fuel_kg: int
    tow_kg: int
    lwg_kg: int


@dataclass(frozen=True)
class LimitResult:
    mtow_limit_kg: float
    mlw_limit_kg: float
    mlw_delta_kg: int
    max_tank_by_mtow_kg: float
    max_tank_by_mlw_kg: float
    tank_allowed_kg: int
    delta_reduce_zfw_kg: int
    tow_exceeds: bool
    lwg_exceeds: bool
    tank_exceeds: bool
    limiter: str  # "MTOW" | "MLW"


@dataclass(frozen=True)
class DerivedWeights:
    tanker_fuel_kg: int
    tow_kg: int
    lwg_kg: int
    mlw_delta_kg: int
    tank_allowed_kg: int
    delta_reduce_zfw_kg: int
    tow_exceeds: bool
    lwg_exceeds: bool
    tank_exceeds: bool
    mtow_limit_kg: float
    mlw_limit_kg: float
    limiter: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def reset_inputs() -> CalculatorInput:
    """All seven fields back to empty string."""
    return CalculatorInput()


def normalize_input(inputs: CalculatorInput) -> NormalizedInput:
    return NormalizedInput(
        taxi_kg=normalize_taxi_to_kg(parse_decimal(inputs.taxi)),
        sector4=parse_decimal(inputs.sector4),
        sector3=parse_decimal(inputs.sector3),
        sector2=parse_decimal(inputs.sector2),
        sector1=parse_decimal(inputs.sector1),
        zfw=parse_decimal(inputs.zfw),
        trip_plus_taxi=parse_decimal(inputs.trip_plus_taxi),
    )


# ---------------------------------------------------------------------------
# Weight calculation
# ---------------------------------------------------------------------------
def compute_weights(n: NormalizedInput) -> WeightResult:
    tanker = round_kg(n.taxi_kg + n.sector4 + n.sector3 + n.sector2 + n.sector1)
    tow = round_kg(n.zfw + tanker)
    lwg = round_kg(tow - n.trip_plus_taxi)
    return WeightResult(tanker_fuel_kg=tanker, tow_kg=tow, lwg_kg=lwg)


# ---------------------------------------------------------------------------
# Limit evaluation
# ---------------------------------------------------------------------------
def evaluate_limits(tow: float, lwg: float, tanker_fuel: float, zfw: float,
                    trip_plus_taxi: float, mtow_limit: float, mlw_limit: float) -> LimitResult:
    """Compare derived weights with MTOW/MLW. Flags only; never raises.

    tank allowed is the lower of the two fuel ceilings:
      takeoff:  MTOW - ZFW
      landing:  MLW + trip/taxi burned before landing - ZFW
    """
    mtow_limit = normalize_limit_to_kg(mtow_limit)
    mlw_limit = normalize_limit_to_kg(mlw_limit)

    mlw_delta = round_kg(lwg - mlw_limit)
    by_mtow = mtow_limit - zfw
    by_mlw = mlw_limit + trip_plus_taxi - zfw
    tank_allowed = round_kg(min(by_mtow, by_mlw))

    return LimitResult(
        mtow_limit_kg=mtow_limit,
        mlw_limit_kg=mlw_limit,
        mlw_delta_kg=mlw_delta,
        max_tank_by_mtow_kg=by_mtow,
        max_tank_by_mlw_kg=by_mlw,
        tank_allowed_kg=tank_allowed,
        # reducing ZFW by X lowers TOW and LWG by X
        delta_reduce_zfw_kg=mlw_delta,
        tow_exceeds=tow > mtow_limit,
        lwg_exceeds=lwg > mlw_limit,
        tank_exceeds=tank_allowed < tanker_fuel,
        limiter="MTOW" if by_mtow <= by_mlw else "MLW",
    )


# ---------------------------------------------------------------------------
# Panel facade
# ---------------------------------------------------------------------------
def compute_panel(inputs: CalculatorInput, limits: AircraftLimits) -> DerivedWeights:
    """Full recompute for one aircraft panel from its current input snapshot."""
    n = normalize_input(inputs)
    w = compute_weights(n)
    lim = evaluate_limits(w.tow_kg, w.lwg_kg, w.tanker_fuel_kg, n.zfw, n.trip_plus_taxi,
                          limits.mtow, limits.mlw)
    log.debug("panel: tanker=%s tow=%s lwg=%s tank_allowed=%s limiter=%s",
              w.tanker_fuel_kg, w.tow_kg, w.lwg_kg, lim.tank_allowed_kg, lim.limiter)
    return DerivedWeights(
        tanker_fuel_kg=w.tanker_fuel_kg,
        tow_kg=w.tow_kg,
        lwg_kg=w.lwg_kg,
        mlw_delta_kg=lim.mlw_delta_kg,
        tank_allowed_kg=lim.tank_allowed_kg,
        delta_reduce_zfw_kg=lim.delta_reduce_zfw_kg,
        tow_exceeds=lim.tow_exceeds,
        lwg_exceeds=lim.lwg_exceeds,
        tank_exceeds=lim.tank_exceeds,
        mtow_limit_kg=lim.mtow_limit_kg,
        mlw_limit_kg=lim.mlw_limit_kg,
        limiter=lim.limiter,
    )


# === Dict-based facade expected by UI / scenario runner (stable contract) ===
def perf_compute_tanker(inputs: Mapping[str, Any], variant: str = "CEO", model: str = "A320",
                        table: Optional[LimitsTable] = None) -> Dict[str, Any]:
    """
    Accepts an inputs dict (snake_case or camelCase keys), returns a flat result dict.
    Unknown variant/model raises KeyError; operator values never raise.
    """
    limits = get_limits(variant, model, table)
    res = compute_panel(CalculatorInput.from_mapping(inputs), limits)
    out = res.to_dict()
    out["variant"] = str(variant).strip().upper()
    out["model"] = str(model).strip().upper()
    return out


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------
def format_kg(value: float) -> str:
    """Whole kilograms, no thousands separator."""
    return str(round_kg(value))


def format_signed_kg(value: float) -> str:
    s = format_kg(value)
    return f"+{s}" if round_kg(value) > 0 else s


def zfw_status_label(delta_reduce_zfw: float) -> str:
    return "(Overweight)" if delta_reduce_zfw > 0 else "(Under Limit)"
