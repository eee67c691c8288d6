# data_loaders.py — v1.1.0-data
# Path-hardening: all CSV loads default to ./data relative to this file.
# Smart fallback — if a caller passes a bare filename or a non-existent path,
# we transparently try ./data/<name> before failing.

from __future__ import annotations
import logging
import os
from functools import lru_cache
from typing import Dict, List, Optional
import pandas as pd

from aircraft_limits import MODELS, VARIANTS, AircraftLimits, canonical_model, canonical_variant
from tanker_core import INPUT_FIELDS, FIELD_ALIASES, normalize_limits

log = logging.getLogger(__name__)

# Resolve ./data relative to this file (works in Streamlit Cloud, local, etc.)
DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

LIMITS_COLUMNS = {"variant", "model", "mtow", "mlw"}


def _csv_path(name: str) -> str:
    return os.path.join(DATA_DIR, name)


def resolve_data_path(path: Optional[str], default_name: str) -> str:
    """
    Resolution rules:
      1) If path is None → use ./data/<default_name>.
      2) If path exists as given (absolute, relative or bare filename in CWD) → use as-is.
      3) Otherwise → try ./data/<basename(path)>.
      4) If that still doesn't exist → raise FileNotFoundError (with both tried paths).
    """
    if path is None:
        p = _csv_path(default_name)
        if os.path.isfile(p):
            return p
        raise FileNotFoundError(f"Missing required file: {p}")

    tried = []
    if os.path.isfile(path):
        return path
    tried.append(path)

    candidate = _csv_path(os.path.basename(path))
    if os.path.isfile(candidate):
        return candidate
    tried.append(candidate)

    raise FileNotFoundError(f"No such file. Tried: {tried}")


@lru_cache(maxsize=None)
def load_limits_csv(path: str | None = None) -> Dict[str, Dict[str, AircraftLimits]]:
    """
    Operator limits table → {variant: {model: AircraftLimits}}.
    Columns required: variant, model, mtow, mlw
    Default location: ./data/aircraft_limits.csv
    Values under 1000 are read as tons and converted to kg.
    Every (variant, model) pair must appear exactly once.
    """
    resolved = resolve_data_path(path, "aircraft_limits.csv")
    df = pd.read_csv(resolved)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = LIMITS_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Limits CSV missing columns: {sorted(missing)}")

    table: Dict[str, Dict[str, AircraftLimits]] = {}
    duplicated: List[str] = []
    for i, r in df.iterrows():
        try:
            variant = canonical_variant(r["variant"])
            model = canonical_model(r["model"])
            limits = normalize_limits(AircraftLimits(mtow=float(r["mtow"]), mlw=float(r["mlw"])))
        except (KeyError, ValueError, TypeError) as e:
            raise ValueError(f"{resolved}: bad limits row {i + 2}: {e}") from e
        if model in table.get(variant, {}):
            duplicated.append(f"{variant}/{model}")
        table.setdefault(variant, {})[model] = limits

    missing_pairs = [f"{v}/{m}" for v in VARIANTS for m in MODELS if m not in table.get(v, {})]
    problems = []
    if missing_pairs:
        problems.append(f"missing {missing_pairs}")
    if duplicated:
        problems.append(f"duplicated {duplicated}")
    if problems:
        raise ValueError(f"{resolved}: limits table must list each variant/model once; "
                         + ", ".join(problems))

    log.info("Loaded limits table from %s (%d rows)", resolved, len(df))
    return table


def load_scenarios_csv(source) -> pd.DataFrame:
    """
    Scenario sheet for batch evaluation.
    Columns required: model. Missing input columns default to empty text.
    Every input column is kept as text so "0,2" survives as typed.
    """
    if isinstance(source, (str, os.PathLike)):
        source = resolve_data_path(str(source), "sample_scenarios.csv")
    df = pd.read_csv(source, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    df = df.rename(columns={c: FIELD_ALIASES[c] for c in df.columns if c in FIELD_ALIASES})
    if "model" not in df.columns:
        raise ValueError("Scenario CSV missing required column: model")
    for c in INPUT_FIELDS:
        if c not in df.columns:
            df[c] = ""
    return df
