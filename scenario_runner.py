"""
scenario_runner.py — batch evaluation of tankering scenarios  (v1.0.0-batch)
Each row: model (A320/A321), optional variant (CEO/NEO), and the seven panel
inputs as typed on the form. Output: the same rows with the derived weights,
flags and limits appended.

Usage:
    python scenario_runner.py scenarios.csv [--variant NEO]
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, List, Dict, Any

import pandas as pd

from aircraft_limits import LimitsTable, canonical_variant
from data_loaders import load_scenarios_csv
from tanker_core import INPUT_FIELDS, perf_compute_tanker
from tanker_settings import configure_logging, load_settings, limits_table

log = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "tanker_fuel_kg", "tow_kg", "lwg_kg", "mlw_delta_kg", "tank_allowed_kg",
    "delta_reduce_zfw_kg", "tow_exceeds", "lwg_exceeds", "tank_exceeds",
    "mtow_limit_kg", "mlw_limit_kg", "limiter",
]


def evaluate_scenarios(df: pd.DataFrame, variant: Optional[str] = None,
                       table: Optional[LimitsTable] = None) -> pd.DataFrame:
    """
    Row-wise evaluation. `variant` overrides / fills the per-row variant column
    (default CEO when neither is given); the canonical variant is written back.
    Result columns already present (a results sheet fed back in) are replaced.
    """
    if "model" not in df.columns:
        raise ValueError("Scenario table missing required column: model")

    rows: List[Dict[str, Any]] = []
    variants: List[str] = []
    for i, r in df.iterrows():
        row_variant = variant or r.get("variant")
        if row_variant is None or pd.isna(row_variant) or not str(row_variant).strip():
            row_variant = "CEO"
        inputs = {c: r.get(c, "") for c in INPUT_FIELDS}
        try:
            row_variant = canonical_variant(row_variant)
            res = perf_compute_tanker(inputs, variant=row_variant, model=r["model"], table=table)
        except KeyError as e:
            raise ValueError(f"Scenario row {i}: {e}") from e
        variants.append(row_variant)
        rows.append({k: res[k] for k in RESULT_COLUMNS})

    out = df.drop(columns=[c for c in RESULT_COLUMNS if c in df.columns])
    out["variant"] = pd.Series(variants, index=df.index, dtype=object)
    results = pd.DataFrame(rows, columns=RESULT_COLUMNS, index=df.index)
    log.info("Evaluated %d scenario(s); %d with an exceedance", len(results),
             int((results["tow_exceeds"] | results["lwg_exceeds"] | results["tank_exceeds"]).sum())
             if len(results) else 0)
    return pd.concat([out, results], axis=1)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Evaluate A320/A321 tankering scenarios from a CSV sheet.")
    p.add_argument("csv", help="scenario CSV (model, variant, taxi, sector4..sector1, zfw, trip_plus_taxi)")
    p.add_argument("--variant", choices=["CEO", "NEO"], default=None,
                   help="apply one engine variant to every row")
    args = p.parse_args(argv)

    cfg = load_settings()
    configure_logging(cfg["log_level"])
    df = load_scenarios_csv(args.csv)
    out = evaluate_scenarios(df, args.variant, limits_table(cfg))
    out.to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
