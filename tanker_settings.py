# tanker_settings.py — v1.0.0-config
# App settings from ./data/tanker_config.json (optional) + logging setup.
# Missing file or keys fall back to the defaults below.

from __future__ import annotations
import json
import logging
import sys
from typing import Any, Dict, Optional

from aircraft_limits import AIRCRAFT_DATA, LimitsTable, canonical_variant
from data_loaders import load_limits_csv, resolve_data_path

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def default_settings() -> Dict[str, Any]:
    return {
        "default_variant": "CEO",
        "log_level": "INFO",
        "limits_csv": None,  # None -> built-in table
        "page_title": "AeroTanker",
    }


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    try:
        with open(resolve_data_path(path, "tanker_config.json")) as f:
            cfg = json.load(f)
    except FileNotFoundError:
        cfg = default_settings()
    if not isinstance(cfg, dict):
        raise ValueError("tanker_config.json must hold a JSON object")
    for k, v in default_settings().items():
        cfg.setdefault(k, v)
    # fail early on a bad variant instead of at first render
    cfg["default_variant"] = canonical_variant(cfg["default_variant"])
    return cfg


def configure_logging(level: str | int = "INFO") -> None:
    """One stream handler on the root logger; calling again only updates the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    global _handler
    root = logging.getLogger()
    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    root.setLevel(level)


def limits_table(cfg: Dict[str, Any]) -> LimitsTable:
    path = cfg.get("limits_csv")
    if not path:
        return AIRCRAFT_DATA
    table = load_limits_csv(path)
    log.info("Using operator limits table %s", path)
    return table
