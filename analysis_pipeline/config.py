"""Configuration helpers for the analysis pipeline.

Provides YAML loading, nested lookups with defaults, and construction of the
color palettes the rendering layer uses for cluster and pattern labels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Sequence

import yaml

from activity_clustering.palette import ColorPalette

DEFAULT_CLUSTER_COLORS = ["#FF3B3B", "#00D9FF", "#FFD93B", "#9D4EDD", "#06FFA5", "#FF6B35", "#4361EE", "#FF1E8C"]
DEFAULT_PATTERN_COLORS = [*DEFAULT_CLUSTER_COLORS, "#00B4D8", "#F72585"]
DEFAULT_NOISE_COLOR = "#808080"


def load_config(path: str | Path) -> Dict[str, Any]:
    """Read the analysis YAML; an empty file yields an empty config."""

    with Path(path).open("r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Analysis config {path} must be a mapping, got {type(cfg).__name__}.")
    return cfg


def get_nested(config: Dict[str, Any], keys: Sequence[str], default: Any) -> Any:
    """Look up a nested section path such as ["route_matching", "min_matches"].

    Missing sections and explicit nulls both fall back to the default.
    """

    current: Any = config
    for key in keys:
        if not isinstance(current, dict) or current.get(key) is None:
            return default
        current = current[key]
    return current


def build_palette(config: Dict[str, Any], kind: str) -> ColorPalette:
    """Palette for 'clusters' or 'patterns' from the palette section."""

    if kind not in {"clusters", "patterns"}:
        raise ValueError(f"Unsupported palette kind: {kind}")
    fallback = DEFAULT_CLUSTER_COLORS if kind == "clusters" else DEFAULT_PATTERN_COLORS
    colors = get_nested(config, ["palette", kind], fallback) or fallback
    noise = get_nested(config, ["palette", "noise"], DEFAULT_NOISE_COLOR)
    return ColorPalette(colors=tuple(colors), noise_color=str(noise))
