"""Input/output helpers for the analysis pipeline.

Loads activity records and route tracks from JSON or CSV, and saves result
tables as CSV.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple

import numpy as np
import pandas as pd

from activity_clustering.features import activities_frame
from geo_metrics import as_coordinates


def _check_path(path: str | Path) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if path.suffix.lower() not in {".json", ".csv"}:
        raise ValueError(f"Unsupported input format: {path.suffix} (expected .json or .csv)")
    return path


def load_activities(path: str | Path) -> pd.DataFrame:
    """Load activity records (distance, moving_time, total_elevation_gain, ...)."""

    path = _check_path(path)
    if path.suffix.lower() == ".json":
        with path.open("r", encoding="utf-8") as fh:
            records = json.load(fh)
        df = pd.DataFrame(records)
    else:
        df = pd.read_csv(path)
    df = activities_frame(df)
    logging.info("Loaded %d activities from %s", len(df), path)
    return df


def load_routes(path: str | Path) -> Tuple[List[Any], List[np.ndarray]]:
    """
    Load route tracks as (route_ids, tracks).

    JSON: a list of {"id": ..., "points": [[lat, lng], ...]} objects, where a
    point may also be a lat/lng or latitude/longitude mapping. CSV: rows of
    route_id, latitude, longitude in track order.
    """

    path = _check_path(path)
    route_ids: List[Any] = []
    tracks: List[np.ndarray] = []

    if path.suffix.lower() == ".json":
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
        for pos, route in enumerate(payload):
            points = route.get("points", []) if isinstance(route, dict) else route
            route_ids.append(route.get("id", pos) if isinstance(route, dict) else pos)
            tracks.append(as_coordinates(points))
    else:
        df = pd.read_csv(path)
        missing = [col for col in ("route_id", "latitude", "longitude") if col not in df.columns]
        if missing:
            raise ValueError(f"Missing required route columns: {missing}")
        for route_id, route in df.groupby("route_id", sort=False):
            route_ids.append(route_id)
            tracks.append(route[["latitude", "longitude"]].to_numpy(dtype=float))

    logging.info("Loaded %d routes from %s", len(tracks), path)
    return route_ids, tracks


def save_dataframe(df: pd.DataFrame, path: str | Path) -> None:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info("Saved %d rows to %s", len(df), path)
