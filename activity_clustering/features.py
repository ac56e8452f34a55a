"""Per-activity feature vectors with fixed unit conversions.

Maps requested feature keys onto columns derived from raw activity attributes
(distance in meters, moving time in seconds, elevation gain in meters, speeds
in m/s). The column order of the output always matches the requested order.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0
FEET_PER_METER = 3.28084
MPS_TO_MPH = 2.23694
MPS_TO_KPH = 3.6
SECONDS_PER_HOUR = 3600.0

REQUIRED_COLUMNS: List[str] = ["distance", "moving_time", "total_elevation_gain"]


def _optional(df: pd.DataFrame, column: str) -> pd.Series:
    """Numeric column with absent, NaN and zero values all reported as NaN."""

    if column not in df.columns:
        return pd.Series(np.nan, index=df.index, dtype=float)
    values = pd.to_numeric(df[column], errors="coerce").astype(float)
    return values.where(values != 0)


def _average_speed_mps(df: pd.DataFrame) -> pd.Series:
    """Reported average speed, falling back to distance / moving_time."""

    moving_time = df["moving_time"].astype(float)
    derived = df["distance"].astype(float).div(moving_time.where(moving_time != 0))
    return _optional(df, "average_speed").fillna(derived).fillna(0.0)


def _max_speed_mps(df: pd.DataFrame) -> pd.Series:
    return _optional(df, "max_speed").fillna(0.0)


FEATURES: Dict[str, Callable[[pd.DataFrame], pd.Series]] = {
    "distance_miles": lambda df: df["distance"].astype(float) / METERS_PER_MILE,
    "distance_km": lambda df: df["distance"].astype(float) / METERS_PER_KM,
    "average_speed_mph": lambda df: _average_speed_mps(df) * MPS_TO_MPH,
    "average_speed_kph": lambda df: _average_speed_mps(df) * MPS_TO_KPH,
    "total_elevation_gain": lambda df: df["total_elevation_gain"].astype(float) * FEET_PER_METER,
    "elevation_gain_m": lambda df: df["total_elevation_gain"].astype(float),
    "moving_time_hours": lambda df: df["moving_time"].astype(float) / SECONDS_PER_HOUR,
    "max_speed_mph": lambda df: _max_speed_mps(df) * MPS_TO_MPH,
    "max_speed_kph": lambda df: _max_speed_mps(df) * MPS_TO_KPH,
}


def activities_frame(activities: pd.DataFrame | Iterable[Mapping]) -> pd.DataFrame:
    """Normalize activity records into a DataFrame and validate required columns."""

    df = activities.copy() if isinstance(activities, pd.DataFrame) else pd.DataFrame(list(activities))
    if df.empty:
        return pd.DataFrame(columns=REQUIRED_COLUMNS)
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required activity attributes: {missing}")
    return df.reset_index(drop=True)


def extract_features(
    activities: pd.DataFrame | Iterable[Mapping],
    feature_names: Sequence[str],
) -> Tuple[np.ndarray, pd.DataFrame]:
    """
    Returns (X, features_df) where X is (n_activities, len(feature_names)).
    features_df holds the same values with one column per requested key.
    """

    unknown = [name for name in feature_names if name not in FEATURES]
    if unknown:
        raise ValueError(f"Unsupported feature keys: {unknown}")

    df = activities_frame(activities)
    if df.empty:
        empty = pd.DataFrame({name: pd.Series(dtype=float) for name in feature_names})
        return np.zeros((0, len(feature_names)), dtype=float), empty

    features_df = pd.DataFrame({name: FEATURES[name](df) for name in feature_names}, columns=list(feature_names))
    features_df = features_df.fillna(0.0)
    return features_df.to_numpy(dtype=float), features_df


def cluster_feature_profiles(raw_data, labels, feature_names: Sequence[str]) -> pd.DataFrame:
    """Per-cluster member count and mean of each feature in its display units."""

    df = pd.DataFrame(np.asarray(raw_data, dtype=float).reshape(-1, len(feature_names)), columns=list(feature_names))
    df["cluster_id"] = np.asarray(labels, dtype=int)
    if df.empty:
        return pd.DataFrame(columns=["cluster_id", "n_activities", *feature_names])

    grouped = df.groupby("cluster_id")
    profiles = grouped[list(feature_names)].mean()
    profiles.insert(0, "n_activities", grouped.size())
    return profiles.reset_index()
