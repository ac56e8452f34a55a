"""Geometry primitives shared by the clustering and route-matching pipelines.

Includes Euclidean distances for feature vectors and spherical helpers
(haversine distance, initial compass bearing) for latitude/longitude tracks.
Coordinates are normalized to numpy arrays shaped (T, 2) holding (lat, lng)
in degrees; points may arrive as (lat, lng) pairs or as mappings with
lat/lng or latitude/longitude keys.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import numpy as np
from scipy.spatial.distance import cdist

EARTH_RADIUS_M = 6_371_000.0

LatLng = tuple[float, float]


def point_pair(point: Any) -> LatLng:
    """Read one point as a (lat, lng) float pair."""

    try:
        if isinstance(point, Mapping):
            lat = point.get("lat", point.get("latitude"))
            lng = point.get("lng", point.get("longitude"))
            if lat is None or lng is None:
                raise ValueError("missing lat/lng")
            return float(lat), float(lng)
        lat, lng = point
        return float(lat), float(lng)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Point must be a (lat, lng) pair or a lat/lng mapping, got {point!r}.") from exc


def as_coordinates(points: Iterable[Any] | np.ndarray) -> np.ndarray:
    """Coerce a point sequence into a float array of shape (T, 2)."""

    if isinstance(points, np.ndarray):
        coords = points.astype(float, copy=False)
        if coords.size == 0:
            return np.empty((0, 2), dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"Coordinates must be shaped (T, 2), got {coords.shape}.")
    else:
        pairs = [point_pair(p) for p in points]
        if not pairs:
            return np.empty((0, 2), dtype=float)
        coords = np.array(pairs, dtype=float)
    if np.isnan(coords).any():
        raise ValueError("Coordinates contain NaN values.")
    return coords


def squared_distances(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance from every point to every center, shape (n, k)."""

    return cdist(points, centers, metric="sqeuclidean")


def euclidean_distance_matrix(points: np.ndarray) -> np.ndarray:
    """Symmetric pairwise Euclidean distance matrix for a feature matrix."""

    points = np.asarray(points, dtype=float)
    if len(points) == 0:
        return np.zeros((0, 0), dtype=float)
    return cdist(points, points, metric="euclidean")


def haversine_distance(lat1, lng1, lat2, lng2):
    """
    Great-circle distance in meters between two points (or arrays of points).

    Accepts scalars or broadcastable arrays; returns a float for scalar input.
    """

    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    d_lat = np.radians(np.subtract(lat2, lat1))
    d_lng = np.radians(np.subtract(lng2, lng1))

    a = np.sin(d_lat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(d_lng / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    dist = EARTH_RADIUS_M * c
    return float(dist) if np.ndim(dist) == 0 else dist


def initial_bearing(lat1, lng1, lat2, lng2):
    """Initial compass heading in degrees [0, 360) from point 1 toward point 2."""

    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    d_lng = np.radians(np.subtract(lng2, lng1))

    y = np.sin(d_lng) * np.cos(lat2_rad)
    x = np.cos(lat1_rad) * np.sin(lat2_rad) - np.sin(lat1_rad) * np.cos(lat2_rad) * np.cos(d_lng)
    bearing = np.mod(np.degrees(np.arctan2(y, x)) + 360.0, 360.0)
    return float(bearing) if np.ndim(bearing) == 0 else bearing


def point_distance(a: LatLng, b: LatLng) -> float:
    """Haversine distance between two (lat, lng) tuples."""

    return haversine_distance(a[0], a[1], b[0], b[1])
