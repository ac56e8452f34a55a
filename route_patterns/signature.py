"""Bearing signatures of GPS tracks.

A signature down-samples a track to a bounded number of points, then records
the compass bearing and cumulative haversine distance of each consecutive
segment, along with the start and end coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from geo_metrics import LatLng, as_coordinates, haversine_distance, initial_bearing

MAX_SIGNATURE_POINTS = 50


@dataclass(frozen=True)
class RouteSignature:
    bearings: np.ndarray
    distances: np.ndarray
    total_distance: float
    start_point: LatLng
    end_point: LatLng


def downsample_indices(n_points: int, max_points: int = MAX_SIGNATURE_POINTS) -> np.ndarray:
    """
    Uniform-stride sample indices, at most max_points long, always ending at n_points - 1.
    """

    if n_points <= max_points:
        return np.arange(n_points)
    stride = math.ceil((n_points - 1) / (max_points - 1))
    indices = np.arange(0, n_points, stride)
    if indices[-1] != n_points - 1:
        indices = np.append(indices, n_points - 1)
    return indices


def build_signature(points, max_points: int = MAX_SIGNATURE_POINTS) -> RouteSignature:
    """Build the signature of an ordered (lat, lng) sequence."""

    coords = as_coordinates(points)
    if len(coords) < 2:
        anchor: LatLng = (float(coords[0, 0]), float(coords[0, 1])) if len(coords) else (0.0, 0.0)
        return RouteSignature(
            bearings=np.zeros(0, dtype=float),
            distances=np.zeros(0, dtype=float),
            total_distance=0.0,
            start_point=anchor,
            end_point=anchor,
        )

    sampled = coords[downsample_indices(len(coords), max_points)]
    lat1, lng1 = sampled[:-1, 0], sampled[:-1, 1]
    lat2, lng2 = sampled[1:, 0], sampled[1:, 1]

    bearings = np.atleast_1d(initial_bearing(lat1, lng1, lat2, lng2)).astype(float)
    segment_lengths = np.atleast_1d(haversine_distance(lat1, lng1, lat2, lng2)).astype(float)
    distances = np.concatenate(([0.0], np.cumsum(segment_lengths)))

    return RouteSignature(
        bearings=bearings,
        distances=distances,
        total_distance=float(distances[-1]),
        start_point=(float(coords[0, 0]), float(coords[0, 1])),
        end_point=(float(coords[-1, 0]), float(coords[-1, 1])),
    )


def build_signatures(routes: Sequence, max_points: int = MAX_SIGNATURE_POINTS) -> list[RouteSignature]:
    return [build_signature(route, max_points=max_points) for route in routes]
