"""Pairwise dissimilarity between route signatures.

The score is a weighted sum of three components in [0, 1]:

- location (0.3): summed start and end offsets, saturating at 10 km;
- distance (0.2): relative length difference, saturating at 50 %;
- bearing shape (0.5): mean wrapped angular difference between the bearing
  sequences after resampling both to a common length (at most 30).

Lower is more similar; 0 means identical.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from geo_metrics import point_distance
from route_patterns.signature import RouteSignature

LOCATION_WEIGHT = 0.3
DISTANCE_WEIGHT = 0.2
BEARING_WEIGHT = 0.5
LOCATION_SCALE_M = 10_000.0
MAX_BEARING_SAMPLES = 30


def interpolate_bearings(bearings, target_len: int) -> np.ndarray:
    """Resample a bearing sequence to target_len values, interpolating across 0/360."""

    bearings = np.asarray(bearings, dtype=float)
    if len(bearings) == 0:
        return np.zeros(target_len, dtype=float)
    if len(bearings) == target_len:
        return bearings.copy()
    if target_len == 1:
        return bearings[:1].copy()

    last = len(bearings) - 1
    pos = np.arange(target_len) * (last / (target_len - 1))
    idx = np.floor(pos).astype(int)
    frac = pos - idx
    at_end = idx >= last
    idx = np.minimum(idx, last - 1)

    b1 = bearings[idx]
    b2 = bearings[idx + 1]
    wrap = np.abs(b2 - b1) > 180
    ascending = b1 < b2
    b1, b2 = np.where(wrap & ascending, b1 + 360, b1), np.where(wrap & ~ascending, b2 + 360, b2)

    interpolated = np.mod(b1 + (b2 - b1) * frac, 360.0)
    return np.where(at_end, bearings[-1], interpolated)


def bearing_shape_score(bearings_a, bearings_b, max_samples: int = MAX_BEARING_SAMPLES) -> float:
    """Mean absolute angular difference normalized to [0, 1]."""

    target_len = min(len(bearings_a), len(bearings_b), max_samples)
    if target_len == 0:
        return 1.0
    norm_a = interpolate_bearings(bearings_a, target_len)
    norm_b = interpolate_bearings(bearings_b, target_len)

    diff = np.abs(norm_a - norm_b)
    diff = np.where(diff > 180, 360 - diff, diff)
    return float(diff.sum() / (180.0 * target_len))


def location_score(sig_a: RouteSignature, sig_b: RouteSignature) -> float:
    offset = point_distance(sig_a.start_point, sig_b.start_point) + point_distance(sig_a.end_point, sig_b.end_point)
    return min(offset / LOCATION_SCALE_M, 1.0)


def distance_score(sig_a: RouteSignature, sig_b: RouteSignature) -> float:
    longest = max(sig_a.total_distance, sig_b.total_distance)
    if longest <= 0:
        return 0.0
    return min(2 * abs(sig_a.total_distance - sig_b.total_distance) / longest, 1.0)


def compare_signatures(
    sig_a: RouteSignature,
    sig_b: RouteSignature,
    max_samples: int = MAX_BEARING_SAMPLES,
) -> float:
    """Dissimilarity in [0, 1]; 1.0 when either route has no bearings."""

    if len(sig_a.bearings) == 0 or len(sig_b.bearings) == 0:
        return 1.0

    return (
        location_score(sig_a, sig_b) * LOCATION_WEIGHT
        + distance_score(sig_a, sig_b) * DISTANCE_WEIGHT
        + bearing_shape_score(sig_a.bearings, sig_b.bearings, max_samples) * BEARING_WEIGHT
    )


def similarity_matrix(signatures: Sequence[RouteSignature], max_samples: int = MAX_BEARING_SAMPLES) -> np.ndarray:
    """Symmetric n x n dissimilarity matrix with a zero diagonal."""

    n = len(signatures)
    D = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1, n):
            D[i, j] = D[j, i] = compare_signatures(signatures[i], signatures[j], max_samples)
    return D
