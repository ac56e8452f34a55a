"""Find repeated routes among a set of GPS tracks.

Signatures are built for every track, compared pairwise into a dense
dissimilarity matrix, and grouped with DBSCAN. Routes that join no group are
reported as unique (label -1).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from activity_clustering.evaluation import compute_internal_metrics
from activity_clustering.palette import ColorPalette
from route_patterns.comparison import MAX_BEARING_SAMPLES, similarity_matrix
from route_patterns.density import DEFAULT_EPS, DEFAULT_MIN_SAMPLES, NOISE, dbscan
from route_patterns.signature import MAX_SIGNATURE_POINTS, build_signatures


@dataclass(frozen=True)
class RouteMatchResult:
    labels: np.ndarray
    pattern_count: int
    unique_route_count: int
    pattern_sizes: List[int] = field(default_factory=list)
    silhouette_score: float = 0.0
    similarity_matrix: np.ndarray | None = None

    def __post_init__(self) -> None:
        labels = np.array(self.labels, dtype=int, copy=True)
        labels.setflags(write=False)
        object.__setattr__(self, "labels", labels)
        if self.similarity_matrix is not None:
            matrix = np.array(self.similarity_matrix, dtype=float, copy=True)
            matrix.setflags(write=False)
            object.__setattr__(self, "similarity_matrix", matrix)

    def pattern_colors(self, palette: ColorPalette) -> List[str]:
        """One color per discovered pattern id."""

        return [palette.color_for(pattern) for pattern in range(self.pattern_count)]

    def route_colors(self, palette: ColorPalette) -> List[str]:
        return palette.colors_for(self.labels)


def find_similar_routes(
    routes: Sequence,
    similarity_threshold: float = DEFAULT_EPS,
    min_matches: int = DEFAULT_MIN_SAMPLES,
    max_signature_points: int = MAX_SIGNATURE_POINTS,
    max_bearing_samples: int = MAX_BEARING_SAMPLES,
    include_matrix: bool = True,
) -> RouteMatchResult:
    """
    Group routes whose signatures are within similarity_threshold of each other.

    similarity_threshold is the DBSCAN eps over the [0, 1] dissimilarity
    (lower is stricter); min_matches is the number of routes, counting the
    route itself, needed to form a pattern.
    """

    logging.info("Finding similar routes among %d tracks (threshold=%.3f)", len(routes), similarity_threshold)
    if len(routes) == 0:
        return RouteMatchResult(
            labels=np.zeros(0, dtype=int),
            pattern_count=0,
            unique_route_count=0,
            similarity_matrix=np.zeros((0, 0)) if include_matrix else None,
        )

    signatures = build_signatures(routes, max_points=max_signature_points)
    D = similarity_matrix(signatures, max_samples=max_bearing_samples)
    labels = dbscan(D, eps=similarity_threshold, min_samples=min_matches)

    pattern_ids = sorted(int(label) for label in np.unique(labels) if label != NOISE)
    pattern_sizes = [int(np.sum(labels == pattern)) for pattern in pattern_ids]
    unique_routes = int(np.sum(labels == NOISE))

    metrics = compute_internal_metrics(D, labels, metric_mode="precomputed", include_noise=False)

    logging.info("Found %d route patterns and %d unique routes", len(pattern_ids), unique_routes)
    return RouteMatchResult(
        labels=labels,
        pattern_count=len(pattern_ids),
        unique_route_count=unique_routes,
        pattern_sizes=pattern_sizes,
        silhouette_score=float(metrics["silhouette"]),
        similarity_matrix=D if include_matrix else None,
    )
