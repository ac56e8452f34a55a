"""Automatic choice of the cluster count by silhouette score.

Runs seeded K-Means for every candidate k, scores each labeling with the
silhouette coefficient and keeps the strictly best one (the smallest k wins
ties). The full per-k score curve is returned with the winner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

from activity_clustering.evaluation import compute_internal_metrics, silhouette_score
from activity_clustering.features import extract_features
from activity_clustering.kmeans import DEFAULT_MAX_ITERATIONS, DEFAULT_SEED, kmeans_fit
from activity_clustering.standardize import standardize

DEFAULT_K_RANGE: Tuple[int, ...] = (2, 3, 4, 5, 6)


def _frozen(arr) -> np.ndarray:
    out = np.array(arr, dtype=float, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class ClusterResult:
    best_k: int
    labels: np.ndarray
    centroids: np.ndarray
    silhouette_score: float
    silhouette_scores_by_k: List[Tuple[int, float]]
    feature_names: List[str] = field(default_factory=list)
    raw_data: np.ndarray | None = None
    scaled_data: np.ndarray | None = None
    means: np.ndarray | None = None
    stds: np.ndarray | None = None
    internal_metrics: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        labels = np.array(self.labels, dtype=int, copy=True)
        labels.setflags(write=False)
        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "centroids", _frozen(self.centroids))
        object.__setattr__(self, "silhouette_scores_by_k", [(int(k), float(s)) for k, s in self.silhouette_scores_by_k])
        object.__setattr__(self, "feature_names", list(self.feature_names))
        object.__setattr__(self, "internal_metrics", dict(self.internal_metrics))
        for name in ("raw_data", "scaled_data", "means", "stds"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _frozen(value))

    def scores_frame(self) -> pd.DataFrame:
        """Score curve as a two-column DataFrame (k, silhouette)."""

        return pd.DataFrame(self.silhouette_scores_by_k, columns=["k", "silhouette"])

    def metrics_frame(self) -> pd.DataFrame:
        """Internal quality indices of the selected model as a one-row DataFrame."""

        return pd.DataFrame([{"k": self.best_k, **self.internal_metrics}])


def find_optimal_k(
    data,
    k_range: Sequence[int] = DEFAULT_K_RANGE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    seed: int = DEFAULT_SEED,
) -> ClusterResult:
    """Fit K-Means for each candidate k and return the best-scoring model."""

    candidates = [int(k) for k in k_range]
    if not candidates:
        raise ValueError("k_range must contain at least one candidate.")

    X = np.asarray(data, dtype=float)
    best: Tuple[int, np.ndarray, np.ndarray, float] | None = None
    scores: List[Tuple[int, float]] = []

    for k in candidates:
        labels, centroids = kmeans_fit(X, k, max_iterations=max_iterations, seed=seed)
        score = silhouette_score(X, labels)
        scores.append((k, score))
        logging.info("k=%d silhouette=%.4f", k, score)
        if best is None or score > best[3]:
            best = (k, labels, centroids, score)

    best_k, labels, centroids, score = best
    logging.info("Selected k=%d (silhouette=%.4f)", best_k, score)
    return ClusterResult(
        best_k=best_k,
        labels=labels,
        centroids=centroids,
        silhouette_score=score,
        silhouette_scores_by_k=scores,
    )


def cluster_activities(
    activities: pd.DataFrame | Iterable[Mapping],
    feature_names: Sequence[str],
    k_range: Sequence[int] = DEFAULT_K_RANGE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    seed: int = DEFAULT_SEED,
) -> ClusterResult:
    """
    Extract features, standardize them, and cluster with automatic k.

    The result carries the raw (display-unit) and standardized matrices so
    callers can re-display per-feature values in the requested order.
    """

    X, _ = extract_features(activities, feature_names)
    logging.info("Clustering %d activities on features %s", len(X), list(feature_names))
    dataset = standardize(X)
    result = find_optimal_k(dataset.scaled, k_range=k_range, max_iterations=max_iterations, seed=seed)
    metrics = compute_internal_metrics(dataset.scaled, result.labels, metric_mode="features")
    logging.info(
        "Selected model quality: davies_bouldin=%.4f calinski_harabasz=%.4f",
        metrics["davies_bouldin"],
        metrics["calinski_harabasz"],
    )
    return ClusterResult(
        best_k=result.best_k,
        labels=result.labels,
        centroids=result.centroids,
        silhouette_score=result.silhouette_score,
        silhouette_scores_by_k=result.silhouette_scores_by_k,
        feature_names=list(feature_names),
        raw_data=X,
        scaled_data=dataset.scaled,
        means=dataset.means,
        stds=dataset.stds,
        internal_metrics=metrics,
    )
