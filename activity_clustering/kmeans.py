"""K-Means with deterministic k-means++ initialization.

Centroids are seeded from a linear-congruential generator so identical input
and seed always reproduce the same clustering. Assignment uses squared
Euclidean distance; an empty cluster keeps its previous centroid.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from activity_clustering.seeded_random import SeededRandom
from geo_metrics import squared_distances

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_SEED = 42


def _sample_index(probabilities: np.ndarray, draw: float) -> int:
    """Walk the cumulative distribution; fall back to the last index."""

    cumulative = np.cumsum(probabilities)
    idx = int(np.searchsorted(cumulative, draw, side="left"))
    return min(idx, len(probabilities) - 1)


def init_centroids(X: np.ndarray, k: int, rng: SeededRandom) -> np.ndarray:
    """Pick k starting centroids with k-means++ seeding."""

    n = X.shape[0]
    first = int(np.floor(rng.next() * n))
    chosen: List[np.ndarray] = [X[first].copy()]

    for _ in range(1, k):
        nearest = squared_distances(X, np.vstack(chosen)).min(axis=1)
        total = float(nearest.sum())
        if total > 0:
            probabilities = nearest / total
        else:
            probabilities = np.zeros(n, dtype=float)
        idx = _sample_index(probabilities, rng.next())
        chosen.append(X[idx].copy())

    return np.vstack(chosen)


def assign_labels(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every row (first one wins on ties)."""

    return np.argmin(squared_distances(X, centroids), axis=1)


def update_centroids(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Return new centroids as member means; empty clusters stay where they were."""

    updated = centroids.copy()
    for c in range(len(centroids)):
        members = X[labels == c]
        if len(members):
            updated[c] = members.mean(axis=0)
    return updated


def kmeans_fit(
    data,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    seed: int = DEFAULT_SEED,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fit K-Means and return (labels, centroids).

    Stops when no assignment changes or after max_iterations passes. Callers
    are responsible for passing a sensible k; an empty dataset yields empty
    labels and centroids.
    """

    X = np.asarray(data, dtype=float)
    if X.ndim != 2 or X.shape[0] == 0:
        n_cols = X.shape[1] if X.ndim == 2 else 0
        return np.zeros(0, dtype=int), np.zeros((0, n_cols), dtype=float)

    rng = SeededRandom(seed)
    centroids = init_centroids(X, k, rng)
    labels = np.zeros(X.shape[0], dtype=int)

    for iteration in range(max_iterations):
        new_labels = assign_labels(X, centroids)
        if np.array_equal(new_labels, labels):
            logging.debug("K-Means (k=%d) converged after %d iterations", k, iteration)
            break
        labels = new_labels
        centroids = update_centroids(X, labels, centroids)

    return labels, centroids
