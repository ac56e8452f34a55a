"""DBSCAN over a precomputed, dense dissimilarity matrix."""

from __future__ import annotations

from typing import List

import numpy as np

NOISE = -1
DEFAULT_EPS = 0.25
DEFAULT_MIN_SAMPLES = 2


def _validate_matrix(D) -> np.ndarray:
    D = np.asarray(D, dtype=float)
    if D.size == 0:
        return np.zeros((0, 0), dtype=float)
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise ValueError(f"Distance matrix must be square, got shape {D.shape}.")
    return D


def region_query(D: np.ndarray, idx: int, eps: float) -> List[int]:
    """Indices whose dissimilarity to idx is within eps (idx itself included)."""

    return np.flatnonzero(D[idx] <= eps).tolist()


def expand_cluster(
    D: np.ndarray,
    labels: np.ndarray,
    seed_idx: int,
    neighbors: List[int],
    cluster_id: int,
    eps: float,
    min_samples: int,
) -> None:
    """Grow cluster_id from a core point, absorbing reachable points still labelled noise."""

    labels[seed_idx] = cluster_id
    queue = list(neighbors)
    queued = set(queue)
    pos = 0
    while pos < len(queue):
        n_idx = queue[pos]
        pos += 1
        if labels[n_idx] != NOISE:
            continue
        labels[n_idx] = cluster_id
        n_neighbors = region_query(D, n_idx, eps)
        if len(n_neighbors) >= min_samples:
            for candidate in n_neighbors:
                if candidate not in queued:
                    queued.add(candidate)
                    queue.append(candidate)


def dbscan(D, eps: float = DEFAULT_EPS, min_samples: int = DEFAULT_MIN_SAMPLES) -> np.ndarray:
    """
    Label every row of a square dissimilarity matrix.

    Cluster ids start at 0 in order of discovery; -1 marks noise. A point
    first marked noise is relabelled when a later cluster reaches it.
    """

    D = _validate_matrix(D)
    n = D.shape[0]
    labels = np.full(n, NOISE, dtype=int)
    cluster_id = 0

    for i in range(n):
        if labels[i] != NOISE:
            continue
        neighbors = region_query(D, i, eps)
        if len(neighbors) < min_samples:
            continue
        expand_cluster(D, labels, i, neighbors, cluster_id, eps, min_samples)
        cluster_id += 1

    return labels
