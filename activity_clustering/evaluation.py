"""Cluster quality metrics."""

from __future__ import annotations

from typing import Literal

import numpy as np
from sklearn.metrics import calinski_harabasz_score, davies_bouldin_score

from geo_metrics import euclidean_distance_matrix


def silhouette_from_distances(D, labels) -> float:
    """
    Mean silhouette coefficient over a precomputed distance matrix.

    a(i) is the mean distance to the other members of i's cluster (0 for a
    singleton), b(i) the smallest mean distance to any other non-empty
    cluster. Fewer than two non-empty clusters, or no points, score 0.
    """

    D = np.asarray(D, dtype=float)
    labels = np.asarray(labels, dtype=int)
    n = len(labels)
    if n == 0:
        return 0.0

    clusters = np.unique(labels)
    if len(clusters) < 2:
        return 0.0

    members = {c: np.flatnonzero(labels == c) for c in clusters}
    total = 0.0
    for i in range(n):
        own = labels[i]
        same = members[own][members[own] != i]
        a = float(D[i, same].mean()) if len(same) else 0.0
        b = min(float(D[i, idx].mean()) for c, idx in members.items() if c != own)
        denom = max(a, b)
        total += (b - a) / denom if denom > 0 else 0.0
    return total / n


def silhouette_score(data, labels) -> float:
    """Mean silhouette coefficient using Euclidean distance in feature space."""

    return silhouette_from_distances(euclidean_distance_matrix(data), labels)


def compute_internal_metrics(
    X_or_D,
    labels,
    metric_mode: Literal["features", "precomputed"],
    include_noise: bool = False,
) -> dict:
    labels = np.asarray(labels)
    X_or_D = np.asarray(X_or_D, dtype=float)
    noise_frac = float(np.mean(labels == -1)) if len(labels) else 0.0
    if not include_noise:
        mask = labels != -1
        X_or_D = X_or_D[mask][:, mask] if metric_mode == "precomputed" else X_or_D[mask]
        labels = labels[mask]

    unique = [c for c in np.unique(labels) if c != -1]
    if len(unique) < 2:
        return {
            "davies_bouldin": float("nan"),
            "silhouette": 0.0,
            "calinski_harabasz": float("nan"),
            "n_clusters": len(unique),
            "noise_frac": noise_frac,
            "reason": "<2 clusters",
        }

    metrics = {"n_clusters": len(unique), "noise_frac": noise_frac}

    if metric_mode == "precomputed":
        metrics["silhouette"] = silhouette_from_distances(X_or_D, labels)
        metrics["davies_bouldin"] = float("nan")
        metrics["calinski_harabasz"] = float("nan")
    else:
        metrics["silhouette"] = silhouette_score(X_or_D, labels)
        # sklearn requires 2 <= n_clusters <= n_samples - 1
        if len(unique) < len(labels):
            metrics["davies_bouldin"] = float(davies_bouldin_score(X_or_D, labels))
            metrics["calinski_harabasz"] = float(calinski_harabasz_score(X_or_D, labels))
        else:
            metrics["davies_bouldin"] = float("nan")
            metrics["calinski_harabasz"] = float("nan")
    return metrics
