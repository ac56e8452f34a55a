"""Optional plotting utilities.

Provides simple matplotlib helpers to visualise the silhouette curve, the
activity clusters over the first two features, and routes colored by their
detected pattern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from activity_clustering.palette import ColorPalette
from activity_clustering.selection import ClusterResult


def plot_silhouette_curve(result: ClusterResult, output_path: Path) -> None:
    """Bar chart of silhouette score per candidate k, highlighting the winner."""

    if not result.silhouette_scores_by_k:
        return

    ks = [k for k, _ in result.silhouette_scores_by_k]
    scores = [s for _, s in result.silhouette_scores_by_k]
    colors = ["tab:orange" if k == result.best_k else "tab:blue" for k in ks]

    fig, ax = plt.subplots(figsize=(5, 3))
    ax.bar([str(k) for k in ks], scores, color=colors)
    ax.set_xlabel("k")
    ax.set_ylabel("Silhouette score")
    ax.set_title(f"Best k = {result.best_k}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def plot_feature_clusters(result: ClusterResult, palette: ColorPalette, output_path: Path) -> None:
    """Scatter of the first two raw features, colored by cluster."""

    if result.raw_data is None or len(result.raw_data) == 0 or result.raw_data.shape[1] < 2:
        return

    fig, ax = plt.subplots(figsize=(6, 5))
    for label in np.unique(result.labels):
        subset = result.raw_data[result.labels == label]
        ax.scatter(subset[:, 0], subset[:, 1], s=18, color=palette.color_for(int(label)), label=f"cluster {label}")
    ax.set_xlabel(result.feature_names[0])
    ax.set_ylabel(result.feature_names[1])
    ax.set_title(f"Activity clusters (k={result.best_k})")
    ax.legend(loc="best", fontsize=8)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def plot_route_patterns(
    tracks: Sequence[np.ndarray],
    labels: Sequence[int],
    palette: ColorPalette,
    output_path: Path,
) -> None:
    """Plot every track in lon/lat, unique routes dashed."""

    if len(tracks) == 0:
        return

    fig, ax = plt.subplots(figsize=(6, 6))
    for track, label in zip(tracks, labels):
        if len(track) == 0:
            continue
        style = "--" if label < 0 else "-"
        ax.plot(track[:, 1], track[:, 0], style, color=palette.color_for(int(label)), linewidth=1)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title("Route patterns")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
