"""CLI entry point for the activity analysis pipeline.

Orchestrates loading, behavioral clustering of activities, repeated-route
detection, and optional plotting, driven by a YAML config.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from activity_clustering.features import cluster_feature_profiles
from activity_clustering.selection import DEFAULT_K_RANGE, cluster_activities
from analysis_pipeline.config import build_palette, get_nested, load_config
from analysis_pipeline.io import load_activities, load_routes, save_dataframe
from route_patterns.matching import find_similar_routes

DEFAULT_FEATURES = ["distance_miles", "average_speed_mph", "total_elevation_gain"]


def configure_logging(log_cfg: Dict[str, object]) -> Path:
    """Route analysis logs to a run log file and, unless disabled, the console."""

    log_path = Path(log_cfg.get("dir", "logs")) / str(log_cfg.get("filename", "analysis.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level_name = str(log_cfg.get("level", "INFO")).upper()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handlers: List[logging.Handler] = [
        logging.FileHandler(log_path, mode="a" if log_cfg.get("append", False) else "w", encoding="utf-8")
    ]
    if log_cfg.get("console", True):
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info("Activity analysis log at %s (level=%s)", log_path, level_name)
    return log_path


def run_activity_clustering(cfg: Dict[str, object], activities_path: str, csv_dir: Path, plots_dir: Path, exp_name: str) -> None:
    activities = load_activities(activities_path)
    feature_names = list(get_nested(cfg, ["features", "names"], DEFAULT_FEATURES))
    result = cluster_activities(
        activities,
        feature_names,
        k_range=get_nested(cfg, ["clustering", "k_range"], list(DEFAULT_K_RANGE)),
        max_iterations=int(get_nested(cfg, ["clustering", "max_iterations"], 100)),
        seed=int(get_nested(cfg, ["clustering", "seed"], 42)),
    )
    palette = build_palette(cfg, "clusters")

    assignments = pd.DataFrame(result.raw_data, columns=feature_names)
    if "id" in activities.columns:
        assignments.insert(0, "activity_id", activities["id"].to_numpy())
    assignments["cluster_id"] = result.labels
    assignments["color"] = palette.colors_for(result.labels)
    save_dataframe(assignments, csv_dir / f"activity_clusters_{exp_name}.csv")
    save_dataframe(result.scores_frame(), csv_dir / f"silhouette_scores_{exp_name}.csv")
    save_dataframe(result.metrics_frame(), csv_dir / f"cluster_metrics_{exp_name}.csv")
    save_dataframe(
        cluster_feature_profiles(result.raw_data, result.labels, feature_names),
        csv_dir / f"cluster_profiles_{exp_name}.csv",
    )

    if get_nested(cfg, ["output", "save_plots"], False):
        from analysis_pipeline.plots import plot_feature_clusters, plot_silhouette_curve

        plot_silhouette_curve(result, plots_dir / f"silhouette_{exp_name}.png")
        plot_feature_clusters(result, palette, plots_dir / f"activity_clusters_{exp_name}.png")


def run_route_matching(cfg: Dict[str, object], routes_path: str, csv_dir: Path, plots_dir: Path, exp_name: str) -> None:
    route_ids, tracks = load_routes(routes_path)
    save_matrix = bool(get_nested(cfg, ["output", "save_similarity_matrix"], False))
    result = find_similar_routes(
        tracks,
        similarity_threshold=float(get_nested(cfg, ["route_matching", "similarity_threshold"], 0.25)),
        min_matches=int(get_nested(cfg, ["route_matching", "min_matches"], 2)),
        max_signature_points=int(get_nested(cfg, ["route_matching", "max_signature_points"], 50)),
        max_bearing_samples=int(get_nested(cfg, ["route_matching", "max_bearing_samples"], 30)),
        include_matrix=save_matrix,
    )
    palette = build_palette(cfg, "patterns")

    patterns = pd.DataFrame(
        {
            "route_id": route_ids,
            "pattern_id": result.labels,
            "color": result.route_colors(palette),
        }
    )
    save_dataframe(patterns, csv_dir / f"route_patterns_{exp_name}.csv")
    if save_matrix and result.similarity_matrix is not None:
        matrix = pd.DataFrame(result.similarity_matrix, index=route_ids, columns=route_ids)
        save_dataframe(matrix.reset_index(names="route_id"), csv_dir / f"similarity_matrix_{exp_name}.csv")

    if get_nested(cfg, ["output", "save_plots"], False):
        from analysis_pipeline.plots import plot_route_patterns

        plot_route_patterns(tracks, result.labels, palette, plots_dir / f"route_patterns_{exp_name}.png")


def main(config_path: str = "config/analysis.yaml") -> None:
    cfg = load_config(config_path)

    configure_logging(cfg.get("logging", {}) or {})

    input_cfg = cfg.get("input", {}) or {}
    activities_path = input_cfg.get("activities")
    routes_path = input_cfg.get("routes")
    if not activities_path and not routes_path:
        logging.warning("No activities or routes input configured; nothing to do.")
        return

    output_cfg = cfg.get("output", {}) or {}
    run_dir = Path(output_cfg.get("dir", "output"))
    csv_dir = run_dir / "csv"
    plots_dir = run_dir / "figures"
    csv_dir.mkdir(parents=True, exist_ok=True)
    exp_name = str(output_cfg.get("experiment_name", "analysis"))
    logging.info("Using run directory %s (experiment=%s)", run_dir, exp_name)

    if activities_path:
        run_activity_clustering(cfg, activities_path, csv_dir, plots_dir, exp_name)
    if routes_path:
        run_route_matching(cfg, routes_path, csv_dir, plots_dir, exp_name)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Activity clustering and route pattern detection.")
    parser.add_argument(
        "-c",
        "--config",
        default="config/analysis.yaml",
        help="Path to YAML config file.",
    )
    args = parser.parse_args()
    main(args.config)
