import numpy as np
import pandas as pd
import pytest

from activity_clustering.features import cluster_feature_profiles, extract_features

ACTIVITIES = [
    {"distance": 1609.34, "moving_time": 3600, "total_elevation_gain": 100.0, "average_speed": 2.0, "max_speed": 5.0},
    {"distance": 8046.7, "moving_time": 1800, "total_elevation_gain": 0.0},
]


def test_unit_conversions_in_requested_order():
    X, df = extract_features(ACTIVITIES, ["moving_time_hours", "distance_miles", "total_elevation_gain"])
    assert list(df.columns) == ["moving_time_hours", "distance_miles", "total_elevation_gain"]
    assert X[0].tolist() == pytest.approx([1.0, 1.0, 328.084])
    assert X[1].tolist() == pytest.approx([0.5, 5.0, 0.0])


def test_average_speed_fallback():
    X, _ = extract_features(ACTIVITIES, ["average_speed_mph", "average_speed_kph"])
    assert X[0].tolist() == pytest.approx([2.0 * 2.23694, 2.0 * 3.6])
    derived = 8046.7 / 1800
    assert X[1].tolist() == pytest.approx([derived * 2.23694, derived * 3.6])


def test_missing_max_speed_is_zero():
    X, _ = extract_features(ACTIVITIES, ["max_speed_mph"])
    assert X[0, 0].tolist() == pytest.approx(5.0 * 2.23694)
    assert X[1, 0] == 0.0


def test_zero_moving_time_does_not_produce_nan():
    X, _ = extract_features([{"distance": 100.0, "moving_time": 0, "total_elevation_gain": 1.0}], ["average_speed_mph"])
    assert X[0, 0] == 0.0


def test_accepts_dataframe():
    X, _ = extract_features(pd.DataFrame(ACTIVITIES), ["distance_km"])
    assert X[:, 0].tolist() == pytest.approx([1.60934, 8.0467])


def test_unknown_feature_raises():
    with pytest.raises(ValueError, match="Unsupported feature"):
        extract_features(ACTIVITIES, ["heart_rate"])


def test_missing_required_column_raises():
    with pytest.raises(ValueError, match="Missing required"):
        extract_features([{"distance": 1.0}], ["distance_km"])


def test_empty_activities():
    X, df = extract_features([], ["distance_km", "moving_time_hours"])
    assert X.shape == (0, 2)
    assert list(df.columns) == ["distance_km", "moving_time_hours"]


def test_cluster_profiles():
    raw = np.array([[1.0, 10.0], [3.0, 20.0], [10.0, 5.0]])
    profiles = cluster_feature_profiles(raw, [0, 0, 1], ["a", "b"])
    assert profiles["cluster_id"].tolist() == [0, 1]
    assert profiles["n_activities"].tolist() == [2, 1]
    assert profiles["a"].tolist() == pytest.approx([2.0, 10.0])
    assert profiles["b"].tolist() == pytest.approx([15.0, 5.0])
