import json

import numpy as np
import pandas as pd
import pytest

from analysis_pipeline.io import load_activities, load_routes, save_dataframe


def test_load_routes_json_with_mixed_point_styles(tmp_path):
    path = tmp_path / "routes.json"
    payload = [
        {"id": "a", "points": [[40.0, -105.0], [40.1, -105.0]]},
        {"id": "b", "points": [{"lat": 41.0, "lng": -104.0}, {"latitude": 41.1, "longitude": -104.0}]},
        {"id": "c", "points": []},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    ids, tracks = load_routes(path)
    assert ids == ["a", "b", "c"]
    assert tracks[1].tolist() == [[41.0, -104.0], [41.1, -104.0]]
    assert tracks[2].shape == (0, 2)


def test_load_routes_csv_keeps_file_order(tmp_path):
    path = tmp_path / "routes.csv"
    pd.DataFrame(
        {
            "route_id": [9, 9, 3, 3, 3],
            "latitude": [1.0, 2.0, 5.0, 6.0, 7.0],
            "longitude": [0.0, 0.0, 1.0, 1.0, 1.0],
        }
    ).to_csv(path, index=False)
    ids, tracks = load_routes(path)
    assert ids == [9, 3]
    assert np.array_equal(tracks[1][:, 0], [5.0, 6.0, 7.0])


def test_load_activities_csv(tmp_path):
    path = tmp_path / "activities.csv"
    pd.DataFrame({"distance": [1000.0], "moving_time": [300], "total_elevation_gain": [5.0]}).to_csv(path, index=False)
    df = load_activities(path)
    assert len(df) == 1


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_routes(tmp_path / "nope.json")


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "routes.gpx"
    path.write_text("<gpx/>", encoding="utf-8")
    with pytest.raises(ValueError):
        load_routes(path)


def test_save_dataframe_creates_parents(tmp_path):
    out = tmp_path / "nested" / "dir" / "table.csv"
    save_dataframe(pd.DataFrame({"a": [1, 2]}), out)
    assert pd.read_csv(out)["a"].tolist() == [1, 2]
