import numpy as np
import pytest

METERS_PER_DEG_LAT = 111_194.93


def straight_track(lat0: float, lng0: float, length_m: float, n_points: int = 60, heading: str = "north") -> np.ndarray:
    """Evenly spaced points along a meridian or parallel."""

    steps = np.linspace(0.0, length_m / METERS_PER_DEG_LAT, n_points)
    if heading == "north":
        return np.column_stack([lat0 + steps, np.full(n_points, lng0)])
    if heading == "south":
        return np.column_stack([lat0 - steps, np.full(n_points, lng0)])
    scale = np.cos(np.radians(lat0))
    sign = 1.0 if heading == "east" else -1.0
    return np.column_stack([np.full(n_points, lat0), lng0 + sign * steps / scale])


@pytest.fixture
def make_track():
    return straight_track
