import numpy as np
import pytest

from route_patterns.comparison import bearing_shape_score, compare_signatures, interpolate_bearings, similarity_matrix
from route_patterns.signature import build_signature


def test_identical_routes_score_zero(make_track):
    track = make_track(40.0, -105.0, 5000.0)
    assert compare_signatures(build_signature(track), build_signature(track.copy())) == pytest.approx(0.0, abs=1e-12)


def test_reversed_route_has_opposite_shape(make_track):
    track = make_track(40.0, -105.0, 5000.0)
    forward = build_signature(track)
    backward = build_signature(track[::-1])
    assert bearing_shape_score(forward.bearings, backward.bearings) == pytest.approx(1.0, abs=1e-6)


def test_score_is_symmetric(make_track):
    rng = np.random.default_rng(5)
    a = make_track(40.0, -105.0, 5000.0) + rng.normal(scale=1e-4, size=(60, 2))
    b = make_track(40.01, -105.02, 7000.0, n_points=90, heading="east")
    sig_a, sig_b = build_signature(a), build_signature(b)
    assert compare_signatures(sig_a, sig_b) == pytest.approx(compare_signatures(sig_b, sig_a), rel=1e-12)


def test_empty_bearings_are_maximally_dissimilar(make_track):
    sig = build_signature(make_track(40.0, -105.0, 5000.0))
    assert compare_signatures(sig, build_signature([[40.0, -105.0]])) == 1.0


def test_far_apart_routes_saturate_location(make_track):
    a = build_signature(make_track(40.0, -105.0, 5000.0))
    b = build_signature(make_track(41.0, -105.0, 5000.0))
    # same shape and length, 2 x 111 km apart
    assert compare_signatures(a, b) == pytest.approx(0.3)


def test_length_difference_saturates_at_half(make_track):
    a = build_signature(make_track(40.0, -105.0, 4000.0))
    b = build_signature(make_track(40.0, -105.0, 8000.0))
    location = min(4000.0 / 10000.0, 1.0)
    assert compare_signatures(a, b) == pytest.approx(location * 0.3 + 1.0 * 0.2, rel=1e-3)


def test_interpolation_wraps_through_north():
    out = interpolate_bearings([350.0, 10.0], 3)
    assert out[0] == pytest.approx(350.0)
    assert out[1] == pytest.approx(0.0) or out[1] == pytest.approx(360.0)
    assert out[2] == pytest.approx(10.0)


def test_wrapped_difference_is_small():
    assert bearing_shape_score([359.0, 359.0], [1.0, 1.0]) == pytest.approx(2.0 / 180.0)


def test_interpolation_to_single_sample():
    assert interpolate_bearings([10.0, 20.0, 30.0], 1).tolist() == [10.0]


def test_similarity_matrix_shape(make_track):
    sigs = [build_signature(make_track(40.0 + i * 0.01, -105.0, 3000.0)) for i in range(4)]
    D = similarity_matrix(sigs)
    assert D.shape == (4, 4)
    assert np.allclose(D, D.T)
    assert np.all(np.diag(D) == 0.0)
    assert np.all((D >= 0.0) & (D <= 1.0))
