import numpy as np

from activity_clustering.standardize import standardize


def test_columns_have_zero_mean_unit_std():
    data = np.array([[1.0, 10.0], [2.0, 20.0], [3.0, 60.0], [6.0, 5.0]])
    result = standardize(data)
    assert np.allclose(result.scaled.mean(axis=0), 0.0)
    assert np.allclose(result.scaled.std(axis=0), 1.0)


def test_zero_variance_column_maps_to_zero():
    data = np.array([[5.0, 1.0], [5.0, 2.0], [5.0, 3.0]])
    result = standardize(data)
    assert np.all(result.scaled[:, 0] == 0.0)
    assert result.stds[0] == 0.0
    assert not np.isnan(result.scaled).any()


def test_uses_population_std():
    result = standardize([[0.0], [2.0]])
    assert np.allclose(result.stds, [1.0])
    assert np.allclose(result.scaled[:, 0], [-1.0, 1.0])


def test_empty_dataset():
    result = standardize(np.zeros((0, 3)))
    assert result.scaled.shape == (0, 3)
    assert result.means.shape == (3,)
