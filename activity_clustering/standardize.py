"""Z-score standardization of feature matrices."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class StandardizedDataset:
    scaled: np.ndarray
    means: np.ndarray
    stds: np.ndarray


def standardize(data) -> StandardizedDataset:
    """
    Scale each column to zero mean and unit population standard deviation.

    Columns with zero variance map to 0 for every row instead of NaN.
    """

    X = np.asarray(data, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1) if X.size else X.reshape(0, 0)
    n_rows, n_cols = X.shape
    if n_rows == 0:
        empty = np.zeros(n_cols, dtype=float)
        return StandardizedDataset(scaled=X.copy(), means=empty, stds=empty.copy())

    means = X.mean(axis=0)
    stds = X.std(axis=0)
    centered = X - means
    scaled = np.divide(centered, stds, out=np.zeros_like(centered), where=stds != 0)
    return StandardizedDataset(scaled=scaled, means=means, stds=stds)
