"""Attribute statistics for ID3: probability, entropy, and information gain."""

from __future__ import annotations

from typing import Final

import numpy as np

from id3tree.dataset import Dataset
from id3tree.exceptions import EmptyDatasetError
from id3tree.value import RawValue, Value

# Gains closer to zero than this are reported as exactly zero. Summing
# weighted entropies can leave a residue of a few ulps below zero.
GAIN_TOLERANCE: Final[float] = 1e-12


def probability(dataset: Dataset, column: str, value: Value | RawValue) -> float:
    """Return the fraction of rows whose `column` equals `value`.

    Args:
        dataset (Dataset): The rows to inspect.
        column (str): Column name.
        value (Value | RawValue): The value to count.

    Returns:
        float: A probability in `[0, 1]`.

    Raises:
        InvalidColumnError: If `column` is not a column of `dataset`.
        EmptyDatasetError: If `dataset` has no rows.

    Examples:
        >>> ds = Dataset.from_columns({"slope": ["steep", "flat", "steep", "steep"]}, target="slope")
        >>> probability(ds, "slope", "steep")
        0.75
    """
    matches = dataset.rows_where(column, value)
    if dataset.height == 0:
        raise EmptyDatasetError(operation="probability")
    return len(matches) / dataset.height


def entropy(dataset: Dataset, column: str) -> float:
    """Return the Shannon entropy, in bits, of a column's value distribution.

    Computes `-sum(p * log2(p))` over the probability of each distinct value.
    Values with zero probability are skipped, so the result is always finite.

    Args:
        dataset (Dataset): The rows to inspect.
        column (str): Column name.

    Returns:
        float: Entropy in bits; `0.0` for an empty dataset or a column with a
            single distinct value.

    Raises:
        InvalidColumnError: If `column` is not a column of `dataset`.
    """
    counts = np.array([count for _, count in dataset.value_counts(column)], dtype=np.float64)
    return _entropy_from_counts(counts)


def information_gain(dataset: Dataset, column: str, target_column: str) -> float:
    """Return how much splitting on `column` reduces the entropy of `target_column`.

    The gain is the target entropy over the whole dataset minus the
    size-weighted target entropy inside each partition `column == v`, summed
    over every distinct value `v` of `column`.

    Args:
        dataset (Dataset): The rows to inspect.
        column (str): Candidate splitting column.
        target_column (str): The label column whose uncertainty is measured.

    Returns:
        float: A non-negative gain in bits; `0.0` for an empty dataset.

    Raises:
        InvalidColumnError: If either column is not a column of `dataset`.
    """
    base_entropy = entropy(dataset, target_column)
    row_count = dataset.height
    if row_count == 0:
        return 0.0

    remainder = 0.0
    for value in dataset.unique_values(column):
        subset = dataset.where(column, value)
        if subset.height == 0:
            continue
        remainder += (subset.height / row_count) * entropy(subset, target_column)

    gain = base_entropy - remainder
    return 0.0 if abs(gain) < GAIN_TOLERANCE else gain


def majority_value(dataset: Dataset, column: str) -> Value:
    """Return the most frequent value of a column.

    Ties go to the value that appears first in row order.

    Args:
        dataset (Dataset): The rows to inspect.
        column (str): Column name.

    Returns:
        Value: The majority value.

    Raises:
        InvalidColumnError: If `column` is not a column of `dataset`.
        EmptyDatasetError: If `dataset` has no rows.
    """
    counts = dataset.value_counts(column)
    if not counts:
        raise EmptyDatasetError(operation="majority_value")
    # max() keeps the first maximal item and counts are in first-seen order.
    best_value, _ = max(counts, key=lambda item: item[1])
    return best_value


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _entropy_from_counts(counts: np.ndarray) -> float:
    total = counts.sum()
    if total == 0:
        return 0.0
    probabilities = counts / total
    probabilities = probabilities[probabilities > 0]
    # max() folds the -0.0 produced by a single certain outcome into 0.0.
    return max(0.0, float(-np.sum(probabilities * np.log2(probabilities))))
