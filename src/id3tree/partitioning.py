"""Best-feature selection and dataset partitioning for ID3 splits."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from loguru import logger

from id3tree.dataset import Dataset
from id3tree.exceptions import EmptyCandidateSetError
from id3tree.statistics import information_gain
from id3tree.value import Value


class FeatureScore(NamedTuple):
    """The information gain of one candidate feature.

    Attributes:
        feature (str): The candidate column name.
        gain (float): Information gain against the target column, in bits.
    """

    feature: str
    gain: float


class Partition(NamedTuple):
    """The rows of a dataset that share one value of the splitting feature.

    Attributes:
        value (Value): The feature value every row in `subset` holds.
        subset (Dataset): The matching rows, with all original columns.
    """

    value: Value
    subset: Dataset


def score_features(
    dataset: Dataset,
    candidate_features: Sequence[str],
    target_column: str,
) -> list[FeatureScore]:
    """Compute the information gain of every candidate feature.

    Args:
        dataset (Dataset): The rows to score.
        candidate_features (Sequence[str]): Columns to score, in caller order.
        target_column (str): The label column.

    Returns:
        list[FeatureScore]: One score per candidate, in the order given.

    Raises:
        InvalidColumnError: If a candidate or the target is not a column.
    """
    scores = [FeatureScore(feature, information_gain(dataset, feature, target_column)) for feature in candidate_features]
    for score in scores:
        logger.trace("Feature scored", feature=score.feature, gain=score.gain, rows=dataset.height)
    return scores


def select_best_feature(
    dataset: Dataset,
    candidate_features: Sequence[str],
    target_column: str,
) -> str:
    """Return the candidate feature with the greatest information gain.

    Only a strictly greater gain displaces the current best, so among tied
    candidates the one listed first wins.

    Args:
        dataset (Dataset): The rows to split.
        candidate_features (Sequence[str]): Columns eligible for splitting,
            in priority order for tie breaking.
        target_column (str): The label column.

    Returns:
        str: Name of the best splitting feature.

    Raises:
        EmptyCandidateSetError: If `candidate_features` is empty.
        InvalidColumnError: If a candidate or the target is not a column.
    """
    if not candidate_features:
        raise EmptyCandidateSetError()
    scores = score_features(dataset, candidate_features, target_column)
    best = scores[0]
    for score in scores[1:]:
        if score.gain > best.gain:
            best = score
    logger.debug("Best feature selected", feature=best.feature, gain=best.gain, candidates=len(scores))
    return best.feature


def partition(dataset: Dataset, feature: str) -> list[Partition]:
    """Split a dataset into one subset per distinct value of `feature`.

    Subsets are produced in `Dataset.unique_values` order. Every row lands in
    exactly one subset and no subset is empty.

    Args:
        dataset (Dataset): The rows to split.
        feature (str): The splitting column.

    Returns:
        list[Partition]: `(value, subset)` pairs; empty when the dataset has
            no rows.

    Raises:
        InvalidColumnError: If `feature` is not a column.
    """
    return [Partition(value, dataset.where(feature, value)) for value in dataset.unique_values(feature)]
