"""Recursive ID3 tree construction."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from id3tree.dataset import Dataset
from id3tree.exceptions import (
    DuplicateColumnsError,
    EmptyDatasetError,
    InvalidColumnError,
    ReservedColumnError,
)
from id3tree.logging import SPLIT_LEVEL
from id3tree.partitioning import partition, select_best_feature
from id3tree.statistics import majority_value
from id3tree.tree import DecisionTree, Leaf, Node, depth, leaf_count
from id3tree.value import Value

# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def build_tree(
    dataset: Dataset,
    candidate_features: Sequence[str] | None = None,
    target_column: str | None = None,
    *,
    reuse_features: bool = False,
) -> DecisionTree:
    """Induce a decision tree from a dataset with the ID3 algorithm.

    At each node the candidate feature with the greatest information gain
    (first candidate on ties) splits the rows into one branch per observed
    value, and each branch is built recursively. A branch becomes a leaf
    when its rows all share one target value, when no candidates remain, or
    when the best feature takes a single value there so no split can make
    progress; the leaf then predicts the majority target value, ties going
    to the value seen first in row order.

    Args:
        dataset (Dataset): The training rows. Must not be empty.
        candidate_features (Sequence[str] | None): Columns eligible for
            splitting, in tie-break priority order. `None` uses every
            column except the resolved target and the identifier.
        target_column (str | None): The label column. `None` uses
            `dataset.target`.
        reuse_features (bool): When `False` (default) a feature used by a
            split is removed from the candidates of its subtrees, as in
            textbook ID3. When `True` the candidate set stays the same at
            every depth, which reproduces the reference ID3 behaviour of
            re-offering every feature to every node.

    Returns:
        DecisionTree: The root `Leaf` or `Node`.

    Raises:
        EmptyDatasetError: If `dataset` has no rows.
        DuplicateColumnsError: If `candidate_features` repeats a name.
        InvalidColumnError: If a candidate or the target is not a column.
        ReservedColumnError: If a candidate is the target or identifier column.

    Examples:
        >>> ds = Dataset.from_columns(
        ...     {"windy": [True, False, True], "play": ["no", "yes", "no"]},
        ...     target="play",
        ... )
        >>> tree = build_tree(ds)
        >>> tree.feature, [str(v) for v in tree.values]
        ('windy', ['false', 'true'])
    """
    target = dataset.target if target_column is None else target_column
    if candidate_features is None:
        candidates = [name for name in dataset.columns if name not in (target, dataset.identifier)]
    else:
        candidates = list(candidate_features)
    _validate_inputs(dataset, candidates, target)

    tree = _build_subtree(
        dataset,
        candidates,
        target,
        parent_majority=None,
        reuse_features=reuse_features,
        level=0,
    )
    logger.info(
        "Decision tree built",
        target=target,
        rows=dataset.height,
        depth=depth(tree),
        leaves=leaf_count(tree),
    )
    return tree


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _build_subtree(
    dataset: Dataset,
    candidates: list[str],
    target: str,
    *,
    parent_majority: Value | None,
    reuse_features: bool,
    level: int,
) -> DecisionTree:
    """Build the subtree for one node of the recursion.

    Args:
        dataset (Dataset): Rows that reached this node.
        candidates (list[str]): Features still eligible for splitting.
        target (str): The label column.
        parent_majority (Value | None): Majority target value of the parent
            node's rows; predicted when this node has no rows.
        reuse_features (bool): Keep the chosen feature in the candidates of
            the children.
        level (int): Depth of this node, for logging.

    Returns:
        DecisionTree: A `Leaf` for a base case, otherwise a `Node`.
    """
    if dataset.height == 0:
        if parent_majority is None:
            raise EmptyDatasetError(operation="build_tree")
        return _leaf(parent_majority, reason="empty partition", level=level)

    target_values = dataset.unique_values(target)
    if len(target_values) == 1:
        return _leaf(target_values[0], reason="pure target", level=level)

    majority = majority_value(dataset, target)
    if not candidates:
        return _leaf(majority, reason="no candidate features", level=level)

    feature = select_best_feature(dataset, candidates, target)
    partitions = partition(dataset, feature)
    if len(partitions) < 2:
        return _leaf(majority, reason="no informative split", level=level)

    logger.log(
        SPLIT_LEVEL,
        "Splitting on {feature}",
        feature=feature,
        rows=dataset.height,
        branches=len(partitions),
        level=level,
    )
    child_candidates = candidates if reuse_features else [name for name in candidates if name != feature]
    children = [
        _build_subtree(
            subset,
            child_candidates,
            target,
            parent_majority=majority,
            reuse_features=reuse_features,
            level=level + 1,
        )
        for _, subset in partitions
    ]
    values = tuple(value for value, _ in partitions)
    return Node(feature=feature, representative=values[0], values=values, children=tuple(children))


def _leaf(prediction: Value, *, reason: str, level: int) -> Leaf:
    logger.trace("Leaf created", prediction=str(prediction), reason=reason, level=level)
    return Leaf(prediction=prediction)


def _validate_inputs(dataset: Dataset, candidates: list[str], target: str) -> None:
    """Fail fast on arguments that would otherwise break deep inside the recursion.

    Args:
        dataset (Dataset): The training rows.
        candidates (list[str]): Requested candidate features.
        target (str): The label column.

    Raises:
        EmptyDatasetError: If `dataset` has no rows.
        DuplicateColumnsError: If `candidates` repeats a name.
        InvalidColumnError: If a candidate or the target is not a column.
        ReservedColumnError: If a candidate is the target or identifier column.
    """
    if len(candidates) != len(set(candidates)):
        raise DuplicateColumnsError(columns=candidates)
    missing_columns = [name for name in [target, *candidates] if name not in dataset.columns]
    if missing_columns:
        raise InvalidColumnError(missing_columns=missing_columns, available_columns=dataset.columns)
    for name in candidates:
        if name == target:
            raise ReservedColumnError(column=name, role="target")
        if name == dataset.identifier:
            raise ReservedColumnError(column=name, role="identifier")
    if dataset.height == 0:
        raise EmptyDatasetError(operation="build_tree")
