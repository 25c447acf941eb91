"""id3tree: ID3 decision tree induction over small categorical datasets."""

from loguru import logger

from id3tree.building import build_tree
from id3tree.dataset import Dataset
from id3tree.exceptions import (
    ColumnLengthMismatchError,
    DuplicateColumnsError,
    EmptyCandidateSetError,
    EmptyDatasetError,
    InvalidColumnError,
    MixedValueKindsError,
    ReservedColumnError,
    UnsupportedColumnTypeError,
)
from id3tree.logging import PACKAGE_NAME, LoggingHandle, enable_logging
from id3tree.partitioning import FeatureScore, Partition, partition, score_features, select_best_feature
from id3tree.statistics import entropy, information_gain, majority_value, probability
from id3tree.tree import DecisionTree, Leaf, Node, Predicate, Rule, depth, extract_rules, leaf_count, leaf_values
from id3tree.value import Value

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3tree package by default

__all__ = [
    "ColumnLengthMismatchError",
    "Dataset",
    "DecisionTree",
    "DuplicateColumnsError",
    "EmptyCandidateSetError",
    "EmptyDatasetError",
    "FeatureScore",
    "InvalidColumnError",
    "Leaf",
    "LoggingHandle",
    "MixedValueKindsError",
    "Node",
    "Partition",
    "Predicate",
    "ReservedColumnError",
    "Rule",
    "UnsupportedColumnTypeError",
    "Value",
    "build_tree",
    "depth",
    "enable_logging",
    "entropy",
    "extract_rules",
    "information_gain",
    "leaf_count",
    "leaf_values",
    "majority_value",
    "partition",
    "probability",
    "score_features",
    "select_best_feature",
]
