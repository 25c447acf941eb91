"""Tests for recursive ID3 tree construction."""

from __future__ import annotations

import pytest
from pytest_check import check

from id3tree.building import _build_subtree, build_tree
from id3tree.dataset import Dataset
from id3tree.exceptions import (
    DuplicateColumnsError,
    EmptyDatasetError,
    InvalidColumnError,
    ReservedColumnError,
)
from id3tree.tree import Leaf, Node, depth, leaf_count, leaf_values
from id3tree.value import Value


class TestBuildTreeVegetation:
    """End-to-end induction on the seven-site vegetation table."""

    def test_root_splits_on_elevation(self, vegetation: Dataset) -> None:
        """The root should split on elevation with one branch per elevation value."""
        # Act
        tree = build_tree(vegetation, ["stream", "slope", "elevation"], "vegetation")

        # Assert
        assert isinstance(tree, Node)
        with check:
            assert tree.feature == "elevation"
        with check:
            assert [str(v) for v in tree.values] == ["high", "highest", "low", "medium"]
        with check:
            assert tree.representative == Value.of("high")

    def test_full_tree_shape(self, vegetation: Dataset) -> None:
        """High elevation splits on slope and medium elevation splits on stream."""
        # Act
        tree = build_tree(vegetation)

        # Assert
        assert isinstance(tree, Node)
        high, highest, low, medium = tree.children
        assert isinstance(high, Node)
        assert isinstance(medium, Node)
        with check:
            assert high.feature == "slope"
        with check:
            assert high.branches() == [
                (Value.of("flat"), Leaf(prediction=Value.of("conifer"))),
                (Value.of("steep"), Leaf(prediction=Value.of("chapparal"))),
            ]
        with check:
            assert highest == Leaf(prediction=Value.of("conifer"))
        with check:
            assert low == Leaf(prediction=Value.of("riparian"))
        with check:
            assert medium.feature == "stream"
        with check:
            assert medium.branches() == [
                (Value.of(False), Leaf(prediction=Value.of("chapparal"))),
                (Value.of(True), Leaf(prediction=Value.of("riparian"))),
            ]
        with check:
            assert depth(tree) == 2
        with check:
            assert leaf_count(tree) == 6

    def test_leaves_predict_known_labels(self, vegetation: Dataset) -> None:
        """Every leaf predicts one of the observed vegetation types."""
        # Act
        tree = build_tree(vegetation)

        # Assert
        labels = {Value.of("chapparal"), Value.of("riparian"), Value.of("conifer")}
        assert set(leaf_values(tree)) <= labels

    def test_reusing_features_builds_the_same_tree(self, vegetation: Dataset) -> None:
        """Used features have no gain further down, so a static candidate set gives the same tree."""
        assert build_tree(vegetation, reuse_features=True) == build_tree(vegetation)

    def test_build_is_deterministic(self, vegetation: Dataset) -> None:
        """Building twice from the same data gives equal trees."""
        assert build_tree(vegetation) == build_tree(vegetation)

    def test_build_does_not_modify_dataset(self, vegetation: Dataset) -> None:
        """The input dataset is left as it was."""
        # Arrange
        before = vegetation.to_frame()

        # Act
        build_tree(vegetation)

        # Assert
        assert vegetation.to_frame().equals(before)


class TestBuildTreePlayTennis:
    """End-to-end induction on Quinlan's play-tennis table."""

    def test_textbook_tree(self, play_tennis: Dataset) -> None:
        """Outlook at the root, windy under rain, humidity under sunny."""
        # Act
        tree = build_tree(play_tennis)

        # Assert
        assert isinstance(tree, Node)
        with check:
            assert tree.feature == "outlook"
        overcast = tree.child_for("overcast")
        rain = tree.child_for("rain")
        sunny = tree.child_for("sunny")
        with check:
            assert overcast == Leaf(prediction=Value.of("yes"))
        assert isinstance(rain, Node)
        assert isinstance(sunny, Node)
        with check:
            assert rain.feature == "windy"
        with check:
            assert rain.child_for(False) == Leaf(prediction=Value.of("yes"))
        with check:
            assert rain.child_for(True) == Leaf(prediction=Value.of("no"))
        with check:
            assert sunny.feature == "humidity"
        with check:
            assert sunny.child_for("high") == Leaf(prediction=Value.of("no"))
        with check:
            assert sunny.child_for("normal") == Leaf(prediction=Value.of("yes"))


class TestBuildTreeBaseCases:
    """Tests for each way the recursion stops."""

    def test_uniform_target_returns_single_leaf(self) -> None:
        """A pure target yields one leaf whatever the other columns hold."""
        # Arrange
        dataset = Dataset.from_columns(
            {"a": ["x", "y", "z"], "b": [1, 2, 3], "t": ["same", "same", "same"]},
            target="t",
        )

        # Act
        tree = build_tree(dataset)

        # Assert
        assert tree == Leaf(prediction=Value.of("same"))

    def test_no_candidates_returns_majority_leaf(self, vegetation: Dataset) -> None:
        """With nothing to split on, the leaf predicts the majority label."""
        assert build_tree(vegetation, []) == Leaf(prediction=Value.of("chapparal"))

    def test_majority_tie_goes_to_first_seen_label(self) -> None:
        """Equal label counts resolve to the label seen first in row order."""
        # Arrange
        dataset = Dataset.from_columns({"a": ["x", "x", "x", "x"], "t": ["q", "p", "p", "q"]}, target="t")

        # Act / Assert
        assert build_tree(dataset, []) == Leaf(prediction=Value.of("q"))

    def test_uninformative_feature_returns_majority_leaf(self) -> None:
        """A best feature with one value at this node cannot split, so the node becomes a leaf."""
        # Arrange
        dataset = Dataset.from_columns({"a": ["x", "x", "x"], "t": ["p", "q", "q"]}, target="t")

        # Act / Assert
        assert build_tree(dataset) == Leaf(prediction=Value.of("q"))

    def test_static_candidates_terminate_on_conflicting_rows(self) -> None:
        """Rows identical on every feature but with different labels must not recurse forever."""
        # Arrange
        dataset = Dataset.from_columns(
            {"a": ["x", "x", "y"], "b": [1, 1, 2], "t": ["p", "q", "p"]},
            target="t",
        )

        # Act
        tree = build_tree(dataset, reuse_features=True)

        # Assert
        assert isinstance(tree, Node)
        with check:
            assert tree.feature == "a"
        with check:
            assert tree.children == (Leaf(prediction=Value.of("p")), Leaf(prediction=Value.of("p")))

    def test_empty_partition_predicts_parent_majority(self, vegetation: Dataset) -> None:
        """An empty node falls back to the majority label of its parent."""
        # Act
        leaf = _build_subtree(
            vegetation.select_rows([]),
            ["slope"],
            "vegetation",
            parent_majority=Value.of("conifer"),
            reuse_features=False,
            level=1,
        )

        # Assert
        assert leaf == Leaf(prediction=Value.of("conifer"))

    def test_integer_target_is_supported(self) -> None:
        """Targets may be integer columns."""
        # Arrange
        dataset = Dataset.from_columns({"flag": [True, False, True], "grade": [1, 2, 1]}, target="grade")

        # Act
        tree = build_tree(dataset)

        # Assert
        assert isinstance(tree, Node)
        with check:
            assert tree.branches() == [
                (Value.of(False), Leaf(prediction=Value.of(2))),
                (Value.of(True), Leaf(prediction=Value.of(1))),
            ]


class TestBuildTreeValidation:
    """Tests for the up-front argument checks."""

    def test_empty_dataset_raises_empty_dataset(self) -> None:
        """The root has no parent majority to fall back on."""
        # Arrange
        dataset = Dataset.from_columns({"a": [], "t": []}, target="t")

        # Act / Assert
        with pytest.raises(EmptyDatasetError):
            build_tree(dataset)

    def test_unknown_candidate_raises_invalid_column(self, vegetation: Dataset) -> None:
        """An unknown candidate halts the build."""
        # Act
        with pytest.raises(InvalidColumnError) as exc_info:
            build_tree(vegetation, ["slope", "aspect"])

        # Assert
        assert exc_info.value.missing_columns == ["aspect"]

    def test_unknown_target_raises_invalid_column(self, vegetation: Dataset) -> None:
        """An unknown target halts the build."""
        with pytest.raises(InvalidColumnError):
            build_tree(vegetation, ["slope"], "label")

    @pytest.mark.parametrize(("column", "role"), [("vegetation", "target"), ("id", "identifier")])
    def test_reserved_candidate_raises_reserved_column(self, vegetation: Dataset, column: str, role: str) -> None:
        """The target and identifier may never be split on.

        Args:
            vegetation (Dataset): The vegetation fixture.
            column (str): The reserved column offered as a candidate.
            role (str): The role the column plays.
        """
        # Act
        with pytest.raises(ReservedColumnError) as exc_info:
            build_tree(vegetation, ["slope", column])

        # Assert
        with check:
            assert exc_info.value.column == column
        with check:
            assert exc_info.value.role == role

    def test_duplicate_candidates_raise_duplicate_columns(self, vegetation: Dataset) -> None:
        """Listing a candidate twice is rejected."""
        # Act
        with pytest.raises(DuplicateColumnsError) as exc_info:
            build_tree(vegetation, ["slope", "stream", "slope"])

        # Assert
        assert exc_info.value.duplicate_columns == ["slope"]


class TestBuildTreeTargetOverride:
    """Tests for building against a column other than the dataset's target."""

    def test_default_candidates_exclude_overridden_target(self, vegetation: Dataset) -> None:
        """With no explicit candidates, the overridden target is not offered for splitting."""
        # Act
        tree = build_tree(vegetation, target_column="slope")

        # Assert
        slopes = {Value.of("flat"), Value.of("moderate"), Value.of("steep")}
        with check:
            assert set(leaf_values(tree)) <= slopes
        with check:
            assert isinstance(tree, Node)
        with check:
            assert tree.feature not in {"slope", "id"}

    def test_dataset_target_becomes_a_default_candidate(self) -> None:
        """The dataset's own target is an ordinary feature once another target is chosen."""
        # Arrange
        dataset = Dataset.from_columns(
            {"a": ["x", "x", "x", "x"], "t": ["p", "q", "p", "q"], "u": [1, 2, 1, 2]},
            target="t",
        )

        # Act
        tree = build_tree(dataset, target_column="u")

        # Assert
        assert isinstance(tree, Node)
        with check:
            assert tree.feature == "t"
        with check:
            assert tree.branches() == [
                (Value.of("p"), Leaf(prediction=Value.of(1))),
                (Value.of("q"), Leaf(prediction=Value.of(2))),
            ]
