"""Pydantic models for induced decision trees, plus traversal and rule extraction."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from id3tree.value import RawValue, Value

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """A terminal node holding a predicted target value.

    Attributes:
        kind (Literal["leaf"]): Discriminator field; always `"leaf"`.
        prediction (Value): The predicted target value.

    Examples:
        >>> Leaf(prediction=Value.of("conifer")).prediction
        Value(str: 'conifer')
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    prediction: Value = Field(description="Predicted target value for rows reaching this leaf.")


class Node(BaseModel):
    """An internal split on one feature with one child per observed feature value.

    `values[i]` is the feature value whose rows built `children[i]`; the two
    tuples are parallel and in the order the partitioner enumerated them.

    Attributes:
        kind (Literal["node"]): Discriminator field; always `"node"`.
        feature (str): Name of the splitting feature.
        representative (Value): Reference tag for the split, equal to the
            first enumerated value. Use `branches()` to route rows.
        values (tuple[Value, ...]): Feature value of each branch.
        children (tuple[DecisionTree, ...]): Subtree of each branch.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["node"] = Field(default="node", description='Discriminator field. Always "node".')
    feature: str = Field(min_length=1, description="Name of the splitting feature.")
    representative: Value = Field(description="First enumerated value of the splitting feature.")
    values: tuple[Value, ...] = Field(min_length=1, description="Feature value of each branch, in order.")
    children: tuple[Annotated[Leaf | Node, Field(discriminator="kind")], ...] = Field(
        min_length=1,
        description="Subtree of each branch, parallel to `values`.",
    )

    @model_validator(mode="after")
    def _validate_branches(self) -> Node:
        """Validate that values and children pair up and the representative is the first value.

        Returns:
            Node: The validated model instance.

        Raises:
            ValueError: If `values` and `children` differ in length, or
                `representative` is not `values[0]`.
        """
        if len(self.values) != len(self.children):
            raise ValueError(f"values length ({len(self.values)}) must equal children length ({len(self.children)})")
        if self.representative != self.values[0]:
            raise ValueError(f"representative {self.representative!r} must equal the first value {self.values[0]!r}")
        return self

    def branches(self) -> list[tuple[Value, DecisionTree]]:
        """Pair each branch value with its subtree.

        Returns:
            list[tuple[Value, DecisionTree]]: `(value, child)` pairs in branch order.
        """
        return list(zip(self.values, self.children, strict=True))

    def child_for(self, value: Value | RawValue) -> DecisionTree | None:
        """Return the subtree for one feature value.

        Args:
            value (Value | RawValue): A value of the splitting feature.

        Returns:
            DecisionTree | None: The matching child, or `None` if the value
                was not observed when the tree was built.
        """
        value = Value.of(value)
        for branch_value, child in self.branches():
            if branch_value == value:
                return child
        return None


# Use this alias when accepting either node type; Pydantic selects the model from `kind`.
type DecisionTree = Annotated[Leaf | Node, Field(discriminator="kind")]


class Predicate(BaseModel):
    """An equality condition on one feature along a root-to-leaf path.

    Attributes:
        feature (str): Feature the condition applies to.
        value (Value): The value the feature must equal.

    Examples:
        >>> p = Predicate(feature="slope", value=Value.of("steep"))
        >>> str(p)
        'slope == steep'
        >>> p.eval("flat")
        False
    """

    model_config = ConfigDict(frozen=True)

    feature: str = Field(description="Feature the condition applies to.")
    value: Value = Field(description="Value the feature must equal.")

    def __str__(self) -> str:
        return f"{self.feature} == {self.value}"

    def eval(self, x: Value | RawValue) -> bool:
        """Evaluate this predicate against a feature value.

        Args:
            x (Value | RawValue): The feature value to test.

        Returns:
            bool: `True` if `x` equals the predicate's value.
        """
        return Value.of(x) == self.value


class Rule(BaseModel):
    """The conditions and prediction of one root-to-leaf path.

    Attributes:
        predicates (tuple[Predicate, ...]): Conditions from the root down;
            empty when the tree is a single leaf.
        prediction (Value): The leaf's predicted target value.
    """

    model_config = ConfigDict(frozen=True)

    predicates: tuple[Predicate, ...] = Field(description="Conditions along the path, root first.")
    prediction: Value = Field(description="Predicted target value at the end of the path.")

    def __str__(self) -> str:
        if not self.predicates:
            return f"THEN {self.prediction}"
        conditions = " AND ".join(str(predicate) for predicate in self.predicates)
        return f"IF {conditions} THEN {self.prediction}"


# ---------------------------------------------------------------------------
# Public interface -- Traversal
# ---------------------------------------------------------------------------


def depth(tree: DecisionTree) -> int:
    """Return the number of splits on the longest root-to-leaf path.

    Args:
        tree (DecisionTree): The tree to measure.

    Returns:
        int: `0` for a single leaf.
    """
    if isinstance(tree, Leaf):
        return 0
    return 1 + max(depth(child) for child in tree.children)


def leaf_count(tree: DecisionTree) -> int:
    """Return the number of leaves in a tree.

    Args:
        tree (DecisionTree): The tree to measure.

    Returns:
        int: Leaf count, at least 1.
    """
    if isinstance(tree, Leaf):
        return 1
    return sum(leaf_count(child) for child in tree.children)


def leaf_values(tree: DecisionTree) -> list[Value]:
    """Return every leaf prediction in left-to-right order.

    Args:
        tree (DecisionTree): The tree to walk.

    Returns:
        list[Value]: One prediction per leaf, duplicates included.
    """
    return [rule.prediction for rule in extract_rules(tree)]


def extract_rules(tree: DecisionTree) -> list[Rule]:
    """Flatten a tree into one rule per leaf.

    Args:
        tree (DecisionTree): The tree to walk.

    Returns:
        list[Rule]: Rules in left-to-right leaf order.
    """
    rules: list[Rule] = []
    _walk_tree(tree, path_predicates=[], rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _walk_tree(tree: DecisionTree, *, path_predicates: list[Predicate], rules: list[Rule]) -> None:
    if isinstance(tree, Leaf):
        rules.append(Rule(predicates=tuple(path_predicates), prediction=tree.prediction))
        return
    for value, child in tree.branches():
        _walk_tree(
            child,
            path_predicates=[*path_predicates, Predicate(feature=tree.feature, value=value)],
            rules=rules,
        )
