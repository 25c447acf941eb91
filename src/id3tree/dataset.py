"""Immutable tabular dataset backed by a Polars DataFrame."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import polars as pl
from loguru import logger

from id3tree.exceptions import (
    ColumnLengthMismatchError,
    InvalidColumnError,
    MixedValueKindsError,
    UnsupportedColumnTypeError,
)
from id3tree.value import RawValue, Value, ValueKind

# ---------------------------------------------------------------------------
# Private helpers -- Column kind classification
# ---------------------------------------------------------------------------

_DTYPE_TO_KIND: dict[type[pl.DataType] | pl.DataType, ValueKind] = {
    pl.Int8: "int",
    pl.Int16: "int",
    pl.Int32: "int",
    pl.Int64: "int",
    pl.UInt8: "int",
    pl.UInt16: "int",
    pl.UInt32: "int",
    pl.UInt64: "int",
    pl.Boolean: "bool",
    pl.String: "str",
    pl.Categorical: "str",
    pl.Enum: "str",
}

_KIND_TO_DTYPE: dict[ValueKind, type[pl.DataType]] = {
    "int": pl.Int64,
    "str": pl.String,
    "bool": pl.Boolean,
}


def _classify_column(name: str, series: pl.Series) -> ValueKind | None:
    """Map a Polars column to the Value kind its cells hold.

    Parameterized dtypes such as `Enum([...])` do not hash like their bare
    class, so an `isinstance` fallback handles them.

    Args:
        name (str): Column name, used in error messages.
        series (pl.Series): The column to classify.

    Returns:
        ValueKind | None: The kind of every cell, or `None` for an empty
            column whose dtype is `Null`.

    Raises:
        UnsupportedColumnTypeError: If the dtype has no Value kind, or the
            column is `Null`-typed but not empty.
    """
    kind = _DTYPE_TO_KIND.get(series.dtype)
    if kind is not None:
        return kind
    if isinstance(series.dtype, (pl.Enum, pl.Categorical)):
        return "str"
    if series.dtype == pl.Null and series.len() == 0:
        return None
    raise UnsupportedColumnTypeError(column=name, dtype=str(series.dtype))


def _build_series(name: str, cells: Sequence[Value | RawValue]) -> pl.Series:
    """Convert a sequence of cells into a typed Polars Series.

    Args:
        name (str): Column name.
        cells (Sequence[Value | RawValue]): Column values in row order.

    Returns:
        pl.Series: A series of `Int64`, `String`, or `Boolean` dtype, or
            `Null` when `cells` is empty.

    Raises:
        MixedValueKindsError: If the cells are not all the same kind.
    """
    values = [Value.of(cell) for cell in cells]
    kinds = {value.kind for value in values}
    if len(kinds) > 1:
        raise MixedValueKindsError(column=name, kinds=list(kinds))
    if not kinds:
        return pl.Series(name, [], dtype=pl.Null)
    (kind,) = kinds
    return pl.Series(name, [value.payload for value in values], dtype=_KIND_TO_DTYPE[kind])


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


class Dataset:
    """An immutable table of named columns with one designated target column.

    Each column holds cells of a single Value kind and every column has the
    same number of rows. Column names are validated when the dataset is
    built; queries on an unknown column raise `InvalidColumnError`. Slicing
    methods return new datasets that share no mutable state with this one.

    Build instances with `Dataset.from_columns` or `Dataset.from_frame`.

    Examples:
        >>> ds = Dataset.from_columns(
        ...     {"id": [1, 2, 3], "windy": [True, False, True], "play": ["no", "yes", "no"]},
        ...     target="play",
        ...     identifier="id",
        ... )
        >>> ds.features
        ['windy']
        >>> ds.unique_values("play")
        [Value(str: 'no'), Value(str: 'yes')]
    """

    def __init__(
        self,
        frame: pl.DataFrame,
        *,
        target: str,
        identifier: str | None = None,
    ) -> None:
        """Initialize a Dataset around an already validated frame.

        Prefer `from_columns` or `from_frame`, which validate their input.

        Args:
            frame (pl.DataFrame): The backing frame; not copied.
            target (str): Name of the target (label) column.
            identifier (str | None): Name of the row identifier column, if any.

        Raises:
            InvalidColumnError: If `target` or `identifier` is not a column.
            ValueError: If `identifier` equals `target`.
            UnsupportedColumnTypeError: If a column dtype has no Value kind.
        """
        self._frame = frame
        self._kinds: dict[str, ValueKind | None] = {
            name: _classify_column(name, frame[name]) for name in frame.columns
        }
        self._require_columns([target] if identifier is None else [target, identifier])
        if identifier == target:
            raise ValueError(f"Identifier column '{identifier}' cannot also be the target column")
        self._target = target
        self._identifier = identifier

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_columns(
        cls,
        columns: Mapping[str, Sequence[Value | RawValue]],
        *,
        target: str,
        identifier: str | None = None,
    ) -> Dataset:
        """Build a dataset from a mapping of column name to cell values.

        Args:
            columns (Mapping[str, Sequence[Value | RawValue]]): Column data in
                column order. Cells may be `Value` instances or raw `int`,
                `str`, or `bool` values.
            target (str): Name of the target (label) column.
            identifier (str | None): Name of the row identifier column, which
                is never offered as a splitting feature.

        Returns:
            Dataset: The validated dataset.

        Raises:
            ValueError: If `columns` is empty.
            ColumnLengthMismatchError: If columns differ in length.
            MixedValueKindsError: If a column mixes value kinds.
            InvalidColumnError: If `target` or `identifier` is missing.
        """
        if not columns:
            raise ValueError("A dataset needs at least one column")
        lengths = {name: len(cells) for name, cells in columns.items()}
        if len(set(lengths.values())) > 1:
            raise ColumnLengthMismatchError(lengths=lengths)
        frame = pl.DataFrame([_build_series(name, cells) for name, cells in columns.items()])
        dataset = cls(frame, target=target, identifier=identifier)
        logger.debug("Dataset built from columns", columns=dataset.columns, rows=dataset.height, target=target)
        return dataset

    @classmethod
    def from_frame(
        cls,
        frame: pl.DataFrame,
        *,
        target: str,
        identifier: str | None = None,
    ) -> Dataset:
        """Build a dataset from an existing Polars DataFrame.

        The frame is cloned so later changes by the caller cannot leak in.

        Args:
            frame (pl.DataFrame): Source frame with integer, string, or
                boolean columns and no null values.
            target (str): Name of the target (label) column.
            identifier (str | None): Name of the row identifier column.

        Returns:
            Dataset: The validated dataset.

        Raises:
            ValueError: If the frame has no columns or contains null values.
            UnsupportedColumnTypeError: If a column dtype has no Value kind.
            InvalidColumnError: If `target` or `identifier` is missing.
        """
        if frame.width == 0:
            raise ValueError("A dataset needs at least one column")
        null_columns = [name for name in frame.columns if frame[name].dtype != pl.Null and frame[name].null_count() > 0]
        if null_columns:
            raise ValueError(f"Columns contain null values, which are not supported: {null_columns}")
        dataset = cls(frame.clone(), target=target, identifier=identifier)
        logger.debug("Dataset built from frame", columns=dataset.columns, rows=dataset.height, target=target)
        return dataset

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    @property
    def columns(self) -> list[str]:
        """Column names in column order."""
        return list(self._frame.columns)

    @property
    def target(self) -> str:
        """Name of the target (label) column."""
        return self._target

    @property
    def identifier(self) -> str | None:
        """Name of the row identifier column, if one was declared."""
        return self._identifier

    @property
    def features(self) -> list[str]:
        """Columns eligible for splitting: everything but the target and identifier."""
        return [name for name in self._frame.columns if name not in {self._target, self._identifier}]

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._frame.height

    def kind(self, name: str) -> ValueKind | None:
        """Return the Value kind held by a column.

        Args:
            name (str): Column name.

        Returns:
            ValueKind | None: The column's kind, or `None` for an empty
                column with no declared type.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        self._require_columns([name])
        return self._kinds[name]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def column(self, name: str) -> list[Value]:
        """Project one column as a list of values in row order.

        Args:
            name (str): Column name.

        Returns:
            list[Value]: One value per row.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        return [Value.of(cell) for cell in self._series(name).to_list()]

    def unique_values(self, name: str) -> list[Value]:
        """Return the distinct values of a column, sorted.

        Args:
            name (str): Column name.

        Returns:
            list[Value]: Deduplicated values in ascending order; empty when
                the dataset has no rows.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        return sorted({Value.of(cell) for cell in self._series(name).unique().to_list()})

    def value_counts(self, name: str) -> list[tuple[Value, int]]:
        """Count occurrences of each distinct value of a column.

        Args:
            name (str): Column name.

        Returns:
            list[tuple[Value, int]]: `(value, count)` pairs ordered by each
                value's first appearance in row order.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        series = self._series(name)
        if series.len() == 0:
            return []
        distinct = series.unique(maintain_order=True).to_list()
        counts = series.unique_counts().to_list()
        return [(Value.of(cell), int(count)) for cell, count in zip(distinct, counts, strict=True)]

    def rows_where(self, name: str, value: Value | RawValue) -> list[int]:
        """Return the indices of rows whose cell in `name` equals `value`.

        Equality is exact: a value of a different kind than the column never
        matches, so `True` does not select rows holding the integer `1`.

        Args:
            name (str): Column name.
            value (Value | RawValue): The value to match.

        Returns:
            list[int]: Matching row indices in ascending order.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        series = self._series(name)
        value = Value.of(value)
        if series.len() == 0 or self._kinds[name] != value.kind:
            return []
        return series.eq(value.payload).arg_true().to_list()

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def select_rows(self, indices: Iterable[int]) -> Dataset:
        """Build a new dataset from a subset of rows.

        Args:
            indices (Iterable[int]): Row indices to keep, in output order.

        Returns:
            Dataset: A new dataset with every column, the same target and
                identifier, and only the selected rows.

        Raises:
            IndexError: If any index is out of range.
        """
        row_indices = list(indices)
        out_of_range = [index for index in row_indices if not 0 <= index < self.height]
        if out_of_range:
            raise IndexError(f"Row indices out of range for dataset of {self.height} rows: {out_of_range}")
        positions = pl.Series("index", row_indices, dtype=pl.UInt32)
        frame = self._frame.select(pl.all().gather(positions))
        return Dataset(frame, target=self._target, identifier=self._identifier)

    def where(self, name: str, value: Value | RawValue) -> Dataset:
        """Build a new dataset from the rows whose cell in `name` equals `value`.

        Args:
            name (str): Column name.
            value (Value | RawValue): The value to match.

        Returns:
            Dataset: The matching rows, possibly none.

        Raises:
            InvalidColumnError: If `name` is not a column.
        """
        return self.select_rows(self.rows_where(name, value))

    def to_frame(self) -> pl.DataFrame:
        """Return a copy of the backing Polars DataFrame.

        Returns:
            pl.DataFrame: The dataset's rows and columns.
        """
        return self._frame.clone()

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return (
            self._target == other._target
            and self._identifier == other._identifier
            and self._frame.equals(other._frame)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Dataset(columns={self.columns}, rows={self.height}, target={self._target!r})"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _series(self, name: str) -> pl.Series:
        self._require_columns([name])
        return self._frame[name]

    def _require_columns(self, names: Sequence[str]) -> None:
        """Raise `InvalidColumnError` if any name is not a column of this dataset.

        Args:
            names (Sequence[str]): Column names to look up.

        Raises:
            InvalidColumnError: If any of `names` is missing.
        """
        missing_columns = [name for name in names if name not in self._kinds]
        if missing_columns:
            raise InvalidColumnError(missing_columns=missing_columns, available_columns=self.columns)
