"""Custom exceptions for dataset validation and tree induction.

Every exception subclasses ValueError: they all describe a caller error in
the data or arguments handed to id3tree, never a transient failure.

Schema exceptions:
- InvalidColumnError: Raised when a referenced column does not exist.
- DuplicateColumnsError: Raised when duplicate column names are provided.
- ColumnLengthMismatchError: Raised when columns have different row counts.
- MixedValueKindsError: Raised when a column mixes int, str, and bool cells.
- UnsupportedColumnTypeError: Raised when a polars dtype has no Value kind.
- ReservedColumnError: Raised when the target or identifier is offered as a
  splitting feature.

Induction exceptions:
- EmptyCandidateSetError: Raised when a best feature is requested from no
  candidates.
- EmptyDatasetError: Raised when an operation needs at least one row.
"""

from __future__ import annotations


class InvalidColumnError(ValueError):
    """Raised when referenced columns do not exist in a dataset.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the dataset.

    Examples:
        >>> err = InvalidColumnError(
        ...     missing_columns=["aspect"],
        ...     available_columns=["id", "slope", "vegetation"],
        ... )
        >>> err.missing_columns
        ['aspect']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize InvalidColumnError.

        Args:
            missing_columns (list[str]): Column names not found in the dataset.
            available_columns (list[str]): Column names present in the dataset.
        """
        super().__init__(f"Columns not found in dataset: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class DuplicateColumnsError(ValueError):
    """Raised when duplicate column names are provided.

    Attributes:
        columns (list[str]): The column list that contains duplicates.
        duplicate_columns (list[str]): The specific column names that are
            duplicated (each listed once).

    Examples:
        >>> err = DuplicateColumnsError(columns=["slope", "slope", "stream"])
        >>> err.duplicate_columns
        ['slope']
    """

    columns: list[str]
    duplicate_columns: list[str]

    def __init__(self, columns: list[str]) -> None:
        """Initialize DuplicateColumnsError.

        Args:
            columns (list[str]): The column list containing duplicates.
        """
        super().__init__("Duplicate column names are not allowed")
        self.columns = columns
        seen: set[str] = set()
        self.duplicate_columns = []
        for col in columns:
            if col in seen and col not in self.duplicate_columns:
                self.duplicate_columns.append(col)
            seen.add(col)


class ColumnLengthMismatchError(ValueError):
    """Raised when dataset columns do not all have the same number of rows.

    Attributes:
        lengths (dict[str, int]): Row count of every supplied column.
    """

    lengths: dict[str, int]

    def __init__(self, lengths: dict[str, int]) -> None:
        """Initialize ColumnLengthMismatchError.

        Args:
            lengths (dict[str, int]): Mapping of column name to its row count.
        """
        super().__init__(f"All columns must have the same length, got {lengths}")
        self.lengths = lengths


class MixedValueKindsError(ValueError):
    """Raised when a column holds values of more than one kind.

    Attributes:
        column (str): The offending column name.
        kinds (list[str]): The distinct kinds found, sorted.
    """

    column: str
    kinds: list[str]

    def __init__(self, column: str, kinds: list[str]) -> None:
        """Initialize MixedValueKindsError.

        Args:
            column (str): The offending column name.
            kinds (list[str]): The distinct kinds found in the column.
        """
        super().__init__(f"Column '{column}' mixes value kinds: {sorted(kinds)}")
        self.column = column
        self.kinds = sorted(kinds)


class UnsupportedColumnTypeError(ValueError):
    """Raised when a polars column dtype cannot be represented as a Value.

    Attributes:
        column (str): The offending column name.
        dtype (str): The polars dtype, rendered as text.
    """

    column: str
    dtype: str

    def __init__(self, column: str, dtype: str) -> None:
        """Initialize UnsupportedColumnTypeError.

        Args:
            column (str): The offending column name.
            dtype (str): The polars dtype, rendered as text.
        """
        super().__init__(f"Column '{column}' has unsupported dtype {dtype}; expected integer, string, or boolean")
        self.column = column
        self.dtype = dtype


class ReservedColumnError(ValueError):
    """Raised when the target or identifier column is offered as a splitting feature.

    Attributes:
        column (str): The reserved column name.
        role (str): Either `"target"` or `"identifier"`.
    """

    column: str
    role: str

    def __init__(self, column: str, role: str) -> None:
        """Initialize ReservedColumnError.

        Args:
            column (str): The reserved column name.
            role (str): Either `"target"` or `"identifier"`.
        """
        super().__init__(f"Column '{column}' is the {role} column and cannot be used as a splitting feature")
        self.column = column
        self.role = role


class EmptyCandidateSetError(ValueError):
    """Raised when a splitting feature is requested from an empty candidate list."""

    def __init__(self) -> None:
        """Initialize EmptyCandidateSetError."""
        super().__init__("Cannot select a splitting feature from an empty candidate set")


class EmptyDatasetError(ValueError):
    """Raised when an operation that needs at least one row receives none.

    Attributes:
        operation (str): Name of the operation that was attempted.
    """

    operation: str

    def __init__(self, operation: str) -> None:
        """Initialize EmptyDatasetError.

        Args:
            operation (str): Name of the operation that was attempted.
        """
        super().__init__(f"{operation} requires a dataset with at least one row")
        self.operation = operation
