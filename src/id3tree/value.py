"""Tagged cell values shared by every column of a dataset."""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

type ValueKind = Literal["int", "str", "bool"]

type RawValue = int | str | bool

# Kind rank used by the total order; only needs to be deterministic.
_KIND_RANK: dict[str, int] = {"bool": 0, "int": 1, "str": 2}

_PAYLOAD_TYPES: dict[str, type] = {"int": int, "str": str, "bool": bool}


@total_ordering
class Value(BaseModel):
    """A single dataset cell: an integer, a text label, or a boolean.

    Values compare equal only when both the kind and the payload match, so
    `Value.of(True)` and `Value.of(1)` are distinct even though Python treats
    `True == 1`. The ordering sorts by kind first and then by payload; it
    exists to produce deterministic unique-value lists, not a meaningful
    ranking.

    Attributes:
        kind (ValueKind): Which variant this value holds.
        payload (int | str | bool): The wrapped Python value.

    Examples:
        >>> Value.of("steep")
        Value(str: 'steep')
        >>> str(Value.of(False))
        'false'
        >>> sorted([Value.of("b"), Value.of(True), Value.of(3)])
        [Value(bool: True), Value(int: 3), Value(str: 'b')]
    """

    model_config = ConfigDict(frozen=True, strict=True)

    kind: ValueKind = Field(description="Variant tag: 'int', 'str', or 'bool'.")
    payload: int | str | bool = Field(description="The wrapped Python value.")

    @model_validator(mode="after")
    def _validate_payload_matches_kind(self) -> Value:
        """Validate that the payload's Python type is exactly the declared kind.

        Returns:
            Value: The validated model instance.

        Raises:
            ValueError: If the payload type does not match `kind`.
        """
        if type(self.payload) is not _PAYLOAD_TYPES[self.kind]:
            raise ValueError(f"payload {self.payload!r} is not of kind '{self.kind}'")
        return self

    @classmethod
    def of(cls, raw: Value | RawValue) -> Value:
        """Wrap a raw Python value, inferring its kind.

        Args:
            raw (Value | int | str | bool): The value to wrap. An existing
                `Value` is returned unchanged.

        Returns:
            Value: The tagged value.

        Raises:
            TypeError: If `raw` is not a `Value`, `bool`, `int`, or `str`.
        """
        if isinstance(raw, Value):
            return raw
        # bool is a subclass of int, so it must be checked first.
        if isinstance(raw, bool):
            return cls(kind="bool", payload=raw)
        if isinstance(raw, int):
            return cls(kind="int", payload=raw)
        if isinstance(raw, str):
            return cls(kind="str", payload=raw)
        raise TypeError(f"Cannot build a Value from {type(raw).__name__}: {raw!r}")

    def sort_key(self) -> tuple[int, Any]:
        """Return the key that defines the total order over values.

        Returns:
            tuple[int, Any]: `(kind rank, payload)`.
        """
        return _KIND_RANK[self.kind], self.payload

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.kind == "bool":
            return "true" if self.payload else "false"
        return str(self.payload)

    def __repr__(self) -> str:
        return f"Value({self.kind}: {self.payload!r})"
