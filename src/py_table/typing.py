"""
DataType system for Column / Table.

Pure metadata design:
  - DataType describes the element kind of a column
  - NA masks live in column storage, not in DataType
  - Kinds form a closed set: bool, int, float, str, object
  - Promotion is functional (immutable DataType instances)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Type
import math
import warnings


KINDS = (bool, int, float, str, object)

# Least upper bound of two kinds. Pairs not listed promote to object.
_PROMOTION_TABLE = {
    (bool, int): int,
    (bool, float): float,
    (int, float): float,
}

_NUMERIC_KINDS = (bool, int, float)


@dataclass(frozen=True)
class DataType:
    """
    Describes the element kind of a Column.

    Attributes
    ----------
    kind : Type
        One of bool, int, float, str or object. Any other Python type
        is stored as object.

    Examples
    --------
    >>> DataType(int)
    <int>
    >>> DataType(int).promote(DataType(float))
    <float>
    >>> DataType(str).promote(DataType(int))
    <object>
    """

    kind: Type[Any]

    def __post_init__(self):
        if self.kind not in KINDS:
            object.__setattr__(self, 'kind', object)

    def __repr__(self):
        return f"<{self.kind.__name__}>"

    @property
    def is_numeric(self) -> bool:
        """True if kind is bool, int or float."""
        return self.kind in _NUMERIC_KINDS

    def promote(self, other: "DataType") -> "DataType":
        """
        Least upper bound of two DataTypes.

        Never mutates; always returns a DataType.
        """
        return DataType(promote_types(self.kind, other.kind))


def as_dtype(dtype: Any) -> DataType:
    """Accept a DataType or a Python type and return a DataType."""
    if isinstance(dtype, DataType):
        return dtype
    if isinstance(dtype, type):
        return DataType(dtype)
    raise TypeError(f"dtype must be a DataType instance or Python type, not {type(dtype).__name__}")


def promote_types(a: Type, b: Type) -> Type:
    """
    Least upper bound of two kinds following the numeric ladder
    bool -> int -> float; anything else meets at object.
    """
    if a is b:
        return a
    lub = _PROMOTION_TABLE.get((a, b)) or _PROMOTION_TABLE.get((b, a))
    if lub is not None:
        return lub
    if a is not object and b is not object:
        warnings.warn(
            f"Degrading column<{a.__name__}> and column<{b.__name__}> to column<object>",
            stacklevel=4,
        )
    return object


def infer_kind(value: Any) -> Optional[Type]:
    """
    Infer the kind of a single scalar.

    Returns None for NA.
    """
    if value is None:
        return None

    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, str):
        return str
    return object


def infer_dtype(values: Iterable[Any], default: Type = object) -> DataType:
    """
    Infer a DataType from an iterable of Python scalars.

    Applies promotion across all non-NA values; `default` is used when
    there are none.

    Examples
    --------
    >>> infer_dtype([1, 2, 3])
    <int>
    >>> infer_dtype([1, 2.5, None])
    <float>
    >>> infer_dtype([None, None])
    <object>
    """
    kind: Optional[Type] = None
    for v in values:
        k = infer_kind(v)
        if k is None:
            continue
        if kind is None:
            kind = k
        elif k is not kind:
            kind = promote_types(kind, k)
    return DataType(default if kind is None else kind)


def validate_scalar(value: Any, dtype: DataType) -> Any:
    """
    Validate (and possibly coerce) a scalar before writing into a column.

    Parameters
    ----------
    value : Any
        Scalar to validate. None (NA) is always accepted.
    dtype : DataType
        Target dtype

    Returns
    -------
    Any
        Validated/coerced scalar

    Raises
    ------
    TypeError
        If value is incompatible with dtype
    """
    if value is None:
        return None

    kind = dtype.kind
    if kind is object:
        return value

    vtype = type(value)

    # Exact match
    if vtype is kind:
        return value

    # Numeric coercions
    if kind is float and isinstance(value, int):
        return float(value)
    if kind is int and vtype is bool:
        return int(value)
    if kind is int and isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)

    # Subclasses of str (enums etc.) stay strings
    if kind is str and isinstance(value, str):
        return str(value)

    raise TypeError(
        f"Incompatible value {value!r} for column<{kind.__name__}>"
    )
