"""
Selector normalization for Table / TableView indexing.

Two steps, kept apart from the dispatch in Table:
  - classify() tags one raw argument (name, position, names, positions,
    boolean mask, slice)
  - normalize() turns a whole key into a Selector with one of six shapes

Row parts are resolved to positions here; column parts stay as raw keys
(names or positions) because a write may target a column that does not
exist yet. Boolean masks and slices over columns are resolved to positions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union

from .column import Column
from .errors import LengthMismatchError, OutOfBoundsError, PyTableTypeError


class ArgKind(Enum):
    NAME = "name"
    POSITION = "position"
    NAMES = "names"
    POSITIONS = "positions"
    MASK = "mask"
    SLICE = "slice"


class Shape(Enum):
    COLUMN_SINGLE = "column"
    COLUMN_MULTI = "columns"
    ROW_SINGLE_COLUMN_SINGLE = "cell"
    ROW_SINGLE_COLUMN_MULTI = "row"
    ROW_MULTI_COLUMN_SINGLE = "rows of column"
    ROW_MULTI_COLUMN_MULTI = "rows of columns"


@dataclass(frozen=True)
class Selector:
    """
    A normalized indexing key.

    Attributes
    ----------
    shape : Shape
    rows : int, tuple of int, or None
        A single row is kept as given (bounds are checked by the caller,
        after any auto-grow); multiple rows are checked positions.
        None for column-only shapes.
    cols : str, int, or tuple of str/int
        Raw column key(s).
    """

    shape: Shape
    rows: Union[int, Tuple[int, ...], None]
    cols: Any

    @property
    def single_row(self) -> bool:
        return self.shape in (Shape.ROW_SINGLE_COLUMN_SINGLE, Shape.ROW_SINGLE_COLUMN_MULTI)

    @property
    def single_column(self) -> bool:
        return self.shape in (
            Shape.COLUMN_SINGLE,
            Shape.ROW_SINGLE_COLUMN_SINGLE,
            Shape.ROW_MULTI_COLUMN_SINGLE,
        )


def classify(arg: Any) -> ArgKind:
    """Tag one raw indexing argument."""
    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(arg, bool):
        raise PyTableTypeError("A single boolean is not a valid selector")
    if isinstance(arg, str):
        return ArgKind.NAME
    if isinstance(arg, int):
        return ArgKind.POSITION
    if isinstance(arg, slice):
        return ArgKind.SLICE
    if isinstance(arg, Column):
        kind = arg.element_type()
        if kind is bool:
            return ArgKind.MASK
        if kind is int:
            return ArgKind.POSITIONS
        raise PyTableTypeError(f"Cannot index with a column<{kind.__name__}>")
    if isinstance(arg, (list, tuple, range)):
        items = list(arg)
        if not items:
            return ArgKind.POSITIONS
        if all(isinstance(x, bool) for x in items):
            return ArgKind.MASK
        if any(isinstance(x, bool) for x in items):
            raise PyTableTypeError("Cannot mix booleans with names or positions in a selector")
        if all(isinstance(x, int) for x in items):
            return ArgKind.POSITIONS
        if all(isinstance(x, (str, int)) for x in items):
            return ArgKind.NAMES
    raise PyTableTypeError(f"Invalid selector type: {type(arg).__name__}")


def _mask_positions(mask, length: int, what: str) -> Tuple[int, ...]:
    flags = list(mask)
    if len(flags) != length:
        raise LengthMismatchError(
            f"Boolean {what} mask length {len(flags)} does not match {length} {what}s"
        )
    if any(flag is None for flag in flags):
        raise PyTableTypeError(f"Boolean {what} mask must not contain NA")
    return tuple(i for i, flag in enumerate(flags) if flag)


def check_row(row: int, nrows: int) -> int:
    """Bounds-check one row position, normalizing negatives."""
    pos = row + nrows if row < 0 else row
    if not (0 <= pos < nrows):
        raise OutOfBoundsError(f"Row {row} out of range for {nrows} rows")
    return pos


def resolve_rows(arg: Any, nrows: int) -> Tuple[int, ...]:
    """Resolve a multi-row selector (or a single position) to checked positions."""
    kind = classify(arg)
    if kind is ArgKind.POSITION:
        return (check_row(arg, nrows),)
    if kind is ArgKind.SLICE:
        return tuple(range(*arg.indices(nrows)))
    if kind is ArgKind.MASK:
        return _mask_positions(arg, nrows, "row")
    if kind is ArgKind.POSITIONS:
        return tuple(check_row(i, nrows) for i in arg)
    raise PyTableTypeError("Rows are selected by position, boolean mask or slice, not by name")


def resolve_columns(arg: Any, kind: ArgKind, ncols: int) -> Tuple[Any, ...]:
    """Resolve a multi-column selector to a tuple of raw column keys."""
    if kind is ArgKind.SLICE:
        return tuple(range(*arg.indices(ncols)))
    if kind is ArgKind.MASK:
        return _mask_positions(arg, ncols, "column")
    return tuple(arg)


def normalize(key: Any, nrows: int, ncols: int) -> Selector:
    """
    Normalize a raw `t[key]` argument into a Selector.

    A tuple of strings selects several columns; any other tuple must be
    a (rows, columns) pair.
    """
    if isinstance(key, tuple):
        if key and all(isinstance(k, str) for k in key):
            return Selector(Shape.COLUMN_MULTI, None, key)
        if len(key) != 2:
            raise PyTableTypeError(f"Table indexing requires 1D or 2D keys, got {len(key)} parts")
        row_key, col_key = key
    else:
        row_key, col_key = None, key

    col_kind = classify(col_key)
    single_col = col_kind in (ArgKind.NAME, ArgKind.POSITION)
    cols = col_key if single_col else resolve_columns(col_key, col_kind, ncols)

    if row_key is None:
        return Selector(Shape.COLUMN_SINGLE if single_col else Shape.COLUMN_MULTI, None, cols)

    if classify(row_key) is ArgKind.POSITION:
        shape = Shape.ROW_SINGLE_COLUMN_SINGLE if single_col else Shape.ROW_SINGLE_COLUMN_MULTI
        return Selector(shape, row_key, cols)

    rows = resolve_rows(row_key, nrows)
    shape = Shape.ROW_MULTI_COLUMN_SINGLE if single_col else Shape.ROW_MULTI_COLUMN_MULTI
    return Selector(shape, rows, cols)
