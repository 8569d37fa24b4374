"""
py-table: A Pythonic, zero-dependency columnar table library

A table of named, independently typed columns of equal length, addressed
by name or position, with NA-aware comparison, zero-copy row views and
type-promoting concatenation.

Main classes:
    - Column: typed, NA-capable sequence (None is NA)
    - Table: named columns of equal length
    - TableView: row subset of a Table sharing its columns
    - RowView: one row of a Table or TableView

Zero external dependencies - pure Python stdlib only.
"""

from .column import Column
from .config import DEFAULT_CONFIG, TableConfig
from .index import ColumnIndex
from .table import DROP, Table
from .views import RowView, TableView
from .concat import hconcat, vconcat
from .typing import DataType
from .errors import (
	PyTableError,
	PyTableKeyError,
	PyTableValueError,
	PyTableTypeError,
	PyTableIndexError,
	UnknownColumnError,
	NonExistentTargetError,
	DuplicateColumnError,
	LengthMismatchError,
	IndexMismatchError,
	ShapeMismatchError,
	EmptyResultError,
	OutOfBoundsError,
	NonContiguousInsertError,
)

__version__ = "0.1.0"
__all__ = [
	"Column",
	"ColumnIndex",
	"DataType",
	"Table",
	"TableView",
	"RowView",
	"TableConfig",
	"DEFAULT_CONFIG",
	"DROP",
	"vconcat",
	"hconcat",
	"PyTableError",
	"PyTableKeyError",
	"PyTableValueError",
	"PyTableTypeError",
	"PyTableIndexError",
	"UnknownColumnError",
	"NonExistentTargetError",
	"DuplicateColumnError",
	"LengthMismatchError",
	"IndexMismatchError",
	"ShapeMismatchError",
	"EmptyResultError",
	"OutOfBoundsError",
	"NonContiguousInsertError",
]
