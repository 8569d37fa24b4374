class PyTableError(Exception):
    """Base exception for py-table library."""
    pass


class PyTableKeyError(PyTableError, KeyError):
    """Raised when a column/key is missing."""

    def __str__(self):
        # KeyError repr()s its message; keep it readable
        return str(self.args[0]) if self.args else ''


class PyTableTypeError(PyTableError, TypeError):
    """Raised for invalid types in API calls."""
    pass


class PyTableValueError(PyTableError, ValueError):
    """Raised for invalid values or mismatched lengths."""
    pass


class PyTableIndexError(PyTableError, IndexError):
    """Raised for invalid indexing operations."""
    pass


class UnknownColumnError(PyTableKeyError):
    """A column name or position does not exist."""
    pass


class NonExistentTargetError(PyTableKeyError):
    """A row-range write targeted a column that does not exist."""
    pass


class DuplicateColumnError(PyTableValueError):
    """A column name is already taken."""
    pass


class LengthMismatchError(PyTableValueError):
    """Columns, masks or values disagree in length."""
    pass


class IndexMismatchError(PyTableValueError):
    """Column index count differs from column count."""
    pass


class ShapeMismatchError(PyTableValueError):
    """A table-valued write does not match the shape of its target."""
    pass


class EmptyResultError(PyTableValueError):
    """The operation would leave a table without columns."""
    pass


class OutOfBoundsError(PyTableIndexError):
    """A row position is outside the table."""
    pass


class NonContiguousInsertError(PyTableIndexError):
    """A new column was addressed by a position past the next free slot."""
    pass
