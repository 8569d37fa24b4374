"""
Storage backends for Column data.

Pure Python implementation using array.array for numeric kinds,
with a separate NA mask; a plain list for everything else.
Both are mutable in place: columns shared between tables see
each other's element writes.
"""

from __future__ import annotations
from array import array
from typing import Any, Protocol, Iterator, Sequence
from collections.abc import Iterable


class Storage(Protocol):
    """Protocol for Column storage backends."""

    def __len__(self) -> int:
        """Number of elements (including NAs)."""
        ...

    def __getitem__(self, i: int) -> Any:
        """Get element at index (returns None if NA)."""
        ...

    def __setitem__(self, i: int, value: Any) -> None:
        """Set element at index in place (None marks NA)."""
        ...

    def __iter__(self) -> Iterator[Any]:
        """Iterate over elements (yielding None for NAs)."""
        ...

    def gather(self, positions: Sequence[int]) -> Storage:
        """Return a new Storage holding the elements at positions."""
        ...

    def copy(self) -> Storage:
        """Return an independent copy."""
        ...

    def is_na(self, i: int) -> bool:
        """Check if element at index is NA."""
        ...


class ArrayStorage:
    """
    Contiguous numeric storage using array.array + optional NA mask.

    For bool, int and float kinds. The mask is created lazily on the
    first NA.
    """

    __slots__ = ('_data', '_mask')

    # Map Python types to array.array typecodes
    _TYPECODE_MAP = {
        int: 'q',      # signed long long
        float: 'd',    # double
        bool: 'B',     # unsigned char (0/1)
    }

    _FILL = {'q': 0, 'd': 0.0, 'B': 0}

    def __init__(self, data: array, mask: bytearray | None = None):
        """
        Parameters
        ----------
        data : array.array
            Contiguous numeric data
        mask : bytearray or None
            NA mask (1 = NA, 0 = valid), same length as data
        """
        self._data = data
        self._mask = mask

    @classmethod
    def from_iterable(cls, values: Iterable[Any], kind: type) -> ArrayStorage:
        """Create from Python iterable. Raises OverflowError for oversized ints."""
        typecode = cls._TYPECODE_MAP.get(kind)
        if typecode is None:
            raise ValueError(f"Cannot use ArrayStorage for {kind}")

        fill = cls._FILL[typecode]
        data_list = []
        mask_list = []
        has_na = False

        for v in values:
            if v is None:
                has_na = True
                mask_list.append(1)
                data_list.append(fill)  # sentinel value (ignored when masked)
            else:
                mask_list.append(0)
                data_list.append(v)

        data = array(typecode, data_list)
        mask = bytearray(mask_list) if has_na else None

        return cls(data, mask)

    @classmethod
    def all_na(cls, kind: type, length: int) -> ArrayStorage:
        typecode = cls._TYPECODE_MAP[kind]
        return cls(array(typecode, [cls._FILL[typecode]]) * length, bytearray(b'\x01') * length)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> Any:
        if self._mask is not None and self._mask[i]:
            return None
        value = self._data[i]
        if self._data.typecode == 'B':
            return bool(value)
        return value

    def __setitem__(self, i: int, value: Any) -> None:
        if value is None:
            if self._mask is None:
                self._mask = bytearray(len(self._data))
            self._mask[i] = 1
            return
        # array raises OverflowError before anything changes
        self._data[i] = value
        if self._mask is not None:
            self._mask[i] = 0

    def __iter__(self) -> Iterator[Any]:
        for i in range(len(self._data)):
            yield self[i]

    def is_na(self, i: int) -> bool:
        return bool(self._mask is not None and self._mask[i])

    def gather(self, positions: Sequence[int]) -> ArrayStorage:
        data = self._data
        new_data = array(data.typecode, [data[i] for i in positions])
        new_mask = None
        if self._mask is not None:
            mask = self._mask
            new_mask = bytearray(mask[i] for i in positions)
        return ArrayStorage(new_data, new_mask)

    def copy(self) -> ArrayStorage:
        mask = bytearray(self._mask) if self._mask is not None else None
        return ArrayStorage(array(self._data.typecode, self._data), mask)


class ListStorage:
    """
    Python object storage using a list.

    For str and object kinds (and ints too large for ArrayStorage).
    NAs are stored as None inline.
    """

    __slots__ = ('_data',)

    def __init__(self, data: list):
        self._data = data

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> ListStorage:
        return cls(list(values))

    @classmethod
    def all_na(cls, length: int) -> ListStorage:
        return cls([None] * length)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> Any:
        return self._data[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self._data[i] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def is_na(self, i: int) -> bool:
        return self._data[i] is None

    def gather(self, positions: Sequence[int]) -> ListStorage:
        data = self._data
        return ListStorage([data[i] for i in positions])

    def copy(self) -> ListStorage:
        return ListStorage(list(self._data))


def choose_storage(values: Iterable[Any], kind: type) -> Storage:
    """
    Choose appropriate storage backend based on kind.

    Parameters
    ----------
    values : Iterable[Any]
        Data to store (already validated for kind)
    kind : type
        Python type (int, float, str, etc.)

    Returns
    -------
    Storage
        Appropriate storage backend
    """
    # Try array.array for numeric types
    if kind in (int, float, bool):
        values = list(values)
        try:
            return ArrayStorage.from_iterable(values, kind)
        except (ValueError, TypeError, OverflowError):
            pass

    # Fallback to list for everything else
    return ListStorage.from_iterable(values)


def na_storage(kind: type, length: int) -> Storage:
    """All-NA storage of the given kind and length."""
    if kind in (int, float, bool):
        return ArrayStorage.all_na(kind, length)
    return ListStorage.all_na(length)
