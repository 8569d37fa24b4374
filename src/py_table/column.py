import math
import operator

from .errors import LengthMismatchError
from .errors import OutOfBoundsError
from .errors import PyTableTypeError
from .storage import ListStorage
from .storage import choose_storage
from .storage import na_storage
from .typing import as_dtype
from .typing import infer_dtype
from .typing import validate_scalar

from typing import Any
from typing import Iterable
from typing import List

# ============================================================
# Small helpers
# ============================================================

def _is_hashable(x: Any) -> bool:
	try:
		hash(x)
		return True
	except TypeError:
		return False


def _safe_sortable_list(xs: Iterable[Any]) -> List[Any]:
	"""
	Deterministic representation for sets in fingerprinting.
	"""
	try:
		return sorted(xs)
	except TypeError:
		return sorted((repr(x) for x in xs))


def is_sequence_value(value) -> bool:
	""" True for values that assign element-wise rather than broadcast """
	if isinstance(value, (str, bytes, bytearray)):
		return False
	if isinstance(value, (set, frozenset, dict)):
		raise PyTableTypeError(f"Unsupported assignment value type: {type(value).__name__}")
	return isinstance(value, (list, tuple, range, Column)) or (
		hasattr(value, '__len__') and hasattr(value, '__getitem__') and hasattr(value, '__iter__')
	)


def _is_bool_mask(key) -> bool:
	if isinstance(key, Column):
		return key.dtype.kind is bool
	return isinstance(key, (list, tuple)) and len(key) > 0 and all(isinstance(e, bool) for e in key)


# ============================================================
# Column
# ============================================================

class Column():
	""" Homogeneously typed, NA-capable sequence of values """
	_dtype = None
	_storage = None

	# Fingerprint constants
	_FP_P = (1 << 61) - 1  # Mersenne prime (2^61 - 1)
	_FP_B = 1315423911     # Base for rolling hash

	# elementwise == makes columns unhashable; use fingerprint()
	__hash__ = None

	def __init__(self, initial=(), dtype=None):
		"""
		Build a column from an iterable of Python scalars. None marks NA.

		The element type is inferred when `dtype` is not given. Values
		that do not fit an explicit `dtype` raise PyTableTypeError.
		"""
		values = list(initial)
		if dtype is None:
			dtype = infer_dtype(values)
		else:
			dtype = as_dtype(dtype)
			values = [self._validate(v, dtype) for v in values]
		self._dtype = dtype
		self._storage = choose_storage(values, dtype.kind)
		self._fp = None

	@classmethod
	def _from_storage(cls, storage, dtype):
		col = cls.__new__(cls)
		col._dtype = dtype
		col._storage = storage
		col._fp = None
		return col

	@classmethod
	def na(cls, dtype, length):
		""" An all-NA column of the given element type and length """
		dtype = as_dtype(dtype)
		return cls._from_storage(na_storage(dtype.kind, length), dtype)

	@classmethod
	def new(cls, default_element, length, dtype=None):
		""" create a new column of length * default_element """
		if default_element is None:
			return cls.na(dtype if dtype is not None else object, length)
		if dtype is None:
			dtype = infer_dtype([default_element])
		return cls([default_element] * length, dtype=dtype)

	@staticmethod
	def _validate(value, dtype):
		try:
			return validate_scalar(value, dtype)
		except TypeError:
			raise PyTableTypeError(
				f"Cannot set {type(value).__name__} in {dtype.kind.__name__} column"
			) from None

	@property
	def dtype(self):
		"""The DataType of this column."""
		return self._dtype

	def element_type(self):
		return self._dtype.kind

	def __len__(self):
		return len(self._storage)

	def __iter__(self):
		return iter(self._storage)

	def to_list(self):
		return list(self._storage)

	def __repr__(self):
		n = len(self)
		if n > 10:
			shown = ', '.join(repr(x) for x in self.get_many(range(5))) + ', ..., ' + \
				', '.join(repr(x) for x in self.get_many(range(n - 5, n)))
		else:
			shown = ', '.join(repr(x) for x in self)
		return f"Column{self._dtype!r}([{shown}])"

	#-----------------------------------------------------
	# Fingerprinting
	#-----------------------------------------------------

	@staticmethod
	def _hash_element(x: Any) -> int:
		P = Column._FP_P
		B = Column._FP_B

		if x is None:
			return 0x9E3779B97F4A7C15

		if isinstance(x, float):
			if math.isnan(x):
				return 0xDEADBEEFCAFEBABE
			return hash(x)

		if isinstance(x, (set, frozenset)):
			rep = _safe_sortable_list(list(x))
			return Column._hash_element(tuple(rep))

		if isinstance(x, (list, tuple)):
			h = 0
			for elem in x:
				h = (h * B + Column._hash_element(elem)) % P
			return h

		if _is_hashable(x):
			return hash(x)

		return hash(repr(x))

	def fingerprint(self) -> int:
		""" Order-sensitive hash of the values; agrees with is_equivalent() """
		if self._fp is None:
			P = self._FP_P
			B = self._FP_B
			total = 0
			for x in self._storage:
				total = (total * B + self._hash_element(x)) % P
			self._fp = total
		return self._fp

	def _invalidate_fp(self) -> None:
		self._fp = None

	#-----------------------------------------------------
	# Positional access
	#-----------------------------------------------------

	def _check_position(self, i):
		n = len(self._storage)
		if isinstance(i, bool) or not isinstance(i, int):
			raise PyTableTypeError(f"Row positions must be integers, not {type(i).__name__}")
		if i < 0:
			i += n
		if not (0 <= i < n):
			raise OutOfBoundsError(f"Index {i} out of range for column length {n}")
		return i

	def _check_positions(self, positions):
		return [self._check_position(i) for i in positions]

	def get(self, position):
		return self._storage[self._check_position(position)]

	def set(self, position, value):
		""" Write one value in place. Incompatible values raise PyTableTypeError. """
		position = self._check_position(position)
		value = self._validate(value, self._dtype)
		self._write(position, value)
		self._invalidate_fp()

	def _write(self, position, value):
		try:
			self._storage[position] = value
		except OverflowError:
			# int too wide for the machine-word array
			self._storage = ListStorage.from_iterable(self._storage)
			self._storage[position] = value

	def get_many(self, positions):
		""" Gather the values at positions into a new column """
		return Column._from_storage(self._storage.gather(self._check_positions(positions)), self._dtype)

	def set_many(self, positions, values):
		"""
		Write values at positions in place. A scalar is broadcast; a
		sequence must match the number of positions. Nothing is written
		unless every value is compatible.
		"""
		positions = self._check_positions(positions)
		if is_sequence_value(values):
			values = list(values)
			if len(values) != len(positions):
				raise LengthMismatchError(
					f"Value length {len(values)} does not match {len(positions)} target positions"
				)
			values = [self._validate(v, self._dtype) for v in values]
		else:
			v = self._validate(values, self._dtype)
			values = [v] * len(positions)
		for i, v in zip(positions, values):
			self._write(i, v)
		self._invalidate_fp()

	def _resolve_key(self, key):
		""" Turn a non-scalar key into a list of positions """
		n = len(self)
		if isinstance(key, slice):
			return list(range(*key.indices(n)))
		if _is_bool_mask(key):
			if len(key) != n:
				raise LengthMismatchError(f"Boolean mask length {len(key)} does not match column length {n}")
			if any(flag is None for flag in key):
				raise PyTableTypeError("Boolean mask must not contain NA")
			return [i for i, flag in enumerate(key) if flag]
		if isinstance(key, (list, tuple, range, Column)):
			return self._check_positions(key)
		raise PyTableTypeError(
			f'Column indices must be integers, slices, boolean masks or integer sequences, not {type(key).__name__}'
		)

	def __getitem__(self, key):
		""" Get item(s) from self.
			# int: a single value (or None for NA)
			# slice, boolean mask, integer sequence: a new Column
		"""
		if isinstance(key, int) and not isinstance(key, bool):
			return self.get(key)
		return self.get_many(self._resolve_key(key))

	def __setitem__(self, key, value):
		if isinstance(key, int) and not isinstance(key, bool):
			self.set(key, value)
			return
		self.set_many(self._resolve_key(key), value)

	def copy(self):
		""" Same values and type in independent storage """
		return Column._from_storage(self._storage.copy(), self._dtype)

	def isna(self):
		""" Boolean column, True where the value is NA """
		storage = self._storage
		return Column((storage.is_na(i) for i in range(len(storage))), dtype=bool)

	def promote(self, dtype):
		""" A new column holding these values as the least upper bound of both types """
		target = self._dtype.promote(as_dtype(dtype))
		if target == self._dtype:
			return self.copy()
		return Column(self._storage, dtype=target)

	@classmethod
	def concat(cls, columns):
		""" Concatenate columns end to end, promoting to a common type """
		columns = list(columns)
		if not columns:
			return cls()
		dtype = columns[0].dtype
		for col in columns[1:]:
			dtype = dtype.promote(col.dtype)
		values = []
		for col in columns:
			values.extend(col)
		return cls(values, dtype=dtype)

	""" Comparison - NA aware
		# equals()         per element True / False / None (unknown)
		# is_equivalent()  NA equals NA, a single bool
		# ==, !=, <, ...   elementwise, boolean Column with NA
	"""
	def equals(self, other):
		if len(self) != len(other):
			raise LengthMismatchError(f"Cannot compare columns of length {len(self)} and {len(other)}")
		return tuple(
			None if (x is None or y is None) else bool(x == y)
			for x, y in zip(self, other)
		)

	def is_equivalent(self, other):
		if len(self) != len(other):
			return False
		for x, y in zip(self, other):
			if x is None or y is None:
				if x is not y:
					return False
			elif not (x == y or (isinstance(x, float) and isinstance(y, float) and math.isnan(x) and math.isnan(y))):
				return False
		return True

	def _elementwise_compare(self, other, op):
		try:
			if isinstance(other, Column) or is_sequence_value(other):
				if len(self) != len(other):
					raise LengthMismatchError(f"Cannot compare columns of length {len(self)} and {len(other)}")
				result_values = tuple(
					None if (x is None or y is None) else bool(op(x, y))
					for x, y in zip(self, other)
				)
			else:
				result_values = tuple(
					None if (x is None or other is None) else bool(op(x, other))
					for x in self
				)
		except TypeError as e:
			raise PyTableTypeError(f"Cannot compare column<{self._dtype.kind.__name__}>: {e}") from e
		return Column(result_values, dtype=bool)

	def __eq__(self, other):
		return self._elementwise_compare(other, operator.eq)

	def __ne__(self, other):
		return self._elementwise_compare(other, operator.ne)

	def __ge__(self, other):
		return self._elementwise_compare(other, operator.ge)

	def __gt__(self, other):
		return self._elementwise_compare(other, operator.gt)

	def __le__(self, other):
		return self._elementwise_compare(other, operator.le)

	def __lt__(self, other):
		return self._elementwise_compare(other, operator.lt)

	def __invert__(self):
		if self._dtype.kind is not bool:
			raise PyTableTypeError(f"~ requires a bool column, not column<{self._dtype.kind.__name__}>")
		return Column((None if x is None else not x for x in self._storage), dtype=bool)
