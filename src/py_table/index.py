from .errors import DuplicateColumnError
from .errors import IndexMismatchError
from .errors import LengthMismatchError
from .errors import PyTableTypeError
from .errors import UnknownColumnError


class ColumnIndex():
	"""
	Ordered, unique column names with a name -> position lookup.

	Positions are 0-based; negative positions count from the end.
	Both representations are rebuilt together on every structural change.
	"""
	__slots__ = ('_names', '_lookup')

	__hash__ = None

	def __init__(self, names=()):
		self._names = []
		self._lookup = {}
		for name in names:
			self.insert(name)

	@staticmethod
	def _check_name(name):
		if not isinstance(name, str):
			raise PyTableTypeError(f"Column names must be str, not {type(name).__name__}")
		return name

	def _rebuild(self):
		self._lookup = {name: i for i, name in enumerate(self._names)}

	def __len__(self):
		return len(self._names)

	def __iter__(self):
		return iter(self._names)

	def __contains__(self, name):
		return isinstance(name, str) and name in self._lookup

	def contains(self, name):
		return name in self

	def names(self):
		return list(self._names)

	def __eq__(self, other):
		if not isinstance(other, ColumnIndex):
			return NotImplemented
		return self._names == other._names

	def __repr__(self):
		return f"ColumnIndex({self._names!r})"

	def copy(self):
		new = ColumnIndex.__new__(ColumnIndex)
		new._names = list(self._names)
		new._lookup = dict(self._lookup)
		return new

	#-----------------------------------------------------
	# Lookup
	#-----------------------------------------------------

	def lookup(self, key):
		""" Position of a name or position, or None when absent """
		if isinstance(key, str):
			return self._lookup.get(key)
		if isinstance(key, int) and not isinstance(key, bool):
			n = len(self._names)
			if key < 0:
				key += n
			return key if 0 <= key < n else None
		return None

	def position(self, key):
		""" Position of a name or position; UnknownColumnError if absent """
		if isinstance(key, bool) or not isinstance(key, (str, int)):
			raise PyTableTypeError(f"Column keys must be str or int, not {type(key).__name__}")
		pos = self.lookup(key)
		if pos is None:
			if isinstance(key, str):
				raise UnknownColumnError(f"Column '{key}' not found")
			raise UnknownColumnError(f"Column position {key} out of range for {len(self._names)} columns")
		return pos

	def positions(self, keys):
		"""
		Resolve a sequence of names, positions or booleans to positions.

		A boolean sequence is a mask over the columns and must have one
		entry per column.
		"""
		keys = list(keys)
		if keys and all(isinstance(k, bool) for k in keys):
			if len(keys) != len(self._names):
				raise LengthMismatchError(
					f"Boolean column mask length {len(keys)} does not match {len(self._names)} columns"
				)
			return [i for i, flag in enumerate(keys) if flag]
		return [self.position(k) for k in keys]

	#-----------------------------------------------------
	# Mutation
	#-----------------------------------------------------

	def insert(self, name, position=None):
		""" Add a name at the end, or before `position` """
		self._check_name(name)
		if name in self._lookup:
			raise DuplicateColumnError(f"Column '{name}' already exists")
		if position is None:
			self._lookup[name] = len(self._names)
			self._names.append(name)
			return
		self._names.insert(position, name)
		self._rebuild()

	def rename(self, old, new):
		pos = self.position(old)
		self._check_name(new)
		if self._names[pos] == new:
			return
		if new in self._lookup:
			raise DuplicateColumnError(f"Column '{new}' already exists")
		del self._lookup[self._names[pos]]
		self._names[pos] = new
		self._lookup[new] = pos

	def delete(self, key):
		""" Remove a column name and renumber the ones after it """
		pos = self.position(key)
		name = self._names.pop(pos)
		self._rebuild()
		return name

	def set_names(self, names):
		names = list(names)
		if len(names) != len(self._names):
			raise IndexMismatchError(f"Expected {len(self._names)} names, got {len(names)}")
		for name in names:
			self._check_name(name)
		if len(set(names)) != len(names):
			dupes = sorted({n for n in names if names.count(n) > 1})
			raise DuplicateColumnError(f"Duplicate column names: {dupes}")
		self._names = names
		self._rebuild()
