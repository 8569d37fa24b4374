import math
import warnings
from collections.abc import Mapping

from .column import Column
from .column import is_sequence_value
from .config import DEFAULT_CONFIG
from .errors import DuplicateColumnError
from .errors import EmptyResultError
from .errors import IndexMismatchError
from .errors import LengthMismatchError
from .errors import NonContiguousInsertError
from .errors import NonExistentTargetError
from .errors import OutOfBoundsError
from .errors import PyTableTypeError
from .errors import ShapeMismatchError
from .errors import UnknownColumnError
from .index import ColumnIndex
from .naming import clean_names
from .naming import gennames
from .naming import next_auto_name
from .selectors import Shape
from .selectors import check_row
from .selectors import normalize
from .selectors import resolve_rows
from .views import RowView
from .views import TableView


class _Drop():
	""" Marker value: assigning it deletes the target column(s) """
	__slots__ = ()

	def __repr__(self):
		return 'DROP'


DROP = _Drop()

_MASK64 = (1 << 64) - 1
_NAN_KEY = ('__nan__',)


def _bitmix(a, b):
	""" Order-sensitive 64-bit combination of two hash values """
	a &= _MASK64
	b &= _MASK64
	a ^= (b + 0x9E3779B97F4A7C15 + ((a << 6) & _MASK64) + (a >> 2)) & _MASK64
	a = ((a ^ (a >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
	a = ((a ^ (a >> 27)) * 0x94D049BB133111EB) & _MASK64
	return a ^ (a >> 31)


def _hashable_key(x):
	"""
	Comparable, hashable stand-in for one cell value.

	Lists become tuples, sets sorted tuples, dicts sorted item tuples.
	All NaNs share one key. Anything else unhashable falls back to repr().
	"""
	if x is None:
		return None
	if isinstance(x, float) and math.isnan(x):
		return _NAN_KEY
	if isinstance(x, (list, tuple)):
		return tuple(_hashable_key(v) for v in x)
	if isinstance(x, (set, frozenset)):
		items = [_hashable_key(v) for v in x]
		try:
			return ('__set__',) + tuple(sorted(items))
		except TypeError:
			return ('__set__',) + tuple(sorted(items, key=repr))
	if isinstance(x, dict):
		items = [(_hashable_key(k), _hashable_key(v)) for k, v in x.items()]
		try:
			return ('__dict__',) + tuple(sorted(items))
		except TypeError:
			return ('__dict__',) + tuple(sorted(items, key=repr))
	try:
		hash(x)
		return x
	except TypeError:
		return repr(x)


class Table():
	""" Multiple named columns of the same length """
	_columns = None
	_index = None
	_config = None

	def __init__(self, columns=(), names=None, *, index=None, config=DEFAULT_CONFIG):
		"""
		Build a table from columns.

		`columns` is a sequence of Columns (or plain sequences, which are
		upgraded to Columns) or a mapping of name -> values. Columns are
		shared, not copied. Names default to x1, x2, ...
		"""
		if isinstance(columns, Mapping):
			if names is None and index is None:
				names = list(columns.keys())
			columns = list(columns.values())
		columns = [self._as_column(c) for c in columns]

		if index is None:
			if names is None:
				names = gennames(len(columns), config.auto_name_prefix)
			index = ColumnIndex(names)
		elif names is not None:
			raise PyTableTypeError("Pass either names or index, not both")

		if len(index) != len(columns):
			raise IndexMismatchError(f"Index has {len(index)} names for {len(columns)} columns")
		lengths = {len(c) for c in columns}
		if len(lengths) > 1:
			raise LengthMismatchError(f"All columns must have the same length; got lengths {sorted(lengths)}")

		self._columns = columns
		self._index = index
		self._config = config

	@staticmethod
	def _as_column(values):
		if isinstance(values, Column):
			return values
		if isinstance(values, Table) or not is_sequence_value(values):
			raise PyTableTypeError(f"Table columns must be sequences, not {type(values).__name__}")
		return Column(values)

	@classmethod
	def _from_parts(cls, columns, index, config):
		t = cls.__new__(cls)
		t._columns = columns
		t._index = index
		t._config = config
		return t

	def _derive(self, columns, names):
		return Table._from_parts(list(columns), ColumnIndex(names), self._config)

	#-----------------------------------------------------
	# Alternate constructors
	#-----------------------------------------------------

	@classmethod
	def empty(cls, nrows, ncols, dtype=None, config=DEFAULT_CONFIG):
		""" nrows x ncols of NA, auto-named """
		if dtype is None:
			dtype = config.default_dtype
		columns = [Column.na(dtype, nrows) for _ in range(ncols)]
		return cls(columns, config=config)

	@classmethod
	def from_types(cls, dtypes, nrows, names=None, config=DEFAULT_CONFIG):
		""" All-NA columns of the given element types """
		columns = [Column.na(dtype, nrows) for dtype in dtypes]
		return cls(columns, names, config=config)

	@classmethod
	def from_dict(cls, mapping, config=DEFAULT_CONFIG):
		return cls(mapping, config=config)

	@classmethod
	def from_records(cls, records, names=None, config=DEFAULT_CONFIG):
		"""
		Build a table from a list of dicts, one per row.

		The columns are the union of keys in order of first appearance
		unless `names` is given. Missing keys are NA. Each column takes
		the promoted type of its non-NA values (object if there are none).
		"""
		records = list(records)
		for i, rec in enumerate(records):
			if not isinstance(rec, Mapping):
				raise PyTableTypeError(f"Record {i} is {type(rec).__name__}, expected a mapping")
		if names is None:
			names = []
			seen = set()
			for rec in records:
				for key in rec:
					if key not in seen:
						seen.add(key)
						names.append(key)
		columns = [Column([rec.get(name) for rec in records]) for name in names]
		return cls(columns, names, config=config)

	#-----------------------------------------------------
	# Shape
	#-----------------------------------------------------

	@property
	def config(self):
		return self._config

	def nrows(self):
		if not self._columns:
			return 0
		return len(self._columns[0])

	def ncols(self):
		return len(self._index)

	def size(self):
		return (self.nrows(), self.ncols())

	def __len__(self):
		return self.nrows()

	def is_empty(self):
		""" True when the table has no columns """
		return self.ncols() == 0

	def __repr__(self):
		cols = ', '.join(f"{name}{col.dtype!r}" for name, col in zip(self._index, self._columns))
		return f"Table({self.nrows()}x{self.ncols()}: {cols})"

	#-----------------------------------------------------
	# Names & associative access
	#-----------------------------------------------------

	def names(self):
		return self._index.names()

	def set_names(self, names):
		self._index.set_names(names)

	def rename(self, old, new=None):
		""" Rename one column, or several given a mapping old -> new """
		if isinstance(old, Mapping):
			for k, v in old.items():
				self._index.rename(k, v)
			return
		self._index.rename(old, new)

	def clean_names(self):
		""" Sanitize names to identifiers, keeping them unique """
		self._index.set_names(clean_names(self._index, self._config.unique_separator))

	def dtypes(self):
		return [col.dtype for col in self._columns]

	def keys(self):
		return self.names()

	def values(self):
		return list(self._columns)

	def items(self):
		return list(zip(self._index, self._columns))

	def get(self, key, default=None):
		pos = self._index.lookup(key)
		if pos is None:
			return default
		return self._columns[pos]

	def __contains__(self, name):
		return name in self._index

	#-----------------------------------------------------
	# Read path
	#-----------------------------------------------------

	def _select_columns(self, positions):
		names = self._index.names()
		return self._derive((self._columns[p] for p in positions), (names[p] for p in positions))

	def __getitem__(self, key):
		"""
		Six shapes:
			# t[c]          the Column itself
			# t[cs]         Table sharing the selected Columns
			# t[r, c]       scalar (None for NA)
			# t[r, cs]      one-row Table
			# t[rs, c]      Column gathered at rs
			# t[rs, cs]     Table
		"""
		sel = normalize(key, self.nrows(), self.ncols())
		shape = sel.shape

		if shape is Shape.COLUMN_SINGLE:
			return self._columns[self._index.position(sel.cols)]

		if shape is Shape.COLUMN_MULTI:
			return self._select_columns(self._index.positions(sel.cols))

		if shape is Shape.ROW_SINGLE_COLUMN_SINGLE:
			row = check_row(sel.rows, self.nrows())
			return self._columns[self._index.position(sel.cols)].get(row)

		if shape is Shape.ROW_SINGLE_COLUMN_MULTI:
			rows = [check_row(sel.rows, self.nrows())]
		else:
			rows = list(sel.rows)

		if shape is Shape.ROW_MULTI_COLUMN_SINGLE:
			return self._columns[self._index.position(sel.cols)].get_many(rows)

		positions = self._index.positions(sel.cols)
		names = self._index.names()
		return self._derive(
			(self._columns[p].get_many(rows) for p in positions),
			(names[p] for p in positions),
		)

	#-----------------------------------------------------
	# Write path
	#-----------------------------------------------------

	def __setitem__(self, key, value):
		"""
		Assign through the same six shapes.
			# t[c] = v       replace, append, or append-next with an auto name
			# t[cs] = v      the single-column write for every target
			# t[r, c] = v    cell write; grows a table of <= 1 row
			# t[r, cs] = v   cell write per column
			# t[rs, ...] = v in-place writes to existing columns only
		Assigning DROP deletes the target column(s). A TableView value is
		materialized first; a RowView fills one row by column name.
		"""
		if value is DROP:
			self.delete(key)
			return
		if isinstance(value, (set, frozenset, dict)):
			raise PyTableTypeError(f"Unsupported assignment value type: {type(value).__name__}")

		sel = normalize(key, self.nrows(), self.ncols())
		shape = sel.shape

		if isinstance(value, TableView):
			value = value.to_table()
		elif isinstance(value, RowView) and shape is not Shape.ROW_SINGLE_COLUMN_MULTI:
			value = value.to_table()

		if shape is Shape.COLUMN_SINGLE:
			self._set_column(sel.cols, value)
		elif shape is Shape.COLUMN_MULTI:
			self._set_columns(sel.cols, value)
		elif shape is Shape.ROW_SINGLE_COLUMN_SINGLE:
			self._set_cell(sel.rows, sel.cols, value)
		elif shape is Shape.ROW_SINGLE_COLUMN_MULTI:
			self._set_row_cells(sel.rows, sel.cols, value)
		elif shape is Shape.ROW_MULTI_COLUMN_SINGLE:
			self._set_rows(sel.rows, (sel.cols,), value)
		else:
			self._set_rows(sel.rows, sel.cols, value)

	def _broadcast(self, value):
		""" A column for a scalar: length 1 on tables of <= 1 row, else the row count """
		n = self.nrows()
		length = n if n > 1 else 1
		if value is None:
			return Column.na(self._config.default_dtype, length)
		return Column.new(value, length)

	def _insert_column(self, key, column):
		pos = self._index.lookup(key)
		remaining = [c for i, c in enumerate(self._columns) if i != pos]
		if remaining and len(column) != len(remaining[0]):
			raise LengthMismatchError(
				f"New column has length {len(column)}; table has {len(remaining[0])} rows"
			)

		if pos is not None:
			self._columns[pos] = column
			return
		if isinstance(key, str):
			self._index.insert(key)
			self._columns.append(column)
			return

		ncols = self.ncols()
		if key < 0:
			raise UnknownColumnError(f"Column position {key} out of range for {ncols} columns")
		if key != ncols:
			raise NonContiguousInsertError(
				f"Cannot insert a column at position {key}; the next free position is {ncols}"
			)
		self._index.insert(next_auto_name(self._index, self._config.auto_name_prefix))
		self._columns.append(column)

	def _set_column(self, key, value):
		if isinstance(value, Table):
			if value.ncols() != 1:
				raise ShapeMismatchError(f"Cannot assign a {value.ncols()}-column table to one column")
			value = value._columns[0]
		if isinstance(value, Column):
			column = value
		elif is_sequence_value(value):
			column = Column(value)
		else:
			column = self._broadcast(value)
		self._insert_column(key, column)

	def _adopt(self, other):
		self._columns = other._columns
		self._index = other._index

	def _set_columns(self, keys, value):
		if isinstance(value, Table):
			if value.ncols() != len(keys):
				raise ShapeMismatchError(
					f"Cannot assign a {value.ncols()}-column table to {len(keys)} columns"
				)
			sources = list(value._columns)
		elif is_sequence_value(value):
			source = value if isinstance(value, Column) else Column(value)
			sources = [source.copy() for _ in keys]
		else:
			sources = [value] * len(keys)

		# all targets land on a shallow copy first; the table is untouched on failure
		scratch = self.copy()
		for key, source in zip(keys, sources):
			scratch._set_column(key, source)
		self._adopt(scratch)

	def _target_position(self, key):
		pos = self._index.lookup(key)
		if pos is None:
			raise NonExistentTargetError(f"Cannot write rows of non-existent column '{key}'")
		return pos

	def _write_lenient(self, column, rows, values):
		"""
		Write values one cell at a time. A value the column cannot hold
		is stored as NA.
		"""
		rejected = []
		for row, value in zip(rows, values):
			try:
				column.set(row, value)
			except PyTableTypeError:
				column.set(row, None)
				rejected.append(value)
		if rejected and self._config.warn_on_na_substitution:
			shown = ', '.join(repr(v) for v in rejected[:3])
			more = f" (+{len(rejected) - 3} more)" if len(rejected) > 3 else ''
			warnings.warn(
				f"Stored NA for {len(rejected)} value(s) incompatible with "
				f"column<{column.element_type().__name__}>: {shown}{more}",
				stacklevel=4,
			)

	def _set_cell(self, row, key, value):
		if isinstance(value, (Table, Column)):
			raise PyTableTypeError("A single cell takes a scalar value")
		if self.nrows() <= 1:
			if row not in (0, -1):
				raise OutOfBoundsError(f"Row {row} out of range for a table of {self.nrows()} rows")
			self._set_column(key, self._broadcast(value))
			return
		row = check_row(row, self.nrows())
		self._write_lenient(self._columns[self._target_position(key)], [row], [value])

	def _row_values(self, source, keys):
		"""
		Values of a RowView for the target columns. Targets are matched
		by name when the row has them all, otherwise by position.
		"""
		names = self._index.names()
		targets = []
		for key in keys:
			pos = self._index.lookup(key)
			targets.append(names[pos] if pos is not None else key)
		available = set(source.names())
		if all(isinstance(name, str) and name in available for name in targets):
			return [source[name] for name in targets]
		values = list(source.values())
		if len(values) != len(keys):
			raise ShapeMismatchError(f"Got {len(values)} values for {len(keys)} columns")
		return values

	def _set_row_cells(self, row, keys, value):
		if isinstance(value, RowView):
			values = self._row_values(value, keys)
		elif isinstance(value, Table):
			if value.ncols() != len(keys) or value.nrows() != 1:
				raise ShapeMismatchError(
					f"Cannot assign a {value.nrows()}x{value.ncols()} table to one row of {len(keys)} columns"
				)
			values = [c.get(0) for c in value._columns]
		elif is_sequence_value(value):
			values = list(value)
			if len(values) != len(keys):
				raise ShapeMismatchError(f"Got {len(values)} values for {len(keys)} columns")
		else:
			values = [value] * len(keys)

		if self.nrows() > 1:
			row = check_row(row, self.nrows())
			positions = [self._target_position(k) for k in keys]
			for pos, v in zip(positions, values):
				self._write_lenient(self._columns[pos], [row], [v])
			return
		scratch = self.copy()
		for key, v in zip(keys, values):
			scratch._set_cell(row, key, v)
		self._adopt(scratch)

	def _set_rows(self, rows, keys, value):
		positions = [self._target_position(k) for k in keys]
		n = len(rows)

		if isinstance(value, Table):
			if value.ncols() != len(positions):
				raise ShapeMismatchError(
					f"Cannot assign a {value.ncols()}-column table to {len(positions)} columns"
				)
			sources = value._columns
		else:
			sources = [value] * len(positions)

		planned = []
		for pos, source in zip(positions, sources):
			if isinstance(source, Table):
				raise ShapeMismatchError("Cannot assign a table to a single column")
			if is_sequence_value(source):
				values = list(source)
				if len(values) != n:
					raise LengthMismatchError(f"Got {len(values)} values for {n} rows")
			else:
				values = [source] * n
			planned.append((self._columns[pos], values))

		for column, values in planned:
			self._write_lenient(column, rows, values)

	#-----------------------------------------------------
	# Column management
	#-----------------------------------------------------

	def _column_positions(self, key):
		sel = normalize(key, self.nrows(), self.ncols())
		if sel.shape is Shape.COLUMN_SINGLE:
			return [self._index.position(sel.cols)]
		if sel.shape is Shape.COLUMN_MULTI:
			return self._index.positions(sel.cols)
		raise PyTableTypeError("Columns are deleted by name, position or mask; use delete_rows() for rows")

	def delete(self, key):
		""" Remove column(s) in place """
		for pos in sorted(set(self._column_positions(key)), reverse=True):
			self._index.delete(pos)
			del self._columns[pos]

	def __delitem__(self, key):
		self.delete(key)

	def insert(self, position, name, values):
		""" Insert a new column before `position` (0 <= position <= ncols) """
		ncols = self.ncols()
		if isinstance(position, bool) or not isinstance(position, int):
			raise PyTableTypeError(f"Insert position must be an int, not {type(position).__name__}")
		if not (0 <= position <= ncols):
			raise NonContiguousInsertError(f"Insert position {position} outside 0..{ncols}")
		if name in self._index:
			raise DuplicateColumnError(f"Column '{name}' already exists")
		if isinstance(values, (Table, TableView, RowView)):
			raise PyTableTypeError("insert() takes a column of values, not a table")
		if isinstance(values, Column):
			column = values
		elif is_sequence_value(values):
			column = Column(values)
		else:
			column = self._broadcast(values)
		if ncols and len(column) != self.nrows():
			raise LengthMismatchError(f"New column has length {len(column)}; table has {self.nrows()} rows")
		self._index.insert(name, position)
		self._columns.insert(position, column)

	def without(self, key):
		""" A table sharing every column except the given ones """
		drop = set(self._column_positions(key))
		keep = [i for i in range(self.ncols()) if i not in drop]
		if not keep:
			raise EmptyResultError("Removing every column would leave an empty table")
		return self._select_columns(keep)

	def with_columns(self, other):
		""" A shallow copy with each column of `other` assigned in by name """
		res = self.copy()
		items = other.items()
		for name, column in items:
			res[name] = column
		return res

	#-----------------------------------------------------
	# Copies
	#-----------------------------------------------------

	def copy(self):
		""" New table and index; Column objects are shared """
		return Table._from_parts(list(self._columns), self._index.copy(), self._config)

	def deepcopy(self):
		""" New table with every column copied """
		return Table._from_parts([c.copy() for c in self._columns], self._index.copy(), self._config)

	def __copy__(self):
		return self.copy()

	def __deepcopy__(self, memo):
		return self.deepcopy()

	def similar(self, nrows=None):
		""" All-NA table with the same names and column types """
		if nrows is None:
			nrows = self.nrows()
		return self._derive((Column.na(c.dtype, nrows) for c in self._columns), self._index)

	#-----------------------------------------------------
	# Rows
	#-----------------------------------------------------

	def _replace_rows(self, positions):
		self._columns = [c.get_many(positions) for c in self._columns]

	def delete_rows(self, rows):
		""" Remove rows in place """
		drop = set(resolve_rows(rows, self.nrows()))
		self._replace_rows([i for i in range(self.nrows()) if i not in drop])

	def keep_rows(self, rows):
		""" Keep only the given rows, in place and in the given order """
		self._replace_rows(list(resolve_rows(rows, self.nrows())))

	def head(self, n=6):
		return self[slice(0, max(n, 0)), :]

	def tail(self, n=6):
		start = max(self.nrows() - max(n, 0), 0)
		return self[slice(start, None), :]

	def flipud(self):
		""" Rows in reverse order """
		return self[slice(None, None, -1), :]

	def flipud_inplace(self):
		self._replace_rows(list(range(self.nrows() - 1, -1, -1)))

	def complete_cases(self):
		""" Boolean column, True for rows without NA """
		flags = [True] * self.nrows()
		for col in self._columns:
			for i, na in enumerate(col.isna()):
				if na:
					flags[i] = False
		return Column(flags, dtype=bool)

	def dropna(self):
		""" Rows without NA """
		return self[self.complete_cases(), :]

	def _row_keys(self):
		for i in range(self.nrows()):
			yield tuple(_hashable_key(col.get(i)) for col in self._columns)

	def duplicated(self):
		""" Boolean column, True for rows equal to an earlier row """
		seen = set()
		flags = []
		for key in self._row_keys():
			flags.append(key in seen)
			seen.add(key)
		return Column(flags, dtype=bool)

	def unique(self):
		""" First occurrence of each distinct row """
		keep = [i for i, dup in enumerate(self.duplicated()) if not dup]
		return self[keep, :]

	def drop_duplicates(self):
		""" Remove repeated rows in place """
		self._replace_rows([i for i, dup in enumerate(self.duplicated()) if not dup])

	#-----------------------------------------------------
	# Conversion & views
	#-----------------------------------------------------

	def to_dict(self, flatten=False):
		"""
		name -> list of values. With `flatten` and a single row, name -> value.
		"""
		if flatten and self.nrows() == 1:
			return {name: col.get(0) for name, col in zip(self._index, self._columns)}
		return {name: col.to_list() for name, col in zip(self._index, self._columns)}

	def to_rows(self):
		""" One dict per row """
		names = self._index.names()
		return [dict(zip(names, values)) for values in zip(*self._columns)] if self._columns else []

	def view(self, rows=None):
		return TableView(self, rows)

	def row(self, position):
		return RowView(self, position)

	def __iter__(self):
		for i in range(self.nrows()):
			yield RowView(self, i)

	#-----------------------------------------------------
	# Equality & hashing
	#-----------------------------------------------------

	def __eq__(self, other):
		"""
		True, False, or None when NA makes the outcome unknown.
		"""
		if not isinstance(other, Table):
			return NotImplemented
		if self.ncols() != other.ncols() or self._index != other._index:
			return False
		if self.nrows() != other.nrows():
			return False
		result = True
		for a, b in zip(self._columns, other._columns):
			outcome = a.equals(b)
			if False in outcome:
				return False
			if None in outcome:
				result = None
		return result

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented or result is None:
			return result
		return not result

	def is_equivalent(self, other):
		""" Strict equality: NA equals NA, NaN equals NaN """
		if not isinstance(other, Table):
			return False
		if self._index != other._index:
			return False
		return all(a.is_equivalent(b) for a, b in zip(self._columns, other._columns))

	def __hash__(self):
		h = hash((self.nrows(), self.ncols())) + 1
		for col in self._columns:
			h = _bitmix(h, col.fingerprint())
		return h
