from .errors import PyTableTypeError
from .errors import UnknownColumnError
from .selectors import Shape
from .selectors import check_row
from .selectors import normalize
from .selectors import resolve_rows


class TableView():
	"""
	Row subset of a Table, sharing its columns.

	Holds the parent and an ordered tuple of parent row positions. A view
	of a view maps its positions through the outer view, so every view
	points straight at a Table. Reads and writes remap rows and go through
	the parent's indexing.
	"""
	__slots__ = ('_parent', '_rows')

	def __init__(self, parent, rows=None):
		if isinstance(parent, TableView):
			local = range(parent.nrows()) if rows is None else resolve_rows(rows, parent.nrows())
			self._parent = parent._parent
			self._rows = tuple(parent._rows[i] for i in local)
			return
		self._parent = parent
		if rows is None:
			self._rows = tuple(range(parent.nrows()))
		else:
			self._rows = resolve_rows(rows, parent.nrows())

	@property
	def parent(self):
		return self._parent

	@property
	def config(self):
		return self._parent.config

	def positions(self):
		""" Parent row positions, in view order """
		return self._rows

	def nrows(self):
		return len(self._rows)

	def ncols(self):
		return self._parent.ncols()

	def size(self):
		return (self.nrows(), self.ncols())

	def __len__(self):
		return self.nrows()

	def names(self):
		return self._parent.names()

	def __contains__(self, name):
		return name in self._parent

	def __repr__(self):
		return f"TableView({self.nrows()} of {self._parent.nrows()} rows, {self.ncols()} columns)"

	def _remap(self, key):
		""" Translate a view key into an equivalent (rows, cols) key on the parent """
		sel = normalize(key, self.nrows(), self.ncols())
		if sel.single_row:
			rows = self._rows[check_row(sel.rows, self.nrows())]
		elif sel.rows is None:
			rows = list(self._rows)
		else:
			rows = [self._rows[i] for i in sel.rows]
		cols = sel.cols if sel.single_column else list(sel.cols)
		return (rows, cols)

	def __getitem__(self, key):
		return self._parent[self._remap(key)]

	def __setitem__(self, key, value):
		self._parent[self._remap(key)] = value

	def view(self, rows=None):
		return TableView(self, rows)

	def row(self, position):
		return RowView(self, position)

	def __iter__(self):
		for i in range(self.nrows()):
			yield RowView(self, i)

	def to_table(self):
		""" Materialize the view as a new Table """
		return self._parent[list(self._rows), :]


class RowView():
	"""
	One row of a Table or TableView.

	row[name] reads table[row, name]; row[name] = v writes through.
	Iterating yields (name, value) pairs in column order.
	"""
	__slots__ = ('_table', '_row', '_names')

	def __init__(self, table, row, names=None):
		if isinstance(row, bool) or not isinstance(row, int):
			raise PyTableTypeError(f"Row position must be an int, not {type(row).__name__}")
		self._table = table
		self._row = check_row(row, table.nrows())
		if names is not None:
			names = list(names)
			for name in names:
				if name not in table:
					raise UnknownColumnError(f"Column '{name}' not found")
		self._names = names

	@property
	def position(self):
		return self._row

	def names(self):
		if self._names is None:
			return self._table.names()
		return list(self._names)

	def _column_key(self, key):
		if self._names is None or isinstance(key, str):
			return key
		if isinstance(key, int) and not isinstance(key, bool):
			try:
				return self._names[key]
			except IndexError:
				raise UnknownColumnError(f"Column position {key} out of range for {len(self._names)} columns") from None
		return key

	def __getitem__(self, key):
		if isinstance(key, (list, tuple)):
			return RowView(self._table, self._row, [self._column_key(k) for k in key])
		return self._table[self._row, self._column_key(key)]

	def __setitem__(self, key, value):
		self._table[self._row, self._column_key(key)] = value

	def __len__(self):
		return len(self.names())

	def __iter__(self):
		for name in self.names():
			yield (name, self._table[self._row, name])

	def values(self):
		return tuple(value for _, value in self)

	def to_table(self):
		""" A one-row Table with this row's columns """
		return self._table[self._row, self.names()]

	def __repr__(self):
		fields = ', '.join(f"{name}={value!r}" for name, value in self)
		return f"Row({self._row}: {fields})"
