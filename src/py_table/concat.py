from .column import Column
from .column import is_sequence_value
from .config import DEFAULT_CONFIG
from .errors import LengthMismatchError
from .errors import PyTableTypeError
from .naming import make_unique
from .table import Table
from .views import TableView


def _collect(items):
	""" Accept f(a, b, c) as well as f([a, b, c]) when a, b, c are tables """
	if len(items) == 1 and isinstance(items[0], (list, tuple)) and all(
		isinstance(t, (Table, TableView)) for t in items[0]
	):
		return list(items[0])
	return list(items)


def _as_table(item):
	if isinstance(item, TableView):
		return item.to_table()
	if not isinstance(item, Table):
		raise PyTableTypeError(f"Expected a Table, got {type(item).__name__}")
	return item


def vconcat(*tables):
	"""
	Stack tables vertically.

	The result has the union of all column names, in order of first
	appearance. A table lacking a column contributes NA rows of the type
	that column had where it first appeared. Each result column is
	promoted to the least upper bound of its pieces.
	"""
	tables = [_as_table(t) for t in _collect(tables)]
	if not tables:
		return Table()
	if len(tables) == 1:
		return tables[0].copy()

	names = []
	first_dtype = {}
	for t in tables:
		for name, column in t.items():
			if name not in first_dtype:
				first_dtype[name] = column.dtype
				names.append(name)

	res = Table(config=tables[0].config)
	for name in names:
		pieces = [
			t[name] if name in t else Column.na(first_dtype[name], t.nrows())
			for t in tables
		]
		res[name] = Column.concat(pieces)
	return res


def hconcat(*items):
	"""
	Place tables side by side.

	Columns are shared with the inputs. Repeated names get a suffix
	(a, a__2, ...). Columns and plain sequences become one auto-named
	column each; a scalar is broadcast to the common row count.
	"""
	items = _collect(items)
	config = next((i.config for i in items if isinstance(i, (Table, TableView))), DEFAULT_CONFIG)

	pieces = []
	for item in items:
		if isinstance(item, (Table, TableView)):
			pieces.append(_as_table(item).items())
		elif isinstance(item, Column):
			pieces.append([(None, item)])
		elif is_sequence_value(item):
			pieces.append([(None, Column(item))])
		else:
			pieces.append(item)

	lengths = {len(col) for piece in pieces if isinstance(piece, list) for _, col in piece}
	if len(lengths) > 1:
		raise LengthMismatchError(f"Cannot hconcat tables with different row counts: {sorted(lengths)}")
	nrows = lengths.pop() if lengths else 1

	names = []
	columns = []
	for piece in pieces:
		if not isinstance(piece, list):
			dtype = config.default_dtype if piece is None else None
			piece = [(None, Column.new(piece, nrows, dtype))]
		for name, col in piece:
			if name is None:
				name = f"{config.auto_name_prefix}{len(columns) + 1}"
			names.append(name)
			columns.append(col)
	return Table(columns, make_unique(names, config.unique_separator), config=config)
