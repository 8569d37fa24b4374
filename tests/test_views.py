"""
TableView and RowView: zero-copy row handles.
"""

import pytest
from py_table import RowView, Table, TableView
from py_table.errors import (
	LengthMismatchError,
	NonExistentTargetError,
	OutOfBoundsError,
	UnknownColumnError,
)


def make_table():
	return Table({"a": [1, 2, 3], "b": ["x", "y", "z"], "c": [1.5, None, 3.5]})


class TestTableView:
	def test_construction(self):
		t = make_table()
		v = t.view([0, 2])
		assert isinstance(v, TableView)
		assert v.nrows() == 2
		assert v.ncols() == 3
		assert len(v) == 2
		assert v.names() == t.names()
		assert v.positions() == (0, 2)

	def test_mask_and_slice(self):
		t = make_table()
		assert t.view([True, False, True]).positions() == (0, 2)
		assert t.view(slice(1, None)).positions() == (1, 2)
		assert t.view().positions() == (0, 1, 2)

	def test_bad_positions(self):
		t = make_table()
		with pytest.raises(OutOfBoundsError):
			t.view([0, 9])
		with pytest.raises(LengthMismatchError):
			t.view([True, False])

	def test_empty_view(self):
		v = make_table().view([])
		assert v.nrows() == 0
		assert v.to_table().size() == (0, 3)

	def test_reads_remap_rows(self):
		t = make_table()
		v = t.view([0, 2])
		assert v[1, "a"] == 3
		assert v["a"].to_list() == [1, 3]
		assert v[[1], ["a", "b"]].to_dict() == {"a": [3], "b": ["z"]}

	def test_read_out_of_bounds(self):
		with pytest.raises(OutOfBoundsError):
			make_table().view([0, 2])[2, "a"]

	def test_view_of_view_composes(self):
		t = make_table()
		v2 = t.view([0, 2]).view([1])
		assert v2.parent is t
		assert v2.positions() == (2,)
		assert v2[0, "b"] == "z"

	def test_writes_go_through(self):
		t = make_table()
		v = t.view([0, 2])
		v[1, "a"] = 100
		assert t[2, "a"] == 100
		v["a"] = 0
		assert t["a"].to_list() == [0, 2, 0]

	def test_writes_never_insert(self):
		v = make_table().view([0, 2])
		with pytest.raises(NonExistentTargetError):
			v["zz"] = 1

	def test_to_table(self):
		t = make_table()
		m = t.view([2, 0]).to_table()
		assert isinstance(m, Table)
		assert m["a"].to_list() == [3, 1]
		m[0, "a"] = 50
		assert t[2, "a"] == 3

	def test_iteration(self):
		v = make_table().view([1, 2])
		assert [row["b"] for row in v] == ["y", "z"]

	def test_column_mask(self):
		t = make_table()
		v = t.view(t["a"] >= 2)
		assert v.positions() == (1, 2)


class TestRowView:
	def test_get_and_set(self):
		t = make_table()
		r = t.row(1)
		assert isinstance(r, RowView)
		assert r["a"] == 2
		assert r[0] == 2
		r["b"] = "w"
		assert t[1, "b"] == "w"

	def test_iteration_in_column_order(self):
		r = make_table().row(1)
		assert list(r) == [("a", 2), ("b", "y"), ("c", None)]
		assert r.values() == (2, "y", None)
		assert len(r) == 3

	def test_restriction(self):
		t = make_table()
		r = t.row(2)[["c", "a"]]
		assert r.names() == ["c", "a"]
		assert r[1] == 3
		assert list(r) == [("c", 3.5), ("a", 3)]

	def test_restriction_unknown(self):
		with pytest.raises(UnknownColumnError):
			make_table().row(0)[["zz"]]

	def test_to_table(self):
		one = make_table().row(0).to_table()
		assert one.size() == (1, 3)
		assert one.to_dict(flatten=True) == {"a": 1, "b": "x", "c": 1.5}

	def test_round_trip_all_rows(self):
		t = make_table()
		for r in range(t.nrows()):
			row = t.row(r)
			for name in t.names():
				assert row[name] == t[r, name]

	def test_bounds(self):
		t = make_table()
		with pytest.raises(OutOfBoundsError):
			t.row(7)
		assert t.row(-1).position == 2

	def test_over_view(self):
		t = make_table()
		r = t.view([0, 2]).row(1)
		assert r["a"] == 3
		r["a"] = 30
		assert t[2, "a"] == 30
		assert r.to_table()["a"].to_list() == [30]

	def test_repr(self):
		assert repr(make_table().row(0)) == "Row(0: a=1, b='x', c=1.5)"
