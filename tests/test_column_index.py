"""
ColumnIndex: name <-> position mapping.
"""

import pytest
from py_table import ColumnIndex
from py_table.errors import (
	DuplicateColumnError,
	IndexMismatchError,
	LengthMismatchError,
	PyTableTypeError,
	UnknownColumnError,
)


class TestLookup:
	def test_position_by_name_and_position(self):
		idx = ColumnIndex(["a", "b"])
		assert idx.position("b") == 1
		assert idx.position(0) == 0
		assert idx.position(-1) == 1

	def test_unknown(self):
		idx = ColumnIndex(["a"])
		with pytest.raises(UnknownColumnError, match="'z'"):
			idx.position("z")
		with pytest.raises(UnknownColumnError):
			idx.position(5)

	def test_lookup_returns_none(self):
		idx = ColumnIndex(["a"])
		assert idx.lookup("z") is None
		assert idx.lookup(3) is None
		assert idx.lookup("a") == 0

	def test_contains(self):
		idx = ColumnIndex(["a"])
		assert "a" in idx
		assert idx.contains("a")
		assert "b" not in idx
		assert 0 not in idx

	def test_positions(self):
		idx = ColumnIndex(["a", "b", "c"])
		assert idx.positions(["c", 0]) == [2, 0]
		assert idx.positions([True, False, True]) == [0, 2]

	def test_positions_mask_length(self):
		with pytest.raises(LengthMismatchError):
			ColumnIndex(["a", "b"]).positions([True])


class TestMutation:
	def test_insert_duplicate(self):
		idx = ColumnIndex(["a"])
		with pytest.raises(DuplicateColumnError):
			idx.insert("a")

	def test_constructor_rejects_duplicates(self):
		with pytest.raises(DuplicateColumnError):
			ColumnIndex(["a", "a"])

	def test_insert_at_position(self):
		idx = ColumnIndex(["a", "c"])
		idx.insert("b", 1)
		assert idx.names() == ["a", "b", "c"]
		assert idx.position("c") == 2

	def test_names_must_be_str(self):
		with pytest.raises(PyTableTypeError):
			ColumnIndex([1])

	def test_rename(self):
		idx = ColumnIndex(["a", "b"])
		idx.rename("a", "z")
		assert idx.names() == ["z", "b"]
		assert idx.position("z") == 0
		assert "a" not in idx

	def test_rename_errors(self):
		idx = ColumnIndex(["a", "b"])
		with pytest.raises(DuplicateColumnError):
			idx.rename("a", "b")
		with pytest.raises(UnknownColumnError):
			idx.rename("q", "r")

	def test_delete_renumbers(self):
		idx = ColumnIndex(["a", "b", "c"])
		assert idx.delete("a") == "a"
		assert idx.position("b") == 0
		assert idx.position("c") == 1
		assert len(idx) == 2

	def test_set_names(self):
		idx = ColumnIndex(["a", "b"])
		idx.set_names(["p", "q"])
		assert idx.position("q") == 1
		with pytest.raises(IndexMismatchError):
			idx.set_names(["p"])
		with pytest.raises(DuplicateColumnError):
			idx.set_names(["p", "p"])

	def test_copy_is_independent(self):
		idx = ColumnIndex(["a"])
		other = idx.copy()
		other.insert("b")
		assert idx.names() == ["a"]
		assert other == ColumnIndex(["a", "b"])
