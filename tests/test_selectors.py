"""
Selector classification and normalization, independent of Table.
"""

import pytest
from py_table import Column
from py_table.errors import LengthMismatchError, OutOfBoundsError, PyTableTypeError
from py_table.selectors import ArgKind, Selector, Shape, classify, normalize


class TestClassify:
	def test_scalars(self):
		assert classify("a") is ArgKind.NAME
		assert classify(0) is ArgKind.POSITION
		assert classify(slice(None)) is ArgKind.SLICE

	def test_sequences(self):
		assert classify([0, 1]) is ArgKind.POSITIONS
		assert classify(range(3)) is ArgKind.POSITIONS
		assert classify([]) is ArgKind.POSITIONS
		assert classify([True, False]) is ArgKind.MASK
		assert classify(["a", "b"]) is ArgKind.NAMES
		assert classify(["a", 0]) is ArgKind.NAMES

	def test_columns(self):
		assert classify(Column([True])) is ArgKind.MASK
		assert classify(Column([1])) is ArgKind.POSITIONS
		with pytest.raises(PyTableTypeError):
			classify(Column(["a"]))

	def test_rejects(self):
		with pytest.raises(PyTableTypeError):
			classify(True)
		with pytest.raises(PyTableTypeError):
			classify({1})
		with pytest.raises(PyTableTypeError):
			classify([True, 1])


class TestNormalize:
	def test_single_column(self):
		assert normalize("a", 3, 2) == Selector(Shape.COLUMN_SINGLE, None, "a")

	def test_multi_column(self):
		assert normalize(["a", "b"], 3, 2) == Selector(Shape.COLUMN_MULTI, None, ("a", "b"))
		assert normalize(("a", "b"), 3, 2).shape is Shape.COLUMN_MULTI
		assert normalize([True, False], 3, 2).cols == (0,)

	def test_column_mask_length(self):
		with pytest.raises(LengthMismatchError):
			normalize([True], 3, 2)

	def test_cell(self):
		assert normalize((0, "a"), 3, 2) == Selector(Shape.ROW_SINGLE_COLUMN_SINGLE, 0, "a")

	def test_single_row_bounds_deferred(self):
		sel = normalize((5, "a"), 3, 2)
		assert sel.shape is Shape.ROW_SINGLE_COLUMN_SINGLE
		assert sel.rows == 5

	def test_row_multi(self):
		sel = normalize(([True, False, True], "a"), 3, 2)
		assert sel.shape is Shape.ROW_MULTI_COLUMN_SINGLE
		assert sel.rows == (0, 2)

	def test_row_mask_length(self):
		with pytest.raises(LengthMismatchError):
			normalize(([True, False], "a"), 3, 2)

	def test_row_positions_bounds(self):
		with pytest.raises(OutOfBoundsError):
			normalize(([0, 7], "a"), 3, 2)

	def test_negative_rows(self):
		assert normalize(([-1], "a"), 3, 2).rows == (2,)

	def test_slices(self):
		sel = normalize((slice(None), slice(None)), 3, 2)
		assert sel.shape is Shape.ROW_MULTI_COLUMN_MULTI
		assert sel.rows == (0, 1, 2)
		assert sel.cols == (0, 1)

	def test_row_single_column_multi(self):
		sel = normalize((1, ["a", "b"]), 3, 2)
		assert sel.shape is Shape.ROW_SINGLE_COLUMN_MULTI
		assert sel.single_row and not sel.single_column

	def test_rows_by_name_rejected(self):
		with pytest.raises(PyTableTypeError):
			normalize(("a", [0]), 3, 2)

	def test_three_part_key(self):
		with pytest.raises(PyTableTypeError, match="1D or 2D"):
			normalize((0, 1, 2), 3, 3)
