"""
Name generation, sanitization and uniquification.
"""

from py_table.naming import _sanitize_user_name, _uniquify, clean_names, gennames, make_unique, next_auto_name


class TestSanitize:
	def test_rules(self):
		assert _sanitize_user_name("First Name") == "first_name"
		assert _sanitize_user_name("  __x__ ") == "x"
		assert _sanitize_user_name("2nd") == "c2nd"
		assert _sanitize_user_name("!!!") is None
		assert _sanitize_user_name(42) == "c42"


class TestUnique:
	def test_uniquify(self):
		assert _uniquify("a", set()) == "a"
		assert _uniquify("a", {"a", "a__2"}) == "a__3"
		assert _uniquify("a", {"a"}, sep="_") == "a_2"

	def test_make_unique_keeps_first(self):
		assert make_unique(["a", "b", "a"]) == ["a", "b", "a__2"]

	def test_make_unique_avoids_later_names(self):
		assert make_unique(["a", "a", "a__2"]) == ["a", "a__3", "a__2"]

	def test_clean_names(self):
		assert clean_names(["A b", "a-b", "%"]) == ["a_b", "a_b__2", "col2"]


class TestAutoNames:
	def test_gennames(self):
		assert gennames(3) == ["x1", "x2", "x3"]
		assert gennames(2, prefix="c", start=5) == ["c5", "c6"]

	def test_next_auto_name(self):
		assert next_auto_name(["a", "b"]) == "x3"
		assert next_auto_name(["a", "x3"]) == "x4"
