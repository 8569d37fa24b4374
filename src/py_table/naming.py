"""Column name generation, sanitization and uniquification utilities."""

from __future__ import annotations
import re


def _sanitize_user_name(name) -> str | None:
	"""Sanitize column name to valid Python identifier.

	Rules:
	- Convert to lowercase
	- Replace runs of non-alphanumeric chars (except _) with single _
	- Strip leading/trailing underscores
	- Prefix with 'c' if starts with digit
	- Return None if empty after sanitization
	"""
	if not isinstance(name, str):
		name = str(name)

	# Lowercase
	name = name.lower()

	# Replace runs of invalid characters with _
	sanitized = re.sub(r'[^a-z0-9_]+', '_', name)

	# Strip leading/trailing _
	sanitized = sanitized.strip('_')

	# Empty → None
	if sanitized == "":
		return None

	# Starts with digit → prefix c
	if sanitized[0].isdigit():
		sanitized = "c" + sanitized

	return sanitized


def _uniquify(base: str, seen, sep: str = "__") -> str:
	"""Make a unique name by adding __2, __3, etc if needed."""
	if base not in seen:
		return base

	i = 2
	while f"{base}{sep}{i}" in seen:
		i += 1

	return f"{base}{sep}{i}"


def gennames(n: int, prefix: str = "x", start: int = 1) -> list[str]:
	"""Auto-generated names: x1, x2, ..."""
	return [f"{prefix}{i}" for i in range(start, start + n)]


def next_auto_name(existing, prefix: str = "x") -> str:
	"""
	Name for a column appended at the next free position.

	Starts from the column count + 1 and bumps until the name is free.
	"""
	k = len(existing) + 1
	while f"{prefix}{k}" in existing:
		k += 1
	return f"{prefix}{k}"


def make_unique(names, sep: str = "__") -> list[str]:
	"""Keep the first occurrence of each name; suffix later repeats."""
	names = list(names)
	taken = set(names)
	seen = set()
	result = []
	for name in names:
		if name in seen:
			name = _uniquify(name, taken, sep)
			taken.add(name)
		seen.add(name)
		result.append(name)
	return result


def clean_names(names, sep: str = "__") -> list[str]:
	"""Sanitize each name to an identifier, then make the result unique."""
	seen = set()
	result = []
	for i, name in enumerate(names):
		base = _sanitize_user_name(name) or f"col{i}"
		unique = _uniquify(base, seen, sep)
		seen.add(unique)
		result.append(unique)
	return result
