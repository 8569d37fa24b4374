"""Explicit configuration carried by every Table."""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class TableConfig:
    """
    Construction defaults for a Table and everything derived from it.

    Attributes
    ----------
    default_dtype : type
        Element type of columns created without one (empty tables,
        NA-filled columns, writes of a bare NA scalar).
    auto_name_prefix : str
        Prefix of generated column names ('x' gives x1, x2, ...).
    unique_separator : str
        Separator used when suffixing duplicate names ('a', 'a__2', ...).
    warn_on_na_substitution : bool
        Emit a UserWarning when a cell write degrades to NA.
    """

    default_dtype: Any = float
    auto_name_prefix: str = "x"
    unique_separator: str = "__"
    warn_on_na_substitution: bool = True

    def with_options(self, **changes) -> "TableConfig":
        """Return a copy with some fields changed."""
        return replace(self, **changes)


DEFAULT_CONFIG = TableConfig()
