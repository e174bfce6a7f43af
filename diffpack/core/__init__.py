"""Core models and deterministic primitives for DiffKit."""

from diffpack.core.canonical import SortedSet, sort_map, sort_set
from diffpack.core.classify import Operand, classify, classify_operand, is_same_value
from diffpack.core.exceptions import DiffError, DiffOptionsError
from diffpack.core.models import ChangeCounts, DiffLinesResult, DiffOp, EditScript, LineRefinement
from diffpack.core.options import DEFAULT_DIFF_OPTIONS, DiffOptions, normalize_diff_options
from diffpack.core.ordering import stable_sort_key
from diffpack.core.style import Formatter, ansi_formatter, plain_formatter
from diffpack.core.types import (
    CATEGORIES,
    DIFF_DELETE,
    DIFF_EQUAL,
    DIFF_INSERT,
    STYLE_ROLES,
    Category,
    DiffTag,
    Granularity,
    StyleRole,
)

__all__ = [
    "CATEGORIES",
    "Category",
    "DIFF_DELETE",
    "DIFF_EQUAL",
    "DIFF_INSERT",
    "DiffTag",
    "Granularity",
    "STYLE_ROLES",
    "StyleRole",
    "DiffOp",
    "EditScript",
    "LineRefinement",
    "ChangeCounts",
    "DiffLinesResult",
    "DiffOptions",
    "DEFAULT_DIFF_OPTIONS",
    "normalize_diff_options",
    "DiffError",
    "DiffOptionsError",
    "Formatter",
    "plain_formatter",
    "ansi_formatter",
    "Operand",
    "classify",
    "classify_operand",
    "is_same_value",
    "SortedSet",
    "sort_map",
    "sort_set",
    "stable_sort_key",
]
