"""Stable public API surface for DiffKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from diffpack import __version__
from diffpack.core import (
    DEFAULT_DIFF_OPTIONS,
    DIFF_DELETE,
    DIFF_EQUAL,
    DIFF_INSERT,
    ChangeCounts,
    DiffLinesResult,
    DiffOp,
    DiffOptions,
    DiffOptionsError,
    EditScript,
    ansi_formatter,
    normalize_diff_options,
    plain_formatter,
)
from diffpack.core.matchers import (
    AsymmetricMatcher,
    Anything,
    CloseTo,
    DictContaining,
    InstanceOf,
    ListContaining,
    StringContaining,
    StringMatching,
)
from diffpack.diff import (
    NO_DIFF_MESSAGE,
    SIMILAR_MESSAGE,
    cleanup_semantic,
    render_edit_script,
)
from diffpack.diff import compare as _compare
from diffpack.diff import diff_lines_raw as _diff_lines_raw
from diffpack.diff import diff_lines_unified as _diff_lines_unified
from diffpack.diff import diff_strings_raw as _diff_strings_raw
from diffpack.serialize import (
    PrettyPrinter,
    SerializationError,
    SerializeConfig,
    Serialized,
    Serializer,
    SerializerPlugin,
    format_value,
)

OptionsInput = DiffOptions | Mapping[str, Any] | None


def compare(
    a: Any,
    b: Any,
    options: OptionsInput = None,
    *,
    serializer: Serializer | None = None,
) -> str | None:
    """Compare two values and describe their difference.

    Args:
        a: Expected value, or an asymmetric matcher.
        b: Received value.
        options: ``DiffOptions`` or a mapping of overrides (snake_case or
            camelCase keys).
        serializer: Serializer for non-string values; defaults to
            ``PrettyPrinter``.

    Returns:
        ``NO_DIFF_MESSAGE`` for identical values, a type-mismatch message,
        a rendered diff (prefixed by ``SIMILAR_MESSAGE`` when only the
        hook-free forms differ), or ``None`` when no structural diff applies.
    """
    return _compare(a, b, options, serializer=serializer)


def diff_lines_unified(a: str, b: str, options: OptionsInput = None) -> str:
    """Line diff of two texts rendered as annotated unified-diff text."""
    return _diff_lines_unified(a, b, options)


def diff_lines_raw(a: str, b: str, options: OptionsInput = None) -> DiffLinesResult:
    """Line diff of two texts as a structured edit script with change counts.

    Args:
        a: Expected text.
        b: Received text.
        options: ``DiffOptions`` or a mapping of overrides. Only
            ``highlight_changes`` shapes the result.

    Returns:
        Cleaned line edit script, its change counts, and the character
        refinements of changed line pairs when ``highlight_changes`` is on.
    """
    return _diff_lines_raw(a, b, options)


def diff_strings_raw(a: str, b: str, cleanup: bool = True) -> EditScript:
    """Character diff of two strings, semantically cleaned unless ``cleanup`` is false."""
    return _diff_strings_raw(a, b, cleanup)


def any_of(expected_type: type) -> InstanceOf:
    """Matcher accepting any instance of ``expected_type``."""
    return InstanceOf(expected_type)


def anything() -> Anything:
    return Anything()


def string_containing(substring: str) -> StringContaining:
    return StringContaining(substring)


def string_matching(pattern: str) -> StringMatching:
    return StringMatching(pattern)


def dict_containing(expected: Mapping[Any, Any]) -> DictContaining:
    return DictContaining(expected)


def list_containing(expected: list[Any] | tuple[Any, ...]) -> ListContaining:
    return ListContaining(expected)


def close_to(expected: float, precision: int = 2) -> CloseTo:
    return CloseTo(expected, precision)


__all__ = [
    "__version__",
    "NO_DIFF_MESSAGE",
    "SIMILAR_MESSAGE",
    "DIFF_DELETE",
    "DIFF_EQUAL",
    "DIFF_INSERT",
    "DEFAULT_DIFF_OPTIONS",
    "DiffOp",
    "EditScript",
    "ChangeCounts",
    "DiffLinesResult",
    "DiffOptions",
    "DiffOptionsError",
    "SerializationError",
    "SerializeConfig",
    "Serialized",
    "Serializer",
    "SerializerPlugin",
    "PrettyPrinter",
    "AsymmetricMatcher",
    "plain_formatter",
    "ansi_formatter",
    "compare",
    "diff_lines_unified",
    "diff_lines_raw",
    "diff_strings_raw",
    "render_edit_script",
    "cleanup_semantic",
    "normalize_diff_options",
    "format_value",
    "any_of",
    "anything",
    "string_containing",
    "string_matching",
    "dict_containing",
    "list_containing",
    "close_to",
]
