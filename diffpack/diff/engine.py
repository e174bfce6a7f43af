"""Type-directed comparison of two arbitrary values."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Callable

from diffpack.core.canonical import sort_map, sort_set
from diffpack.core.classify import classify, classify_operand, is_same_value
from diffpack.core.options import DiffOptions, normalize_diff_options
from diffpack.core.types import Category
from diffpack.diff.cleanup import cleanup_semantic
from diffpack.diff.constants import NO_DIFF_MESSAGE, SIMILAR_MESSAGE
from diffpack.diff.formatting import diff_lines_unified, render_edit_script
from diffpack.diff.lines import diff_lines
from diffpack.serialize import (
    PrettyPrinter,
    SerializationError,
    SerializeConfig,
    Serialized,
    Serializer,
)

logger = logging.getLogger(__name__)

DISPLAY_INDENT = 2
FALLBACK_MAX_DEPTH = 10

_DEFAULT_SERIALIZER = PrettyPrinter()

_Comparer = Callable[[Any, Any, DiffOptions, Serializer], str]


def compare(
    a: Any,
    b: Any,
    options: DiffOptions | Mapping[str, Any] | None = None,
    *,
    serializer: Serializer | None = None,
) -> str | None:
    """Describe how ``b`` differs from ``a``.

    Returns ``NO_DIFF_MESSAGE`` for identical values, a type-mismatch
    message when the operands belong to different categories, a rendered
    diff otherwise, or ``None`` when ``a`` is a matcher whose difference
    from ``b`` cannot be shown structurally.

    Raises:
        SerializationError: When a value cannot be serialized even with
            custom hooks disabled.
    """
    if is_same_value(a, b):
        return NO_DIFF_MESSAGE

    normalized = normalize_diff_options(options)
    operand = classify_operand(a)
    expected = operand.expected_category
    if operand.is_matcher and expected in (None, "string"):
        return None

    received = classify(b)
    if expected != received:
        return _type_mismatch_message(expected, received, normalized)
    if operand.is_matcher:
        return None

    comparer = _COMPARERS[received]
    return comparer(a, b, normalized, serializer or _DEFAULT_SERIALIZER)


def _type_mismatch_message(
    expected: Category | None,
    received: Category,
    options: DiffOptions,
) -> str:
    fmt = options.formatter
    return (
        "  Comparing two different types of values. "
        f"Expected {fmt(str(expected), 'removal')} "
        f"but received {fmt(received, 'addition')}."
    )


def _compare_strings(a: str, b: str, options: DiffOptions, serializer: Serializer) -> str:
    return diff_lines_unified(a, b, options)


def _compare_primitives(a: Any, b: Any, options: DiffOptions, serializer: Serializer) -> str:
    config = SerializeConfig()
    a_text = _run_serializer(serializer, a, config).unwrap()
    b_text = _run_serializer(serializer, b, config).unwrap()
    return diff_lines_unified(a_text, b_text, options)


def _compare_maps(a: Any, b: Any, options: DiffOptions, serializer: Serializer) -> str:
    return _compare_objects(sort_map(a), sort_map(b), options, serializer)


def _compare_sets(a: Any, b: Any, options: DiffOptions, serializer: Serializer) -> str:
    return _compare_objects(sort_set(a), sort_set(b), options, serializer)


def _compare_objects(a: Any, b: Any, options: DiffOptions, serializer: Serializer) -> str:
    primary = _diff_serialized(a, b, options, serializer, call_hooks=True, max_depth=None)
    if primary.ok:
        rendered = primary.unwrap()
        if rendered != NO_DIFF_MESSAGE:
            return rendered
        logger.debug("Serialized forms are identical; comparing without to_dict hooks")
    else:
        logger.debug("Serialization with to_dict hooks failed: %s", primary.error)

    fallback = _diff_serialized(
        a,
        b,
        options,
        serializer,
        call_hooks=False,
        max_depth=FALLBACK_MAX_DEPTH,
    )
    rendered = fallback.unwrap()
    if primary.ok and rendered != NO_DIFF_MESSAGE:
        return f"{SIMILAR_MESSAGE}\n\n{rendered}"
    return rendered


def _diff_serialized(
    a: Any,
    b: Any,
    options: DiffOptions,
    serializer: Serializer,
    *,
    call_hooks: bool,
    max_depth: int | None,
) -> Serialized:
    """Diff the unindented forms of both values, displaying the indented forms.

    The result carries the rendered diff, or the first serialization error.
    """
    texts: list[str] = []
    for value in (a, b):
        for indent in (0, DISPLAY_INDENT):
            config = SerializeConfig(call_hooks=call_hooks, max_depth=max_depth, indent=indent)
            outcome = _run_serializer(serializer, value, config)
            if not outcome.ok:
                return outcome
            texts.append(outcome.unwrap())

    a_compact, a_display, b_compact, b_display = texts
    script = cleanup_semantic(diff_lines(a_compact, b_compact))
    return Serialized.success(
        render_edit_script(script, options, display=(a_display, b_display))
    )


def _run_serializer(serializer: Serializer, value: Any, config: SerializeConfig) -> Serialized:
    try:
        return serializer.serialize(value, config)
    except SerializationError as error:
        return Serialized.failure(error)


_COMPARERS: dict[Category, _Comparer] = {
    "string": _compare_strings,
    "boolean": _compare_primitives,
    "number": _compare_primitives,
    "map": _compare_maps,
    "set": _compare_sets,
    "object": _compare_objects,
}
