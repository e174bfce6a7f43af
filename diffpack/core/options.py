"""Diff options: defaults, caller overrides and normalization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
import math
import re
from types import MappingProxyType
from typing import Any

from diffpack.core.exceptions import DiffOptionsError
from diffpack.core.style import Formatter, ansi_formatter, plain_formatter

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

_COUNT_FIELDS = frozenset({"context_lines", "truncate_threshold"})
_FLAG_FIELDS = frozenset(
    {"expand", "include_change_counts", "omit_annotation_lines", "highlight_changes"}
)
_TEXT_FIELDS = frozenset(
    {
        "a_annotation",
        "b_annotation",
        "a_indicator",
        "b_indicator",
        "common_indicator",
        "truncate_annotation",
    }
)


@dataclass(frozen=True, slots=True)
class DiffOptions:
    """Fully populated, immutable diff configuration."""

    a_annotation: str = "Expected"
    b_annotation: str = "Received"
    a_indicator: str = "-"
    b_indicator: str = "+"
    common_indicator: str = " "
    context_lines: int = 5
    expand: bool = False
    include_change_counts: bool = False
    omit_annotation_lines: bool = False
    truncate_threshold: int = 0
    truncate_annotation: str = "... Diff result is truncated"
    highlight_changes: bool = True
    formatter: Formatter = plain_formatter

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


DEFAULT_DIFF_OPTIONS: Mapping[str, Any] = MappingProxyType(DiffOptions().to_dict())


def normalize_diff_options(options: DiffOptions | Mapping[str, Any] | None = None) -> DiffOptions:
    """Merge caller overrides over the defaults.

    Keys may be snake_case or camelCase; unknown keys are ignored. Count
    options are coerced to non-negative integers, falling back to their
    defaults when the value is not numeric. ``color=True`` selects the ANSI
    formatter unless a formatter is given explicitly.
    """
    if options is None:
        return DiffOptions()
    if isinstance(options, DiffOptions):
        return options
    if not isinstance(options, Mapping):
        raise DiffOptionsError(
            f"Diff options must be a mapping or DiffOptions, got {type(options).__name__}"
        )

    overrides = {_snake_case(str(key)): value for key, value in options.items()}
    merged: dict[str, Any] = dict(DEFAULT_DIFF_OPTIONS)

    for name in _COUNT_FIELDS:
        if name in overrides:
            merged[name] = _coerce_count(overrides[name], default=DEFAULT_DIFF_OPTIONS[name])

    for name in _FLAG_FIELDS:
        if name in overrides and overrides[name] is not None:
            merged[name] = bool(overrides[name])

    for name in _TEXT_FIELDS:
        if name in overrides and overrides[name] is not None:
            merged[name] = str(overrides[name])

    formatter = overrides.get("formatter")
    if formatter is None and overrides.get("color"):
        formatter = ansi_formatter
    if formatter is not None:
        if not callable(formatter):
            raise DiffOptionsError("formatter must be callable as formatter(text, role)")
        merged["formatter"] = formatter

    return DiffOptions(**merged)


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub(lambda match: "_" + match.group(1).lower(), key)


def _coerce_count(value: Any, *, default: int) -> int:
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return max(0, int(number))
