"""Deterministic total order over arbitrary hashable values."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
import math
from typing import Any

_RANK_NONE = 0
_RANK_BOOL = 1
_RANK_NUMBER = 2
_RANK_STRING = 3
_RANK_BYTES = 4
_RANK_TUPLE = 5
_RANK_SET = 6
_RANK_OTHER = 7


def stable_sort_key(value: Any) -> tuple[Any, ...]:
    """Return a sort key that orders mixed values without raising.

    Keys of different ranks never compare their payloads, so ``None``,
    numbers, strings and arbitrary objects can share one sorted sequence.
    """
    if value is None:
        return (_RANK_NONE, "", 0)

    if isinstance(value, bool):
        return (_RANK_BOOL, "", int(value))

    if isinstance(value, (int, float, Fraction, Decimal)):
        if _is_nan(value):
            return (_RANK_NUMBER, 1, 0)
        return (_RANK_NUMBER, 0, value)

    if isinstance(value, complex):
        if math.isnan(value.real) or math.isnan(value.imag):
            return (_RANK_NUMBER, 1, 0)
        return (_RANK_NUMBER, 0, value.real, value.imag)

    if isinstance(value, str):
        return (_RANK_STRING, "", value)

    if isinstance(value, (bytes, bytearray)):
        return (_RANK_BYTES, "", bytes(value))

    if isinstance(value, tuple):
        return (
            _RANK_TUPLE,
            type(value).__qualname__,
            tuple(stable_sort_key(item) for item in value),
        )

    if isinstance(value, (set, frozenset)):
        return (
            _RANK_SET,
            type(value).__qualname__,
            tuple(sorted(stable_sort_key(item) for item in value)),
        )

    return (_RANK_OTHER, type(value).__qualname__, repr(value))


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False
