"""Operand classification for type-directed diff dispatch."""

from __future__ import annotations

from collections.abc import Mapping, Set
from dataclasses import dataclass
from decimal import Decimal
import math
import numbers
from typing import Any

from diffpack.core.canonical import SortedSet
from diffpack.core.matchers import AsymmetricMatcher
from diffpack.core.types import Category

_PRIMITIVE_TYPES = (type(None), bool, int, float, complex, Decimal, str, bytes)


@dataclass(frozen=True, slots=True)
class Operand:
    """A classified comparison operand.

    ``matcher`` is set when the operand is an asymmetric matcher; its
    ``expected_category`` then comes from the matcher rather than from the
    operand's own structure.
    """

    value: Any
    category: Category
    matcher: AsymmetricMatcher | None = None

    @property
    def is_matcher(self) -> bool:
        return self.matcher is not None

    @property
    def expected_category(self) -> Category | None:
        if self.matcher is None:
            return self.category
        return self.matcher.expected_category()


def classify(value: Any) -> Category:
    """Return the structural category of ``value``."""
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (numbers.Number, Decimal)):
        return "number"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, (Set, SortedSet)):
        return "set"
    return "object"


def classify_operand(value: Any) -> Operand:
    matcher = value if isinstance(value, AsymmetricMatcher) else None
    return Operand(value=value, category=classify(value), matcher=matcher)


def is_same_value(a: Any, b: Any) -> bool:
    """Identity, or equality of two primitives of the same type.

    NaN is the same value as NaN, while ``0.0`` and ``-0.0`` differ.
    """
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _PRIMITIVE_TYPES):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    if isinstance(a, float) and a == 0.0 and b == 0.0:
        return math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b
