"""Asymmetric matchers: expectations matched by predicate, not equality."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from fractions import Fraction
import math
import numbers
import re
from typing import Any

from diffpack.core.types import Category

_MISSING = object()


class AsymmetricMatcher:
    """Base matcher interface.

    ``expected_category`` returns the category of values the matcher can
    accept, or ``None`` when no single category applies.
    """

    name = "AsymmetricMatcher"

    def asymmetric_match(self, other: Any) -> bool:
        raise NotImplementedError

    def expected_category(self) -> Category | None:
        return None

    def to_asymmetric_string(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return self.to_asymmetric_string()


class Anything(AsymmetricMatcher):
    """Matches any value except ``None``."""

    name = "Anything"

    def asymmetric_match(self, other: Any) -> bool:
        return other is not None


class InstanceOf(AsymmetricMatcher):
    """Matches any instance of ``expected_type``."""

    name = "Any"

    def __init__(self, expected_type: type) -> None:
        if not isinstance(expected_type, type):
            raise TypeError("InstanceOf expects a type")
        self.expected_type = expected_type

    def asymmetric_match(self, other: Any) -> bool:
        if self.expected_type is not bool and isinstance(other, bool):
            return self.expected_type is object
        return isinstance(other, self.expected_type)

    def expected_category(self) -> Category | None:
        return category_for_type(self.expected_type)

    def to_asymmetric_string(self) -> str:
        return f"Any<{self.expected_type.__name__}>"


class StringContaining(AsymmetricMatcher):
    name = "StringContaining"

    def __init__(self, substring: str) -> None:
        if not isinstance(substring, str):
            raise TypeError("StringContaining expects a str")
        self.substring = substring

    def asymmetric_match(self, other: Any) -> bool:
        return isinstance(other, str) and self.substring in other

    def expected_category(self) -> Category | None:
        return "string"

    def to_asymmetric_string(self) -> str:
        return f"{self.name} {_quote(self.substring)}"


class StringMatching(AsymmetricMatcher):
    name = "StringMatching"

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def asymmetric_match(self, other: Any) -> bool:
        return isinstance(other, str) and self.pattern.search(other) is not None

    def expected_category(self) -> Category | None:
        return "string"

    def to_asymmetric_string(self) -> str:
        return f"{self.name} /{self.pattern.pattern}/"


class DictContaining(AsymmetricMatcher):
    """Matches mappings holding at least the expected entries."""

    name = "DictContaining"

    def __init__(self, expected: Mapping[Any, Any]) -> None:
        if not isinstance(expected, Mapping):
            raise TypeError("DictContaining expects a mapping")
        self.expected = dict(expected)

    def asymmetric_match(self, other: Any) -> bool:
        if not isinstance(other, Mapping):
            return False
        for key, value in self.expected.items():
            actual = other.get(key, _MISSING)
            if actual is _MISSING or not _values_match(value, actual):
                return False
        return True

    def expected_category(self) -> Category | None:
        return "map"


class ListContaining(AsymmetricMatcher):
    """Matches sequences holding every expected item, in any order."""

    name = "ListContaining"

    def __init__(self, expected: Sequence[Any]) -> None:
        if isinstance(expected, (str, bytes)) or not isinstance(expected, Sequence):
            raise TypeError("ListContaining expects a sequence")
        self.expected = list(expected)

    def asymmetric_match(self, other: Any) -> bool:
        if isinstance(other, (str, bytes)) or not isinstance(other, Sequence):
            return False
        return all(
            any(_values_match(item, candidate) for candidate in other)
            for item in self.expected
        )

    def expected_category(self) -> Category | None:
        return "object"


class CloseTo(AsymmetricMatcher):
    """Matches numbers within ``10 ** -precision / 2`` of ``expected``."""

    name = "CloseTo"

    def __init__(self, expected: float, precision: int = 2) -> None:
        self.expected = expected
        self.precision = precision

    def asymmetric_match(self, other: Any) -> bool:
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return False
        if math.isinf(self.expected) or math.isinf(other):
            return other == self.expected
        return abs(self.expected - other) < 10 ** -self.precision / 2

    def expected_category(self) -> Category | None:
        return "number"

    def to_asymmetric_string(self) -> str:
        return f"{self.name}({self.expected!r}, {self.precision})"


def category_for_type(expected_type: type) -> Category:
    if issubclass(expected_type, str):
        return "string"
    if issubclass(expected_type, bool):
        return "boolean"
    if issubclass(expected_type, (numbers.Number, Decimal, Fraction)):
        return "number"
    if issubclass(expected_type, Mapping):
        return "map"
    if issubclass(expected_type, Set):
        return "set"
    return "object"


def _values_match(expected: Any, actual: Any) -> bool:
    if isinstance(expected, AsymmetricMatcher):
        return expected.asymmetric_match(actual)
    return expected == actual


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
