"""Deterministic ordering helpers for unordered collections."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Mapping, Set
from dataclasses import dataclass
from typing import Any, Iterator

from diffpack.core.ordering import stable_sort_key


@dataclass(frozen=True, slots=True)
class SortedSet:
    """Set members in canonical order, printed like the source collection."""

    items: tuple[Any, ...]
    kind: str = "set"

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self.items


def sort_map(value: Mapping[Any, Any]) -> dict[Any, Any]:
    """Return a copy of ``value`` with entries ordered by key.

    Mappings and sets nested inside plain containers are normalized too, so
    two mappings with the same contents serialize identically.
    """
    return _canonicalize(value)


def sort_set(value: Set[Any] | SortedSet) -> SortedSet:
    """Return the members of ``value`` as a canonically ordered ``SortedSet``."""
    return _canonicalize(value)


def _canonicalize(value: Any) -> Any:
    if isinstance(value, SortedSet):
        return value

    if isinstance(value, Mapping):
        ordered = [
            (key, _canonicalize(value[key]))
            for key in sorted(value.keys(), key=stable_sort_key)
        ]
        return _rebuild_mapping(value, ordered)

    if isinstance(value, Set):
        members = sorted(value, key=stable_sort_key)
        return SortedSet(
            items=tuple(_canonicalize(item) for item in members),
            kind=_set_kind(value),
        )

    if type(value) is list:
        return [_canonicalize(item) for item in value]

    if type(value) is tuple:
        return tuple(_canonicalize(item) for item in value)

    return value


def _rebuild_mapping(source: Mapping[Any, Any], items: list[tuple[Any, Any]]) -> Any:
    if type(source) is OrderedDict:
        return OrderedDict(items)
    return dict(items)


def _set_kind(value: Set[Any]) -> str:
    if type(value) is set:
        return "set"
    if type(value) is frozenset:
        return "frozenset"
    return type(value).__name__
