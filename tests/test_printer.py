from collections import OrderedDict, namedtuple
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pytest

from diffpack.core.canonical import sort_set
from diffpack.core.matchers import DictContaining, InstanceOf, ListContaining
from diffpack.serialize import (
    PrettyPrinter,
    PrintContext,
    SerializationError,
    SerializeConfig,
    SerializerPlugin,
    format_value,
)


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Account:
    def __init__(self, owner: str, balance: int) -> None:
        self.owner = owner
        self.balance = balance


class Snapshot:
    calls = 0

    def __init__(self, label: str, internal: int) -> None:
        self.label = label
        self.internal = internal

    def to_dict(self) -> dict[str, str]:
        Snapshot.calls += 1
        return {"label": self.label}


class Exploding:
    def to_dict(self) -> dict[str, str]:
        raise RuntimeError("boom")


def test_scalars() -> None:
    assert format_value(None) == "None"
    assert format_value(True) == "True"
    assert format_value(1.5) == "1.5"
    assert format_value(b"x") == "b'x'"


def test_strings_are_quoted_and_escaped() -> None:
    assert format_value('say "hi"\\') == '"say \\"hi\\"\\\\"'
    assert format_value('say "hi"', escape_strings=False) == '"say "hi""'


def test_containers_put_each_item_on_its_own_line() -> None:
    assert format_value([1, 2]) == "[\n  1,\n  2,\n]"
    assert format_value((1,)) == "(\n  1,\n)"
    assert format_value({"a": [1]}) == '{\n  "a": [\n    1,\n  ],\n}'


def test_empty_containers() -> None:
    assert format_value([]) == "[]"
    assert format_value({}) == "{}"
    assert format_value(set()) == "set()"
    assert format_value(frozenset()) == "frozenset()"


def test_zero_indent_keeps_line_structure() -> None:
    assert format_value([1, [2]], indent=0) == "[\n1,\n[\n2,\n],\n]"


def test_sets_print_sorted() -> None:
    assert format_value({3, 1, 2}) == "{\n  1,\n  2,\n  3,\n}"
    assert format_value(frozenset({1})) == "frozenset({\n  1,\n})"
    assert format_value(sort_set(frozenset({2, 1}))) == "frozenset({\n  1,\n  2,\n})"


def test_dicts_print_key_sorted() -> None:
    assert format_value({"b": 1, "a": 2}) == '{\n  "a": 2,\n  "b": 1,\n}'
    assert format_value({2: "x", None: "y"}) == '{\n  None: "y",\n  2: "x",\n}'


def test_non_dict_mappings_are_prefixed() -> None:
    assert format_value(OrderedDict(a=1)) == 'OrderedDict {\n  "a": 1,\n}'
    assert format_value(OrderedDict(b=1, a=2)) == (
        'OrderedDict {\n  "b": 1,\n  "a": 2,\n}'
    )


def test_objects_print_their_attributes() -> None:
    assert format_value(Point(1, 2)) == "Point(\n  x=1,\n  y=2,\n)"
    assert format_value(Account("ann", 3)) == 'Account(\n  balance=3,\n  owner="ann",\n)'


def test_named_tuples_print_fields() -> None:
    Pair = namedtuple("Pair", ["left", "right"])

    assert format_value(Pair(1, 2)) == "Pair(\n  left=1,\n  right=2,\n)"


def test_circular_references() -> None:
    items: list[object] = []
    items.append(items)

    assert format_value(items) == "[\n  [Circular],\n]"


def test_max_depth_collapses_nested_containers() -> None:
    assert format_value({"a": {"b": 1}}, max_depth=1) == '{\n  "a": [dict],\n}'
    assert format_value([Point(1, 2)], max_depth=1) == "[\n  [Point],\n]"


def test_to_dict_hook_is_called_once() -> None:
    Snapshot.calls = 0

    assert format_value(Snapshot("a", 1)) == '{\n  "label": "a",\n}'
    assert Snapshot.calls == 1


def test_hooks_can_be_disabled() -> None:
    rendered = format_value(Snapshot("a", 1), call_hooks=False)

    assert rendered == 'Snapshot(\n  internal=1,\n  label="a",\n)'


def test_hook_failure_is_a_failure_value() -> None:
    outcome = PrettyPrinter().serialize(Exploding(), SerializeConfig())

    assert outcome.ok is False
    assert isinstance(outcome.error, SerializationError)
    assert isinstance(outcome.error.__cause__, RuntimeError)
    assert "Exploding.to_dict()" in str(outcome.error)
    with pytest.raises(SerializationError):
        outcome.unwrap()


def test_hook_failure_is_skipped_without_hooks() -> None:
    assert format_value(Exploding(), call_hooks=False) == "Exploding()"


def test_enum_plugin() -> None:
    assert format_value(Color.RED) == "Color.RED"


def test_matcher_plugin() -> None:
    assert format_value(InstanceOf(int)) == "Any<int>"
    assert format_value(DictContaining({"a": 1})) == 'DictContaining {\n  "a": 1,\n}'
    assert format_value(ListContaining([1])) == "ListContaining [\n  1,\n]"


def test_custom_plugin_replaces_defaults() -> None:
    class UpperPlugin(SerializerPlugin):
        name = "upper"

        def test(self, value: object) -> bool:
            return isinstance(value, str)

        def serialize(
            self, value: Any, context: PrintContext, indentation: str, depth: int
        ) -> str:
            return value.upper()

    assert format_value(["ab"], plugins=(UpperPlugin(),)) == "[\n  AB,\n]"
    assert format_value(Color.RED, plugins=()) == "<Color.RED: 'red'>"


def test_failing_plugin_is_reported() -> None:
    class BrokenPlugin(SerializerPlugin):
        name = "broken"

        def test(self, value: object) -> bool:
            return True

        def serialize(
            self, value: Any, context: PrintContext, indentation: str, depth: int
        ) -> str:
            raise ValueError("nope")

    outcome = PrettyPrinter().serialize(1, SerializeConfig(plugins=(BrokenPlugin(),)))

    assert outcome.ok is False
    assert "broken" in str(outcome.error)
