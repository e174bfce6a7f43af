"""Printer plugins shipped with the default serializer."""

from __future__ import annotations

from enum import Enum
from typing import Any

from diffpack.core.matchers import AsymmetricMatcher, DictContaining, ListContaining
from diffpack.serialize.base import SerializerPlugin
from diffpack.serialize.printer import PrintContext


class AsymmetricMatcherPlugin(SerializerPlugin):
    """Print matchers by their expectation, e.g. ``DictContaining {...}``."""

    name = "asymmetric-matcher"

    def test(self, value: Any) -> bool:
        return isinstance(value, AsymmetricMatcher)

    def serialize(
        self,
        value: Any,
        context: PrintContext,
        indentation: str,
        depth: int,
    ) -> str:
        if isinstance(value, (DictContaining, ListContaining)):
            return f"{value.name} {context.print(value.expected, indentation, depth)}"
        return value.to_asymmetric_string()


class EnumPlugin(SerializerPlugin):
    name = "enum"

    def test(self, value: Any) -> bool:
        return isinstance(value, Enum)

    def serialize(
        self,
        value: Any,
        context: PrintContext,
        indentation: str,
        depth: int,
    ) -> str:
        return f"{type(value).__name__}.{value.name}"


DEFAULT_PLUGINS: tuple[SerializerPlugin, ...] = (
    AsymmetricMatcherPlugin(),
    EnumPlugin(),
)
