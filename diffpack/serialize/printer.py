"""Default pretty printer: deterministic, multi-line value rendering."""

from __future__ import annotations

from collections.abc import Mapping, Set
from dataclasses import dataclass, field, fields, is_dataclass
from decimal import Decimal
from fractions import Fraction
import inspect
from typing import Any, Iterable

from diffpack.core.canonical import SortedSet
from diffpack.core.ordering import stable_sort_key
from diffpack.serialize.base import SerializeConfig, Serialized, SerializerPlugin
from diffpack.serialize.exceptions import SerializationError

_SCALAR_TYPES = (type(None), bool, int, float, complex, Decimal, Fraction, bytes, bytearray)


@dataclass(slots=True)
class PrintContext:
    """Per-call printing state shared with plugins."""

    config: SerializeConfig
    plugins: tuple[SerializerPlugin, ...]
    refs: list[int] = field(default_factory=list)

    @property
    def step(self) -> str:
        return " " * self.config.indent

    def print(self, value: Any, indentation: str = "", depth: int = 0) -> str:
        for plugin in self.plugins:
            if _plugin_claims(plugin, value):
                return _run_plugin(plugin, value, self, indentation, depth)

        if isinstance(value, str):
            return self._print_string(value)
        if isinstance(value, _SCALAR_TYPES):
            return _safe_repr(value)
        return self._print_complex(value, indentation, depth, hooked=False)

    def print_block(
        self,
        opening: str,
        closing: str,
        entries: Iterable[str],
        indentation: str,
    ) -> str:
        """Lay out already printed ``entries`` one per line, each followed by a comma."""
        inner = indentation + self.step
        body = "".join(f"\n{inner}{entry}," for entry in entries)
        if not body:
            return opening + closing
        return f"{opening}{body}\n{indentation}{closing}"

    def _print_string(self, value: str) -> str:
        if self.config.escape_strings:
            value = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{value}"'

    def _print_complex(self, value: Any, indentation: str, depth: int, *, hooked: bool) -> str:
        if id(value) in self.refs:
            return "[Circular]"

        if self.config.call_hooks and not hooked and _has_hook(value):
            return self._print_hooked(value, indentation, depth)

        if not _is_container(value):
            return _safe_repr(value)

        depth += 1
        if self.config.max_depth is not None and depth > self.config.max_depth:
            return f"[{_display_name(value)}]"

        self.refs.append(id(value))
        try:
            return self._print_container(value, indentation, depth)
        finally:
            self.refs.pop()

    def _print_hooked(self, value: Any, indentation: str, depth: int) -> str:
        try:
            converted = value.to_dict()
        except Exception as error:
            raise SerializationError(
                f"{type(value).__name__}.to_dict() raised "
                f"{error.__class__.__name__}: {error}"
            ) from error

        if converted is value:
            return self._print_complex(value, indentation, depth, hooked=True)

        self.refs.append(id(value))
        try:
            if isinstance(converted, str) or isinstance(converted, _SCALAR_TYPES):
                return self.print(converted, indentation, depth)
            return self._print_complex(converted, indentation, depth, hooked=True)
        finally:
            self.refs.pop()

    def _print_container(self, value: Any, indentation: str, depth: int) -> str:
        inner = indentation + self.step

        if isinstance(value, SortedSet):
            return self._print_set(value.items, value.kind, indentation, depth)

        if isinstance(value, Mapping):
            items = list(value.items())
            # Plain dicts print key-sorted; other mappings keep their own order.
            if type(value) is dict:
                items.sort(key=lambda pair: stable_sort_key(pair[0]))
            entries = [
                f"{self.print(key, inner, depth)}: {self.print(item, inner, depth)}"
                for key, item in items
            ]
            prefix = "" if type(value) is dict else f"{type(value).__name__} "
            return prefix + self.print_block("{", "}", entries, indentation)

        if isinstance(value, Set):
            members = sorted(value, key=stable_sort_key)
            return self._print_set(tuple(members), _set_kind(value), indentation, depth)

        if isinstance(value, tuple) and hasattr(value, "_fields"):
            pairs = [(name, getattr(value, name)) for name in value._fields]
            return self._print_attributes(type(value).__name__, pairs, indentation, depth)

        if isinstance(value, (list, tuple)):
            opening, closing = ("[", "]") if isinstance(value, list) else ("(", ")")
            entries = [self.print(item, inner, depth) for item in value]
            prefix = "" if type(value) in (list, tuple) else f"{type(value).__name__} "
            return prefix + self.print_block(opening, closing, entries, indentation)

        return self._print_attributes(
            type(value).__name__,
            _attribute_pairs(value),
            indentation,
            depth,
        )

    def _print_set(
        self,
        members: tuple[Any, ...],
        kind: str,
        indentation: str,
        depth: int,
    ) -> str:
        inner = indentation + self.step
        entries = [self.print(item, inner, depth) for item in members]
        if kind == "set":
            return self.print_block("{", "}", entries, indentation) if entries else "set()"
        if kind == "frozenset":
            if not entries:
                return "frozenset()"
            return "frozenset(" + self.print_block("{", "}", entries, indentation) + ")"
        return f"{kind} " + self.print_block("{", "}", entries, indentation)

    def _print_attributes(
        self,
        name: str,
        pairs: list[tuple[str, Any]],
        indentation: str,
        depth: int,
    ) -> str:
        inner = indentation + self.step
        entries = [f"{attr}={self.print(item, inner, depth)}" for attr, item in pairs]
        return name + self.print_block("(", ")", entries, indentation)


class PrettyPrinter:
    """Default ``Serializer`` implementation."""

    def serialize(self, value: Any, config: SerializeConfig | None = None) -> Serialized:
        resolved = config or SerializeConfig()
        context = PrintContext(config=resolved, plugins=_resolve_plugins(resolved))
        try:
            return Serialized.success(context.print(value))
        except SerializationError as error:
            return Serialized.failure(error)


def format_value(value: Any, **config: Any) -> str:
    """Render ``value`` with the default printer; raises ``SerializationError``."""
    return PrettyPrinter().serialize(value, SerializeConfig(**config)).unwrap()


def _resolve_plugins(config: SerializeConfig) -> tuple[SerializerPlugin, ...]:
    if config.plugins is not None:
        return tuple(config.plugins)
    from diffpack.serialize.plugins import DEFAULT_PLUGINS

    return DEFAULT_PLUGINS


def _plugin_claims(plugin: SerializerPlugin, value: Any) -> bool:
    try:
        return bool(plugin.test(value))
    except Exception as error:
        raise SerializationError(
            f"Plugin {plugin.name} failed to test {type(value).__name__}: {error}"
        ) from error


def _run_plugin(
    plugin: SerializerPlugin,
    value: Any,
    context: PrintContext,
    indentation: str,
    depth: int,
) -> str:
    try:
        return plugin.serialize(value, context, indentation, depth)
    except SerializationError:
        raise
    except Exception as error:
        raise SerializationError(
            f"Plugin {plugin.name} failed to serialize {type(value).__name__}: {error}"
        ) from error


def _has_hook(value: Any) -> bool:
    if inspect.isclass(value):
        return False
    return callable(getattr(value, "to_dict", None))


def _is_container(value: Any) -> bool:
    if isinstance(value, (Mapping, Set, SortedSet, list, tuple)):
        return True
    if is_dataclass(value):
        return True
    if inspect.isclass(value) or inspect.isroutine(value) or inspect.ismodule(value):
        return False
    # Instances with a custom repr print through it; the default repr only
    # names a memory address, so those print their attributes instead.
    if type(value).__repr__ is not object.__repr__:
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _attribute_pairs(value: Any) -> list[tuple[str, Any]]:
    if is_dataclass(value):
        return [
            (item.name, getattr(value, item.name))
            for item in fields(value)
            if hasattr(value, item.name)
        ]

    names = set(getattr(value, "__dict__", {}) or {})
    names.update(name for name in _slot_names(type(value)) if hasattr(value, name))
    return [(name, getattr(value, name)) for name in sorted(names)]


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(name for name in slots if name not in ("__dict__", "__weakref__"))
    return names


def _set_kind(value: Set[Any]) -> str:
    if type(value) is set:
        return "set"
    if type(value) is frozenset:
        return "frozenset"
    return type(value).__name__


def _display_name(value: Any) -> str:
    if isinstance(value, SortedSet):
        return value.kind
    return type(value).__name__


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception as error:
        raise SerializationError(
            f"repr() of {type(value).__name__} raised {error.__class__.__name__}: {error}"
        ) from error
