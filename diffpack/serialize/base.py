"""Serializer interfaces, configuration and result values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from diffpack.serialize.exceptions import SerializationError

if TYPE_CHECKING:
    from diffpack.serialize.printer import PrintContext


@dataclass(frozen=True, slots=True)
class SerializeConfig:
    """How a value is rendered.

    ``plugins`` of ``None`` selects the default plugin set; pass an empty
    tuple to disable plugins entirely.
    """

    call_hooks: bool = True
    max_depth: int | None = None
    indent: int = 2
    plugins: tuple[SerializerPlugin, ...] | None = None
    escape_strings: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "call_hooks": self.call_hooks,
            "max_depth": self.max_depth,
            "indent": self.indent,
            "plugins": None
            if self.plugins is None
            else [plugin.name for plugin in self.plugins],
            "escape_strings": self.escape_strings,
        }


@dataclass(frozen=True, slots=True)
class Serialized:
    """Serializer outcome: the rendered ``text`` or the ``error`` that prevented it."""

    text: str | None = None
    error: SerializationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text if self.text is not None else ""

    @classmethod
    def success(cls, text: str) -> "Serialized":
        return cls(text=text)

    @classmethod
    def failure(cls, error: SerializationError) -> "Serialized":
        return cls(error=error)


class Serializer(Protocol):
    def serialize(self, value: Any, config: SerializeConfig) -> Serialized:
        ...


class SerializerPlugin:
    """Base printer plugin interface.

    ``test`` claims a value; ``serialize`` renders a claimed value at the
    given indentation, using ``context`` to print nested values.
    """

    name = "serializer-plugin"

    def test(self, value: Any) -> bool:
        return False

    def serialize(
        self,
        value: Any,
        context: PrintContext,
        indentation: str,
        depth: int,
    ) -> str:
        raise NotImplementedError
