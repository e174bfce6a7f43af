"""Value serialization for DiffKit."""

from diffpack.serialize.base import (
    SerializeConfig,
    Serialized,
    Serializer,
    SerializerPlugin,
)
from diffpack.serialize.exceptions import SerializationError
from diffpack.serialize.plugins import DEFAULT_PLUGINS, AsymmetricMatcherPlugin, EnumPlugin
from diffpack.serialize.printer import PrettyPrinter, PrintContext, format_value

__all__ = [
    "SerializeConfig",
    "Serialized",
    "Serializer",
    "SerializerPlugin",
    "SerializationError",
    "DEFAULT_PLUGINS",
    "AsymmetricMatcherPlugin",
    "EnumPlugin",
    "PrettyPrinter",
    "PrintContext",
    "format_value",
]
