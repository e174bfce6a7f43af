"""Serializer subsystem exceptions."""


class SerializationError(Exception):
    """Raised when a value cannot be rendered as text.

    Custom ``to_dict()`` hooks, plugins and ``repr`` implementations that
    raise are reported through this error, chained to the underlying exception.
    """
