"""DiffKit internals: diff engine, normalizers and serializer."""

__version__ = "0.1.0"
