"""Core subsystem exceptions."""


class DiffError(Exception):
    """Base class for diff errors."""


class DiffOptionsError(DiffError):
    """Invalid diff options."""
