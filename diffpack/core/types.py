"""Type definitions for DiffKit core models."""

from typing import Literal

Category = Literal[
    "string",
    "boolean",
    "number",
    "map",
    "set",
    "object",
]

CATEGORIES: tuple[str, ...] = (
    "string",
    "boolean",
    "number",
    "map",
    "set",
    "object",
)

DiffTag = Literal["delete", "insert", "equal"]

DIFF_DELETE: DiffTag = "delete"
DIFF_INSERT: DiffTag = "insert"
DIFF_EQUAL: DiffTag = "equal"

Granularity = Literal["line", "char"]

StyleRole = Literal[
    "addition",
    "removal",
    "neutral",
    "trailing-whitespace",
    "change",
    "patch",
]

STYLE_ROLES: tuple[str, ...] = (
    "addition",
    "removal",
    "neutral",
    "trailing-whitespace",
    "change",
    "patch",
)
