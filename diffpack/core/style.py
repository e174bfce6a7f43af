"""Role-based text decoration for rendered diffs."""

from __future__ import annotations

from typing import Callable

import typer

from diffpack.core.types import StyleRole

Formatter = Callable[[str, StyleRole], str]


def plain_formatter(text: str, role: StyleRole) -> str:
    """Pass text through undecorated."""
    return text


def ansi_formatter(text: str, role: StyleRole) -> str:
    """Decorate text with ANSI styles: expected green, received red."""
    if not text:
        return text
    if role == "removal":
        return typer.style(text, fg=typer.colors.GREEN)
    if role == "addition":
        return typer.style(text, fg=typer.colors.RED)
    if role == "neutral":
        return typer.style(text, dim=True)
    if role == "change":
        return typer.style(text, reverse=True)
    if role == "trailing-whitespace":
        return typer.style(text, bg=typer.colors.YELLOW)
    if role == "patch":
        return typer.style(text, fg=typer.colors.YELLOW)
    return text
