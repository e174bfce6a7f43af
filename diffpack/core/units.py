"""Splitting text into diff units (lines or characters)."""

from __future__ import annotations

import re

from diffpack.core.types import Granularity

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def split_lines(text: str) -> list[str]:
    """Split text into lines that keep their terminating newline.

    The last line is kept even when it has no terminator, so joining the
    result reproduces ``text`` exactly. Empty text has no lines.
    """
    return _LINE_RE.findall(text)


def split_units(text: str, granularity: Granularity) -> list[str]:
    if granularity == "line":
        return split_lines(text)
    return list(text)


def unit_count(text: str, granularity: Granularity) -> int:
    if granularity == "line":
        return len(split_lines(text))
    return len(text)


def strip_terminator(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line
