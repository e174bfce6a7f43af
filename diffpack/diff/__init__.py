"""Diff subsystem for DiffKit."""

from diffpack.diff.cleanup import cleanup_semantic
from diffpack.diff.constants import NO_DIFF_MESSAGE, NO_NEWLINE_MARKER, SIMILAR_MESSAGE
from diffpack.diff.engine import compare
from diffpack.diff.formatting import diff_lines_unified, render_edit_script
from diffpack.diff.lines import (
    diff_chars,
    diff_lines,
    diff_lines_raw,
    diff_strings_raw,
    refine_line_pair,
)
from diffpack.diff.sequences import diff_sequences, edit_distance

__all__ = [
    "NO_DIFF_MESSAGE",
    "NO_NEWLINE_MARKER",
    "SIMILAR_MESSAGE",
    "compare",
    "cleanup_semantic",
    "diff_chars",
    "diff_lines",
    "diff_lines_raw",
    "diff_lines_unified",
    "diff_sequences",
    "diff_strings_raw",
    "edit_distance",
    "refine_line_pair",
    "render_edit_script",
]
