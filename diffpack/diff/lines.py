"""Line and character edit scripts built on the Myers sequence differ."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from diffpack.core.models import DiffLinesResult, DiffOp, EditScript, LineRefinement
from diffpack.core.options import DiffOptions, normalize_diff_options
from diffpack.core.types import DIFF_DELETE, DIFF_EQUAL, DIFF_INSERT, Granularity
from diffpack.core.units import split_lines, strip_terminator
from diffpack.diff.cleanup import cleanup_semantic
from diffpack.diff.sequences import diff_sequences

__all__ = [
    "build_edit_script",
    "diff_chars",
    "diff_lines",
    "diff_lines_raw",
    "diff_strings_raw",
    "refine_line_pair",
    "split_lines",
]


def build_edit_script(
    a_units: Sequence[str],
    b_units: Sequence[str],
    *,
    granularity: Granularity,
) -> EditScript:
    """Turn a minimal alignment of two unit sequences into an edit script.

    Within each change region deletions come before insertions; equal runs
    are maximal and no op is empty.
    """
    ops: list[DiffOp] = []
    a_pos = 0
    b_pos = 0
    for a_start, b_start, length in diff_sequences(a_units, b_units):
        _append_changes(ops, a_units, a_pos, a_start, b_units, b_pos, b_start)
        ops.append(
            DiffOp(
                tag=DIFF_EQUAL,
                text="".join(a_units[a_start:a_start + length]),
                offset=a_start,
            )
        )
        a_pos = a_start + length
        b_pos = b_start + length
    _append_changes(ops, a_units, a_pos, len(a_units), b_units, b_pos, len(b_units))
    return EditScript(ops=tuple(ops), granularity=granularity)


def _append_changes(
    ops: list[DiffOp],
    a_units: Sequence[str],
    a_start: int,
    a_end: int,
    b_units: Sequence[str],
    b_start: int,
    b_end: int,
) -> None:
    if a_end > a_start:
        ops.append(DiffOp(tag=DIFF_DELETE, text="".join(a_units[a_start:a_end]), offset=a_start))
    if b_end > b_start:
        ops.append(DiffOp(tag=DIFF_INSERT, text="".join(b_units[b_start:b_end]), offset=b_start))


def diff_lines(a: str, b: str) -> EditScript:
    """Raw (uncleaned) minimal line edit script."""
    return build_edit_script(split_lines(a), split_lines(b), granularity="line")


def diff_chars(a: str, b: str) -> EditScript:
    """Raw (uncleaned) minimal character edit script."""
    return build_edit_script(a, b, granularity="char")


def diff_lines_raw(
    a: str,
    b: str,
    options: DiffOptions | Mapping[str, Any] | None = None,
) -> DiffLinesResult:
    """Cleaned line edit script plus change counts, without rendering.

    With ``highlight_changes`` on (the default) the result also carries the
    character-level refinement of every changed line pair that shares some
    text. Presentation options have no effect on the structure.
    """
    normalized = normalize_diff_options(options)
    script = cleanup_semantic(diff_lines(a, b))
    refinements = _line_refinements(script) if normalized.highlight_changes else ()
    return DiffLinesResult(script=script, counts=script.counts(), refinements=refinements)


def _line_refinements(script: EditScript) -> tuple[LineRefinement, ...]:
    """Pair each deleted line with the inserted line at the same position."""
    refinements: list[LineRefinement] = []
    for removed, added in zip(script.ops, script.ops[1:]):
        if removed.tag != DIFF_DELETE or added.tag != DIFF_INSERT:
            continue
        for offset, (a_line, b_line) in enumerate(
            zip(split_lines(removed.text), split_lines(added.text))
        ):
            refined = refine_line_pair(a_line, b_line)
            if refined is not None:
                refinements.append(
                    LineRefinement(
                        a_index=removed.offset + offset,
                        b_index=added.offset + offset,
                        script=refined,
                    )
                )
    return tuple(refinements)


def diff_strings_raw(a: str, b: str, cleanup: bool = True) -> EditScript:
    """Character-level edit script, semantically cleaned unless ``cleanup`` is false."""
    script = diff_chars(a, b)
    if cleanup:
        script = cleanup_semantic(script)
    return script


def refine_line_pair(a_line: str, b_line: str) -> EditScript | None:
    """Character-level diff of a changed line pair for inline highlighting.

    Returns ``None`` when the lines share no text, since highlighting every
    character of both lines says nothing the line markers do not.
    """
    script = cleanup_semantic(diff_chars(strip_terminator(a_line), strip_terminator(b_line)))
    if not any(op.tag == DIFF_EQUAL for op in script.ops):
        return None
    return script
