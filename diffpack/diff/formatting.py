"""Unified rendering for line edit scripts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from diffpack.core.models import ChangeCounts, EditScript
from diffpack.core.options import DiffOptions, normalize_diff_options
from diffpack.core.style import Formatter
from diffpack.core.types import DIFF_DELETE, DIFF_EQUAL, DIFF_INSERT, DiffTag, StyleRole
from diffpack.core.units import split_lines, strip_terminator
from diffpack.diff.cleanup import cleanup_semantic
from diffpack.diff.constants import NO_DIFF_MESSAGE, NO_NEWLINE_MARKER
from diffpack.diff.lines import diff_lines, refine_line_pair


@dataclass(slots=True)
class _DiffLine:
    tag: DiffTag
    text: str
    a_index: int
    b_index: int
    inline: EditScript | None = None
    missing_newline: bool = False


def render_edit_script(
    script: EditScript,
    options: DiffOptions | Mapping[str, Any] | None = None,
    *,
    display: tuple[str, str] | None = None,
) -> str:
    """Render a line edit script as annotated unified-diff text.

    ``display`` optionally supplies alternative texts for operands A and B
    with the same line structure as the diffed texts (for example the
    indented form of a value whose unindented form was diffed); lines are
    then shown from those texts.
    """
    normalized = normalize_diff_options(options)
    if script.granularity != "line":
        script = cleanup_semantic(diff_lines(script.source_text(), script.target_text()))
    if not script.has_changes:
        return NO_DIFF_MESSAGE

    lines = _collect_lines(script, normalized, display)
    if normalized.expand:
        body = [_render_line(line, normalized) for line in lines]
        body = _with_newline_markers(lines, body, normalized)
    else:
        body = _render_windowed(lines, normalized)

    truncated = 0 < normalized.truncate_threshold < len(body)
    if truncated:
        body = body[: normalized.truncate_threshold]

    rendered = "\n".join(_annotation_lines(normalized, script.counts()) + body)
    if truncated:
        rendered += "\n" + normalized.formatter(normalized.truncate_annotation, "neutral")
    return rendered


def _collect_lines(
    script: EditScript,
    options: DiffOptions,
    display: tuple[str, str] | None,
) -> list[_DiffLine]:
    source = script.source_text()
    target = script.target_text()
    a_display, b_display = _display_lines(source, target, display)
    newline_mismatch = bool(source) and bool(target) and (
        source.endswith("\n") != target.endswith("\n")
    )

    lines: list[_DiffLine] = []
    a_index = 0
    b_index = 0
    for op in script.ops:
        for unit in split_lines(op.text):
            # Common lines show the received side's display form.
            if op.tag == DIFF_DELETE:
                text = a_display[a_index] if a_display is not None else strip_terminator(unit)
            else:
                text = b_display[b_index] if b_display is not None else strip_terminator(unit)
            lines.append(
                _DiffLine(
                    tag=op.tag,
                    text=text,
                    a_index=a_index,
                    b_index=b_index,
                    missing_newline=(
                        newline_mismatch and op.tag != DIFF_EQUAL and not unit.endswith("\n")
                    ),
                )
            )
            if op.tag != DIFF_INSERT:
                a_index += 1
            if op.tag != DIFF_DELETE:
                b_index += 1

    if options.highlight_changes:
        _attach_inline_changes(lines)
    return lines


def _display_lines(
    source: str,
    target: str,
    display: tuple[str, str] | None,
) -> tuple[list[str] | None, list[str] | None]:
    if display is None:
        return None, None
    a_lines = [strip_terminator(line) for line in split_lines(display[0])]
    b_lines = [strip_terminator(line) for line in split_lines(display[1])]
    if len(a_lines) != len(split_lines(source)) or len(b_lines) != len(split_lines(target)):
        return None, None
    return a_lines, b_lines


def _attach_inline_changes(lines: list[_DiffLine]) -> None:
    """Pair each deleted line with the inserted line at the same position."""
    index = 0
    while index < len(lines):
        if lines[index].tag != DIFF_DELETE:
            index += 1
            continue
        delete_end = index
        while delete_end < len(lines) and lines[delete_end].tag == DIFF_DELETE:
            delete_end += 1
        insert_end = delete_end
        while insert_end < len(lines) and lines[insert_end].tag == DIFF_INSERT:
            insert_end += 1
        for offset in range(min(delete_end - index, insert_end - delete_end)):
            removed = lines[index + offset]
            added = lines[delete_end + offset]
            inline = refine_line_pair(removed.text, added.text)
            removed.inline = inline
            added.inline = inline
        index = insert_end


def _render_windowed(lines: list[_DiffLine], options: DiffOptions) -> list[str]:
    context = options.context_lines
    keep = [False] * len(lines)
    for index, line in enumerate(lines):
        if line.tag == DIFF_EQUAL:
            continue
        for near in range(max(0, index - context), min(len(lines), index + context + 1)):
            keep[near] = True

    hunks: list[tuple[int, int]] = []
    start: int | None = None
    for index, kept in enumerate(keep):
        if kept and start is None:
            start = index
        elif not kept and start is not None:
            hunks.append((start, index))
            start = None
    if start is not None:
        hunks.append((start, len(lines)))

    with_patch_marks = len(hunks) != 1 or hunks[0] != (0, len(lines))
    body: list[str] = []
    for hunk_start, hunk_end in hunks:
        hunk = lines[hunk_start:hunk_end]
        if with_patch_marks:
            body.append(_patch_mark(hunk, options))
        rendered = [_render_line(line, options) for line in hunk]
        body.extend(_with_newline_markers(hunk, rendered, options))
    return body


def _patch_mark(hunk: list[_DiffLine], options: DiffOptions) -> str:
    a_length = sum(1 for line in hunk if line.tag != DIFF_INSERT)
    b_length = sum(1 for line in hunk if line.tag != DIFF_DELETE)
    first = hunk[0]
    mark = (
        f"@@ {options.a_indicator}{first.a_index + 1},{a_length} "
        f"{options.b_indicator}{first.b_index + 1},{b_length} @@"
    )
    return options.formatter(mark, "patch")


def _with_newline_markers(
    lines: list[_DiffLine],
    rendered: list[str],
    options: DiffOptions,
) -> list[str]:
    if not any(line.missing_newline for line in lines):
        return rendered
    out: list[str] = []
    for line, text in zip(lines, rendered):
        out.append(text)
        if line.missing_newline:
            out.append(options.formatter(NO_NEWLINE_MARKER, "neutral"))
    return out


def _line_style(tag: DiffTag, options: DiffOptions) -> tuple[str, StyleRole]:
    if tag == DIFF_DELETE:
        return options.a_indicator, "removal"
    if tag == DIFF_INSERT:
        return options.b_indicator, "addition"
    return options.common_indicator, "neutral"


def _render_line(line: _DiffLine, options: DiffOptions) -> str:
    indicator, role = _line_style(line.tag, options)
    fmt = options.formatter

    if not line.text:
        return "" if line.tag == DIFF_EQUAL else fmt(indicator, role)
    if line.tag == DIFF_EQUAL:
        return fmt(f"{indicator} {line.text}", role)

    head = fmt(f"{indicator} ", role)
    content_length = len(line.text.rstrip())
    if line.inline is None:
        return head + "".join(_styled_pieces([(line.text, False)], content_length, role, fmt))

    shown = DIFF_DELETE if line.tag == DIFF_DELETE else DIFF_INSERT
    pieces = [
        (op.text, op.tag == shown)
        for op in line.inline.ops
        if op.tag in (DIFF_EQUAL, shown)
    ]
    return head + "".join(_styled_pieces(pieces, content_length, role, fmt))


def _styled_pieces(
    pieces: list[tuple[str, bool]],
    content_length: int,
    role: StyleRole,
    fmt: Formatter,
) -> list[str]:
    """Style ``(text, changed)`` pieces; text past ``content_length`` is trailing whitespace."""
    out: list[str] = []
    position = 0
    for text, changed in pieces:
        content = text[: max(0, content_length - position)]
        trailing = text[len(content):]
        if content:
            out.append(fmt(fmt(content, "change"), role) if changed else fmt(content, role))
        if trailing:
            out.append(fmt(trailing, "trailing-whitespace"))
        position += len(text)
    return out


def _annotation_lines(options: DiffOptions, counts: ChangeCounts) -> list[str]:
    if options.omit_annotation_lines and not options.include_change_counts:
        return []

    a_label = f"{options.a_indicator} {options.a_annotation}"
    b_label = f"{options.b_indicator} {options.b_annotation}"
    if options.include_change_counts:
        label_width = max(len(a_label), len(b_label))
        a_count = str(counts.deletions)
        b_count = str(counts.insertions)
        count_width = max(len(a_count), len(b_count))
        a_label = (
            f"{a_label.ljust(label_width)}  {options.a_indicator} {a_count.rjust(count_width)}"
        )
        b_label = (
            f"{b_label.ljust(label_width)}  {options.b_indicator} {b_count.rjust(count_width)}"
        )

    return [
        options.formatter(a_label, "removal"),
        options.formatter(b_label, "addition"),
        "",
    ]


def diff_lines_unified(
    a: str,
    b: str,
    options: DiffOptions | Mapping[str, Any] | None = None,
) -> str:
    """Line diff of two texts rendered as annotated unified-diff text."""
    return render_edit_script(cleanup_semantic(diff_lines(a, b)), options)
