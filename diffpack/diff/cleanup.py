"""Semantic cleanup: rewrite raw edit scripts into a legible form.

The rewrite never changes what a script reconstructs: delete+equal text
still spells operand A and insert+equal text still spells operand B.

One pass does the following, and passes repeat until the script stops
changing:

* merge: drop empty ops, gather every deletion and insertion between two
  equalities into one delete followed by one insert, factor their common
  prefix and suffix into the neighbouring equalities, and slide single
  edits sideways when they end (or start) with a whole neighbouring
  equality;
* fold (character scripts only): an equality squeezed between edits that
  is no longer than the larger edit on each side carries no meaning for a
  reader, so it becomes a delete plus an insert of the same text;
* align: slide single edits between equalities to the most natural
  boundary (blank line, line break, sentence end, whitespace,
  punctuation).
"""

from __future__ import annotations

import re
from typing import Sequence

from diffpack.core.models import EditScript
from diffpack.core.types import DIFF_DELETE, DIFF_EQUAL, DIFF_INSERT, DiffTag
from diffpack.core.units import split_units

Units = tuple[str, ...]
Segment = tuple[DiffTag, Units]

_BLANK_LINE_END_RE = re.compile(r"\n\r?\n$")
_BLANK_LINE_START_RE = re.compile(r"^\r?\n\r?\n")


def cleanup_semantic(script: EditScript) -> EditScript:
    """Return the cleaned, stable form of ``script``.

    ``cleanup_semantic(cleanup_semantic(s)) == cleanup_semantic(s)``.
    """
    segments = [
        (op.tag, tuple(split_units(op.text, script.granularity)))
        for op in script.ops
    ]
    fold_equalities = script.granularity == "char"

    seen: dict[tuple[Segment, ...], int] = {}
    history: list[list[Segment]] = []
    while True:
        state = tuple(segments)
        if state in seen:
            # A rewrite cycle has no fixed point; settle on its least member
            # so that every entry into the cycle yields the same script.
            cycle = history[seen[state]:]
            segments = min(cycle, key=lambda candidate: (len(candidate), candidate))
            break
        seen[state] = len(history)
        history.append(segments)

        cleaned = _cleanup_pass(segments, fold_equalities=fold_equalities)
        if cleaned == segments:
            break
        segments = cleaned

    return EditScript.from_segments(
        ((tag, "".join(units)) for tag, units in segments),
        granularity=script.granularity,
    )


def _cleanup_pass(segments: list[Segment], *, fold_equalities: bool) -> list[Segment]:
    merged = merge_segments(segments)
    if fold_equalities:
        merged = merge_segments(_fold_short_equalities(merged))
    return merge_segments(_align_to_boundaries(merged))


def merge_segments(segments: Sequence[Segment]) -> list[Segment]:
    """Merge, reorder and factor segments; see the module docstring."""
    current = list(segments)
    while True:
        gathered = _gather(current)
        shifted = _shift_single_edit(gathered)
        if shifted is None:
            return gathered
        current = shifted


def _gather(segments: Sequence[Segment]) -> list[Segment]:
    out: list[Segment] = []
    deletes: list[str] = []
    inserts: list[str] = []

    def flush() -> None:
        del_units = tuple(deletes)
        ins_units = tuple(inserts)
        suffix: Units = ()
        if del_units and ins_units:
            prefix_length = _common_prefix_length(del_units, ins_units)
            if prefix_length:
                _append_equal(out, del_units[:prefix_length])
                del_units = del_units[prefix_length:]
                ins_units = ins_units[prefix_length:]
            suffix_length = _common_suffix_length(del_units, ins_units)
            if suffix_length:
                suffix = del_units[len(del_units) - suffix_length:]
                del_units = del_units[: len(del_units) - suffix_length]
                ins_units = ins_units[: len(ins_units) - suffix_length]
        if del_units:
            out.append((DIFF_DELETE, del_units))
        if ins_units:
            out.append((DIFF_INSERT, ins_units))
        if suffix:
            _append_equal(out, suffix)
        deletes.clear()
        inserts.clear()

    for tag, units in segments:
        if not units:
            continue
        if tag == DIFF_DELETE:
            deletes.extend(units)
        elif tag == DIFF_INSERT:
            inserts.extend(units)
        else:
            flush()
            _append_equal(out, units)
    flush()
    return out


def _append_equal(out: list[Segment], units: Units) -> None:
    if not units:
        return
    if out and out[-1][0] == DIFF_EQUAL:
        out[-1] = (DIFF_EQUAL, out[-1][1] + units)
    else:
        out.append((DIFF_EQUAL, units))


def _shift_single_edit(segments: list[Segment]) -> list[Segment] | None:
    """Absorb one equality into a neighbouring single edit, if possible.

    ``A<ins>BA</ins>C`` becomes ``<ins>AB</ins>AC`` and
    ``A<del>CB</del>C`` becomes ``AC<del>BC</del>``.
    """
    for index in range(1, len(segments) - 1):
        prev_tag, prev_units = segments[index - 1]
        tag, units = segments[index]
        next_tag, next_units = segments[index + 1]
        if prev_tag != DIFF_EQUAL or next_tag != DIFF_EQUAL or tag == DIFF_EQUAL:
            continue

        if units[len(units) - len(prev_units):] == prev_units:
            return (
                segments[: index - 1]
                + [
                    (tag, prev_units + units[: len(units) - len(prev_units)]),
                    (DIFF_EQUAL, prev_units + next_units),
                ]
                + segments[index + 2:]
            )

        if units[: len(next_units)] == next_units:
            return (
                segments[: index - 1]
                + [
                    (DIFF_EQUAL, prev_units + next_units),
                    (tag, units[len(next_units):] + next_units),
                ]
                + segments[index + 2:]
            )
    return None


def _fold_short_equalities(segments: list[Segment]) -> list[Segment]:
    out: list[Segment] = []
    for index, (tag, units) in enumerate(segments):
        if tag == DIFF_EQUAL:
            before = _largest_edit(segments, index, step=-1)
            after = _largest_edit(segments, index, step=1)
            if len(units) <= before and len(units) <= after:
                out.append((DIFF_DELETE, units))
                out.append((DIFF_INSERT, units))
                continue
        out.append((tag, units))
    return out


def _largest_edit(segments: list[Segment], index: int, *, step: int) -> int:
    deleted = 0
    inserted = 0
    cursor = index + step
    while 0 <= cursor < len(segments) and segments[cursor][0] != DIFF_EQUAL:
        tag, units = segments[cursor]
        if tag == DIFF_DELETE:
            deleted += len(units)
        else:
            inserted += len(units)
        cursor += step
    return max(deleted, inserted)


def _align_to_boundaries(segments: list[Segment]) -> list[Segment]:
    aligned = list(segments)
    for index in range(1, len(aligned) - 1):
        prev_tag, equality1 = aligned[index - 1]
        tag, edit = aligned[index]
        next_tag, equality2 = aligned[index + 1]
        if prev_tag != DIFF_EQUAL or next_tag != DIFF_EQUAL or tag == DIFF_EQUAL:
            continue
        if not equality1 or not edit:
            continue

        common = _common_suffix_length(equality1, edit)
        if common:
            shared = edit[len(edit) - common:]
            equality1 = equality1[: len(equality1) - common]
            edit = shared + edit[: len(edit) - common]
            equality2 = shared + equality2

        best = (equality1, edit, equality2)
        best_score = _boundary_score(equality1, edit) + _boundary_score(edit, equality2)
        while edit and equality2 and edit[0] == equality2[0]:
            equality1 = equality1 + edit[:1]
            edit = edit[1:] + equality2[:1]
            equality2 = equality2[1:]
            score = _boundary_score(equality1, edit) + _boundary_score(edit, equality2)
            if score >= best_score:
                best_score = score
                best = (equality1, edit, equality2)

        aligned[index - 1] = (DIFF_EQUAL, best[0])
        aligned[index] = (tag, best[1])
        aligned[index + 1] = (DIFF_EQUAL, best[2])
    return [(tag, units) for tag, units in aligned if units]


def _boundary_score(one: Units, two: Units) -> int:
    """Score how natural the boundary between ``one`` and ``two`` is (0-6)."""
    if not one or not two:
        return 6

    left = "".join(one[-2:])
    right = "".join(two[:2])
    if not left or not right:
        return 6

    char1 = left[-1]
    char2 = right[0]
    non_alnum1 = not char1.isalnum()
    non_alnum2 = not char2.isalnum()
    whitespace1 = non_alnum1 and char1.isspace()
    whitespace2 = non_alnum2 and char2.isspace()
    line_break1 = whitespace1 and char1 in "\r\n"
    line_break2 = whitespace2 and char2 in "\r\n"
    blank_line1 = line_break1 and _BLANK_LINE_END_RE.search(left) is not None
    blank_line2 = line_break2 and _BLANK_LINE_START_RE.match(right) is not None

    if blank_line1 or blank_line2:
        return 5
    if line_break1 or line_break2:
        return 4
    if non_alnum1 and not whitespace1 and whitespace2:
        return 3
    if whitespace1 or whitespace2:
        return 2
    if non_alnum1 or non_alnum2:
        return 1
    return 0


def _common_prefix_length(a: Units, b: Units) -> int:
    length = 0
    limit = min(len(a), len(b))
    while length < limit and a[length] == b[length]:
        length += 1
    return length


def _common_suffix_length(a: Units, b: Units) -> int:
    length = 0
    limit = min(len(a), len(b))
    while length < limit and a[len(a) - 1 - length] == b[len(b) - 1 - length]:
        length += 1
    return length
