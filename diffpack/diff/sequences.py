"""Myers O(N·D) shortest edit script with linear-space bisection.

The edit graph is searched from both ends at once; where the furthest
reaching forward and backward paths overlap, the problem is split in two
and each half is solved recursively. Common prefixes and suffixes are
trimmed before every bisection, which both speeds up typical inputs and
guarantees a nontrivial split.

Results are reported as common runs ``(a_start, b_start, length)`` in
increasing order; everything between runs is a deletion from ``a`` and/or
an insertion from ``b``.
"""

from __future__ import annotations

from typing import Any, Sequence

CommonRun = tuple[int, int, int]


def diff_sequences(a: Sequence[Any], b: Sequence[Any]) -> list[CommonRun]:
    """Return the maximal common runs of a minimal edit script from ``a`` to ``b``."""
    runs: list[CommonRun] = []
    _diff_range(a, 0, len(a), b, 0, len(b), runs)
    return _merge_adjacent_runs(runs)


def edit_distance(a: Sequence[Any], b: Sequence[Any]) -> int:
    """Number of deletions plus insertions in a minimal edit script."""
    common = sum(length for _, _, length in diff_sequences(a, b))
    return len(a) + len(b) - 2 * common


def _diff_range(
    a: Sequence[Any],
    a_lo: int,
    a_hi: int,
    b: Sequence[Any],
    b_lo: int,
    b_hi: int,
    runs: list[CommonRun],
) -> None:
    prefix = 0
    while a_lo + prefix < a_hi and b_lo + prefix < b_hi and a[a_lo + prefix] == b[b_lo + prefix]:
        prefix += 1
    if prefix:
        runs.append((a_lo, b_lo, prefix))
        a_lo += prefix
        b_lo += prefix

    suffix = 0
    while (
        a_lo < a_hi - suffix
        and b_lo < b_hi - suffix
        and a[a_hi - 1 - suffix] == b[b_hi - 1 - suffix]
    ):
        suffix += 1
    a_hi -= suffix
    b_hi -= suffix

    if a_lo < a_hi and b_lo < b_hi:
        split = _bisect(a, a_lo, a_hi, b, b_lo, b_hi)
        if split is not None:
            a_mid, b_mid = split
            _diff_range(a, a_lo, a_mid, b, b_lo, b_mid, runs)
            _diff_range(a, a_mid, a_hi, b, b_mid, b_hi, runs)

    if suffix:
        runs.append((a_hi, b_hi, suffix))


def _bisect(
    a: Sequence[Any],
    a_lo: int,
    a_hi: int,
    b: Sequence[Any],
    b_lo: int,
    b_hi: int,
) -> tuple[int, int] | None:
    """Find the split point of the middle snake, or ``None`` if nothing is common.

    ``forward[offset + k]`` holds the furthest x reached on diagonal
    ``k = x - y``; ``backward`` holds the same measured from the ends.
    Diagonals that leave the grid are pruned from the sweep.
    """
    n = a_hi - a_lo
    m = b_hi - b_lo
    max_d = (n + m + 1) // 2
    offset = max_d + 1
    size = 2 * max_d + 3
    forward = [-1] * size
    backward = [-1] * size
    forward[offset + 1] = 0
    backward[offset + 1] = 0

    delta = n - m
    front = delta % 2 != 0

    k1_start = k1_end = 0
    k2_start = k2_end = 0

    for d in range(max_d):
        for k1 in range(-d + k1_start, d + 1 - k1_end, 2):
            k1_offset = offset + k1
            if k1 == -d or (k1 != d and forward[k1_offset - 1] < forward[k1_offset + 1]):
                x1 = forward[k1_offset + 1]
            else:
                x1 = forward[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[a_lo + x1] == b[b_lo + y1]:
                x1 += 1
                y1 += 1
            forward[k1_offset] = x1

            if x1 > n:
                k1_end += 2
            elif y1 > m:
                k1_start += 2
            elif front:
                k2_offset = offset + delta - k1
                if 0 <= k2_offset < size and backward[k2_offset] != -1:
                    if x1 >= n - backward[k2_offset]:
                        return a_lo + x1, b_lo + y1

        for k2 in range(-d + k2_start, d + 1 - k2_end, 2):
            k2_offset = offset + k2
            if k2 == -d or (k2 != d and backward[k2_offset - 1] < backward[k2_offset + 1]):
                x2 = backward[k2_offset + 1]
            else:
                x2 = backward[k2_offset - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[a_hi - 1 - x2] == b[b_hi - 1 - y2]:
                x2 += 1
                y2 += 1
            backward[k2_offset] = x2

            if x2 > n:
                k2_end += 2
            elif y2 > m:
                k2_start += 2
            elif not front:
                k1_offset = offset + delta - k2
                if 0 <= k1_offset < size and forward[k1_offset] != -1:
                    x1 = forward[k1_offset]
                    y1 = x1 - (k1_offset - offset)
                    if x1 >= n - x2:
                        return a_lo + x1, b_lo + y1

    return None


def _merge_adjacent_runs(runs: list[CommonRun]) -> list[CommonRun]:
    merged: list[CommonRun] = []
    for a_start, b_start, length in runs:
        if length <= 0:
            continue
        if merged:
            prev_a, prev_b, prev_length = merged[-1]
            if prev_a + prev_length == a_start and prev_b + prev_length == b_start:
                merged[-1] = (prev_a, prev_b, prev_length + length)
                continue
        merged.append((a_start, b_start, length))
    return merged
