"""Core data models for DiffKit edit scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from diffpack.core.types import DIFF_DELETE, DIFF_EQUAL, DIFF_INSERT, DiffTag, Granularity
from diffpack.core.units import unit_count


@dataclass(frozen=True, slots=True)
class DiffOp:
    """A single edit operation over a run of units.

    ``offset`` indexes the first unit of ``text`` in its source sequence:
    operand A for delete and equal ops, operand B for insert ops.
    """

    tag: DiffTag
    text: str
    offset: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "text": self.text,
            "offset": self.offset,
        }


@dataclass(frozen=True, slots=True)
class ChangeCounts:
    """Number of changed units on each side of a diff."""

    deletions: int = 0
    insertions: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "deletions": self.deletions,
            "insertions": self.insertions,
        }


@dataclass(frozen=True, slots=True)
class EditScript:
    """Ordered edit operations transforming operand A into operand B."""

    ops: tuple[DiffOp, ...] = ()
    granularity: Granularity = "line"

    def __iter__(self) -> Iterator[DiffOp]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    @property
    def has_changes(self) -> bool:
        return any(op.tag != DIFF_EQUAL for op in self.ops)

    def source_text(self) -> str:
        """Reconstruct operand A from delete and equal ops."""
        return "".join(op.text for op in self.ops if op.tag != DIFF_INSERT)

    def target_text(self) -> str:
        """Reconstruct operand B from insert and equal ops."""
        return "".join(op.text for op in self.ops if op.tag != DIFF_DELETE)

    def counts(self) -> ChangeCounts:
        deletions = 0
        insertions = 0
        for op in self.ops:
            if op.tag == DIFF_DELETE:
                deletions += unit_count(op.text, self.granularity)
            elif op.tag == DIFF_INSERT:
                insertions += unit_count(op.text, self.granularity)
        return ChangeCounts(deletions=deletions, insertions=insertions)

    def segments(self) -> list[tuple[DiffTag, str]]:
        return [(op.tag, op.text) for op in self.ops]

    def to_dict(self) -> dict[str, Any]:
        return {
            "granularity": self.granularity,
            "ops": [op.to_dict() for op in self.ops],
            "counts": self.counts().to_dict(),
        }

    @classmethod
    def from_segments(
        cls,
        segments: Iterable[tuple[DiffTag, str]],
        *,
        granularity: Granularity = "line",
    ) -> "EditScript":
        """Build a script from ``(tag, text)`` pairs, computing offsets."""
        ops: list[DiffOp] = []
        a_pos = 0
        b_pos = 0
        for tag, text in segments:
            size = unit_count(text, granularity)
            if tag == DIFF_INSERT:
                ops.append(DiffOp(tag=tag, text=text, offset=b_pos))
                b_pos += size
            elif tag == DIFF_DELETE:
                ops.append(DiffOp(tag=tag, text=text, offset=a_pos))
                a_pos += size
            elif tag == DIFF_EQUAL:
                ops.append(DiffOp(tag=tag, text=text, offset=a_pos))
                a_pos += size
                b_pos += size
            else:
                raise ValueError(f"Unsupported diff tag: {tag}")
        return cls(ops=tuple(ops), granularity=granularity)


@dataclass(frozen=True, slots=True)
class LineRefinement:
    """Character-level diff of a deleted line and the inserted line paired with it."""

    a_index: int
    b_index: int
    script: EditScript

    def to_dict(self) -> dict[str, Any]:
        return {
            "a_index": self.a_index,
            "b_index": self.b_index,
            "script": self.script.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class DiffLinesResult:
    """Structured line diff for embedding inside another report."""

    script: EditScript
    counts: ChangeCounts
    refinements: tuple[LineRefinement, ...] = ()

    @property
    def identical(self) -> bool:
        return not self.script.has_changes

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "counts": self.counts.to_dict(),
            "script": self.script.to_dict(),
            "refinements": [refinement.to_dict() for refinement in self.refinements],
        }
