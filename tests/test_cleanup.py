import random

from diffpack.core.models import EditScript
from diffpack.diff.cleanup import cleanup_semantic
from diffpack.diff.lines import diff_chars, diff_lines, diff_strings_raw

FUZZ_SEED = 20261020


def _random_text(rng: random.Random, alphabet: str, max_length: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_length)))


def test_disjoint_words_stay_a_single_replacement() -> None:
    script = diff_strings_raw("The cat", "The dog")

    assert script.segments() == [
        ("equal", "The "),
        ("delete", "cat"),
        ("insert", "dog"),
    ]


def test_short_equality_between_edits_is_folded() -> None:
    raw = diff_chars("a b", "c d")
    assert raw.segments() == [
        ("delete", "a"),
        ("insert", "c"),
        ("equal", " "),
        ("delete", "b"),
        ("insert", "d"),
    ]

    cleaned = cleanup_semantic(raw)

    assert cleaned.segments() == [("delete", "a b"), ("insert", "c d")]


def test_single_edit_slides_to_word_boundary() -> None:
    script = diff_strings_raw("The came.", "The cat came.")

    assert script.segments() == [
        ("equal", "The "),
        ("insert", "cat "),
        ("equal", "came."),
    ]


def test_raw_mode_skips_cleanup() -> None:
    assert diff_strings_raw("a b", "c d", cleanup=False) == diff_chars("a b", "c d")


def test_line_scripts_keep_short_equal_lines() -> None:
    cleaned = cleanup_semantic(diff_lines("a\nx\nb\n", "c\nx\nd\n"))

    assert ("equal", "x\n") in cleaned.segments()
    assert cleaned.counts().deletions == 2
    assert cleaned.counts().insertions == 2


def test_fragmented_edits_are_gathered_delete_first() -> None:
    script = EditScript.from_segments(
        [
            ("equal", "x"),
            ("insert", "1"),
            ("delete", "a"),
            ("insert", "2"),
            ("delete", "b"),
            ("equal", "y"),
        ],
        granularity="char",
    )

    cleaned = cleanup_semantic(script)

    assert cleaned.segments() == [
        ("equal", "x"),
        ("delete", "ab"),
        ("insert", "12"),
        ("equal", "y"),
    ]


def test_offsets_are_recomputed() -> None:
    cleaned = diff_strings_raw("The came.", "The cat came.")

    assert [op.offset for op in cleaned.ops] == [0, 4, 4]


def test_cleanup_preserves_reconstruction() -> None:
    rng = random.Random(FUZZ_SEED)
    for _ in range(300):
        a = _random_text(rng, "ab \n.", 30)
        b = _random_text(rng, "ab \n.", 30)
        for script in (diff_chars(a, b), diff_lines(a, b)):
            cleaned = cleanup_semantic(script)

            assert script.source_text() == a
            assert script.target_text() == b
            assert cleaned.source_text() == a
            assert cleaned.target_text() == b
            assert all(op.text for op in cleaned.ops)


def test_cleanup_is_idempotent() -> None:
    rng = random.Random(FUZZ_SEED + 1)
    for _ in range(300):
        a = _random_text(rng, "ab \n.", 30)
        b = _random_text(rng, "ab \n.", 30)
        for script in (diff_chars(a, b), diff_lines(a, b)):
            once = cleanup_semantic(script)

            assert cleanup_semantic(once) == once


def _random_segments(rng: random.Random, granularity: str) -> list[tuple[str, str]]:
    segments = []
    for _ in range(rng.randint(0, 10)):
        tag = rng.choice(("delete", "insert", "equal"))
        if granularity == "char":
            text = _random_text(rng, "ab .", 4)
        else:
            lines = ("a\n", "b\n", "\n", " .\n")
            text = "".join(rng.choice(lines) for _ in range(rng.randint(0, 3)))
        segments.append((tag, text))
    return segments


def test_cleanup_handles_fragmented_scripts() -> None:
    rng = random.Random(FUZZ_SEED + 2)
    for _ in range(300):
        for granularity in ("char", "line"):
            script = EditScript.from_segments(
                _random_segments(rng, granularity),
                granularity=granularity,
            )
            cleaned = cleanup_semantic(script)

            assert cleaned.source_text() == script.source_text()
            assert cleaned.target_text() == script.target_text()
            assert all(op.text for op in cleaned.ops)
            assert cleanup_semantic(cleaned) == cleaned
