from diffpack.core.models import EditScript
from diffpack.diff.constants import NO_DIFF_MESSAGE, NO_NEWLINE_MARKER
from diffpack.diff.formatting import diff_lines_unified, render_edit_script
from diffpack.diff.lines import diff_chars, diff_lines_raw


def _hundred_lines(changed: str | None = None) -> str:
    lines = [f"line {index}" for index in range(100)]
    if changed is not None:
        lines[50] = changed
    return "\n".join(lines)


def _tagging_formatter(text: str, role: str) -> str:
    return f"<{role}>{text}</{role}>"


def test_end_to_end_line_diff() -> None:
    assert diff_lines_unified("a\nb\nc", "a\nx\nc") == (
        "- Expected\n+ Received\n\n  a\n- b\n+ x\n  c"
    )


def test_unchanged_script_renders_no_diff_message() -> None:
    assert render_edit_script(diff_lines_raw("a\nb", "a\nb").script) == NO_DIFF_MESSAGE


def test_context_window_emits_patch_mark() -> None:
    rendered = diff_lines_unified(
        _hundred_lines(),
        _hundred_lines("line 50 changed"),
        {"contextLines": 2},
    )

    assert rendered.splitlines() == [
        "- Expected",
        "+ Received",
        "",
        "@@ -49,5 +49,5 @@",
        "  line 48",
        "  line 49",
        "- line 50",
        "+ line 50 changed",
        "  line 51",
        "  line 52",
    ]


def test_separate_changes_form_separate_hunks() -> None:
    a = "\n".join(f"row {index}" for index in range(20))
    b_lines = [f"row {index}" for index in range(20)]
    b_lines[2] = "first"
    b_lines[17] = "second"

    rendered = diff_lines_unified(a, "\n".join(b_lines), {"context_lines": 1})

    marks = [line for line in rendered.splitlines() if line.startswith("@@")]
    assert marks == ["@@ -2,3 +2,3 @@", "@@ -17,3 +17,3 @@"]
    assert "  row 10" not in rendered.splitlines()


def test_single_hunk_covering_everything_has_no_patch_mark() -> None:
    rendered = diff_lines_unified("a\nb\nc", "a\nx\nc", {"context_lines": 1})

    assert "@@" not in rendered


def test_expand_shows_every_line() -> None:
    rendered = diff_lines_unified(
        _hundred_lines(),
        _hundred_lines("line 50 changed"),
        {"expand": True, "context_lines": 0},
    )
    body = rendered.splitlines()[3:]

    assert len(body) == 101
    assert not any(line.startswith("@@") for line in body)
    assert body[0] == "  line 0"
    assert body[-1] == "  line 99"


def test_truncation_keeps_threshold_lines_and_annotates() -> None:
    a = "\n".join(f"a{index}" for index in range(10))
    b = "\n".join(f"b{index}" for index in range(10))

    rendered = diff_lines_unified(a, b, {"truncateThreshold": 3})

    assert rendered == (
        "- Expected\n+ Received\n\n- a0\n- a1\n- a2\n... Diff result is truncated"
    )


def test_truncation_threshold_zero_is_unlimited() -> None:
    a = "\n".join(f"a{index}" for index in range(10))
    b = "\n".join(f"b{index}" for index in range(10))

    rendered = diff_lines_unified(a, b, {"truncate_threshold": 0})

    assert "truncated" not in rendered
    assert len(rendered.splitlines()) == 3 + 20


def test_change_counts_in_header() -> None:
    rendered = diff_lines_unified(
        "a\nb\nc",
        "a\nx\ny\nc",
        {"includeChangeCounts": True},
    )

    assert rendered.splitlines()[:2] == ["- Expected  - 1", "+ Received  + 2"]


def test_omit_annotation_lines() -> None:
    rendered = diff_lines_unified("a", "b", {"omitAnnotationLines": True})

    assert rendered == "- a\n+ b"


def test_custom_annotations_and_indicators() -> None:
    rendered = diff_lines_unified(
        "a",
        "b",
        {
            "aAnnotation": "Before",
            "bAnnotation": "After",
            "aIndicator": "<",
            "bIndicator": ">",
        },
    )

    assert rendered == "< Before\n> After\n\n< a\n> b"


def test_empty_lines_render_indicator_only() -> None:
    rendered = diff_lines_unified("a\n\nb", "a\nb", {"omitAnnotationLines": True})

    assert rendered == "  a\n-\n  b"


def test_missing_trailing_newline_is_marked() -> None:
    rendered = diff_lines_unified("a\n", "a")

    assert rendered.splitlines()[3:] == ["- a", "+ a", NO_NEWLINE_MARKER]


def test_trailing_whitespace_role() -> None:
    rendered = diff_lines_unified(
        "a",
        "a  ",
        {"formatter": _tagging_formatter, "highlightChanges": False},
    )

    assert (
        "<addition>+ </addition><addition>a</addition>"
        "<trailing-whitespace>  </trailing-whitespace>"
    ) in rendered


def test_trailing_whitespace_role_on_highlighted_pairs() -> None:
    rendered = diff_lines_unified(
        "keep\nab  \n",
        "keep\nxb  \n",
        {"formatter": _tagging_formatter, "omitAnnotationLines": True},
    )

    assert rendered.splitlines()[1:] == [
        "<removal>- </removal><removal><change>a</change></removal>"
        "<removal>b</removal><trailing-whitespace>  </trailing-whitespace>",
        "<addition>+ </addition><addition><change>x</change></addition>"
        "<addition>b</addition><trailing-whitespace>  </trailing-whitespace>",
    ]


def test_changed_characters_use_change_role() -> None:
    rendered = diff_lines_unified(
        "value: 1",
        "value: 2",
        {"formatter": _tagging_formatter, "omitAnnotationLines": True},
    )

    assert "<removal><change>1</change></removal>" in rendered
    assert "<addition><change>2</change></addition>" in rendered
    assert "<removal>value: </removal>" in rendered


def test_patch_mark_uses_patch_role() -> None:
    rendered = diff_lines_unified(
        _hundred_lines(),
        _hundred_lines("line 50 changed"),
        {"contextLines": 0, "formatter": _tagging_formatter},
    )

    assert "<patch>@@ -51,1 +51,1 @@</patch>" in rendered


def test_ansi_color_option() -> None:
    rendered = diff_lines_unified("a", "b", {"color": True})

    assert "\x1b[32m" in rendered
    assert "\x1b[31m" in rendered


def test_character_scripts_are_rendered_by_line() -> None:
    script = diff_chars("a\nb\nc", "a\nx\nc")

    assert render_edit_script(script) == "- Expected\n+ Received\n\n  a\n- b\n+ x\n  c"


def test_display_texts_replace_diffed_lines() -> None:
    script = EditScript.from_segments(
        [("equal", "{\n"), ("delete", "1,\n"), ("insert", "2,\n"), ("equal", "}")],
    )

    rendered = render_edit_script(
        script,
        {"omitAnnotationLines": True},
        display=("{\n  1,\n}", "{\n  2,\n}"),
    )

    assert rendered == "  {\n-   1,\n+   2,\n  }"
