"""Tests for markdown-like line classification."""

import pytest

from farmconnect_translate.translation.structured import (
    BLANK,
    BULLET,
    HEADER,
    PLAIN,
    STRUCTURAL,
    classify_line,
    join_lines,
    plan_content,
    split_lines,
)


@pytest.mark.parametrize(
    "line, kind, prefix, payload",
    [
        ("", BLANK, "", None),
        ("    ", BLANK, "", None),
        ("---", STRUCTURAL, "", None),
        ("1.", STRUCTURAL, "", None),
        ("## ", STRUCTURAL, "", None),
        ("# Crop Planning", HEADER, "#", "Crop Planning"),
        ("### Step 2: sow seeds", HEADER, "###", "Step 2: sow seeds"),
        ("- Use urea sparingly", BULLET, "- ", "Use urea sparingly"),
        ("  + nested item", BULLET, "  + ", "nested item"),
        ("12. Harvest in winter", BULLET, "12. ", "Harvest in winter"),
        ("**Important** note", PLAIN, "", "**Important** note"),
        ("Irrigate twice a week.", PLAIN, "", "Irrigate twice a week."),
    ],
)
def test_classify_line(line, kind, prefix, payload):
    plan = classify_line(line)

    assert plan.kind == kind
    assert plan.prefix == prefix
    assert plan.payload == payload


def test_render_reattaches_tokens():
    assert classify_line("#  Soil").render("মাটি") == "# মাটি"
    assert classify_line("  * Leaf").render("পাতা") == "  * পাতা"
    assert classify_line("---").render("ignored") == "---"
    assert classify_line("Plain").render(None) == "Plain"


def test_split_and_join_keep_separators():
    content = "a\r\nb\n\nc"
    lines, separators = split_lines(content)

    assert lines == ["a", "b", "", "c"]
    assert separators == ["\r\n", "\n", "\n"]
    assert join_lines(lines, separators) == content


def test_plan_content_marks_only_payload_lines():
    plans, _ = plan_content("# Title\n\n- item\n***")

    assert [plan.payload for plan in plans] == ["Title", None, "item", None]
