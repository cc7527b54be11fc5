from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.release.changelog import (
    Heading,
    extract_section,
    find_headings,
    release_notes,
    section_range,
    strip_leading_blank_lines,
)
from relkit.release.pandoc import RenderError

ORG_CHANGELOG = "\n".join(
    [
        "#+title: Changelog",
        "",
        "* v2.0 (tag-X)",
        "** Added",
        "- new thing",
        "",
        "** Fixed",
        "- old bug",
        "",
        "* v1.0",
        "- first release",
        "",
    ]
)


@dataclass
class FakeRenderer:
    calls: list[tuple[str, str, str]] = field(default_factory=list)
    fail: bool = False

    def convert(
        self,
        text: str,
        *,
        src: str,
        dst: str,
        standalone: bool = False,
        toc: bool = False,
        title: str | None = None,
    ) -> Result[str, RenderError]:
        self.calls.append((text, src, dst))
        if self.fail:
            return Err(RenderError(kind="convert_failed", message="pandoc org -> gfm failed"))
        return Ok(f"<{dst}>{text}")


class TestHeadings:
    def test_first_two_headings(self) -> None:
        lines = ORG_CHANGELOG.splitlines(keepends=True)
        assert find_headings(lines, "*") == [
            Heading(line=3, text="* v2.0 (tag-X)"),
            Heading(line=10, text="* v1.0"),
        ]

    def test_sub_headings_and_bare_markers_are_ignored(self) -> None:
        lines = ["** sub\n", "*bold*\n", "*\n", "* top\n"]
        assert find_headings(lines, "*") == [Heading(line=4, text="* top")]

    def test_range_to_next_heading(self) -> None:
        headings = [Heading(3, "* v2.0 (tag-X)"), Heading(10, "* v1.0")]
        assert section_range(headings, 12) == (4, 9)

    def test_range_to_end_of_file(self) -> None:
        assert section_range([Heading(1, "# v1")], 5) == (2, 5)


class TestExtractSection:
    def test_org_section_lines_4_to_9(self) -> None:
        section = extract_section(ORG_CHANGELOG, tag="tag-X", marker="*")
        expected = ORG_CHANGELOG.splitlines(keepends=True)[3:9]
        assert section == "".join(expected)

    def test_only_heading_runs_to_eof(self) -> None:
        text = "# v1.0\n\nbody\nmore\n"
        assert extract_section(text, tag="v1.0", marker="#") == "\nbody\nmore\n"

    def test_first_heading_must_contain_tag(self) -> None:
        assert extract_section(ORG_CHANGELOG, tag="v1.0", marker="*") is None

    def test_no_headings(self) -> None:
        assert extract_section("just text\n", tag="v1", marker="#") is None

    def test_tag_match_is_substring(self) -> None:
        text = "# v1.2.3\nbody\n"
        assert extract_section(text, tag="v1.2", marker="#") == "body\n"

    def test_adjacent_headings_give_empty_section(self) -> None:
        text = "# v2\n# v1\nold\n"
        assert extract_section(text, tag="v2", marker="#") == ""


def test_strip_leading_blank_lines() -> None:
    assert strip_leading_blank_lines("\n\n  \ncontent\n\nmore\n") == "content\n\nmore\n"
    assert strip_leading_blank_lines("\n\n\n") == ""
    assert strip_leading_blank_lines("x\n") == "x\n"


class TestReleaseNotes:
    def test_org_changelog_is_converted(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.org").write_text(ORG_CHANGELOG, encoding="utf-8")
        renderer = FakeRenderer()

        result = release_notes(tmp_path, tag="tag-X", renderer=renderer)

        assert isinstance(result, Ok)
        assert result.value.startswith("<gfm>** Added\n")
        assert renderer.calls[0][1:] == ("org", "gfm")

    def test_markdown_changelog_is_stripped_not_converted(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.md").write_text(
            "# v1.1\n\n\n\n- fixed\n\n# v1.0\n- initial\n", encoding="utf-8"
        )
        renderer = FakeRenderer()

        result = release_notes(tmp_path, tag="v1.1", renderer=renderer)

        assert result == Ok("- fixed\n\n")
        assert renderer.calls == []

    def test_no_match_gives_empty_notes(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.md").write_text("# v0.9\n- old\n", encoding="utf-8")
        assert release_notes(tmp_path, tag="v1.0", renderer=FakeRenderer()) == Ok("")

    def test_no_changelog(self, tmp_path: Path) -> None:
        assert release_notes(tmp_path, tag="v1.0", renderer=FakeRenderer()) == Ok("")

    def test_markdown_used_when_org_does_not_match(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.org").write_text("* v0.1\n", encoding="utf-8")
        (tmp_path / "CHANGELOG.md").write_text("# v1.0\nnotes\n", encoding="utf-8")
        assert release_notes(tmp_path, tag="v1.0", renderer=FakeRenderer()) == Ok("notes\n")

    def test_org_wins_when_both_match(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.org").write_text("* v1.0\norg notes\n", encoding="utf-8")
        (tmp_path / "CHANGELOG.md").write_text("# v1.0\nmd notes\n", encoding="utf-8")
        result = release_notes(tmp_path, tag="v1.0", renderer=FakeRenderer())
        assert result == Ok("<gfm>org notes\n")

    def test_conversion_failure(self, tmp_path: Path) -> None:
        (tmp_path / "CHANGELOG.org").write_text("* v1.0\nnotes\n", encoding="utf-8")
        result = release_notes(tmp_path, tag="v1.0", renderer=FakeRenderer(fail=True))
        assert isinstance(result, Err)
        assert result.error.kind == "convert_failed"
