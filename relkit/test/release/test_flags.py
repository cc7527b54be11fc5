from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.result import Err, Ok
from relkit.release.errors import FileNotFound, UnknownFlag
from relkit.release.flags import FileEntry, Flag, parse_flag_line, split_flag_line


@pytest.fixture
def root(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("a\n", encoding="utf-8")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.org").write_text("* Guide\n", encoding="utf-8")
    return tmp_path


class TestSplitFlagLine:
    def test_blank_line_is_skipped(self) -> None:
        assert split_flag_line("") is None
        assert split_flag_line("   \t ") is None

    def test_path_only(self) -> None:
        assert split_flag_line("  a.txt  ") == ("a.txt", ())

    def test_whitespace_and_repeated_plus_are_collapsed(self) -> None:
        assert split_flag_line("a.txt +  v ++ doc") == ("a.txt", ("v", "doc"))
        assert split_flag_line("a.txt+v+doc") == ("a.txt", ("v", "doc"))
        assert split_flag_line("a.txt + + + v") == ("a.txt", ("v",))

    def test_trailing_plus_adds_no_flag(self) -> None:
        assert split_flag_line("a.txt +") == ("a.txt", ())

    def test_empty_path_is_skipped(self) -> None:
        assert split_flag_line("+ v") is None
        assert split_flag_line("  ++doc") is None

    def test_inner_spaces_stay_in_path(self) -> None:
        assert split_flag_line("my file.txt + v") == ("my file.txt", ("v",))


class TestParseFlagLine:
    def test_equivalent_spellings_give_same_entry(self, root: Path) -> None:
        first = parse_flag_line("a.txt +  v ++ doc", root=root)
        second = parse_flag_line("a.txt+v+doc", root=root)
        assert first == second
        assert first == Ok(FileEntry(path="a.txt", flags=frozenset({Flag.VERSIONED, Flag.DOC})))

    def test_flags_are_case_insensitive(self, root: Path) -> None:
        result = parse_flag_line("a.txt + V + Doc + TOC", root=root)
        assert isinstance(result, Ok)
        assert result.value is not None
        assert result.value.flags == frozenset(Flag)

    def test_blank_line_yields_none(self, root: Path) -> None:
        assert parse_flag_line("   ", root=root) == Ok(None)

    def test_nested_path(self, root: Path) -> None:
        result = parse_flag_line("docs/guide.org + doc", root=root)
        assert result == Ok(FileEntry(path="docs/guide.org", flags=frozenset({Flag.DOC})))

    def test_unknown_flag(self, root: Path) -> None:
        result = parse_flag_line("a.txt + v + bogus", root=root)
        assert isinstance(result, Err)
        assert result.error == UnknownFlag(name="bogus", line="a.txt + v + bogus")

    def test_unknown_flag_reported_before_missing_file(self, root: Path) -> None:
        result = parse_flag_line("missing.txt + x", root=root)
        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownFlag)

    def test_missing_file(self, root: Path) -> None:
        assert parse_flag_line("missing.txt + v", root=root) == Err(
            FileNotFound(path="missing.txt")
        )

    def test_directory_is_not_a_file(self, root: Path) -> None:
        assert parse_flag_line("docs", root=root) == Err(FileNotFound(path="docs"))

    def test_entry_has(self) -> None:
        entry = FileEntry(path="a", flags=frozenset({Flag.DOC}))
        assert entry.has(Flag.DOC)
        assert not entry.has(Flag.TOC)
