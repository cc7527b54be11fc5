from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.result import Err, Ok
from relkit.release.errors import DuplicateFile, FileNotFound, UnknownFlag
from relkit.release.flags import Flag
from relkit.release.inputs import parse_input_files


@pytest.fixture
def root(tmp_path: Path) -> Path:
    for name in ("tool.sh", "README.org", "notes.txt", "LICENSE"):
        (tmp_path / name).write_text("x\n", encoding="utf-8")
    return tmp_path


def test_builds_file_and_flag_sets(root: Path) -> None:
    text = "\n".join(
        [
            "tool.sh + v",
            "",
            "   ",
            "README.org + doc + toc",
            "notes.txt",
        ]
    )
    result = parse_input_files(text, root=root)
    assert isinstance(result, Ok)
    table = result.value

    assert table.files == {"tool.sh", "README.org", "notes.txt"}
    assert table.versioned == {"tool.sh"}
    assert table.docs == {"README.org"}
    assert table.toc == {"README.org"}
    assert [e.path for e in table.entries] == ["README.org", "notes.txt", "tool.sh"]


def test_flag_sets_are_subsets_of_files(root: Path) -> None:
    result = parse_input_files("tool.sh+v+doc\nREADME.org+toc\nnotes.txt", root=root)
    assert isinstance(result, Ok)
    table = result.value
    for flag in Flag:
        assert table.flagged(flag) <= table.files


def test_duplicate_path_fails_even_with_other_flags(root: Path) -> None:
    result = parse_input_files("tool.sh + v\nREADME.org + doc\ntool.sh + doc", root=root)
    assert result == Err(DuplicateFile(path="tool.sh"))


def test_first_error_wins(root: Path) -> None:
    result = parse_input_files("missing + v\ntool.sh + nope", root=root)
    assert result == Err(FileNotFound(path="missing"))

    result = parse_input_files("tool.sh + nope\nmissing", root=root)
    assert isinstance(result, Err)
    assert isinstance(result.error, UnknownFlag)


def test_bump_kept_when_versioned_files_exist(root: Path) -> None:
    result = parse_input_files("tool.sh + v", root=root, bump="+dev")
    assert isinstance(result, Ok)
    assert result.value.bump == "+dev"


def test_bump_dropped_without_versioned_files(root: Path) -> None:
    result = parse_input_files("notes.txt", root=root, bump="+dev")
    assert isinstance(result, Ok)
    assert result.value.bump is None


def test_empty_bump_means_no_bump(root: Path) -> None:
    result = parse_input_files("tool.sh + v", root=root, bump="")
    assert isinstance(result, Ok)
    assert result.value.bump is None


def test_default_files_added_when_present(root: Path) -> None:
    result = parse_input_files("tool.sh", root=root, default_files=("LICENSE", "COPYING"))
    assert isinstance(result, Ok)
    assert result.value.files == {"tool.sh", "LICENSE"}


def test_listed_default_file_keeps_its_flags(root: Path) -> None:
    result = parse_input_files("LICENSE + v", root=root, default_files=("LICENSE",))
    assert isinstance(result, Ok)
    assert result.value.versioned == {"LICENSE"}
    assert len(result.value.entries) == 1
