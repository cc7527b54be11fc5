"""Input validation errors.

Every check in the input pipeline stops at the first problem and reports it
as one of these values. ``describe`` renders the single line shown to the
user before the run aborts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class UnknownFlag:
    name: str
    line: str


@dataclass(frozen=True, slots=True)
class FileNotFound:
    path: str


@dataclass(frozen=True, slots=True)
class DuplicateFile:
    path: str


@dataclass(frozen=True, slots=True)
class InvalidDocExtension:
    path: str


@dataclass(frozen=True, slots=True)
class DuplicateDocStem:
    stem: str
    first: str
    second: str


@dataclass(frozen=True, slots=True)
class DocOutputCollision:
    doc_path: str
    colliding_path: str
    kind: Literal["html", "plaintext"]


@dataclass(frozen=True, slots=True)
class TocRequiresDoc:
    path: str


@dataclass(frozen=True, slots=True)
class VersionPatternMissing:
    path: str


@dataclass(frozen=True, slots=True)
class InvalidBumpValue:
    value: str


InputError = (
    UnknownFlag
    | FileNotFound
    | DuplicateFile
    | InvalidDocExtension
    | DuplicateDocStem
    | DocOutputCollision
    | TocRequiresDoc
    | VersionPatternMissing
    | InvalidBumpValue
)


def describe(error: InputError) -> str:
    """Single-line message for an input error."""
    match error:
        case UnknownFlag(name=name, line=line):
            return f"Unknown flag {name!r} in line: {line!r}"
        case FileNotFound(path=path):
            return f"No such file: {path!r}"
        case DuplicateFile(path=path):
            return f"File listed more than once: {path!r}"
        case InvalidDocExtension(path=path):
            return f"Doc file must have 'org' or 'md' extension: {path!r}"
        case DuplicateDocStem(stem=stem, first=first, second=second):
            return f"Doc files {first!r} and {second!r} share the output name {stem!r}"
        case DocOutputCollision(doc_path=doc, colliding_path=other, kind=kind):
            return f"{kind} output of doc file {doc!r} would overwrite {other!r}"
        case TocRequiresDoc(path=path):
            return f"'toc' flag requires 'doc' flag: {path!r}"
        case VersionPatternMissing(path=path):
            return f"No NAME_VERSION=value line in versioned file: {path!r}"
        case InvalidBumpValue(value=value):
            return f"Bump version value must not contain whitespace: {value!r}"


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Failure while staging or bumping, after the input passed its checks."""

    kind: Literal[
        "dist_exists",
        "io_failed",
        "render_failed",
        "git_failed",
    ]
    message: str
    hint: str | None = None
