"""Release input parsing, checks and packaging steps."""

from .changelog import release_notes
from .check import check_flags, check_input
from .errors import InputError, ReleaseError, describe
from .flags import FileEntry, Flag, parse_flag_line
from .inputs import InputTable, parse_input_files

__all__ = [
    "FileEntry",
    "Flag",
    "InputError",
    "InputTable",
    "ReleaseError",
    "check_flags",
    "check_input",
    "describe",
    "parse_flag_line",
    "parse_input_files",
    "release_notes",
]
