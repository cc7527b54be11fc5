"""Process and filesystem access."""

from .files import atomic_write_text, read_text
from .process import ProcessError, run, which

__all__ = [
    # files
    "atomic_write_text",
    "read_text",
    # process
    "ProcessError",
    "run",
    "which",
]
