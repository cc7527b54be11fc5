"""Release packaging toolkit for CI pipelines."""

__version__ = "0.1.0"
