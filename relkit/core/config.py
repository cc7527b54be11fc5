"""Typed release configuration.

Settings live in an optional ``relkit.toml`` at the project root under a
``[release]`` table. Every key is optional; a missing file yields the
defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILENAME = "relkit.toml"

DEFAULT_FILES = ("LICENSE",)
DEFAULT_COMMIT_MESSAGE = "Post-release dev version bump"
DEFAULT_COMMITTER_NAME = "github-actions[bot]"
DEFAULT_COMMITTER_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file exists but cannot be used."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Settings shared by every relkit command.

    Attributes:
        default_files: Files added to every release when present on disk.
        out_dir: Directory (relative to the project root) that receives the
            staged ``<project>-<tag>`` tree.
        commit_message: Message of the post-release bump commit.
        committer_name: ``user.name`` set locally before that commit.
        committer_email: ``user.email`` set locally before that commit.
    """

    default_files: tuple[str, ...] = DEFAULT_FILES
    out_dir: str = "."
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    committer_name: str = DEFAULT_COMMITTER_NAME
    committer_email: str = DEFAULT_COMMITTER_EMAIL

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[ReleaseConfig, str]:
        """Build from the parsed TOML root table."""
        section = data.get("release", {})
        if not isinstance(section, dict):
            return Err("[release] must be a table")

        defaults = cls()
        files = section.get("default_files", list(defaults.default_files))
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            return Err("release.default_files must be a list of strings")

        strings: dict[str, str] = {}
        for key in ("out_dir", "commit_message", "committer_name", "committer_email"):
            value = section.get(key, getattr(defaults, key))
            if not isinstance(value, str) or not value.strip():
                return Err(f"release.{key} must be a non-empty string")
            strings[key] = value.strip()

        return Ok(
            cls(
                default_files=tuple(f.strip() for f in files if f.strip()),
                **strings,
            )
        )


def load_config(root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``relkit.toml`` from ``root``.

    Returns:
        Ok(ReleaseConfig) with defaults when the file is absent,
        Err(ConfigError) when it is unreadable or malformed.
    """
    import tomllib

    path = root / CONFIG_FILENAME
    if not path.is_file():
        return Ok(ReleaseConfig())

    try:
        data: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))

    if not isinstance(data, dict):
        return Err(ConfigError("Config root must be a TOML table", path=path))

    parsed = ReleaseConfig.from_dict(data)
    if isinstance(parsed, Err):
        return Err(ConfigError(parsed.error, path=path))
    return parsed
