"""Post-release development version bump.

After a release is published the versioned source files get
``<tag><bump>`` (e.g. ``v1.2.0+dev``) and the change is committed and
pushed. Nothing is committed when no file changed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relkit.core.config import ReleaseConfig
from relkit.core.result import Err, Ok, Result
from relkit.git.repository import GitError, Repository
from relkit.release.errors import ReleaseError
from relkit.release.inputs import InputTable
from relkit.release.version import set_version

__all__ = ["BumpResult", "bump_dev_version", "dev_version"]


@dataclass(frozen=True, slots=True)
class BumpResult:
    version: str | None
    committed: tuple[str, ...] = ()


def dev_version(tag: str, bump: str) -> str:
    return f"{tag}{bump}"


def _git_failed(error: GitError, state: str) -> ReleaseError:
    return ReleaseError(
        kind="git_failed",
        message=f"git {error.command} failed (exit {error.returncode}): {error.message}",
        hint=state,
    )


def _uncommitted(paths: Sequence[str]) -> str:
    listed = " ".join(paths)
    return f"{listed} stamped but not committed; run 'git checkout -- {listed}' before retrying"


def bump_dev_version(
    *,
    root: Path,
    table: InputTable,
    tag: str,
    config: ReleaseConfig,
    repo: Repository,
) -> Result[BumpResult, ReleaseError]:
    """Stamp the development version into source files and commit it.

    Returns Ok(BumpResult(version=None)) when the table carries no bump.
    On a git failure the error hint says whether the stamped files were
    left uncommitted or committed but not pushed.
    """
    if table.bump is None:
        return Ok(BumpResult(version=None))

    version = dev_version(tag, table.bump)
    versioned = sorted(table.versioned)
    stamped = set_version(root, table.versioned, version)
    if isinstance(stamped, Err):
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to set version in {stamped.error.path}: {stamped.error.message}",
            )
        )

    changed = repo.changed_files(versioned)
    if isinstance(changed, Err):
        return Err(_git_failed(changed.error, _uncommitted(versioned)))
    if not changed.value:
        return Ok(BumpResult(version=version))

    steps = (
        lambda: repo.set_identity(config.committer_name, config.committer_email),
        lambda: repo.add(changed.value),
        lambda: repo.commit(config.commit_message),
    )
    for step in steps:
        result = step()
        if isinstance(result, Err):
            return Err(_git_failed(result.error, _uncommitted(changed.value)))

    pushed = repo.push()
    if isinstance(pushed, Err):
        return Err(
            _git_failed(
                pushed.error,
                "the version bump is committed locally but not pushed; push it before retrying",
            )
        )

    return Ok(BumpResult(version=version, committed=changed.value))
