"""Git operations needed for the post-release commit.

Usage:
    repo = Repository(root)
    match repo.changed_files(["src/tool.sh"]):
        case Ok(paths):
            ...
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def changed_files(self, paths: Sequence[str]) -> Result[tuple[str, ...], GitError]:
        """Paths among ``paths`` with unstaged changes, relative to ``path``."""
        if not paths:
            return Ok(())
        result = self._checked("diff", ["diff", "--name-only", "--relative", "--", *paths])
        if isinstance(result, Err):
            return result
        return Ok(tuple(line for line in result.value.splitlines() if line.strip()))

    def set_identity(self, name: str, email: str) -> Result[None, GitError]:
        """Set the committer identity for this repository only."""
        for key, value in (("user.name", name), ("user.email", email)):
            result = self._checked("config", ["config", "--local", key, value])
            if isinstance(result, Err):
                return result
        return Ok(None)

    def add(self, paths: Sequence[str]) -> Result[None, GitError]:
        return self._checked("add", ["add", "--", *paths]).map(lambda _: None)

    def commit(self, message: str) -> Result[None, GitError]:
        return self._checked("commit", ["commit", "-m", message]).map(lambda _: None)

    def push(self) -> Result[None, GitError]:
        return self._checked("push", ["push"]).map(lambda _: None)

    def _checked(self, command: str, args: list[str]) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
