"""Git subprocess wrapper — workspace/ref validation and the .proto diff."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

_REVISION_ERRORS = ("unknown revision", "bad revision")
_BASE_REF_HINT = "Common alternatives: 'origin/master', 'main', 'HEAD~1'"
_WORKING_TREE = "."


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


class NotARepositoryError(GitError):
    """The current directory is not inside a git working copy."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__("not in a git repository or git not available")


class ReferenceNotFoundError(GitError):
    """A base or head reference does not resolve to a commit."""

    def __init__(self, ref: str, role: str = "base") -> None:
        self.ref = ref
        self.role = role
        msg = f"{role} reference '{ref}' not found"
        if role == "base":
            msg += f". {_BASE_REF_HINT}"
        super().__init__(msg)


class DiffInvocationError(GitError):
    """``git diff`` exited non-zero for a reason other than a bad revision."""

    def __init__(self, exit_code: int, stderr: str) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"git diff failed (exit {exit_code}): {stderr}")


class DiffReadError(GitError):
    """A pre-computed diff could not be read."""


def _run_git(
    args: List[str], cwd: Path, timeout: int = 30
) -> subprocess.CompletedProcess[str]:
    """Run a git command. Raises GitError if git cannot be run at all."""
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    result = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    if result.returncode != 0:
        raise NotARepositoryError(cwd)
    return Path(result.stdout.strip())


def ensure_repository(cwd: Path) -> None:
    """Raise NotARepositoryError unless *cwd* is inside a git working copy."""
    if _run_git(["rev-parse", "--git-dir"], cwd=cwd).returncode != 0:
        raise NotARepositoryError(cwd)


def ref_exists(cwd: Path, ref: str) -> bool:
    result = _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=cwd)
    return result.returncode == 0


def validate_refs(cwd: Path, base: str, head: str) -> None:
    """Pre-flight check before diffing: workspace, base ref, head ref."""
    ensure_repository(cwd)
    if not ref_exists(cwd, base):
        raise ReferenceNotFoundError(base, "base")
    if head not in ("HEAD", _WORKING_TREE) and not ref_exists(cwd, head):
        raise ReferenceNotFoundError(head, "head")


def diff_spec(base: str, head: str) -> str:
    """``base`` alone for a working-tree diff (head ``.``), else ``base...head``."""
    if head == _WORKING_TREE:
        return base
    return f"{base}...{head}"


def get_proto_diff(
    repo_root: Path,
    base: str,
    head: str,
    *,
    context_lines: int = 10,
    pathspec: Sequence[str] = ("*.proto",),
) -> str:
    """Return the unified diff of schema files between *base* and *head*."""
    result = _run_git(
        [
            "diff",
            "--no-color",
            "--no-ext-diff",
            f"-U{context_lines}",
            diff_spec(base, head),
            "--",
            *pathspec,
        ],
        cwd=repo_root,
        timeout=120,
    )
    if result.returncode != 0:
        stderr = result.stderr.strip()
        if any(marker in stderr for marker in _REVISION_ERRORS):
            raise ReferenceNotFoundError(base, "base")
        raise DiffInvocationError(result.returncode, stderr)
    return result.stdout


def read_diff_file(path: str) -> str:
    """Read a pre-computed unified diff from *path* (``-`` for stdin)."""
    try:
        if path == "-":
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise DiffReadError(f"cannot read diff from {path}: {exc}") from exc

