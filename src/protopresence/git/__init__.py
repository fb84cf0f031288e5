"""Git interface layer — adapter, diff walking, models."""

from protopresence.git.adapter import (
    DiffInvocationError,
    DiffReadError,
    GitError,
    NotARepositoryError,
    ReferenceNotFoundError,
    diff_spec,
    get_proto_diff,
    get_repo_root,
    read_diff_file,
    validate_refs,
)
from protopresence.git.diff_walker import DiffWalker, parse_diff
from protopresence.git.models import DiffFile, ScanContext

__all__ = [
    "DiffFile",
    "DiffInvocationError",
    "DiffReadError",
    "DiffWalker",
    "GitError",
    "NotARepositoryError",
    "ReferenceNotFoundError",
    "ScanContext",
    "diff_spec",
    "get_proto_diff",
    "get_repo_root",
    "parse_diff",
    "read_diff_file",
    "validate_refs",
]
