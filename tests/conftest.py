"""Shared test fixtures — sample diffs, diff builders, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from typing import Callable

import pytest

BASE_PROTO = textwrap.dedent("""\
    syntax = "proto3";

    package demo.v1;

    message User {
      optional string id = 1;
    }
""")


@pytest.fixture
def new_proto_diff() -> Callable[..., str]:
    """Build a diff that adds a new .proto file made of *lines*."""

    def _build(*lines: str, path: str = "proto/v1/test.proto") -> str:
        header = (
            f"diff --git a/{path} b/{path}\n"
            "new file mode 100644\n"
            "index 0000000..1234567\n"
            "--- /dev/null\n"
            f"+++ b/{path}\n"
            f"@@ -0,0 +1,{len(lines)} @@\n"
        )
        return header + "".join(f"+{line}\n" for line in lines)

    return _build


@pytest.fixture
def sample_diff_missing_optional(new_proto_diff) -> str:
    return new_proto_diff(
        'syntax = "proto3";',
        "",
        "message Test {",
        "  string missing_optional = 1;",
        "}",
    )


@pytest.fixture
def sample_diff_clean(new_proto_diff) -> str:
    return new_proto_diff(
        'syntax = "proto3";',
        "",
        "message Test {",
        "  optional string has_optional = 1;",
        "  repeated string tags = 2;",
        "  map<string, string> metadata = 3;",
        "}",
    )


@pytest.fixture
def sample_diff_existing_file() -> str:
    """A modification of an existing file: context lines, then two added fields."""
    return (
        "diff --git a/proto/v1/existing.proto b/proto/v1/existing.proto\n"
        "index abc1234..def5678 100644\n"
        "--- a/proto/v1/existing.proto\n"
        "+++ b/proto/v1/existing.proto\n"
        "@@ -5,6 +5,8 @@ package proto.v1;\n"
        " \n"
        " message ExistingMessage {\n"
        "   optional string existing_field = 1;\n"
        "+  string new_field_added = 2;\n"
        "+  optional string another_new_field = 3;\n"
        " }\n"
    )


@pytest.fixture
def sample_diff_binary() -> str:
    return textwrap.dedent("""\
        diff --git a/binary.jpg b/binary.jpg
        new file mode 100644
        index 0000000..1234567
        Binary files /dev/null and b/binary.jpg differ
    """)


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one committed .proto file."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "demo.proto").write_text(BASE_PROTO)
    (repo / "README.md").write_text("# Test\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "init")
    return repo


@pytest.fixture
def commit_file() -> Callable[[Path, str, str], None]:
    """Write *content* to *name* inside *repo* and commit it."""

    def _commit(repo: Path, name: str, content: str) -> None:
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        _git(repo, "add", name)
        _git(repo, "commit", "-m", f"update {name}")

    return _commit


@pytest.fixture
def not_a_repo(tmp_path: Path, monkeypatch) -> Path:
    """A directory git will not treat as part of any repository."""
    plain = tmp_path / "plain"
    plain.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return plain
