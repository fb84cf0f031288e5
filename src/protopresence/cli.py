"""protopresence CLI — Typer application that checks a .proto diff."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from protopresence import __version__

app = typer.Typer(
    name="protopresence",
    help="Fail when newly added proto fields are missing the `optional` keyword.",
    add_completion=False,
)

console = Console(stderr=True)


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _fail(kind: str, exc: Exception) -> typer.Exit:
    """Print a one-line error to stderr and return the exit to raise."""
    console.print(f"[bold red]{kind}:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=2)


def _resolve_root(*, required: bool) -> Path:
    """Find the git repo root. Falls back to cwd when a repo is optional."""
    from protopresence.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        if not required:
            return Path.cwd()
        raise _fail("Git validation error", exc) from exc


def _version_callback(value: bool) -> None:
    if value:
        print(f"protopresence {__version__}")
        raise typer.Exit()


def _write_starter_config(root: Path) -> None:
    from protopresence.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = root / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)
    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")
    raise typer.Exit(code=0)


@app.command()
def check(
    base_ref: Optional[str] = typer.Argument(None, help="Base revision (default: origin/main)"),
    head_ref: Optional[str] = typer.Argument(
        None, help="Head revision; '.' compares the working tree with BASE_REF (default: HEAD)"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .protopresence.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | sarif"),
    scope: Optional[str] = typer.Option(None, "--scope", help="Fields to flag: scalar | all"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    diff_file: Optional[str] = typer.Option(
        None, "--diff-file", help="Check a pre-computed unified diff ('-' for stdin) instead of running git"
    ),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode (annotations)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="List the .proto files in the diff and exit"),
    init_config: bool = typer.Option(False, "--init-config", help="Write a starter .protopresence.toml and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Check new .proto fields between BASE_REF and HEAD_REF for explicit `optional`."""
    from protopresence.config.loader import ConfigError, load_config
    from protopresence.config.schema import OUTPUT_FORMATS, SCOPES
    from protopresence.findings.baseline import Baseline, BaselineError
    from protopresence.git.adapter import (
        DiffReadError,
        GitError,
        NotARepositoryError,
        ReferenceNotFoundError,
        diff_spec,
        get_proto_diff,
        read_diff_file,
        validate_refs,
    )
    from protopresence.output import json_report, sarif, terminal
    from protopresence.scanner.engine import CheckError, check as run_check

    repo_root = _resolve_root(required=diff_file is None and not init_config)

    if init_config:
        _write_starter_config(repo_root)

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if scope:
        if scope not in SCOPES:
            console.print(f"[bold red]Invalid scope:[/bold red] {escape(scope)}")
            raise typer.Exit(code=2)
        cfg.policy.scope = scope  # type: ignore[assignment]

    base = base_ref or cfg.diff.base
    head = head_ref or cfg.diff.head
    ci_mode = ci or _detect_ci()

    if verbose or debug:
        console.print(f"[dim]Repo root: {escape(str(repo_root))}[/dim]")
        if diff_file is None:
            console.print(f"[dim]Diff spec: {escape(diff_spec(base, head))}[/dim]")
        console.print(f"[dim]Policy scope: {cfg.policy.scope}[/dim]")
        console.print(f"[dim]CI mode: {ci_mode}[/dim]")

    # --- Get diff ---
    try:
        if diff_file is not None:
            diff_text = read_diff_file(diff_file)
        else:
            validate_refs(repo_root, base, head)
            diff_text = get_proto_diff(
                repo_root,
                base,
                head,
                context_lines=cfg.diff.context_lines,
                pathspec=cfg.diff.pathspec,
            )
    except (NotARepositoryError, ReferenceNotFoundError) as exc:
        raise _fail("Git validation error", exc) from exc
    except DiffReadError as exc:
        raise _fail("Diff read error", exc) from exc
    except GitError as exc:
        raise _fail("Git error", exc) from exc

    if debug:
        console.print(f"[dim]Diff size: {len(diff_text)} bytes[/dim]")

    if dry_run:
        from protopresence.git.diff_walker import DiffWalker
        from protopresence.git.models import DiffFile

        files = [item.path for item in DiffWalker(diff_text).parse() if isinstance(item, DiffFile)]
        console.print(f"[bold]Dry run — {len(files)} files would be checked:[/bold]")
        for f in files:
            console.print(f"  {escape(f)}")
        raise typer.Exit(code=0)

    # --- Baseline ---
    try:
        baseline = Baseline.from_file(repo_root / cfg.baseline.path)
    except BaselineError as exc:
        raise _fail("Baseline error", exc) from exc

    if (verbose or debug) and len(baseline):
        console.print(f"[dim]Baseline entries: {len(baseline)}[/dim]")

    # --- Run check ---
    try:
        result = run_check(diff_text, cfg, baseline=baseline)
    except CheckError as exc:
        raise _fail("Check error", exc) from exc

    if debug:
        console.print(f"[dim]Check duration: {result.duration_ms:.0f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary)
    elif cfg.output.format == "json":
        report_text = json_report.render(result)
        print(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(result)
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal format writes the JSON report to the file
            report_text = json_report.render(result)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {escape(output)}[/dim]")

    # --- CI annotations ---
    if ci_mode and result.violations:
        _emit_ci_annotations(result, cfg)

    raise typer.Exit(code=1 if result.failed else 0)


def _escape_annotation_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_annotation_property(value: str) -> str:
    return _escape_annotation_data(value).replace(":", "%3A").replace(",", "%2C")


def _emit_ci_annotations(result, cfg) -> None:
    """Emit GitHub Actions workflow annotations, one per violation.

    Machine-readable formats own stdout, so annotations go to stderr there.
    """
    if cfg.ci.annotation_format != "github":
        return
    stream = sys.stdout if cfg.output.format == "terminal" else sys.stderr
    for v in result.violations:
        message = f"field '{v.field_name}' of type '{v.field_type}' is missing 'optional' keyword"
        print(
            f"::error file={_escape_annotation_property(v.file)},line={v.line_no}"
            f"::{_escape_annotation_data(message)}",
            file=stream,
        )
