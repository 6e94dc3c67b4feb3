from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .actions import PipelineResult, run_pipeline
from .collect import collect_evidence
from .config import ConfigError
from .errors import AccessError
from .export import SEVERITY_MARKS, SerializedPlan, format_github_output
from .io_utils import append_text, write_json_atomic, write_text_atomic


app = typer.Typer(
    add_completion=False,
    help="Resolve a static-site deployment plan from a project's files",
    invoke_without_command=True,
    no_args_is_help=True,
)

console = Console(stderr=False)
err_console = Console(stderr=True)

SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "cyan"}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", help="Print version and exit", is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)
    _setup_logging(verbose)


def _run(target: Path, separator: str | None = None, strict: bool | None = None) -> PipelineResult:
    try:
        return run_pipeline(target, separator=separator, strict=strict)
    except (AccessError, ConfigError) as e:
        err_console.print(f"ERROR: {escape(str(e))}")
        raise typer.Exit(code=2)


def _check_format(format: str) -> None:
    if format not in ("text", "json"):
        raise typer.BadParameter("expected text|json", param_hint="--format")


def _print_variables(res: PipelineResult) -> None:
    table = Table(title="deployment plan")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for k, v in res.serialized.variables.items():
        table.add_row(k, escape(v) if v else "-")
    console.print(table)


def _print_report(target: Path, res: PipelineResult) -> None:
    ser: SerializedPlan = res.serialized
    ev = res.evidence
    console.print(f"project: {target.resolve()}")
    if ev.manifest_name or ev.manifest_version:
        console.print(f"package: {escape(ev.manifest_name or '-')} {escape(ev.manifest_version or '')}".rstrip())
    if ev.cname_domain:
        console.print(f"custom domain: {escape(ev.cname_domain)}")
    console.print(f"package manager: {res.plan.package_manager} ({res.plan.confidence})")

    for severity, items in ser.grouped().items():
        if not items:
            continue
        style = SEVERITY_STYLES[severity]
        console.print(f"\n[bold {style}]{severity.upper()} ({len(items)})[/]")
        for code, message in items:
            console.print(f"  [{style}]{SEVERITY_MARKS[severity]}[/] {escape(f'[{code}]')} {escape(message)}")

    console.print("\n" + "━" * 40)
    style = "green" if ser.passed else "red"
    console.print(f"[bold {style}]{'PASS' if ser.passed else 'FAIL'}[/]: {ser.summary()}")


@app.command()
def plan(
    target: Path = typer.Argument(Path("."), file_okay=False, dir_okay=True),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    separator: str | None = typer.Option(
        None, "--separator", help="cache_paths separator: newline|comma"
    ),
    github_output: Path | None = typer.Option(
        None,
        "--github-output",
        envvar="GITHUB_OUTPUT",
        help="Append plan variables to this file (GitHub Actions step outputs)",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the JSON payload to this file"
    ),
    check: bool = typer.Option(
        False, "--check", help="Exit non-zero when the report fails"
    ),
):
    """Resolve the deployment plan and print its variables."""
    _check_format(format)
    if separator is not None and separator not in ("newline", "comma"):
        raise typer.BadParameter("expected newline|comma", param_hint="--separator")
    res = _run(target, separator=separator)
    ser = res.serialized

    if format == "json":
        sys.stdout.write(json.dumps(ser.to_json(), indent=2) + "\n")
    else:
        _print_variables(res)
        console.print(ser.summary())

    if output is not None:
        write_json_atomic(output, ser.to_json())
    if github_output is not None:
        append_text(github_output, format_github_output(ser.variables))

    if check and not ser.passed:
        raise typer.Exit(code=1)


def _check(target: Path, format: str, strict: bool, report: Path | None) -> None:
    _check_format(format)
    res = _run(target, strict=True if strict else None)
    if report is not None:
        write_text_atomic(report, res.serialized.render_report())
    if format == "json":
        sys.stdout.write(json.dumps(res.serialized.to_json(), indent=2) + "\n")
    else:
        _print_report(target, res)
    raise typer.Exit(code=0 if res.serialized.passed else 1)


@app.command(name="check")
def check_cmd(
    target: Path = typer.Argument(Path("."), file_okay=False, dir_okay=True),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as failures (overrides .pagesplan.json)"
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Also write the plain-text report to this file"
    ),
):
    """Validate that a project is ready to deploy. Non-zero exit code on errors."""
    _check(target, format, strict, report)


@app.command()
def doctor(
    target: Path = typer.Argument(Path("."), file_okay=False, dir_okay=True),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as failures (overrides .pagesplan.json)"
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Also write the plain-text report to this file"
    ),
):
    """Alias for check."""
    _check(target, format, strict, report)


@app.command()
def detect(
    target: Path = typer.Argument(Path("."), file_okay=False, dir_okay=True),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
):
    """Print the evidence read from the project root."""
    _check_format(format)
    try:
        ev = collect_evidence(target)
    except AccessError as e:
        err_console.print(f"ERROR: {escape(str(e))}")
        raise typer.Exit(code=2)

    if format == "json":
        sys.stdout.write(json.dumps(ev.to_json(), indent=2) + "\n")
        raise typer.Exit(code=0)

    console.print(f"lockfiles: {', '.join(sorted(ev.lock_files_present)) or '(none)'}")
    console.print(f"packageManager: {escape(ev.package_manager_field or '(not set)')}")
    console.print(f"yarn berry markers: {'yes' if ev.yarn_berry_markers_present else 'no'}")
    console.print(f"framework configs: {', '.join(sorted(ev.framework_config_files)) or '(none)'}")
    console.print(f"output dirs: {', '.join(sorted(ev.output_dirs_present)) or '(none)'}")
    console.print(f"workflows: {ev.workflow_files_present}")
    if ev.sources:
        console.print("evidence:")
        for s in ev.sources:
            console.print(f"- {escape(s)}")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="pagesplan")


if __name__ == "__main__":
    main(sys.argv[1:])
