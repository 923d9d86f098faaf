# cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from actionflow import settings
from actionflow.errors import WorkflowError
from actionflow.flow import assign_columns, build_flow
from actionflow.lint import count_by_severity, lint_workflow
from actionflow.matrix import expand_matrix
from actionflow.ui.console import Console, set_console, get_console
from actionflow.yaml_io import ParseResult, load_workflow


def find_workflow_files(workflow_dir: str | Path) -> list[Path]:
    """
    Find all workflow files in a directory.

    Returns:
        Sorted list of *.yml / *.yaml paths
    """
    root = Path(workflow_dir)
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.suffix in (".yml", ".yaml") and p.is_file())


def discover_workflows(paths: tuple[str, ...], workflow_dir: str) -> list[Path]:
    """
    Resolve the files to operate on: explicit paths, or everything in workflow_dir.

    Raises:
        SystemExit: If nothing can be found
    """
    console = get_console()

    if paths:
        return [Path(p) for p in paths]

    workflow_files = find_workflow_files(workflow_dir)
    if not workflow_files:
        console.print_error(
            "No workflow file found",
            f"Could not find any workflow files in {workflow_dir}.",
            details=["Looked for:", "  *.yml", "  *.yaml"],
            suggestion="Pass a file explicitly: actionflow lint path/to/workflow.yml",
        )
        sys.exit(1)
    return workflow_files


def _load_or_exit(ctx, path: str | Path) -> ParseResult:
    console = get_console()
    try:
        result = load_workflow(path)
    except WorkflowError as e:
        console.print_error("Failed to load workflow", e.message, details=[f"{k}={v}" for k, v in e.details.items()])
        if ctx.obj.get("debug", False):
            import traceback
            traceback.print_exc()
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        console.print_error("Could not read workflow", str(path))
        console.print_exception(e)
        sys.exit(1)
    console.print_debug(f"Loaded {path}: {len(result.workflow.jobs)} job(s)")
    return result


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """actionflow: lint GitHub Actions workflows and export their job graph."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--workflow-dir",
    default=settings.WORKFLOW_DIR,
    show_default=True,
    help="Directory searched when no paths are given",
)
@click.option("--strict/--no-strict", default=settings.STRICT, help="Treat warnings as failures")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.pass_context
def lint(ctx, paths, workflow_dir, strict, output_format):
    """Lint one or more workflow files."""
    console = get_console()
    files = discover_workflows(paths, workflow_dir)

    report: dict[str, list] = {}
    totals = {"error": 0, "warning": 0}

    if output_format == "text":
        console.print_lint_started(len(files))

    for path in files:
        result = _load_or_exit(ctx, path)
        diagnostics = result.errors or lint_workflow(result.workflow)
        for severity, n in count_by_severity(diagnostics).items():
            totals[severity] = totals.get(severity, 0) + n

        if output_format == "json":
            report[str(path)] = [d.to_dict() for d in diagnostics]
        else:
            console.print_file_result(str(path), diagnostics)

    if output_format == "json":
        click.echo(json.dumps(report, indent=2))
    else:
        console.print_summary(totals)

    if totals["error"] or (strict and totals["warning"]):
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--columns/--no-columns", default=False, help="Include the column (rank) of every node")
@click.pass_context
def graph(ctx, path, columns):
    """Print the job graph of a workflow as JSON."""
    console = get_console()
    result = _load_or_exit(ctx, path)
    if not result.ok:
        console.print_file_result(str(path), result.errors)
        sys.exit(1)

    payload = build_flow(result.workflow).to_dict()
    if columns:
        payload["columns"] = assign_columns(result.workflow)
    click.echo(json.dumps(payload, indent=2))


@cli.command()
@click.argument("path", type=click.Path())
@click.pass_context
def matrix(ctx, path):
    """List the matrix combinations of every job."""
    console = get_console()
    result = _load_or_exit(ctx, path)
    if not result.ok:
        console.print_file_result(str(path), result.errors)
        sys.exit(1)

    found = False
    for job_id, job in result.workflow.jobs.items():
        if job.matrix is None:
            continue
        found = True
        console.print_matrix(job_id, expand_matrix(job.matrix))

    if not found:
        console.print_info("No job defines a matrix.")


if __name__ == "__main__":
    cli()
