# yaml_io.py
"""
Reading and writing workflow YAML.

This is the boundary between markup and the pure core: markup problems
become a single "Validation failed: ..." diagnostic and an empty workflow,
so callers can keep rendering.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from .errors import WorkflowError
from .lint import lint_workflow
from .model import LintError, Workflow

VALIDATION_FAILED = "Validation failed"


class _NamedStream(io.StringIO):
    # PyYAML reports `in "<name>", line N` using the stream's name.
    def __init__(self, text: str, name: str):
        super().__init__(text)
        self.name = name


@dataclass(frozen=True)
class ParseResult:
    workflow: Workflow
    errors: List[LintError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _failed(problem: str) -> ParseResult:
    return ParseResult(
        workflow=Workflow(),
        errors=[LintError(f"{VALIDATION_FAILED}: {problem}")],
    )


def parse_workflow(text: str, filename: str = "workflow.yml") -> ParseResult:
    """Parse workflow YAML. Never raises for bad markup."""
    try:
        data = yaml.safe_load(_NamedStream(text, filename))
    except yaml.YAMLError as e:
        return _failed(str(e))

    if data is None:
        return ParseResult(workflow=Workflow())
    if not isinstance(data, dict):
        return _failed(f"{filename}: expected a mapping at the top level, got {type(data).__name__}")

    return ParseResult(workflow=Workflow.from_dict(data))


def dump_workflow(workflow: Workflow) -> str:
    """Serialize back to YAML, keeping key order. `on` is quoted so it stays a string key."""
    return yaml.safe_dump(
        workflow.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def validate_workflow_yaml(text: str, filename: str = "workflow.yml") -> List[LintError]:
    """Parse errors when the markup is broken, lint diagnostics otherwise."""
    result = parse_workflow(text, filename)
    if not result.ok:
        return result.errors
    return lint_workflow(result.workflow)


def validate_workflow(workflow: Workflow) -> List[LintError]:
    """
    Serialize a workflow, re-parse it and lint the result.

    A workflow edited in memory is checked exactly as it would be once saved.
    """
    return validate_workflow_yaml(dump_workflow(workflow))


def load_workflow(path: str | Path) -> ParseResult:
    """Read and parse a workflow file."""
    wf_path = Path(path).expanduser()
    if not wf_path.is_file():
        raise WorkflowError(
            kind="not_found",
            message=f"Workflow file not found: {wf_path}",
            details={"path": str(wf_path)},
        )
    text = wf_path.read_text(encoding="utf-8")
    return parse_workflow(text, filename=wf_path.name)
