# lint.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Union

from .dag import dependency_map, find_cycles
from .model import LintError, Workflow
from .triggers import (
    has_trigger_config,
    is_valid_event,
    normalize_triggers,
    schedule_entries,
    workflow_run_workflows,
)

Rule = Callable[[Workflow], Iterable[LintError]]

# Ordered: diagnostics come out in registration order.
RULES: List[Rule] = []

CRON_FIELDS = 5


def rule(fn: Rule) -> Rule:
    """Register a lint rule. Rules are independent and run in definition order."""
    RULES.append(fn)
    return fn


def lint_workflow(workflow: Union[Workflow, Mapping[str, Any], None]) -> List[LintError]:
    """
    Run every rule over a workflow and collect diagnostics.

    Rules never short-circuit each other: a workflow with no trigger still
    gets its jobs checked. Defects are returned as data, never raised.
    """
    wf = Workflow.coerce(workflow)
    errors: List[LintError] = []
    for check in RULES:
        errors.extend(check(wf))
    return errors


def has_errors(diagnostics: Iterable[LintError]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def count_by_severity(diagnostics: Iterable[LintError]) -> Dict[str, int]:
    counts = {"error": 0, "warning": 0}
    for d in diagnostics:
        counts[d.severity] = counts.get(d.severity, 0) + 1
    return counts


# ---------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------

@rule
def trigger_presence(wf: Workflow) -> Iterable[LintError]:
    if not normalize_triggers(wf.on):
        yield LintError("workflow must have at least one trigger", path="on")


@rule
def trigger_validity(wf: Workflow) -> Iterable[LintError]:
    # Only the mapping form has a per-event key to point at.
    keyed = isinstance(wf.on, Mapping)
    for name in normalize_triggers(wf.on):
        if not is_valid_event(name):
            yield LintError(f'Invalid trigger event: "{name}"', path=f"on.{name}" if keyed else "on")


@rule
def schedule_shape(wf: Workflow) -> Iterable[LintError]:
    for i, entry in enumerate(schedule_entries(wf.on)):
        if not isinstance(entry, Mapping) or not entry.get("cron"):
            yield LintError("schedule entry missing cron expression", path=f"on.schedule[{i}]")


@rule
def cron_syntax(wf: Workflow) -> Iterable[LintError]:
    # Field count only; ranges like "61 * * * *" are not checked.
    for i, entry in enumerate(schedule_entries(wf.on)):
        if not isinstance(entry, Mapping) or not entry.get("cron"):
            continue
        cron = str(entry["cron"])
        fields = cron.split()
        if len(fields) != CRON_FIELDS:
            yield LintError(
                f'Invalid cron expression "{cron}": expected {CRON_FIELDS} fields, got {len(fields)}',
                path=f"on.schedule[{i}].cron",
            )


@rule
def workflow_run_shape(wf: Workflow) -> Iterable[LintError]:
    if has_trigger_config(wf.on, "workflow_run") and not workflow_run_workflows(wf.on):
        yield LintError("workflow_run trigger requires workflows", path="on.workflow_run")


# ---------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------

@rule
def jobs_presence(wf: Workflow) -> Iterable[LintError]:
    if not wf.jobs:
        yield LintError("workflow must have at least one job", path="jobs")


@rule
def runs_on_presence(wf: Workflow) -> Iterable[LintError]:
    for job_id, job in wf.jobs.items():
        if not job.runs_on:
            yield LintError(f'job "{job_id}" is missing runs-on', path=f"jobs.{job_id}.runs-on")


@rule
def needs_exist(wf: Workflow) -> Iterable[LintError]:
    for job_id, job in wf.jobs.items():
        for need in job.needs:
            if need not in wf.jobs:
                yield LintError(
                    f'job "{job_id}" depends on job "{need}" which does not exist',
                    path=f"jobs.{job_id}.needs",
                )


@rule
def circular_needs(wf: Workflow) -> Iterable[LintError]:
    for cycle in find_cycles(dependency_map(wf)):
        yield LintError(
            f"Circular dependency detected: {' -> '.join(cycle)}",
            path=f"jobs.{cycle[0]}.needs",
        )


@rule
def empty_matrix(wf: Workflow) -> Iterable[LintError]:
    for job_id, job in wf.jobs.items():
        matrix = job.matrix
        if isinstance(matrix, Mapping) and not matrix:
            yield LintError(
                f'job "{job_id}" has an empty matrix',
                severity="warning",
                path=f"jobs.{job_id}.strategy.matrix",
            )


@rule
def step_run_or_uses(wf: Workflow) -> Iterable[LintError]:
    for job_id, job in wf.jobs.items():
        for i, step in enumerate(job.steps):
            path = f"jobs.{job_id}.steps[{i}]"
            has_run = step.run is not None
            has_uses = step.uses is not None
            if not has_run and not has_uses:
                yield LintError('step must have either "run" or "uses"', path=path)
            elif has_run and has_uses:
                yield LintError('step cannot have both "run" and "uses"', path=path)
