# triggers.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .model import TriggerSpec

# Events a workflow may be triggered by.
# https://docs.github.com/en/actions/writing-workflows/choosing-when-your-workflow-runs/events-that-trigger-workflows
VALID_EVENTS = frozenset({
    "branch_protection_rule",
    "check_run",
    "check_suite",
    "create",
    "delete",
    "deployment",
    "deployment_status",
    "discussion",
    "discussion_comment",
    "fork",
    "gollum",
    "issue_comment",
    "issues",
    "label",
    "merge_group",
    "milestone",
    "page_build",
    "project",
    "project_card",
    "project_column",
    "public",
    "pull_request",
    "pull_request_review",
    "pull_request_review_comment",
    "pull_request_target",
    "push",
    "registry_package",
    "release",
    "repository_dispatch",
    "schedule",
    "status",
    "watch",
    "workflow_call",
    "workflow_dispatch",
    "workflow_run",
})


def is_valid_event(name: str) -> bool:
    return name in VALID_EVENTS


def normalize_triggers(on: TriggerSpec) -> List[str]:
    """
    Flatten `on` into an ordered list of distinct event names.

    Accepts the three shapes GitHub allows:
      on: push
      on: [push, pull_request]
      on: {push: {branches: [main]}, schedule: [...]}
    """
    if on is None:
        return []
    if isinstance(on, str):
        names = [on]
    elif isinstance(on, Mapping):
        names = [str(k) for k in on.keys()]
    elif isinstance(on, (list, tuple)):
        names = [str(v) for v in on if v is not None]
    else:
        names = [str(on)]

    seen = set()
    out: List[str] = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            out.append(name)
    return out


def trigger_config(on: TriggerSpec, event: str) -> Optional[Any]:
    """Per-event configuration; only the mapping form of `on` carries any."""
    if isinstance(on, Mapping):
        return on.get(event)
    return None


def has_trigger_config(on: TriggerSpec, event: str) -> bool:
    return isinstance(on, Mapping) and event in on


def schedule_entries(on: TriggerSpec) -> List[Any]:
    """The `schedule` list, e.g. [{"cron": "0 0 * * *"}]. Empty when absent."""
    entries = trigger_config(on, "schedule")
    if isinstance(entries, (list, tuple)):
        return list(entries)
    return []


def workflow_run_workflows(on: TriggerSpec) -> List[str]:
    config = trigger_config(on, "workflow_run")
    if not isinstance(config, Mapping):
        return []
    workflows = config.get("workflows")
    if isinstance(workflows, str):
        return [workflows]
    if isinstance(workflows, (list, tuple)):
        return [str(w) for w in workflows]
    return []

