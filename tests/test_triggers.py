"""Tests for trigger normalization."""

import pytest

from actionflow.triggers import (
    is_valid_event,
    normalize_triggers,
    schedule_entries,
    trigger_config,
    workflow_run_workflows,
)


@pytest.mark.parametrize(
    "on, expected",
    [
        ("push", ["push"]),
        (["push", "pull_request"], ["push", "pull_request"]),
        ({"push": {"branches": ["main"]}, "workflow_dispatch": None}, ["push", "workflow_dispatch"]),
        (["push", "push", "release"], ["push", "release"]),
        ({}, []),
        (None, []),
        ("", []),
    ],
)
def test_normalize_triggers(on, expected):
    assert normalize_triggers(on) == expected


def test_valid_events():
    assert is_valid_event("push")
    assert is_valid_event("workflow_run")
    assert not is_valid_event("invalid_event_xyz")


def test_schedule_entries_only_from_mapping_form():
    on = {"schedule": [{"cron": "0 0 * * *"}, {}]}
    assert schedule_entries(on) == [{"cron": "0 0 * * *"}, {}]
    assert schedule_entries("schedule") == []
    assert schedule_entries({"schedule": None}) == []


def test_trigger_config():
    on = {"push": {"branches": ["main"]}}
    assert trigger_config(on, "push") == {"branches": ["main"]}
    assert trigger_config(on, "release") is None
    assert trigger_config(["push"], "push") is None


def test_workflow_run_workflows():
    assert workflow_run_workflows({"workflow_run": {"workflows": ["CI"]}}) == ["CI"]
    assert workflow_run_workflows({"workflow_run": {"workflows": "CI"}}) == ["CI"]
    assert workflow_run_workflows({"workflow_run": {}}) == []
    assert workflow_run_workflows({"workflow_run": None}) == []
