"""Tests for the lint rules."""

from actionflow.lint import RULES, count_by_severity, has_errors, lint_workflow
from actionflow.model import Workflow

from conftest import make_job


def messages(errors):
    return [e.message for e in errors]


def test_valid_workflow_has_no_errors(minimal_workflow):
    assert lint_workflow(minimal_workflow) == []


def test_accepts_workflow_objects(minimal_workflow):
    assert lint_workflow(Workflow.from_dict(minimal_workflow)) == []


def test_no_trigger():
    errors = lint_workflow({"on": {}, "jobs": {"build": make_job()}})
    assert any("at least one trigger" in m for m in messages(errors))
    assert errors[0].path == "on"


def test_missing_on_key():
    errors = lint_workflow({"jobs": {"build": make_job()}})
    assert messages(errors) == ["workflow must have at least one trigger"]


def test_invalid_trigger_event():
    errors = lint_workflow({"on": "invalid_event_xyz", "jobs": {"build": make_job()}})
    assert messages(errors) == ['Invalid trigger event: "invalid_event_xyz"']
    assert errors[0].path == "on"


def test_invalid_trigger_event_path_in_mapping_form():
    errors = lint_workflow({"on": {"push": None, "bogus": {}}, "jobs": {"build": make_job()}})
    assert messages(errors) == ['Invalid trigger event: "bogus"']
    assert errors[0].path == "on.bogus"


def test_invalid_trigger_event_path_in_list_form():
    errors = lint_workflow({"on": ["push", "bogus"], "jobs": {"build": make_job()}})
    assert [e.path for e in errors] == ["on"]


def test_schedule_without_cron():
    errors = lint_workflow({"on": {"schedule": [{}]}, "jobs": {"build": make_job()}})
    assert messages(errors) == ["schedule entry missing cron expression"]
    assert errors[0].path == "on.schedule[0]"


def test_invalid_cron_field_count():
    errors = lint_workflow({"on": {"schedule": [{"cron": "not-five-parts"}]}, "jobs": {"build": make_job()}})
    assert len(errors) == 1
    assert errors[0].message.startswith("Invalid cron expression")
    assert errors[0].path == "on.schedule[0].cron"


def test_valid_cron():
    wf = {"on": {"schedule": [{"cron": "30 5 * * 1-5"}]}, "jobs": {"build": make_job()}}
    assert lint_workflow(wf) == []


def test_workflow_run_requires_workflows():
    errors = lint_workflow({"on": {"workflow_run": {}}, "jobs": {"build": make_job()}})
    assert messages(errors) == ["workflow_run trigger requires workflows"]

    ok = {"on": {"workflow_run": {"workflows": ["CI"], "types": ["completed"]}}, "jobs": {"build": make_job()}}
    assert lint_workflow(ok) == []


def test_no_jobs():
    errors = lint_workflow({"name": "No jobs", "on": "push", "jobs": {}})
    assert messages(errors) == ["workflow must have at least one job"]


def test_missing_runs_on():
    errors = lint_workflow({"on": "push", "jobs": {"build": {"steps": [{"run": "echo hi"}]}}})
    assert len(errors) == 1
    assert "runs-on" in errors[0].message
    assert errors[0].path == "jobs.build.runs-on"


def test_needs_non_existent_job():
    errors = lint_workflow({"on": "push", "jobs": {"two": make_job(needs="one")}})
    assert messages(errors) == ['job "two" depends on job "one" which does not exist']
    assert errors[0].path == "jobs.two.needs"


def test_circular_dependency(cyclic_workflow):
    errors = lint_workflow(cyclic_workflow)
    assert messages(errors) == ["Circular dependency detected: a -> c -> b -> a"]
    assert errors[0].path == "jobs.a.needs"


def test_self_dependency():
    errors = lint_workflow({"on": "push", "jobs": {"a": make_job(needs="a")}})
    assert messages(errors) == ["Circular dependency detected: a -> a"]


def test_empty_matrix_is_a_warning():
    errors = lint_workflow({"on": "push", "jobs": {"build": make_job(strategy={"matrix": {}})}})
    assert len(errors) == 1
    assert "empty matrix" in errors[0].message
    assert errors[0].severity == "warning"
    assert errors[0].path == "jobs.build.strategy.matrix"


def test_matrix_expression_is_not_empty():
    job = make_job(strategy={"matrix": "${{ fromJson(needs.setup.outputs.matrix) }}"})
    assert lint_workflow({"on": "push", "jobs": {"build": job}}) == []


def test_step_with_neither_run_nor_uses():
    errors = lint_workflow({"on": "push", "jobs": {"build": make_job([{"name": "No run"}])}})
    assert messages(errors) == ['step must have either "run" or "uses"']
    assert errors[0].path == "jobs.build.steps[0]"


def test_step_with_both_run_and_uses():
    steps = [{"uses": "actions/checkout@v4"}, {"run": "echo hi", "uses": "actions/checkout@v4"}]
    errors = lint_workflow({"on": "push", "jobs": {"build": make_job(steps)}})
    assert messages(errors) == ['step cannot have both "run" and "uses"']
    assert errors[0].path == "jobs.build.steps[1]"


def test_errors_accumulate_in_rule_order():
    wf = {
        "on": {"bogus": None, "schedule": [{"cron": "* *"}]},
        "jobs": {
            "b": {"needs": "missing", "steps": [{}]},
            "a": make_job(strategy={"matrix": {}}),
        },
    }
    errors = lint_workflow(wf)
    assert messages(errors) == [
        'Invalid trigger event: "bogus"',
        'Invalid cron expression "* *": expected 5 fields, got 2',
        'job "b" is missing runs-on',
        'job "b" depends on job "missing" which does not exist',
        'job "a" has an empty matrix',
        'step must have either "run" or "uses"',
    ]


def test_lint_is_deterministic(cyclic_workflow, diamond_workflow):
    for wf in (cyclic_workflow, diamond_workflow):
        assert lint_workflow(wf) == lint_workflow(wf)


def test_lint_does_not_mutate_input(cyclic_workflow):
    import copy

    before = copy.deepcopy(cyclic_workflow)
    lint_workflow(cyclic_workflow)
    assert cyclic_workflow == before


def test_rules_are_independently_callable():
    wf = Workflow.from_dict({"on": "push", "jobs": {}})
    by_name = {r.__name__: r for r in RULES}
    assert list(by_name["trigger_presence"](wf)) == []
    assert len(list(by_name["jobs_presence"](wf))) == 1


def test_severity_helpers():
    errors = lint_workflow({"on": "push", "jobs": {"build": make_job(strategy={"matrix": {}})}})
    assert not has_errors(errors)
    assert count_by_severity(errors) == {"error": 0, "warning": 1}


def test_long_needs_chain_lints_clean():
    jobs = {}
    for i in reversed(range(2000)):
        jobs[f"j{i}"] = make_job(needs=f"j{i - 1}") if i else make_job()
    assert lint_workflow({"on": "push", "jobs": jobs}) == []
