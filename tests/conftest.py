"""Shared workflow fixtures. All plain mappings, shaped like parsed YAML."""

import pytest


def make_job(steps=None, **fields):
    job = {"runs-on": "ubuntu-latest", "steps": steps if steps is not None else [{"run": "echo hi"}]}
    job.update(fields)
    return job


@pytest.fixture
def minimal_workflow():
    return {
        "name": "Minimal",
        "on": "push",
        "jobs": {"build": make_job()},
    }


@pytest.fixture
def needs_workflow():
    return {
        "name": "With Needs",
        "on": "push",
        "jobs": {
            "one": make_job([{"run": "echo one"}]),
            "two": make_job([{"run": "echo two"}], needs="one"),
        },
    }


@pytest.fixture
def matrix_workflow():
    return {
        "name": "Matrix",
        "on": "push",
        "jobs": {
            "build": make_job(
                strategy={"matrix": {"node": [18, 20], "os": ["ubuntu-latest", "macos-latest"]}},
            ),
        },
    }


@pytest.fixture
def cyclic_workflow():
    """a needs c, b needs a, c needs b"""
    return {
        "name": "Cycle",
        "on": "push",
        "jobs": {
            "a": make_job(needs="c"),
            "b": make_job(needs="a"),
            "c": make_job(needs="b"),
        },
    }


@pytest.fixture
def diamond_workflow():
    """lint -> (test, build) -> deploy"""
    return {
        "name": "Diamond",
        "on": ["push", "pull_request"],
        "jobs": {
            "lint": make_job(),
            "test": make_job(needs="lint"),
            "build": make_job(needs=["lint"]),
            "deploy": make_job(needs=["test", "build"]),
        },
    }


MINIMAL_YAML = """
name: Minimal
on: push
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - run: echo hello
"""


@pytest.fixture
def minimal_yaml():
    return MINIMAL_YAML
