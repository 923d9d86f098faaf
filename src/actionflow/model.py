# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

Severity = Literal["error", "warning"]
NodeType = Literal["trigger", "job", "add-job"]

# `on` as written: "push", ["push", "pull_request"] or {"push": {...}, ...}
TriggerSpec = Union[str, List[Any], Dict[str, Any], None]

TRIGGER_NODE_PREFIX = "__trigger__"
ADD_JOB_NODE_ID = "__add_job__"

_STEP_KEYS = ("name", "run", "uses")
_JOB_KEYS = ("runs-on", "needs", "strategy", "steps")
_WORKFLOW_KEYS = ("name", "on", "jobs")


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def normalize_needs(value: Any) -> Tuple[str, ...]:
    """`needs: build` and `needs: [build]` mean the same thing."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if v is not None)
    return (str(value),)


# ---------------------------------------------------------------------
# Workflow definition
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Step:
    """A single step inside a job: either a shell `run` or an action `uses`."""
    name: Optional[str] = None
    run: Optional[str] = None
    uses: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Step:
        data = _as_mapping(data)
        return cls(
            name=data.get("name"),
            run=data.get("run"),
            uses=data.get("uses"),
            extra={k: v for k, v in data.items() if k not in _STEP_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in _STEP_KEYS:
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class Strategy:
    """
    Job strategy block.

    `matrix` is kept as written: usually a mapping of axis -> values, but
    GitHub also allows an expression string such as `${{ fromJson(...) }}`.
    """
    matrix: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Strategy:
        data = _as_mapping(data)
        return cls(
            matrix=data.get("matrix"),
            extra={k: v for k, v in data.items() if k != "matrix"},
        )

    @property
    def has_matrix(self) -> bool:
        return self.matrix is not None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.matrix is not None:
            out["matrix"] = self.matrix
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class Job:
    """
    A workflow job: execution target, dependencies, optional matrix and steps.

    `runs_on` is None when the job does not declare one; the linter reports it.
    """
    runs_on: Union[str, List[str], None] = None
    needs: Tuple[str, ...] = ()
    strategy: Optional[Strategy] = None
    steps: Tuple[Step, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Job:
        data = _as_mapping(data)
        strategy = data.get("strategy")
        return cls(
            runs_on=data.get("runs-on"),
            needs=normalize_needs(data.get("needs")),
            strategy=Strategy.from_dict(strategy) if strategy is not None else None,
            steps=tuple(Step.from_dict(s) for s in _as_list(data.get("steps"))),
            extra={k: v for k, v in data.items() if k not in _JOB_KEYS},
        )

    @property
    def matrix(self) -> Any:
        return self.strategy.matrix if self.strategy is not None else None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.runs_on is not None:
            out["runs-on"] = self.runs_on
        if len(self.needs) == 1:
            out["needs"] = self.needs[0]
        elif self.needs:
            out["needs"] = list(self.needs)
        if self.strategy is not None:
            out["strategy"] = self.strategy.to_dict()
        out.update(self.extra)
        out["steps"] = [s.to_dict() for s in self.steps]
        return out


@dataclass(frozen=True)
class Workflow:
    """A parsed workflow: name, triggers (`on`) and jobs in declaration order."""
    name: Optional[str] = None
    on: TriggerSpec = None
    jobs: Dict[str, Job] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Workflow:
        data = _as_mapping(data)
        # YAML 1.1 loaders read a bare `on:` key as the boolean True.
        on = data["on"] if "on" in data else data.get(True)
        jobs = _as_mapping(data.get("jobs"))
        return cls(
            name=data.get("name"),
            on=on,
            jobs={str(job_id): Job.from_dict(spec) for job_id, spec in jobs.items()},
            extra={
                k: v for k, v in data.items()
                if k not in _WORKFLOW_KEYS and k is not True
            },
        )

    @classmethod
    def coerce(cls, value: Union[Workflow, Mapping[str, Any], None]) -> Workflow:
        if isinstance(value, Workflow):
            return value
        return cls.from_dict(value)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        if self.on is not None:
            out["on"] = self.on
        out.update(self.extra)
        out["jobs"] = {job_id: job.to_dict() for job_id, job in self.jobs.items()}
        return out


# ---------------------------------------------------------------------
# Derived artifacts
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class LintError:
    """A single lint diagnostic. `path` points into the workflow, e.g. `jobs.build.runs-on`."""
    message: str
    severity: Severity = "error"
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"message": self.message, "severity": self.severity}
        if self.path is not None:
            out["path"] = self.path
        return out


@dataclass(frozen=True)
class FlowNode:
    id: str
    type: NodeType
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "data": dict(self.data)}


@dataclass(frozen=True)
class FlowEdge:
    source: str
    target: str

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target}


@dataclass(frozen=True)
class Flow:
    """Diagram structure for a workflow. Positioning is left to the renderer."""
    nodes: List[FlowNode]
    edges: List[FlowEdge]

    def node(self, node_id: str) -> Optional[FlowNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
