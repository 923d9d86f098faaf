# flow.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from .dag import dependency_map, topo_levels
from .matrix import matrix_combinations
from .model import (
    ADD_JOB_NODE_ID,
    TRIGGER_NODE_PREFIX,
    Flow,
    FlowEdge,
    FlowNode,
    Workflow,
)
from .triggers import normalize_triggers


def trigger_node_id(index: int) -> str:
    return f"{TRIGGER_NODE_PREFIX}{index}"


def build_flow(workflow: Union[Workflow, Mapping[str, Any], None]) -> Flow:
    """
    Convert a workflow into diagram nodes and edges.

    Nodes: one per trigger, one per job (declaration order), then the
    trailing "add job" node. Edges: trigger -> every root job, need -> job
    for each `needs` entry, every leaf job -> "add job".

    `needs` lists are read in a single pass, so unknown or cyclic
    dependencies are drawn as written; the linter reports them.
    """
    wf = Workflow.coerce(workflow)
    triggers = normalize_triggers(wf.on)

    nodes: List[FlowNode] = [
        FlowNode(id=trigger_node_id(i), type="trigger", data={"trigger": name})
        for i, name in enumerate(triggers)
    ]

    for job_id, job in wf.jobs.items():
        data: Dict[str, Any] = {"jobId": job_id, "stepCount": len(job.steps)}
        if job.strategy is not None and job.strategy.has_matrix:
            combos = matrix_combinations(job.matrix)
            if combos is not None:
                data["matrixCombinations"] = combos
        nodes.append(FlowNode(id=job_id, type="job", data=data))

    nodes.append(FlowNode(id=ADD_JOB_NODE_ID, type="add-job"))

    edges: List[FlowEdge] = []

    roots = [job_id for job_id, job in wf.jobs.items() if not job.needs]
    for i in range(len(triggers)):
        for job_id in roots:
            edges.append(FlowEdge(source=trigger_node_id(i), target=job_id))

    needed = set()
    for job_id, job in wf.jobs.items():
        for need in job.needs:
            edges.append(FlowEdge(source=need, target=job_id))
            needed.add(need)

    for job_id in wf.jobs:
        if job_id not in needed:
            edges.append(FlowEdge(source=job_id, target=ADD_JOB_NODE_ID))

    return Flow(nodes=nodes, edges=edges)


def assign_columns(workflow: Union[Workflow, Mapping[str, Any], None]) -> Dict[str, int]:
    """
    Column (rank) of every node in the diagram.

    Triggers and root jobs are column 0; a job sits one column after its
    deepest declared dependency; "add job" follows the last job column.
    Jobs stuck in a cycle share the column after the last resolved one.
    """
    wf = Workflow.coerce(workflow)
    columns: Dict[str, int] = {
        trigger_node_id(i): 0 for i, _ in enumerate(normalize_triggers(wf.on))
    }

    levels, stuck = topo_levels(dependency_map(wf))
    for rank, level in enumerate(levels):
        for job_id in level:
            columns[job_id] = rank

    next_col = len(levels)
    if stuck:
        for job_id in stuck:
            columns[job_id] = next_col
        next_col += 1

    columns[ADD_JOB_NODE_ID] = max(next_col, 1)
    return columns
