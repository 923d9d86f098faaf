# dag.py
from __future__ import annotations

from collections import deque
from typing import Dict, Iterator, List, Mapping, Sequence, Set, Tuple

from .model import Workflow

Adjacency = Mapping[str, Sequence[str]]


def dependency_map(workflow: Workflow) -> Dict[str, List[str]]:
    """
    Job -> the jobs it `needs`, in declaration order.

    References to undeclared jobs are kept; callers decide whether that matters
    (the linter reports them, the graph builder draws them).
    """
    return {job_id: list(job.needs) for job_id, job in workflow.jobs.items()}


def find_cycles(adj: Adjacency) -> List[List[str]]:
    """
    Find dependency cycles with a depth-first search.

    Each cycle is returned as a closed path, e.g. ["a", "c", "b", "a"].
    A node is "on the stack" while its subtree is being explored; an edge back
    into such a node is a cycle. Finished nodes are never re-entered, so this
    terminates on self-references and fully connected graphs alike.
    """
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []
    cycles: List[List[str]] = []
    seen_members: Set[frozenset] = set()

    def enter(node: str, stack: List[Tuple[str, Iterator[str]]]) -> None:
        visited.add(node)
        on_stack.add(node)
        path.append(node)
        stack.append((node, iter(adj.get(node, ()))))

    # Explicit stack of (node, remaining deps): long `needs` chains must not
    # hit the interpreter's recursion limit.
    for start in adj:
        if start in visited:
            continue
        stack: List[Tuple[str, Iterator[str]]] = []
        enter(start, stack)

        while stack:
            node, deps = stack[-1]
            dep = next(deps, None)
            if dep is None:
                stack.pop()
                path.pop()
                on_stack.discard(node)
                continue
            if dep not in adj:
                continue
            if dep in on_stack:
                cycle = path[path.index(dep):] + [dep]
                members = frozenset(cycle)
                if members not in seen_members:
                    seen_members.add(members)
                    cycles.append(cycle)
            elif dep not in visited:
                enter(dep, stack)

    return cycles


def topo_levels(adj: Adjacency) -> Tuple[List[List[str]], List[str]]:
    """
    Group nodes into topological "levels" (columns in the diagram).

    `adj` maps node -> dependencies. Level 0 holds nodes with no known
    dependency; every other node sits one level after its deepest dependency.
    Dependencies on unknown nodes are ignored.

    Returns (levels, stuck): nodes caught in a cycle never reach in-degree
    zero and are returned in `stuck` (declaration order) instead of raising.
    """
    indeg: Dict[str, int] = {n: 0 for n in adj}
    dependents: Dict[str, List[str]] = {n: [] for n in adj}

    for node, deps in adj.items():
        for dep in dict.fromkeys(deps):
            if dep not in indeg:
                continue
            dependents[dep].append(node)
            indeg[node] += 1

    q = deque(n for n, d in indeg.items() if d == 0)

    levels: List[List[str]] = []
    processed = 0

    while q:
        level_size = len(q)
        level: List[str] = []

        for _ in range(level_size):
            node = q.popleft()
            level.append(node)
            processed += 1

            for child in dependents[node]:
                indeg[child] -= 1
                if indeg[child] == 0:
                    q.append(child)

        levels.append(level)

    stuck: List[str] = []
    if processed != len(indeg):
        stuck = [n for n, d in indeg.items() if d > 0]

    return levels, stuck
