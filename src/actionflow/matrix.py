# matrix.py
from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, List, Mapping, Optional

# Keys that adjust the product instead of defining an axis.
RESERVED_KEYS = frozenset({"include", "exclude"})


# ---------------------------------------------------------------------
# Axes / combinations
# ---------------------------------------------------------------------

def matrix_axes(matrix: Any) -> Dict[str, List[Any]]:
    """
    Plain list-valued axes of a matrix, in declaration order.

    `include`/`exclude` entries and non-list values (expressions such as
    `${{ fromJson(...) }}`) are not axes and are left out.
    """
    if not isinstance(matrix, Mapping):
        return {}
    return {
        str(name): list(values)
        for name, values in matrix.items()
        if name not in RESERVED_KEYS and isinstance(values, (list, tuple))
    }


def matrix_combinations(matrix: Any) -> Optional[int]:
    """
    Size of the cartesian product over the plain axes.

    None when there is no axis at all, so "no matrix metadata" is never
    confused with a matrix that expands to zero jobs.
    """
    axes = matrix_axes(matrix)
    if not axes:
        return None
    total = 1
    for values in axes.values():
        total *= len(values)
    return total


def expand_matrix(matrix: Any) -> List[Dict[str, Any]]:
    """
    Concrete combinations, first axis varying slowest.

        expand_matrix({"os": ["ubuntu", "macos"], "node": [18, 20]})
        -> [{"os": "ubuntu", "node": 18}, {"os": "ubuntu", "node": 20}, ...]
    """
    axes = matrix_axes(matrix)
    if not axes:
        return []
    names = list(axes)
    return [dict(zip(names, combo)) for combo in product(*axes.values())]


# ---------------------------------------------------------------------
# Common variables (editor suggestions)
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class MatrixVariableOption:
    name: str
    label: str
    values: tuple


COMMON_MATRIX_VARIABLES = (
    MatrixVariableOption("node", "Node.js", ("16", "18", "20", "22")),
    MatrixVariableOption("os", "Operating system", ("ubuntu-latest", "windows-latest", "macos-latest")),
    MatrixVariableOption("python", "Python", ("3.9", "3.10", "3.11", "3.12", "3.13")),
    MatrixVariableOption("java", "Java", ("11", "17", "21")),
    MatrixVariableOption("go", "Go", ("1.21", "1.22", "1.23")),
    MatrixVariableOption("ruby", "Ruby", ("3.1", "3.2", "3.3")),
    MatrixVariableOption("dotnet", ".NET", ("6.0.x", "8.0.x")),
)

_BY_NAME = {opt.name: opt for opt in COMMON_MATRIX_VARIABLES}


def get_matrix_variable_values(name: str) -> Optional[List[str]]:
    opt = _BY_NAME.get(name)
    return list(opt.values) if opt else None


def is_common_matrix_variable(name: str) -> bool:
    return name in _BY_NAME
