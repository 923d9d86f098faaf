# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WorkflowError(Exception):
    """
    Structured error raised outside the pure core, e.g. when loading files.

    Carries enough context for clean CLI output without a traceback.
    kind: short machine-readable category, e.g. "not_found"
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)
