from __future__ import annotations
import os


def _flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


WORKFLOW_DIR = os.environ.get("ACTIONFLOW_WORKFLOW_DIR", ".github/workflows")
STRICT = _flag("ACTIONFLOW_STRICT")
MAX_YAML_BYTES = int(os.environ.get("ACTIONFLOW_MAX_YAML_BYTES", str(1024 * 1024)))
