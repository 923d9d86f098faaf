from .flow import build_flow, assign_columns
from .lint import lint_workflow, RULES
from .model import Workflow, Job, Step, Strategy, LintError, FlowNode, FlowEdge, Flow
from .yaml_io import parse_workflow, dump_workflow, validate_workflow, validate_workflow_yaml

__all__ = [
    "build_flow",
    "assign_columns",
    "lint_workflow",
    "RULES",
    "Workflow",
    "Job",
    "Step",
    "Strategy",
    "LintError",
    "FlowNode",
    "FlowEdge",
    "Flow",
    "parse_workflow",
    "dump_workflow",
    "validate_workflow",
    "validate_workflow_yaml",
]
