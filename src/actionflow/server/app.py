from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from actionflow.flow import assign_columns, build_flow
from actionflow.lint import count_by_severity, lint_workflow
from actionflow.model import Workflow
from actionflow.settings import MAX_YAML_BYTES
from actionflow.yaml_io import parse_workflow

app = FastAPI(title="actionflow workflow service")

# -------------------- Schemas --------------------

class WorkflowRequest(BaseModel):
    """Either raw YAML or an already parsed workflow mapping."""
    yaml: str | None = None
    filename: str = "workflow.yml"
    workflow: dict[str, Any] | None = None

    @model_validator(mode="after")
    def one_source(self) -> WorkflowRequest:
        if (self.yaml is None) == (self.workflow is None):
            raise ValueError("provide exactly one of 'yaml' or 'workflow'")
        return self

class Diagnostic(BaseModel):
    message: str
    severity: str
    path: str | None = None

class LintResponse(BaseModel):
    errors: list[Diagnostic]
    error_count: int
    warning_count: int

class FlowNodeOut(BaseModel):
    id: str
    type: str
    data: dict[str, Any] = Field(default_factory=dict)

class FlowEdgeOut(BaseModel):
    source: str
    target: str

class FlowResponse(BaseModel):
    nodes: list[FlowNodeOut]
    edges: list[FlowEdgeOut]
    columns: dict[str, int]

# -------------------- Helpers --------------------

def _resolve(req: WorkflowRequest) -> tuple[Workflow, list[Diagnostic]]:
    if req.workflow is not None:
        return Workflow.from_dict(req.workflow), []

    if len(req.yaml.encode("utf-8")) > MAX_YAML_BYTES:
        raise HTTPException(status_code=413, detail=f"yaml exceeds {MAX_YAML_BYTES} bytes")

    result = parse_workflow(req.yaml, req.filename)
    return result.workflow, [Diagnostic(**e.to_dict()) for e in result.errors]

# -------------------- Endpoints --------------------

@app.get("/health")
async def health():
    return {"ok": True}

@app.post("/lint", response_model=LintResponse)
async def lint(req: WorkflowRequest):
    workflow, parse_errors = _resolve(req)
    if parse_errors:
        return LintResponse(errors=parse_errors, error_count=len(parse_errors), warning_count=0)

    diagnostics = lint_workflow(workflow)
    counts = count_by_severity(diagnostics)
    return LintResponse(
        errors=[Diagnostic(**d.to_dict()) for d in diagnostics],
        error_count=counts["error"],
        warning_count=counts["warning"],
    )

@app.post("/flow", response_model=FlowResponse)
async def flow(req: WorkflowRequest):
    workflow, parse_errors = _resolve(req)
    if parse_errors:
        raise HTTPException(status_code=422, detail=[e.model_dump() for e in parse_errors])

    graph = build_flow(workflow)
    return FlowResponse(
        nodes=[FlowNodeOut(**n.to_dict()) for n in graph.nodes],
        edges=[FlowEdgeOut(**e.to_dict()) for e in graph.edges],
        columns=assign_columns(workflow),
    )
