"""FastAPI routes for the less-assets web panel."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from less_assets.errors import LessAssetsError
from less_assets.paths import normalize_separators, project_relative_path
from less_assets.web.state import AppState

router = APIRouter(prefix="/api")


# --- Request models ---

class CompileRequest(BaseModel):
    force: bool = False


def _state(request: Request) -> AppState:
    return request.app.state.less


def _entry_path(state: AppState, entry: str) -> Path:
    """Resolve *entry* under the source root; reject anything outside it."""
    root = state.config.source_root.resolve()
    resolved = (root / entry).resolve()
    if not resolved.is_relative_to(root):
        raise HTTPException(403, "Entry must be inside the LESS source root")
    if not resolved.is_file():
        raise HTTPException(404, f"Entry not found: {entry}")
    return resolved


# --- Endpoints ---

@router.get("/config")
async def get_config(request: Request):
    return _state(request).config.to_dict()


@router.post("/compile")
def compile_all(request: Request, req: CompileRequest | None = None):
    state = _state(request)
    try:
        snapshot = state.run_pass(force=bool(req and req.force))
    except LessAssetsError as e:
        raise HTTPException(500, str(e))
    return snapshot.to_dict()


@router.get("/results")
async def get_results(request: Request):
    snapshot = _state(request).last_pass
    if snapshot is None:
        return {"records": [], "summary": None}
    return {
        "records": [r.to_dict() for r in snapshot.result.log.records],
        "summary": snapshot.result.log.summary(),
        "timestamp": snapshot.timestamp,
    }


@router.get("/errors")
async def get_errors(request: Request):
    snapshot = _state(request).last_pass
    if snapshot is None:
        return {"errors": []}
    return {"errors": [e.to_dict() for e in snapshot.result.log.errors.values()]}


@router.get("/status")
def get_status(request: Request):
    state = _state(request)
    orchestrator = state.orchestrator
    entries = []
    for entry in orchestrator.find_entries():
        entries.append({
            "entry": project_relative_path(entry, state.config.source_root),
            "artifact": normalize_separators(orchestrator.artifact_path(entry)),
            "verdict": orchestrator.verdict(entry).value,
        })
    return {"entries": entries, "count": len(entries)}


@router.get("/dependencies")
def get_dependencies(request: Request, entry: str = Query(..., min_length=1)):
    state = _state(request)
    path = _entry_path(state, entry)
    try:
        resolver = state.orchestrator.oracle.resolver
    except LessAssetsError as e:
        raise HTTPException(500, str(e))

    check = resolver.check(path)
    if not check.ok:
        raise HTTPException(422, f"Dependency check failed: {check.error}")
    return {
        "entry": entry,
        "dependencies": sorted(normalize_separators(p) for p in check.dependencies),
        "count": len(check.dependencies),
    }
