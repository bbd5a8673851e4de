from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from creator_api.services.history_service import HistoryStore
from creator_api.services.history_view import HistoryProjection

router = APIRouter(prefix="/history", tags=["history"])

SAVE_ERROR_STATUS = {
    "not_ready": 503,
    "capacity_exceeded": 409,
    "backend_failure": 502,
    "serialization_failure": 507,
}


def _get_history_store(request: Request) -> HistoryStore:
    store = getattr(getattr(request.app, "state", None), "history_store", None)
    if not store:
        raise RuntimeError("HistoryStore not configured")
    return store


def _get_projection(request: Request) -> HistoryProjection:
    view = getattr(getattr(request.app, "state", None), "history_view", None)
    if not view:
        raise RuntimeError("HistoryProjection not configured")
    return view


def _get_templates(request: Request) -> Jinja2Templates:
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


@router.get("")
def history_list(request: Request):
    store = _get_history_store(request)
    return {
        "mode": store.mode.value if store.mode else None,
        "ready": store.is_ready,
        "limit": store.limit,
        "records": store.current_list(),
    }


@router.post("")
async def history_save(payload: dict, request: Request):
    if not payload:
        raise HTTPException(400, "No content to save")
    store = _get_history_store(request)
    result = await store.save(payload)
    if not result.ok:
        status = SAVE_ERROR_STATUS.get(result.error or "", 500)
        return JSONResponse({"error": result.error, "message": result.message}, status_code=status)
    return JSONResponse({"record": result.record, "message": result.message}, status_code=201)


@router.get("/page", response_class=HTMLResponse)
def history_page(request: Request):
    view = _get_projection(request)
    templates = _get_templates(request)
    return templates.TemplateResponse(
        request,
        "history.html",
        {"cards": view.cards, "empty": view.is_empty},
    )


@router.get("/{backend_id}")
def history_detail(backend_id: str, request: Request):
    detail = _get_projection(request).detail(backend_id)
    if not detail:
        raise HTTPException(404, "Record not found")
    return asdict(detail)
