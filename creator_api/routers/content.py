from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from creator_api.services.content_generator import ContentForm, export_text, generate_all

router = APIRouter(prefix="/content", tags=["content"])


@router.post("/generate")
def generate(payload: dict):
    try:
        form = ContentForm.from_payload(payload)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return generate_all(form).to_dict()


@router.post("/export", response_class=PlainTextResponse)
def export(payload: dict):
    if not payload.get("topic") and not payload.get("titles"):
        raise HTTPException(400, "No content to export")
    return PlainTextResponse(
        export_text(payload),
        headers={"Content-Disposition": 'attachment; filename="youtube-content.txt"'},
    )
