from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

HTMX_SRC = "https://unpkg.com/htmx.org@2.0.4"

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    state = request.app.state
    return state.templates.TemplateResponse(
        request,
        "index.html",
        {"title": "Click counter", "htmx_src": HTMX_SRC, "count": state.counter.value()},
    )


@router.post("/clicked", response_class=HTMLResponse)
async def clicked(request: Request) -> HTMLResponse:
    state = request.app.state
    return state.templates.TemplateResponse(
        request,
        "_counter.html",
        {"count": state.counter.increment()},
    )
