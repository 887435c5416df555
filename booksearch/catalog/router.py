"""
Route definitions for the search interface.

HTML endpoints (one ``SearchController`` per browser session):
- GET  /                 : mount; runs the initial search when nothing is loaded
- POST /search           : submit the filter form
- POST /clear            : reset the filters and search again
- POST /page/next        : next page
- POST /page/prev        : previous page
- POST /records/{index}  : open the detail overlay for a held record
- POST /detail/close     : close the overlay

JSON endpoints under /api:
- GET  /search           : stateless search, one page of cards
- GET  /session          : the caller's current search state
"""

from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from ..config import PAGE_CAP, PAGE_SIZE, SESSION_COOKIE
from . import openlibrary_service
from .controller import SearchController
from .query import build_search_url, total_pages
from .render import card_view, page_view, templates
from .schemas import FilterSet, SearchPage
from .state import (
    Clear, CloseDetail, Event, Mount, NextPage, OpenDetail, PrevPage,
    SearchState, Submit,
)
from .store import sessions


ui_router = APIRouter(tags=["ui"])
api_router = APIRouter(prefix="/api", tags=["api"])


def _session(request: Request) -> Tuple[str, SearchController]:
    return sessions.get_or_create(request.cookies.get(SESSION_COOKIE))


def _render(request: Request, session_id: str, controller: SearchController) -> HTMLResponse:
    response = templates.TemplateResponse(request, "index.html", page_view(controller.state))
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


async def _dispatch_and_render(request: Request, event: Event) -> HTMLResponse:
    session_id, controller = _session(request)
    await controller.dispatch(event)
    return _render(request, session_id, controller)


@ui_router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return await _dispatch_and_render(request, Mount())


@ui_router.post("/search", response_class=HTMLResponse)
async def submit_search(
    request: Request,
    title: str = Form(default=""),
    author: str = Form(default=""),
    subject: str = Form(default=""),
    isbn: str = Form(default=""),
):
    filters = FilterSet(title=title, author=author, subject=subject, isbn=isbn)
    return await _dispatch_and_render(request, Submit(filters=filters))


@ui_router.post("/clear", response_class=HTMLResponse)
async def clear_search(request: Request):
    return await _dispatch_and_render(request, Clear())


@ui_router.post("/page/next", response_class=HTMLResponse)
async def next_page(request: Request):
    return await _dispatch_and_render(request, NextPage())


@ui_router.post("/page/prev", response_class=HTMLResponse)
async def prev_page(request: Request):
    return await _dispatch_and_render(request, PrevPage())


@ui_router.post("/records/{index}", response_class=HTMLResponse)
async def open_record(request: Request, index: int):
    session_id, controller = _session(request)
    records = controller.state.records
    if index < 0 or index >= len(records):
        raise HTTPException(status_code=404, detail="Record not found")
    await controller.dispatch(OpenDetail(record=records[index]))
    return _render(request, session_id, controller)


@ui_router.post("/detail/close", response_class=HTMLResponse)
async def close_detail(request: Request):
    return await _dispatch_and_render(request, CloseDetail())


@api_router.get("/search", response_model=SearchPage)
async def api_search(
    title: Optional[str] = Query(default=None, description="Title words"),
    author: Optional[str] = Query(default=None, description="Author name"),
    subject: Optional[str] = Query(default=None, description="Subject"),
    isbn: Optional[str] = Query(default=None, description="ISBN"),
    page: int = Query(default=1, ge=1, le=PAGE_CAP, description="Page (1-indexed)"),
) -> SearchPage:
    filters = FilterSet(title=title, author=author, subject=subject, isbn=isbn)
    url = build_search_url(filters, page)
    try:
        result = await openlibrary_service.fetch_search(url, page=page)
    except openlibrary_service.SearchError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return SearchPage(
        url=url,
        page=page,
        page_size=PAGE_SIZE,
        total_found=result.total_found,
        total_pages=total_pages(result.total_found),
        items=[card_view(record) for record in result.records],
    )


@api_router.get("/session", response_model=SearchState)
def api_session(request: Request) -> SearchState:
    _, controller = _session(request)
    return controller.state
