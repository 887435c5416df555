"""
Presentation of search records.

``card_view`` and ``detail_view`` turn a ``ResultRecord`` into the
display models the templates consume, substituting placeholder text
for anything the record lacks. ``page_view`` assembles the context for
the whole page from a ``SearchState``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi.templating import Jinja2Templates

from .links import amazon_url, author_links, cover_url, work_url
from .schemas import BookCard, BookDetail, ResultRecord
from .state import SearchState


TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

PLACEHOLDER = "—"
UNKNOWN_AUTHOR = "Unknown author"
UNTITLED = "Untitled"
MAX_SUBJECTS = 8


def _or_placeholder(value: Optional[int]) -> str:
    return str(value) if value else PLACEHOLDER


def card_view(record: ResultRecord) -> BookCard:
    """Summary card for the result grid.

    Parameters
    ----------
    record : ResultRecord
        One record from the current result set.

    Returns
    -------
    BookCard
        Title, joined author names, first publish year and the medium
        cover URL, with placeholders for whatever the record lacks.
    """
    return BookCard(
        title=record.title or UNTITLED,
        authors=", ".join(record.author_name) or UNKNOWN_AUTHOR,
        year=_or_placeholder(record.first_publish_year),
        cover_url=cover_url(record, "M"),
        work_url=work_url(record),
    )


def detail_view(record: ResultRecord) -> BookDetail:
    """Everything the overlay shows: large cover, linked authors, the
    first eight subjects and the publication facts."""
    return BookDetail(
        title=record.title or UNTITLED,
        authors=author_links(record),
        subjects=record.subject[:MAX_SUBJECTS],
        first_published=_or_placeholder(record.first_publish_year),
        edition_count=_or_placeholder(record.edition_count),
        languages=", ".join(record.language) or PLACEHOLDER,
        cover_url=cover_url(record, "L"),
        work_url=work_url(record),
        amazon_url=amazon_url(record),
    )


def status_line(state: SearchState) -> str:
    if state.loading:
        return "Loading…"
    if state.error:
        return state.error
    suffix = "" if state.total_found == 1 else "s"
    return f"Showing {len(state.records)} of {state.total_found:,} result{suffix}"


def page_view(state: SearchState) -> Dict[str, Any]:
    """Template context for ``index.html``."""
    return {
        "filters": state.filters,
        "status": status_line(state),
        "is_error": bool(state.error) and not state.loading,
        "page": state.page,
        "total_pages": state.total_pages or 1,
        "can_prev": state.can_prev,
        "can_next": state.can_next,
        "cards": [card_view(record) for record in state.records],
        "show_empty": not state.loading and not state.records,
        "detail": detail_view(state.open_record) if state.open_record is not None else None,
    }
