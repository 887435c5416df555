"""
The search page as a pure state machine.

``reduce(state, event)`` returns the next ``SearchState`` together with
at most one ``FetchRequest``. It performs no I/O; ``controller.py`` is
responsible for running the fetch and feeding its outcome back in as a
``SearchSucceeded`` or ``SearchFailed`` event.

Every fetch is tagged with a sequence number. Outcomes that do not
carry the latest number are dropped, so a slow response to an older
query can never overwrite the result of a newer one.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from .query import build_search_url, total_pages
from .schemas import FilterSet, ResultRecord, SearchResultSet


logger = logging.getLogger(__name__)

FilterField = Literal["title", "author", "subject", "isbn"]


class SearchState(BaseModel):
    filters: FilterSet = Field(default_factory=FilterSet)
    page: int = 1
    loading: bool = False
    error: Optional[str] = None
    records: List[ResultRecord] = Field(default_factory=list)
    total_found: int = 0
    open_record: Optional[ResultRecord] = None
    request_seq: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_found)

    @property
    def can_prev(self) -> bool:
        return not self.loading and self.page > 1

    @property
    def can_next(self) -> bool:
        return not self.loading and self.page < self.total_pages


# Events -------------------------------------------------------------------


class EditFilter(BaseModel):
    field: FilterField
    value: str = ""


class Submit(BaseModel):
    # None keeps whatever EditFilter events have already set
    filters: Optional[FilterSet] = None


class Clear(BaseModel):
    pass


class NextPage(BaseModel):
    pass


class PrevPage(BaseModel):
    pass


class GoToPage(BaseModel):
    page: int


class Mount(BaseModel):
    pass


class OpenDetail(BaseModel):
    record: ResultRecord


class CloseDetail(BaseModel):
    pass


class SearchSucceeded(BaseModel):
    seq: int
    result: SearchResultSet


class SearchFailed(BaseModel):
    seq: int
    message: str


Event = Union[
    EditFilter, Submit, Clear, NextPage, PrevPage, GoToPage, Mount,
    OpenDetail, CloseDetail, SearchSucceeded, SearchFailed,
]


class FetchRequest(BaseModel):
    """Side effect: fetch ``url`` and report back under ``seq``."""

    seq: int
    url: str
    page: int


Transition = Tuple[SearchState, Optional[FetchRequest]]


def _start_search(state: SearchState) -> Transition:
    seq = state.request_seq + 1
    effect = FetchRequest(seq=seq, url=build_search_url(state.filters, state.page), page=state.page)
    return state.model_copy(update={"loading": True, "error": None, "request_seq": seq}), effect


def _change_page(state: SearchState, target: int) -> Transition:
    if state.loading or target == state.page:
        return state, None
    if target < 1 or target > state.total_pages:
        return state, None
    return _start_search(state.model_copy(update={"page": target}))


def _is_stale(state: SearchState, seq: int) -> bool:
    if seq != state.request_seq:
        logger.debug("Dropping outcome of request %s (latest is %s)", seq, state.request_seq)
        return True
    return False


def reduce(state: SearchState, event: Event) -> Transition:
    """Apply ``event`` to ``state``."""
    if isinstance(event, EditFilter):
        filters = state.filters.model_copy(update={event.field: event.value})
        return state.model_copy(update={"filters": filters}), None

    if isinstance(event, Submit):
        filters = event.filters if event.filters is not None else state.filters
        return _start_search(state.model_copy(update={"filters": filters, "page": 1}))

    if isinstance(event, Clear):
        return _start_search(state.model_copy(update={"filters": FilterSet(), "page": 1}))

    if isinstance(event, NextPage):
        return _change_page(state, state.page + 1)

    if isinstance(event, PrevPage):
        return _change_page(state, state.page - 1)

    if isinstance(event, GoToPage):
        return _change_page(state, event.page)

    if isinstance(event, Mount):
        if state.filters.is_empty() and state.page == 1 and not state.records and not state.loading:
            return _start_search(state)
        return state, None

    if isinstance(event, OpenDetail):
        return state.model_copy(update={"open_record": event.record}), None

    if isinstance(event, CloseDetail):
        return state.model_copy(update={"open_record": None}), None

    if isinstance(event, SearchSucceeded):
        if _is_stale(state, event.seq):
            return state, None
        return state.model_copy(update={
            "loading": False,
            "records": event.result.records,
            "total_found": event.result.total_found,
            "page": event.result.current_page,
        }), None

    if isinstance(event, SearchFailed):
        if _is_stale(state, event.seq):
            return state, None
        return state.model_copy(update={"loading": False, "error": event.message}), None

    raise TypeError(f"unknown event {event!r}")
