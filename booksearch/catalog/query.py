"""
Query construction and pagination bounds for the search endpoint.

Open Library treats page 1 as the default, so the ``page`` parameter
is only sent for later pages. When no filter is filled in, a wildcard
``q=*`` is sent so that an empty search still returns something.
"""

from __future__ import annotations

import math
from typing import List, Tuple
from urllib.parse import urlencode

from ..config import PAGE_CAP, PAGE_SIZE, SEARCH_URL
from .schemas import FILTER_FIELDS, FilterSet


def search_params(filters: FilterSet, page: int = 1) -> List[Tuple[str, str]]:
    """Return the ordered query parameters for ``filters`` at ``page``."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    params: List[Tuple[str, str]] = []
    for name in FILTER_FIELDS:
        value = getattr(filters, name).strip()
        if value:
            params.append((name, value))
    if not params:
        params.append(("q", "*"))
    params.append(("limit", str(PAGE_SIZE)))
    if page > 1:
        params.append(("page", str(page)))
    return params


def build_search_url(filters: FilterSet, page: int = 1) -> str:
    """Build the full ``search.json`` URL.

    >>> build_search_url(FilterSet(title=" clean code ", author="martin"))
    'https://openlibrary.org/search.json?title=clean+code&author=martin&limit=20'
    """
    # keep "*" literal so the wildcard reads as q=* on the wire
    return f"{SEARCH_URL}?{urlencode(search_params(filters, page), safe='*')}"


def total_pages(total_found: int) -> int:
    """Number of reachable pages: ``min(PAGE_CAP, ceil(total_found / PAGE_SIZE))``."""
    if total_found <= 0:
        return 0
    return min(PAGE_CAP, math.ceil(total_found / PAGE_SIZE))
