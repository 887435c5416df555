"""
URLs derived from a search record: cover images, the canonical work
page, author profiles and the optional Amazon search link.

None of these are fetched by the application; the browser loads the
covers and the user follows the links.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from ..config import AMAZON_SEARCH_URL, AUTHORS_URL, COVER_SIZES, COVERS_BASE_URL, OPENLIBRARY_BASE_URL
from .schemas import AuthorLink, ResultRecord


def cover_url(record: ResultRecord, size: str = "M") -> Optional[str]:
    """Cover image URL, preferring the numeric cover id over the first ISBN.

    Returns ``None`` when the record has neither, so the caller can show
    a placeholder instead.
    """
    if size not in COVER_SIZES:
        raise ValueError(f"unknown cover size {size!r}")
    if record.cover_i:
        return f"{COVERS_BASE_URL}/id/{record.cover_i}-{size}.jpg"
    if record.isbn:
        return f"{COVERS_BASE_URL}/isbn/{record.isbn[0]}-{size}.jpg"
    return None


def work_url(record: ResultRecord) -> Optional[str]:
    """Canonical Open Library page for the work, or ``None`` without a key."""
    if not record.key:
        return None
    return f"{OPENLIBRARY_BASE_URL}{record.key}"


def author_urls(record: ResultRecord) -> List[str]:
    """One profile URL per entry in ``author_key``."""
    return [f"{AUTHORS_URL}/{key}" for key in record.author_key]


def author_links(record: ResultRecord) -> List[AuthorLink]:
    """Pair each author name with the profile URL at the same position.

    Names past the end of ``author_key`` are left unlinked.
    """
    urls = author_urls(record)
    return [
        AuthorLink(name=name, url=urls[i] if i < len(urls) else None)
        for i, name in enumerate(record.author_name)
    ]


def amazon_url(record: ResultRecord) -> Optional[str]:
    """Amazon search for the title, offered only for records that list an
    Amazon id."""
    if not record.id_amazon or not record.title:
        return None
    return f"{AMAZON_SEARCH_URL}?k={quote(record.title, safe='')}"
