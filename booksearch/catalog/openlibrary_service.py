"""
Open Library integration for the search interface.

A single coroutine, ``fetch_search()``, performs the one network call
the application makes: a GET against ``search.json`` with a URL built
by ``query.build_search_url()``. The JSON body is mapped into a
``SearchResultSet``; a missing ``docs`` array is an empty result set.

Failures are raised as one of two ``SearchError`` subclasses:

* ``RequestError`` for a non-success HTTP status (the status code is
  kept on the exception and appears in the message).
* ``TransportError`` for network failures and undecodable bodies.

There is no retry, no backoff and no client-side timeout; the request
resolves or fails as the transport decides.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import REQUEST_HEADERS
from .schemas import ResultRecord, SearchResultSet


logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Base class for failures of a search request."""


class RequestError(SearchError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Request failed: {status_code}")


class TransportError(SearchError):
    pass


def parse_search_response(data: Any, page: int = 1) -> SearchResultSet:
    """Map a decoded ``search.json`` body into a ``SearchResultSet``.

    Parameters
    ----------
    data : Any
        The decoded JSON body. Must be an object; ``docs`` must be a
        list when present.
    page : int
        The page the request asked for, recorded as ``current_page``.

    Returns
    -------
    SearchResultSet
        Records built from every object in ``docs`` (other entries are
        skipped) and ``numFound`` as the total, 0 when absent.

    Raises
    ------
    TransportError
        When the body does not have the shape described above.
    """
    if not isinstance(data, dict):
        raise TransportError(f"Unexpected response body: {type(data).__name__}")
    docs = data.get("docs")
    if docs is None:
        docs = []
    if not isinstance(docs, list):
        raise TransportError(f"Unexpected 'docs' in response: {type(docs).__name__}")
    try:
        records: List[ResultRecord] = [
            ResultRecord.model_validate(doc) for doc in docs if isinstance(doc, dict)
        ]
    except ValueError as exc:
        raise TransportError(f"Malformed search record: {exc}") from exc
    num_found = data.get("numFound")
    if isinstance(num_found, bool) or not isinstance(num_found, int):
        num_found = 0
    return SearchResultSet(records=records, total_found=num_found, current_page=page)


async def _get_json(client: httpx.AsyncClient, url: str) -> Dict[str, Any]:
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.error("Error fetching %s: %s", url, exc)
        raise TransportError(str(exc) or exc.__class__.__name__) from exc
    if not response.is_success:
        logger.warning(
            "Open Library request to %s returned status %s", url, response.status_code
        )
        raise RequestError(response.status_code)
    try:
        return response.json()
    except ValueError as exc:
        logger.error("Invalid JSON from %s: %s", url, exc)
        raise TransportError(str(exc)) from exc


async def fetch_search(
    url: str,
    *,
    page: int = 1,
    client: Optional[httpx.AsyncClient] = None,
) -> SearchResultSet:
    """GET ``url`` and return the parsed result set.

    Parameters
    ----------
    url : str
        Full ``search.json`` URL, as built by ``query.build_search_url()``.
    page : int
        Page number the URL asks for; copied into the result.
    client : Optional[httpx.AsyncClient]
        Used as is when given (tests pass one built on
        ``httpx.MockTransport``). Otherwise a short-lived client is
        opened for this one request.

    Returns
    -------
    SearchResultSet
        The records and total count of the response.

    Raises
    ------
    RequestError
        The endpoint answered with a non-success status.
    TransportError
        The request failed on the network or the body could not be
        decoded into a result set.
    """
    logger.info("Searching Open Library: %s", url)
    if client is not None:
        data = await _get_json(client, url)
    else:
        async with httpx.AsyncClient(headers=REQUEST_HEADERS, timeout=None) as own_client:
            data = await _get_json(own_client, url)
    return parse_search_response(data, page=page)
