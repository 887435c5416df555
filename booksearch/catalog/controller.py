"""
Search controller: owns one ``SearchState`` and runs its side effects.

Each call to ``dispatch()`` applies the event through ``state.reduce``
and, when the transition asks for it, performs exactly one fetch. The
controller awaits that fetch before returning, so callers always get
back the state after the attempt concluded.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from . import openlibrary_service
from .schemas import SearchResultSet
from .state import Event, FetchRequest, SearchFailed, SearchState, SearchSucceeded, reduce


logger = logging.getLogger(__name__)

Fetcher = Callable[..., Awaitable[SearchResultSet]]


class SearchController:
    """Mutable holder of one browser session's search state.

    Parameters
    ----------
    fetcher : Optional[Fetcher]
        Coroutine function called as ``fetcher(url, page=page)`` and
        returning a ``SearchResultSet``. Defaults to
        ``openlibrary_service.fetch_search``.
    """

    def __init__(self, fetcher: Optional[Fetcher] = None) -> None:
        self.state = SearchState()
        self._fetcher = fetcher

    async def dispatch(self, event: Event) -> SearchState:
        """Apply ``event`` and run the fetch it triggers, if any.

        Parameters
        ----------
        event : Event
            Any of the events defined in ``state.py``.

        Returns
        -------
        SearchState
            The state after the event and, when a search was started,
            after that search concluded. A failed search never raises;
            its message is stored in ``SearchState.error``.
        """
        self.state, effect = reduce(self.state, event)
        if effect is not None:
            await self._run(effect)
        return self.state

    async def _run(self, effect: FetchRequest) -> None:
        # looked up per call so tests can monkeypatch the service
        fetch = self._fetcher or openlibrary_service.fetch_search
        try:
            result = await fetch(effect.url, page=effect.page)
        except openlibrary_service.SearchError as exc:
            logger.info("Search %s failed: %s", effect.seq, exc)
            outcome = SearchFailed(seq=effect.seq, message=str(exc))
        except Exception as exc:
            logger.exception("Search %s failed unexpectedly", effect.seq)
            outcome = SearchFailed(seq=effect.seq, message=str(exc) or exc.__class__.__name__)
        else:
            outcome = SearchSucceeded(seq=effect.seq, result=result)
        self.state, _ = reduce(self.state, outcome)
