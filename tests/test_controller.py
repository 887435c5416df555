import asyncio

import httpx

from booksearch.catalog import openlibrary_service
from booksearch.catalog.controller import SearchController
from booksearch.catalog.openlibrary_service import RequestError, TransportError
from booksearch.catalog.schemas import FilterSet
from booksearch.catalog.state import Clear, Mount, NextPage, Submit

from conftest import make_result


class FakeFetcher:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def __call__(self, url, page=1):
        self.calls.append((url, page))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome.model_copy(update={"current_page": page})


def test_mount_runs_initial_search():
    fetcher = FakeFetcher(make_result("A", "B"))
    controller = SearchController(fetcher=fetcher)
    state = asyncio.run(controller.dispatch(Mount()))
    assert len(fetcher.calls) == 1
    assert "q=*" in fetcher.calls[0][0]
    assert state.loading is False
    assert [r.title for r in state.records] == ["A", "B"]


def test_loading_is_set_while_request_is_in_flight():
    controller = SearchController()
    observed = []

    async def fetcher(url, page=1):
        observed.append((controller.state.loading, controller.state.error))
        return make_result("A")

    controller._fetcher = fetcher
    controller.state = controller.state.model_copy(update={"error": "old"})
    state = asyncio.run(controller.dispatch(Submit(filters=FilterSet(title="dune"))))
    assert observed == [(True, None)]
    assert state.loading is False


def test_error_keeps_previous_results():
    fetcher = FakeFetcher(make_result("A", "B", total_found=2), RequestError(503))
    controller = SearchController(fetcher=fetcher)
    asyncio.run(controller.dispatch(Mount()))
    state = asyncio.run(controller.dispatch(Submit(filters=FilterSet(title="x"))))
    assert "503" in state.error
    assert [r.title for r in state.records] == ["A", "B"]
    assert state.total_found == 2
    assert state.loading is False


def test_transport_error_message_is_shown():
    controller = SearchController(fetcher=FakeFetcher(TransportError("Name or service not known")))
    state = asyncio.run(controller.dispatch(Mount()))
    assert state.error == "Name or service not known"
    assert state.loading is False


def test_unexpected_errors_end_the_attempt():
    fetcher = FakeFetcher(RuntimeError("boom"), make_result("A", total_found=1))
    controller = SearchController(fetcher=fetcher)
    state = asyncio.run(controller.dispatch(Submit(filters=FilterSet(title="x"))))
    assert state.loading is False
    assert state.error == "boom"

    state = asyncio.run(controller.dispatch(Submit(filters=FilterSet(title="y"))))
    assert state.error is None
    assert [r.title for r in state.records] == ["A"]


def test_malformed_response_body_is_reported():
    def handler(request):
        return httpx.Response(200, json={"numFound": 5, "docs": 5})

    async def fetcher(url, page=1):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await openlibrary_service.fetch_search(url, page=page, client=client)

    controller = SearchController(fetcher=fetcher)
    state = asyncio.run(controller.dispatch(Mount()))
    assert state.loading is False
    assert "docs" in state.error

    calls = []

    async def recording(url, page=1):
        calls.append(url)
        return make_result("A", total_found=30)

    controller._fetcher = recording
    state = asyncio.run(controller.dispatch(Mount()))
    assert len(calls) == 1
    assert state.can_next


def test_clear_triggers_exactly_one_wildcard_search():
    fetcher = FakeFetcher(make_result("A"))
    controller = SearchController(fetcher=fetcher)
    asyncio.run(controller.dispatch(Submit(filters=FilterSet(title="t", author="a", subject="s", isbn="1"))))
    fetcher.calls.clear()

    state = asyncio.run(controller.dispatch(Clear()))
    assert state.filters == FilterSet()
    assert state.page == 1
    assert len(fetcher.calls) == 1
    assert "q=*" in fetcher.calls[0][0]


def test_next_page_fetches_new_page():
    fetcher = FakeFetcher(make_result("A", total_found=45))
    controller = SearchController(fetcher=fetcher)
    asyncio.run(controller.dispatch(Mount()))
    state = asyncio.run(controller.dispatch(NextPage()))
    assert state.page == 2
    assert fetcher.calls[-1] == ("https://openlibrary.org/search.json?q=*&limit=20&page=2", 2)

    asyncio.run(controller.dispatch(NextPage()))
    calls = len(fetcher.calls)
    state = asyncio.run(controller.dispatch(NextPage()))
    assert state.page == 3
    assert len(fetcher.calls) == calls


def test_slow_earlier_response_does_not_overwrite_newer_one():
    async def scenario():
        gate = asyncio.Event()
        calls = []

        async def fetcher(url, page=1):
            calls.append(url)
            if len(calls) == 1:
                await gate.wait()
                return make_result("stale")
            return make_result("fresh")

        controller = SearchController(fetcher=fetcher)
        first = asyncio.create_task(controller.dispatch(Submit(filters=FilterSet(title="a"))))
        await asyncio.sleep(0)
        await controller.dispatch(Submit(filters=FilterSet(title="b")))
        gate.set()
        await first
        return controller.state

    state = asyncio.run(scenario())
    assert [r.title for r in state.records] == ["fresh"]
    assert state.filters.title == "b"
    assert state.loading is False


def test_default_fetcher_is_service(monkeypatch):
    calls = []

    async def fake(url, page=1):
        calls.append(url)
        return make_result("A")

    monkeypatch.setattr(openlibrary_service, "fetch_search", fake)
    asyncio.run(SearchController().dispatch(Mount()))
    assert len(calls) == 1
