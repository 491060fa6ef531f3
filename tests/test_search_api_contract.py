"""
Test Suite: HTTP contract of the search service

A SearchPipeline built from in-memory fakes is injected through FastAPI
dependency overrides, so these tests never call Bing, Gemini or any page.

Covered:
- GET / welcome text and GET /health
- GET /search success body shape ({"links", "summary"})
- 400 plain-text error for a missing or empty query
- 500 plain-text errors naming the failing stage, never a partial result
- Internal errors fall through to the default 500 without leaking details
- X-Request-ID propagation
"""

import pytest
from fastapi.testclient import TestClient

from api.errors import EmptyResultError, TransportError
from fakes import FakeFetcher, FakeSearchClient, FakeSummarizer
from models.pipeline_response import PipelineResponse
from orchestrator.core import SearchPipeline
from server import dependencies as deps
from server.app import create_app
from server.schemas.responses import SearchResponseDTO

LINKS = ["https://a.example", "https://b.example", "https://c.example"]
PAGES = {"https://a.example": "A", "https://b.example": "B", "https://c.example": "C"}


class PipelineSpy:
    """Builds a fresh fake-backed pipeline per request and remembers the fakes."""

    def __init__(self, config, search=None, fetcher=None, summarizer=None):
        self.config = config
        self.search = search or FakeSearchClient(LINKS)
        self.fetcher = fetcher or FakeFetcher(PAGES)
        self.summarizer = summarizer or FakeSummarizer("summary-of-A-B")
        self.built = 0

    def __call__(self) -> SearchPipeline:
        self.built += 1
        return SearchPipeline(
            self.config, search_client=self.search, fetcher=self.fetcher, summarizer=self.summarizer
        )


@pytest.fixture()
def make_client(config):
    created = []

    def factory(raise_server_exceptions=True, **fakes):
        app = create_app()
        if hasattr(deps.get_config, "_instance"):
            delattr(deps.get_config, "_instance")
        spy = PipelineSpy(config, **fakes)
        app.dependency_overrides[deps.get_pipeline] = spy
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        created.append(client)
        return client, spy

    yield factory

    for client in created:
        client.close()


def test_home_returns_welcome_text(make_client):
    client, _ = make_client()

    r = client.get("/")

    assert r.status_code == 200
    assert r.text == "Welcome to 2e100"
    assert r.headers["content-type"].startswith("text/plain")


def test_health_ok(make_client):
    client, _ = make_client()

    r = client.get("/health")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["status"] == "healthy"


def test_search_scenario_returns_links_and_summary(make_client):
    client, spy = make_client()

    r = client.get("/search", params={"query": "rust ownership"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {
        "links": ["https://a.example", "https://b.example", "https://c.example"],
        "summary": "summary-of-A-B",
    }
    assert spy.search.calls == ["rust ownership"]
    assert [c.content for c in spy.summarizer.calls[0]] == ["A", "B"]


@pytest.mark.parametrize("params", [{}, {"query": ""}])
def test_missing_query_is_400_plain_text(make_client, params):
    client, spy = make_client()

    r = client.get("/search", params=params)

    assert r.status_code == 400
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "Query parameter 'query' is missing"
    assert spy.search.calls == []


@pytest.mark.parametrize(
    "fakes, expected_text",
    [
        (
            {"search": FakeSearchClient(error=TransportError("Bing search returned HTTP 403", provider="bing", status_code=403))},
            "Failed to search: Bing search returned HTTP 403",
        ),
        ({"fetcher": FakeFetcher(PAGES, fail_on=["https://b.example"])}, "Failed to fetch site contents"),
        (
            {"summarizer": FakeSummarizer(error=EmptyResultError("no summary returned from the API", provider="gemini"))},
            "Failed to summarize content",
        ),
    ],
)
def test_stage_failures_are_500_plain_text(make_client, fakes, expected_text):
    client, _ = make_client(**fakes)

    r = client.get("/search", params={"query": "rust ownership"})

    assert r.status_code == 500
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == expected_text
    assert "links" not in r.text


def test_internal_error_is_not_reported_as_search_failure(make_client):
    broken = FakeSearchClient(error=AttributeError("'NoneType' object has no attribute 'internal_secret'"))
    client, _ = make_client(raise_server_exceptions=False, search=broken)

    r = client.get("/search", params={"query": "rust ownership"})

    assert r.status_code == 500
    assert not r.text.startswith("Failed to search")
    assert "internal_secret" not in r.text


def test_each_request_gets_its_own_pipeline(make_client):
    client, spy = make_client()

    client.get("/search", params={"query": "one"})
    client.get("/search", params={"query": "two"})

    assert spy.built == 2
    assert spy.search.calls == ["one", "two"]


def test_request_id_is_echoed(make_client):
    client, _ = make_client()

    r = client.get("/search", params={"query": "q"}, headers={"X-Request-ID": "req_test_123"})

    assert r.headers["X-Request-ID"] == "req_test_123"


def test_request_id_is_generated_when_absent(make_client):
    client, _ = make_client()

    r = client.get("/")

    assert r.headers["X-Request-ID"].startswith("req_")


def test_response_dto_json_round_trip():
    original = PipelineResponse(links=LINKS, summary="summary-of-A-B")

    dto = SearchResponseDTO.from_pipeline_response(original)
    parsed = SearchResponseDTO.model_validate_json(dto.model_dump_json())

    assert parsed == dto
    assert PipelineResponse.from_dict(parsed.model_dump()) == original
