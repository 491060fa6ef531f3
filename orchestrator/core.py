"""
SearchPipeline - search -> fetch -> summarize for a single query.

Key guarantees:
- An empty query fails with BadRequest before any provider is called
- Stages run strictly in order; any stage failure ends the run (no retries)
- links in the response is the full search result, only a prefix is summarized
- Every run owns its state; nothing is shared between requests
"""

import time
from typing import Sequence

from api.base_client import BaseContentFetcher, BaseSearchClient, BaseSummarizer
from api.bing_search_client import BingSearchClient
from api.content_fetcher import HttpContentFetcher
from api.errors import ProviderError
from api.google_gemini_client import GeminiSummarizer
from config.config import Config
from models.pipeline_response import PipelineResponse
from models.site_content import SiteContent
from orchestrator.errors import (
    BadRequest,
    FetchFailure,
    PipelineError,
    SearchFailure,
    SummarizeFailure,
)
from orchestrator.pipeline_types import PipelineRun, PipelineStage
from utils.logger import get_logger

logger = get_logger(__name__)


def truncate_contents(contents: Sequence[SiteContent], limit: int) -> list[SiteContent]:
    """First ``min(limit, len(contents))`` entries, in input order."""
    return list(contents[:limit])


class SearchPipeline:
    def __init__(
        self,
        config: Config,
        search_client: BaseSearchClient | None = None,
        fetcher: BaseContentFetcher | None = None,
        summarizer: BaseSummarizer | None = None,
    ):
        self.config = config
        self.summary_source_limit = config.SUMMARY_SOURCE_LIMIT

        self.search_client = search_client or BingSearchClient(
            api_key=config.BING_API_KEY,
            endpoint=config.BING_SEARCH_URL,
            timeout_s=config.HTTP_TIMEOUT_S,
        )
        self.fetcher = fetcher or HttpContentFetcher(
            timeout_s=config.HTTP_TIMEOUT_S,
            concurrency=config.FETCH_CONCURRENCY,
        )
        self.summarizer = summarizer or GeminiSummarizer(
            api_key=config.GEMINI_API_KEY,
            endpoint=config.gemini_generate_url,
            timeout_s=config.HTTP_TIMEOUT_S,
        )

    async def run(
        self, query: str | None, request_id: str = "unknown", trace: PipelineRun | None = None
    ) -> PipelineResponse:
        """
        Run the whole pipeline for one query.

        ``trace`` records the stages the run went through and carries the request
        id used in log lines; a fresh one is made for ``request_id`` when not given.
        Errors that are not provider failures propagate unchanged.

        Raises:
            BadRequest: query is missing or blank
            SearchFailure / FetchFailure / SummarizeFailure: a stage failed
        """
        trace = trace or PipelineRun(query=query or "", request_id=request_id)
        started = time.perf_counter()

        if not query or not query.strip():
            trace.fail()
            raise BadRequest(PipelineStage.IDLE)

        try:
            trace.advance(PipelineStage.SEARCHING)
            links = await self._search(trace, query)

            trace.advance(PipelineStage.FETCHING)
            contents = await self._fetch(trace, links)

            trace.advance(PipelineStage.SUMMARIZING)
            selected = truncate_contents(contents, self.summary_source_limit)
            summary = await self._summarize(trace, selected)
        except PipelineError as e:
            trace.fail()
            logger.error(
                "Search pipeline failed",
                extra={
                    "extra_fields": {
                        "request_id": trace.request_id,
                        "stage": e.stage.value,
                        "error_type": type(e).__name__,
                        "cause_type": type(e.cause).__name__ if e.cause else None,
                        "cause": str(e.cause) if e.cause else None,
                        "upstream_status": e.upstream_status,
                    }
                },
            )
            raise
        except Exception:
            trace.fail()
            raise

        trace.advance(PipelineStage.DONE)
        logger.info(
            "Search pipeline completed",
            extra={
                "extra_fields": {
                    "request_id": trace.request_id,
                    "link_count": len(links),
                    "fetched_count": len(contents),
                    "summarized_count": len(selected),
                    "latency_ms": int((time.perf_counter() - started) * 1000),
                }
            },
        )
        return PipelineResponse(links=links, summary=summary)

    async def _search(self, trace: PipelineRun, query: str) -> list[str]:
        try:
            return list(await self.search_client.search(query))
        except ProviderError as e:
            raise SearchFailure(trace.stage, self._describe("Failed to search", e), cause=e) from e

    async def _fetch(self, trace: PipelineRun, links: list[str]) -> list[SiteContent]:
        try:
            return list(await self.fetcher.fetch(links))
        except ProviderError as e:
            raise FetchFailure(trace.stage, cause=e) from e

    async def _summarize(self, trace: PipelineRun, contents: list[SiteContent]) -> str:
        try:
            return await self.summarizer.summarize(contents)
        except ProviderError as e:
            raise SummarizeFailure(trace.stage, cause=e) from e

    @staticmethod
    def _describe(prefix: str, error: ProviderError) -> str:
        return f"{prefix}: {error.message}" if error.message else prefix
