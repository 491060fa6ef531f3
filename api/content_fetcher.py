"""Raw page retrieval for search result URLs."""

import asyncio
from typing import Sequence

import httpx

from api.base_client import BaseContentFetcher
from api.errors import TransportError
from models.site_content import SiteContent
from utils.logger import get_logger

logger = get_logger(__name__)


class HttpContentFetcher(BaseContentFetcher):
    """
    Fetches each URL with a plain GET and keeps the body as-is.

    Fail-fast: the first URL that cannot be fetched aborts the whole call and
    nothing fetched before it is returned. HTTP status is not checked; an error
    page is still page content.

    With ``concurrency > 1`` up to that many fetches run at once. Results keep
    the input order and the first failure cancels the outstanding fetches.
    """

    provider = "fetch"

    def __init__(
        self,
        timeout_s: float = 30.0,
        concurrency: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.timeout_s = timeout_s
        self.concurrency = concurrency
        self._transport = transport

    async def fetch(self, urls: Sequence[str]) -> list[SiteContent]:
        if not urls:
            return []

        async with httpx.AsyncClient(
            timeout=self.timeout_s, transport=self._transport, follow_redirects=True
        ) as client:
            if self.concurrency == 1:
                contents = [await self._fetch_one(client, url) for url in urls]
            else:
                contents = await self._fetch_bounded(client, urls)

        logger.info(
            "Fetched site contents",
            extra={"extra_fields": {"url_count": len(urls), "concurrency": self.concurrency}},
        )
        return contents

    async def _fetch_bounded(self, client: httpx.AsyncClient, urls: Sequence[str]) -> list[SiteContent]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch_limited(url: str) -> SiteContent:
            async with semaphore:
                return await self._fetch_one(client, url)

        tasks = [asyncio.create_task(fetch_limited(url)) for url in urls]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _fetch_one(self, client: httpx.AsyncClient, url: str) -> SiteContent:
        try:
            response = await client.get(url)
            body = response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                "Site fetch failed",
                extra={"extra_fields": {"url": url, "error": str(e), "error_type": type(e).__name__}},
            )
            raise TransportError(f"Failed to fetch {url}: {e}", provider=self.provider) from e

        logger.debug(
            "Fetched site",
            extra={"extra_fields": {"url": url, "upstream_status": response.status_code, "bytes": len(response.content)}},
        )
        return SiteContent(url=url, content=body)
