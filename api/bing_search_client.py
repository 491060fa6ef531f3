"""Bing Web Search v7 client."""

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from api.base_client import BaseSearchClient
from api.errors import DecodeError, TransportError
from utils.logger import get_logger
from utils.redaction import redact_sensitive_headers

logger = get_logger(__name__)

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class BingWebPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = ""


class BingWebPages(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: list[BingWebPage] = Field(default_factory=list)


class BingSearchResponse(BaseModel):
    """The part of the Bing response envelope we read: ``webPages.value[].url``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    web_pages: BingWebPages | None = Field(default=None, alias="webPages")

    def to_links(self) -> list[str]:
        if self.web_pages is None:
            return []
        return [page.url for page in self.web_pages.value if page.url]


class BingSearchClient(BaseSearchClient):
    """
    Searches the web through the Bing Web Search API.

    A fresh HTTP client is opened for every call so nothing is shared between
    requests. ``transport`` lets tests substitute an ``httpx.MockTransport``.
    """

    provider = "bing"

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self._transport = transport

    async def search(self, query: str) -> list[str]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.get(
                    self.endpoint,
                    params={"q": query},
                    headers={SUBSCRIPTION_KEY_HEADER: self.api_key},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Bing search returned an error status",
                extra={
                    "extra_fields": {
                        "upstream_status": e.response.status_code,
                        "request_headers": redact_sensitive_headers(e.request.headers),
                        "body": e.response.text[:500],
                    }
                },
            )
            raise TransportError(
                f"Bing search returned HTTP {e.response.status_code}",
                provider=self.provider,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"Bing search request failed: {e}", provider=self.provider) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(
                "Bing search response is not valid JSON", provider=self.provider, status_code=response.status_code
            ) from e

        try:
            links = BingSearchResponse.model_validate(payload).to_links()
        except ValidationError as e:
            raise DecodeError(
                f"Bing search response has an unexpected shape: {e.error_count()} error(s)",
                provider=self.provider,
                status_code=response.status_code,
            ) from e

        logger.info(
            "Bing search completed",
            extra={"extra_fields": {"link_count": len(links), "upstream_status": response.status_code}},
        )
        return links
