from abc import ABC, abstractmethod
from typing import Sequence

from models.site_content import SiteContent


class BaseSearchClient(ABC):
    """
    Abstract base class for web search providers.
    Implementations turn a query into URLs ordered by provider relevance.
    """

    provider: str = "search"

    @abstractmethod
    async def search(self, query: str) -> list[str]:
        """
        Search the web for a query.

        Args:
            query: Non-empty search text

        Returns:
            Result URLs in rank order (may be empty)

        Raises:
            TransportError: If the provider could not be reached
            DecodeError: If the response body is not the expected JSON
        """


class BaseContentFetcher(ABC):
    """Retrieves raw page bodies for a list of URLs."""

    @abstractmethod
    async def fetch(self, urls: Sequence[str]) -> list[SiteContent]:
        """
        Fetch every URL, keeping the input order.

        Aborts on the first failing URL; nothing fetched so far is returned.
        """


class BaseSummarizer(ABC):
    """Turns fetched page contents into one summary via a generation provider."""

    provider: str = "summarizer"

    @abstractmethod
    async def summarize(self, contents: Sequence[SiteContent]) -> str:
        """
        Summarize the given contents as one text.

        An empty sequence is valid input and is still sent to the provider.
        """
