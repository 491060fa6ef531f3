from dataclasses import dataclass


@dataclass(frozen=True)
class SiteContent:
    """Unprocessed response body of a single page fetch."""

    url: str
    content: str
