"""Errors raised by provider clients (search, fetch, summarize)."""


class ProviderError(Exception):
    """Base class for failures talking to an external service."""

    def __init__(self, message: str, provider: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code

    def to_log_fields(self) -> dict:
        return {
            "provider": self.provider,
            "error_type": type(self).__name__,
            "upstream_status": self.status_code,
            "error": self.message,
        }


class TransportError(ProviderError):
    """Connection failure, timeout, or non-2xx status from the provider."""


class DecodeError(ProviderError):
    """Body was not JSON or did not match the provider's schema."""


class EmptyResultError(ProviderError):
    """Provider answered successfully but produced nothing usable."""
