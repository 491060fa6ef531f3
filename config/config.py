import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BING_SEARCH_URL = "https://api.bing.microsoft.com/v7.0/search"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-pro"
DEFAULT_SUMMARY_SOURCE_LIMIT = 2
DEFAULT_FETCH_CONCURRENCY = 1
DEFAULT_HTTP_TIMEOUT_S = 30.0


def _int_setting(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


def _float_setting(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


class Config:
    """
    Process-wide settings for the search pipeline.

    Explicit constructor arguments win over environment variables. The object is
    built once at startup and passed to the pipeline; tests build their own with
    substitute keys and endpoints. Settings are read-only once constructed.
    """

    def __init__(
        self,
        bing_api_key: str | None = None,
        gemini_api_key: str | None = None,
        *,
        bing_search_url: str | None = None,
        gemini_base_url: str | None = None,
        gemini_model: str | None = None,
        summary_source_limit: int | None = None,
        fetch_concurrency: int | None = None,
        http_timeout_s: float | None = None,
        load_env_file: bool = True,
    ):
        if load_env_file:
            env_path = Path(__file__).parent.parent / ".env"
            if env_path.exists():
                load_dotenv(dotenv_path=env_path)

        # API credentials
        self.BING_API_KEY = bing_api_key if bing_api_key is not None else os.getenv("BING_API_KEY", "")
        self.GEMINI_API_KEY = gemini_api_key if gemini_api_key is not None else os.getenv("GEMINI_API_KEY", "")

        # Provider endpoints
        self.BING_SEARCH_URL = bing_search_url or os.getenv("BING_SEARCH_URL", DEFAULT_BING_SEARCH_URL)
        self.GEMINI_BASE_URL = (gemini_base_url or os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL)).rstrip("/")
        self.GEMINI_MODEL = gemini_model or os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)

        # Pipeline behaviour
        self.SUMMARY_SOURCE_LIMIT = _int_setting(
            summary_source_limit
            if summary_source_limit is not None
            else os.getenv("SUMMARY_SOURCE_LIMIT", DEFAULT_SUMMARY_SOURCE_LIMIT),
            "SUMMARY_SOURCE_LIMIT",
        )
        self.FETCH_CONCURRENCY = _int_setting(
            fetch_concurrency
            if fetch_concurrency is not None
            else os.getenv("FETCH_CONCURRENCY", DEFAULT_FETCH_CONCURRENCY),
            "FETCH_CONCURRENCY",
        )
        self.HTTP_TIMEOUT_S = _float_setting(
            http_timeout_s if http_timeout_s is not None else os.getenv("HTTP_TIMEOUT_S", DEFAULT_HTTP_TIMEOUT_S),
            "HTTP_TIMEOUT_S",
        )

        if self.SUMMARY_SOURCE_LIMIT < 0:
            raise ValueError("SUMMARY_SOURCE_LIMIT must be >= 0")
        if self.FETCH_CONCURRENCY < 1:
            raise ValueError("FETCH_CONCURRENCY must be >= 1")
        if self.HTTP_TIMEOUT_S <= 0:
            raise ValueError("HTTP_TIMEOUT_S must be > 0")

        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Config is read-only, cannot set {name}")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Config is read-only, cannot delete {name}")
        super().__delattr__(name)

    @property
    def gemini_generate_url(self) -> str:
        """generateContent endpoint for the configured model (without the key)."""
        return f"{self.GEMINI_BASE_URL}/models/{self.GEMINI_MODEL}:generateContent"

    def missing_credentials(self) -> list[str]:
        """Names of credentials that are not set."""
        missing = []
        if not self.BING_API_KEY:
            missing.append("BING_API_KEY")
        if not self.GEMINI_API_KEY:
            missing.append("GEMINI_API_KEY")
        return missing

    def validate(self) -> bool:
        """
        Validate that both provider credentials are present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        return not self.missing_credentials()

    def get_provider_info(self) -> str:
        """Short human-readable description of the configured providers."""
        return f"Bing Web Search + Google Gemini ({self.GEMINI_MODEL})"
