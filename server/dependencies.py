"""FastAPI dependencies for configuration and pipeline access."""

from config.config import Config
from orchestrator.core import SearchPipeline


def get_config() -> Config:
    """Process-wide configuration, read once (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance


def get_pipeline() -> SearchPipeline:
    """A fresh pipeline per request; only the read-only config is shared."""
    return SearchPipeline(get_config())
