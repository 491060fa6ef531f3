import os

# Keep test runs from writing rotating log files; must be set before utils.logger is imported.
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from dotenv import load_dotenv

from config.config import Config

# Load environment variables from .env file for tests
load_dotenv()


@pytest.fixture
def config():
    """Config with substitute credentials and endpoints; never reads the environment file."""
    return Config(
        bing_api_key="test-bing-key",
        gemini_api_key="test-gemini-key",
        bing_search_url="https://search.test/v7.0/search",
        gemini_base_url="https://gemini.test/v1beta",
        gemini_model="gemini-pro",
        load_env_file=False,
    )


@pytest.fixture
def live_config():
    """Config from the real environment; skips when credentials are missing."""
    config = Config()
    if not config.validate():
        pytest.skip(f"Missing credentials: {config.missing_credentials()}")
    return config

