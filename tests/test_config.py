import pytest

from config.config import (
    DEFAULT_BING_SEARCH_URL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_SUMMARY_SOURCE_LIMIT,
    Config,
)

ENV_VARS = [
    "BING_API_KEY",
    "GEMINI_API_KEY",
    "BING_SEARCH_URL",
    "GEMINI_BASE_URL",
    "GEMINI_MODEL",
    "SUMMARY_SOURCE_LIMIT",
    "FETCH_CONCURRENCY",
    "HTTP_TIMEOUT_S",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = Config(load_env_file=False)

    assert config.BING_SEARCH_URL == DEFAULT_BING_SEARCH_URL
    assert config.GEMINI_MODEL == DEFAULT_GEMINI_MODEL
    assert config.SUMMARY_SOURCE_LIMIT == DEFAULT_SUMMARY_SOURCE_LIMIT == 2
    assert config.FETCH_CONCURRENCY == 1
    assert config.gemini_generate_url == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
    )


def test_reads_environment(clean_env):
    clean_env.setenv("BING_API_KEY", "env-bing")
    clean_env.setenv("GEMINI_API_KEY", "env-gemini")
    clean_env.setenv("GEMINI_MODEL", "gemini-1.5-flash")
    clean_env.setenv("SUMMARY_SOURCE_LIMIT", "4")
    clean_env.setenv("FETCH_CONCURRENCY", "3")

    config = Config(load_env_file=False)

    assert config.BING_API_KEY == "env-bing"
    assert config.GEMINI_API_KEY == "env-gemini"
    assert config.SUMMARY_SOURCE_LIMIT == 4
    assert config.FETCH_CONCURRENCY == 3
    assert config.gemini_generate_url.endswith("/models/gemini-1.5-flash:generateContent")


def test_explicit_arguments_win_over_environment(clean_env):
    clean_env.setenv("BING_API_KEY", "env-bing")
    clean_env.setenv("SUMMARY_SOURCE_LIMIT", "4")

    config = Config(bing_api_key="arg-bing", summary_source_limit=1, load_env_file=False)

    assert config.BING_API_KEY == "arg-bing"
    assert config.SUMMARY_SOURCE_LIMIT == 1


def test_base_url_trailing_slash_is_stripped(clean_env):
    config = Config(gemini_base_url="https://gemini.test/v1beta/", load_env_file=False)
    assert config.gemini_generate_url == "https://gemini.test/v1beta/models/gemini-pro:generateContent"


def test_validate_reports_missing_credentials(clean_env):
    config = Config(load_env_file=False)

    assert not config.validate()
    assert config.missing_credentials() == ["BING_API_KEY", "GEMINI_API_KEY"]

    assert Config(bing_api_key="b", gemini_api_key="g", load_env_file=False).validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"summary_source_limit": -1},
        {"fetch_concurrency": 0},
        {"http_timeout_s": 0},
    ],
)
def test_invalid_numbers_are_rejected(clean_env, kwargs):
    with pytest.raises(ValueError):
        Config(load_env_file=False, **kwargs)


def test_non_numeric_environment_value_is_rejected(clean_env):
    clean_env.setenv("FETCH_CONCURRENCY", "many")

    with pytest.raises(ValueError, match="FETCH_CONCURRENCY"):
        Config(load_env_file=False)


@pytest.mark.parametrize("name", ["GEMINI_API_KEY", "BING_API_KEY", "SUMMARY_SOURCE_LIMIT"])
def test_settings_are_read_only_after_construction(config, name):
    before = getattr(config, name)

    with pytest.raises(AttributeError):
        setattr(config, name, "mutated")
    with pytest.raises(AttributeError):
        delattr(config, name)

    assert getattr(config, name) == before
