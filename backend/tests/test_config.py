"""
Tests for centralized configuration.
"""
import json
import pytest
from dashboard_core.core.config import Settings, get_settings, reload_settings

ENV_VARS = (
    "MAX_SUGGESTIONS", "TYPE_SAMPLE_SIZE", "CATEGORY_MIN_UNIQUE", "CATEGORY_MAX_UNIQUE",
    "PIE_MAX_CATEGORIES", "MAX_SERIES", "LANGUAGE", "KEYWORDS_FILE", "MAX_ROWS",
    "RATE_LIMIT_PER_MINUTE", "REQUEST_TIMEOUT_SECONDS", "ALLOWED_ORIGINS", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    reload_settings()


def test_settings_defaults(clean_env):
    """Test that settings have sensible defaults."""
    settings = Settings.from_env()

    assert settings.max_suggestions == 3
    assert settings.type_sample_size == 10
    assert settings.category_min_unique == 2
    assert settings.category_max_unique == 20
    assert settings.pie_max_categories == 6
    assert settings.max_series == 10
    assert settings.language == "en"
    assert settings.max_rows == 50000
    assert settings.rate_limit_per_minute == 60
    assert settings.request_timeout_seconds == 30
    assert settings.log_level == "INFO"


def test_settings_from_env(clean_env):
    """Test loading settings from environment variables."""
    clean_env.setenv("MAX_SUGGESTIONS", "2")
    clean_env.setenv("LANGUAGE", "PT")
    clean_env.setenv("RATE_LIMIT_PER_MINUTE", "20")

    settings = reload_settings()

    assert settings.max_suggestions == 2
    assert settings.language == "pt"
    assert settings.rate_limit_per_minute == 20


def test_keywords_file_from_env(clean_env, tmp_path):
    """Test keyword overrides loaded from KEYWORDS_FILE."""
    path = tmp_path / "keywords.json"
    path.write_text(json.dumps({"ranking": ["podium"]}), encoding="utf-8")
    clean_env.setenv("KEYWORDS_FILE", str(path))

    assert Settings.from_env().keywords.ranking == ["podium"]


@pytest.mark.parametrize("overrides", [
    {"max_suggestions": 0},
    {"max_suggestions": 4},
    {"type_sample_size": 0},
    {"language": "fr"},
    {"log_level": "INVALID"},
    {"category_min_unique": 10, "category_max_unique": 5},
])
def test_settings_validation(overrides):
    """Test that settings validate input ranges."""
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_settings_properties():
    """Test computed properties."""
    settings = Settings(allowed_origins="http://a.example, http://b.example,")
    assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]
    assert Settings().allowed_origins_list == ["*"]


def test_settings_singleton(clean_env):
    """Test that get_settings returns singleton."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
