"""Tests for settings loading."""
import pytest

from config import DEFAULT_GEMINI_MODEL, DEFAULT_LIBRETRANSLATE_URL, Settings, load_settings


def test_empty_environment_gives_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.has_gemini is False
    assert settings.has_libretranslate is True
    assert settings.libretranslate_url == DEFAULT_LIBRETRANSLATE_URL


def test_values_are_read_and_trimmed():
    settings = load_settings({
        "GEMINI_API_KEY": " abc ",
        "GEMINI_MODEL": "gemini-2.5-flash-lite",
        "GEMINI_BASE_URL": "http://gemini.test/v1/",
        "LIBRETRANSLATE_URL": "",
        "PROVIDER_TIMEOUT_SECONDS": "7.5",
        "PORT": "8080",
        "CORS_ORIGINS": "http://a.test, http://b.test",
    })
    assert settings.gemini_api_key == "abc"
    assert settings.has_gemini is True
    assert settings.gemini_model == "gemini-2.5-flash-lite"
    assert settings.gemini_base_url == "http://gemini.test/v1"
    assert settings.has_libretranslate is False
    assert settings.provider_timeout == 7.5
    assert settings.port == 8080
    assert settings.cors_origins == ("http://a.test", "http://b.test")


def test_blank_model_falls_back_to_default():
    assert load_settings({"GEMINI_MODEL": "  "}).gemini_model == DEFAULT_GEMINI_MODEL


@pytest.mark.parametrize("env", [
    {"PROVIDER_TIMEOUT_SECONDS": "soon"},
    {"PROVIDER_TIMEOUT_SECONDS": "0"},
    {"PORT": "eighty"},
])
def test_invalid_numbers_are_rejected(env):
    with pytest.raises(ValueError):
        load_settings(env)


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.gemini_api_key = "x"
    assert settings.with_overrides(gemini_api_key="x").has_gemini is True
