"""Runtime configuration.

Settings are read once at startup and passed explicitly into the app and the
pipelines, so tests can build all-present, all-absent or partial configs.
"""
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_LIBRETRANSLATE_URL = "https://libretranslate.de/translate"
DEFAULT_PROVIDER_TIMEOUT = 20.0
DEFAULT_PORT = 4000


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    libretranslate_url: str = DEFAULT_LIBRETRANSLATE_URL
    libretranslate_api_key: str = ""
    source_language: str = "ja"
    target_language: str = "vi"
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT
    port: int = DEFAULT_PORT
    cors_origins: tuple = ("*",)

    @property
    def has_gemini(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def has_libretranslate(self) -> bool:
        return bool(self.libretranslate_url)

    def with_overrides(self, **changes) -> "Settings":
        return replace(self, **changes)


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key)
    if value is None:
        return default
    return value.strip()


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from a mapping, defaulting to the process environment.

    When reading the real environment, a local `.env` file is loaded first.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    origins = _env_str(env, "CORS_ORIGINS", "*")
    return Settings(
        gemini_api_key=_env_str(env, "GEMINI_API_KEY", ""),
        gemini_model=_env_str(env, "GEMINI_MODEL", "") or DEFAULT_GEMINI_MODEL,
        gemini_base_url=(_env_str(env, "GEMINI_BASE_URL", "") or DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        libretranslate_url=_env_str(env, "LIBRETRANSLATE_URL", DEFAULT_LIBRETRANSLATE_URL),
        libretranslate_api_key=_env_str(env, "LIBRETRANSLATE_API_KEY", ""),
        source_language=_env_str(env, "SOURCE_LANGUAGE", "") or "ja",
        target_language=_env_str(env, "TARGET_LANGUAGE", "") or "vi",
        provider_timeout=_env_float(env, "PROVIDER_TIMEOUT_SECONDS", DEFAULT_PROVIDER_TIMEOUT),
        port=_env_int(env, "PORT", DEFAULT_PORT),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
    )
