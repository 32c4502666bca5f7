"""
config.py — environment-driven settings for the QuizMaster frontend.
Reads .env once at import; QUIZMASTER_ENV picks the config class.
"""
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    pass


class Config:
    # Backend
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

    # HTTP
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    pass


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    env = env or os.getenv("QUIZMASTER_ENV", "development")
    return config_map.get(env, config_map["default"])


def validate_config(cfg: type[Config]) -> None:
    """Raise ConfigError when the backend URL or anon key is unusable."""
    if not cfg.SUPABASE_URL or not cfg.SUPABASE_ANON_KEY:
        raise ConfigError(
            "Missing Supabase environment variables. Please check your .env file."
        )
    parsed = urlparse(cfg.SUPABASE_URL)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid Supabase URL format: {cfg.SUPABASE_URL}")
