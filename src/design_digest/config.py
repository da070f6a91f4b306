"""Configuration loading from config.yaml + .env."""

from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings

from .models import DateRange, ExperienceLevel, Topic


# ---------------------------------------------------------------------------
# Config sub-models (loaded from config.yaml)
# ---------------------------------------------------------------------------

class LlmConfig(BaseModel):
    model: str = "google/gemini-2.5-flash"  # OpenRouter model ID
    base_url: str = "https://openrouter.ai/api/v1"
    max_retries: int = 2  # OpenAI client 传输层重试，不是 pipeline 的 fallback
    timeout: float = 90.0  # seconds, per request
    temperature: float = 0.3
    articles_per_digest: int = 4
    search_max_results: int = 8  # web plugin results for grounded calls


class StorageConfig(BaseModel):
    dir: str = "data"


class DigestDefaults(BaseModel):
    """Defaults used when the caller does not pass a DigestConfig."""

    level: ExperienceLevel = ExperienceLevel.MID_SENIOR
    topics: list[Topic] = [Topic.SURPRISE_ME]
    date_range: DateRange = DateRange.LAST_MONTH


class AppConfig(BaseModel):
    """Application config loaded from config.yaml."""

    llm: LlmConfig = LlmConfig()
    storage: StorageConfig = StorageConfig()
    digest: DigestDefaults = DigestDefaults()


# ---------------------------------------------------------------------------
# Secrets (loaded from .env / environment variables)
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Secret settings loaded from environment / .env file."""

    openrouter_api_key: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load_config(config_path: str = "config.yaml") -> tuple[AppConfig, Settings]:
    """Load app config from YAML and secrets from .env."""
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        app_config = AppConfig(**data)
    else:
        app_config = AppConfig()

    settings = Settings()
    return app_config, settings
