from pydantic_settings import BaseSettings
from functools import lru_cache
import os

# Look for .env in the repo root (two levels up from backend/cloneforge/)
_ENV_PATH = os.path.join(os.path.dirname(__file__), "..", "..", ".env")


class Settings(BaseSettings):
    gemini_api_key: str = ""
    anthropic_api_key: str = ""
    supabase_url: str = ""
    supabase_key: str = ""

    # Generative model
    llm_provider: str = "gemini"  # "gemini" or "anthropic"
    gemini_model: str = "gemini-2.5-flash"
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    generation_temperature: float = 0.3
    max_output_tokens: int = 8192
    llm_timeout: int = 300  # seconds

    # Analysis defaults
    page_load_timeout: int = 60000  # milliseconds
    settle_delay: int = 3000  # milliseconds
    viewport_width: int = 1920
    viewport_height: int = 1080
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    )
    computed_style_limit: int = 100
    max_screenshot_dim: int = 16000  # px, larger full-page shots get downscaled

    # Pipeline
    persisted_field_limit: int = 50000  # characters per extracted field
    progress_ttl_seconds: int = 3600
    default_frameworks: list[str] = ["HTML_CSS_JS", "NEXTJS", "REACT"]
    pipeline_start_delay: float = 1.0  # seconds

    class Config:
        # On hosted deployments env vars are injected directly, .env is optional
        env_file = _ENV_PATH if os.path.exists(_ENV_PATH) else None
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
