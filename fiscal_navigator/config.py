"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "fiscal-navigator"
    log_level: str = "INFO"

    # Advisory text generation (Gemini-style generateContent API)
    advisory_api_base: str = "https://generativelanguage.googleapis.com"
    advisory_api_key: str | None = None
    advisory_model: str = "gemini-2.0-flash"
    advisory_timeout_seconds: float = 15.0

    # Feedback stub
    feedback_delay_seconds: float = 0.5  # Simulated latency of the external write


settings = Settings()
