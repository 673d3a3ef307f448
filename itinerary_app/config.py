"""
Configuration management for the itinerary app.
Supports multiple LLM providers: Gemini, OpenAI, Ollama and an offline mock.
"""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["gemini", "openai", "ollama", "mock"] = "mock"
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_model: str = "gemini-2.5-flash"

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    # LLM Parameters
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000

    # Trip header
    trip_title: str = "Shanghai Winter Trip"
    trip_dates: str = "Dec 21 - 24, 2025"
    trip_destination: str = "Shanghai"

    # How long the "copied" acknowledgment stays visible
    copy_ack_seconds: float = 2.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_llm_config() -> dict:
    """Get LLM configuration based on provider."""
    config = {
        "api_key": settings.llm_api_key or "not-needed",
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }

    # Set base URL based on provider
    if settings.llm_provider == "gemini":
        config["base_url"] = settings.llm_base_url or "https://generativelanguage.googleapis.com/v1beta/openai/"
    elif settings.llm_provider == "ollama":
        config["base_url"] = settings.llm_base_url or "http://localhost:11434/v1"
    else:  # openai
        config["base_url"] = settings.llm_base_url or "https://api.openai.com/v1"

    return config
