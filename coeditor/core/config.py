"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key. Leave empty to disable the provider.",
    )
    openai_model: str = Field(
        default="gpt-4o",
        description="OpenAI chat model used for edits and chat.",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Optional custom OpenAI base URL.",
    )

    # Groq (OpenAI-compatible endpoint)
    groq_api_key: str = Field(
        default="",
        description="Groq API key. Leave empty to disable the provider.",
    )
    groq_model: str = Field(
        default="llama-3.3-70b-versatile",
        description="Groq chat model used for edits and chat.",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Groq OpenAI-compatible API base URL.",
    )

    # Web search
    tavily_api_key: str = Field(
        default="",
        description="Tavily API key for the web search agent.",
    )
    tavily_search_url: str = Field(
        default="https://api.tavily.com/search",
        description="Tavily search endpoint.",
    )
    search_max_results: int = Field(
        default=5,
        ge=1,
        description="Maximum number of search results requested from Tavily.",
    )

    # Completion behaviour
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout for provider and transport calls.",
    )
    edit_max_tokens: int = Field(
        default=800,
        ge=1,
        description="Token budget for selection edits.",
    )
    chat_max_tokens: int = Field(
        default=1000,
        ge=1,
        description="Token budget for chat replies.",
    )
    min_selection_length: int = Field(
        default=3,
        ge=1,
        description="Shortest trimmed selection accepted for an AI edit.",
    )

    # Client transport
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL the editing client uses to reach this API.",
    )

    # HTTP
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for info.log/error.log. Console only when unset.",
    )

    @field_validator("log_dir")
    @classmethod
    def ensure_log_dir(cls, v: Path | None) -> Path | None:
        """Ensure log directory exists."""
        if v is None:
            return None
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
