"""
Agentic-Board Configuration Module

Centralized configuration for the multi-agent message board pipeline.
Uses Pydantic Settings for environment variable loading with sensible defaults.

Environment variables can be set directly or via a .env file in the project root.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """
    Global configuration settings for Agentic-Board.

    All settings can be overridden via environment variables with the same name
    (case-insensitive). For example, set MAX_AGENT_ITERATIONS=5 in environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Coordination Settings
    # ==========================================================================

    MAX_GLOBAL_CYCLES: int = Field(
        default=20,
        description="Hard upper bound on coordinator cycles for a single pipeline run"
    )

    MAX_AGENT_ITERATIONS: int = Field(
        default=3,
        description="Iteration budget per agent: how many times one agent may act in a run. "
                    "The first act drafts an artifact, later acts refine it."
    )

    IDLE_CYCLE_THRESHOLD: int = Field(
        default=3,
        description="Consecutive cycles without any appended message before the run is idle-stopped"
    )

    POLL_INTERVAL_SECONDS: float = Field(
        default=1.0,
        description="Pause between coordinator cycles. Set to 0 to run cycles back to back."
    )

    SUMMARY_MAX_LENGTH: int = Field(
        default=200,
        description="Maximum length of the one-line summary kept for each agent's last output"
    )

    ACT_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        description="Optional wall-clock limit for a single agent act. "
                    "An act that exceeds it is treated as a generation failure."
    )

    # ==========================================================================
    # LLM Settings
    # ==========================================================================

    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenAI API key. Required for online generation. Set via OPENAI_API_KEY env var or .env file."
    )

    OPENAI_BASE_URL: Optional[str] = Field(
        default=None,
        description="Optional base URL for an OpenAI-compatible endpoint"
    )

    LLM_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Default LLM model for all agents"
    )

    LLM_TEMPERATURE: float = Field(
        default=0.3,
        description="Default temperature for LLM generation"
    )

    LLM_MAX_TOKENS: int = Field(
        default=2048,
        description="Maximum tokens for a single LLM response"
    )

    LLM_MAX_RETRIES: int = Field(
        default=3,
        description="Maximum attempts to open a generation stream on rate-limit or connection errors"
    )

    LLM_RETRY_BASE_DELAY: float = Field(
        default=2.0,
        description="Base delay in seconds for exponential backoff between attempts"
    )

    LLM_REQUESTS_PER_MINUTE: int = Field(
        default=50,
        description="Client-side request-per-minute ceiling for generation calls"
    )

    # ==========================================================================
    # Logging Settings
    # ==========================================================================

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Global log level: DEBUG, INFO, WARNING, ERROR"
    )

    LOG_JSON_MODE: bool = Field(
        default=False,
        description="If True, output logs in JSON format for structured aggregation"
    )

    LOG_SHOW_AGENT_THOUGHTS: bool = Field(
        default=True,
        description="If True, display agent-level activity (prompts, summaries) in logs"
    )

    # ==========================================================================
    # Operator Settings
    # ==========================================================================

    EXIT_SENTINEL: str = Field(
        default="exit",
        description="Input that ends the interactive session (compared case-insensitively)"
    )


# Global settings instance - import this in other modules
settings = Settings()
