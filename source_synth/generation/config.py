"""Configuration for the generative fallback (Ollama) client.

Provides Pydantic settings for the endpoint, API key, model selection,
sampling parameters and request timeout. All settings can be overridden
via OLLAMA_* environment variables.
"""

from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationConfig(BaseSettings):
    """Configuration for LLM-based source config generation.

    Sampling parameters are fixed here rather than chosen per call.

    Example:
        OLLAMA_BASE_URL=https://ollama.com
        OLLAMA_API_KEY=...
        OLLAMA_MODEL=gpt-oss:20b
        OLLAMA_TIMEOUT_MS=90000
    """

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Endpoint
    base_url: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL (local daemon or cloud)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Bearer token for Ollama cloud",
    )

    # Model selection
    model: str = Field(
        default="llama3.1",
        description="Model used to generate source configs",
    )

    # Sampling
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    top_p: float = Field(
        default=0.9,
        gt=0.0,
        le=1.0,
        description="Nucleus sampling threshold",
    )
    repeat_penalty: float = Field(
        default=1.1,
        ge=0.0,
        description="Penalty for repeated tokens",
    )
    max_tokens: int = Field(
        default=3000,
        ge=256,
        description="Output token ceiling (num_predict)",
    )
    context_window: int = Field(
        default=4096,
        ge=1024,
        description="Context window size (num_ctx)",
    )

    # Request timeout
    timeout_ms: int = Field(
        default=60_000,
        ge=1_000,
        le=600_000,
        description="Timeout in milliseconds for a generation request",
    )

    @property
    def timeout_seconds(self) -> float:
        """Get request timeout in seconds."""
        return self.timeout_ms / 1000

    def sampling_options(self) -> dict[str, Any]:
        """Ollama ``options`` block for /api/generate."""
        return {
            "temperature": self.temperature,
            "num_predict": self.max_tokens,
            "num_ctx": self.context_window,
            "top_p": self.top_p,
            "repeat_penalty": self.repeat_penalty,
        }
