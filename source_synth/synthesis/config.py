"""Configuration for the source config synthesis pipeline.

Controls the structural-analysis stage (timeout, how much of the analysis is
copied into the website config) and the orchestrator's escalation policy.
All settings can be overridden via SYNTHESIS_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SynthesisConfig(BaseSettings):
    """Settings for the synthesis orchestrator.

    Example:
        SYNTHESIS_ANALYSIS_TIMEOUT=20
        SYNTHESIS_ESCALATE_EMPTY_ANALYSIS=false
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNTHESIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    analysis_timeout: float = Field(
        default=45.0,
        gt=0.0,
        le=300.0,
        description="Seconds allowed for structural analysis of a website",
    )
    max_link_selectors: int = Field(
        default=5,
        ge=1,
        description="Maximum article-link selectors copied into a website config",
    )
    max_rss_feeds: int = Field(
        default=3,
        ge=0,
        description="Maximum RSS/Atom feeds copied into a website config",
    )
    escalate_empty_analysis: bool = Field(
        default=True,
        description=(
            "Use the generative fallback when analysis found neither "
            "article-link selectors nor feeds"
        ),
    )
    batch_concurrency: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Default concurrent syntheses for synthesize_batch()",
    )
