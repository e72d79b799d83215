"""
Source config schema for the ingestion pipeline.

A ``SourceConfig`` is a tagged union keyed by ``platform``: each variant
declares only its own platform section, so a Telegram config can never carry
a ``website`` block and vice versa. Every section has defaults, which is what
guarantees ``common.fetch_limit`` and ``common.deduplication_strategy`` are
present even when a config was produced by the generative fallback.

CRITICAL: the dumped JSON shape is what the scrapers read back from storage.
Do not rename fields without updating the Telegram and website scrapers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Platform(str, Enum):
    """Supported ingestion platforms."""

    TELEGRAM = "telegram"
    WEBSITE = "website"


class _Section(BaseModel):
    """Immutable config block; unknown keys from generated JSON are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# ── Shared defaults ──────────────────────────────────────

TELEGRAM_SKIP_PATTERNS = ["ad", "sponsored", "subscribe"]
WEBSITE_SKIP_PATTERNS = [
    "subscribe to",
    "sign up for",
    "advertisement",
    "cookie policy",
    "newsletter",
]
WEBSITE_REMOVE_SELECTORS = [
    ".ad",
    ".advertisement",
    ".social-share",
    "aside",
    "nav",
    ".related-content",
    ".comments",
    ".newsletter-signup",
]


# ── Common sections ──────────────────────────────────────


class AISettings(_Section):
    """Whether fetched items are passed through AI rewriting downstream."""

    enabled: bool = True


class WebsiteAISettings(AISettings):
    prefer_local_ollama: bool = False


class TelegramMediaSettings(_Section):
    include: bool = True
    download: bool = True
    max_per_item: int = Field(default=10, ge=0)
    allowed_types: list[str] = Field(
        default_factory=lambda: ["photo", "video", "document"]
    )


class WebsiteMediaSettings(_Section):
    include: bool = True
    download: bool = True
    max_per_item: int = Field(default=5, ge=0)
    allowed_types: list[str] = Field(default_factory=lambda: ["image"])


class TelegramState(_Section):
    """Polling cursor, always null at creation time."""

    last_message_id: int | None = None
    last_fetched_at: datetime | None = None


class WebsiteState(_Section):
    last_item_id: str | None = None
    last_fetched_at: datetime | None = None


class TelegramContentSettings(_Section):
    strip_urls: bool = False
    strip_emojis: bool = False
    skip_patterns: list[str] = Field(
        default_factory=lambda: list(TELEGRAM_SKIP_PATTERNS)
    )
    min_text_length: int = Field(default=30, ge=0)
    use_caption_if_media: bool = True


class WebsiteContentSettings(_Section):
    strip_urls: bool = False
    strip_emojis: bool = False
    skip_patterns: list[str] = Field(
        default_factory=lambda: list(WEBSITE_SKIP_PATTERNS)
    )
    min_text_length: int = Field(default=300, ge=0)


class TelegramCommonConfig(_Section):
    """Polling, media and filtering rules for chat messages."""

    ai: AISettings = Field(default_factory=AISettings)
    media: TelegramMediaSettings = Field(default_factory=TelegramMediaSettings)
    state: TelegramState = Field(default_factory=TelegramState)
    content: TelegramContentSettings = Field(default_factory=TelegramContentSettings)
    fetch_limit: int = Field(default=50, ge=1)
    deduplication_strategy: Literal["message_id"] = "message_id"


class WebsiteCommonConfig(_Section):
    """Polling, media and filtering rules for article bodies."""

    ai: WebsiteAISettings = Field(default_factory=WebsiteAISettings)
    media: WebsiteMediaSettings = Field(default_factory=WebsiteMediaSettings)
    state: WebsiteState = Field(default_factory=WebsiteState)
    content: WebsiteContentSettings = Field(default_factory=WebsiteContentSettings)
    fetch_limit: int = Field(default=20, ge=1)
    deduplication_strategy: Literal["url", "content_hash"] = "content_hash"


# ── Platform sections ────────────────────────────────────


class TelegramSettings(_Section):
    type: str = "channel"
    username: str
    access_method: str = "user"


class ArticleSelectors(_Section):
    """CSS selectors used by the website scraper on article pages.

    Defaults are generic patterns that match most news templates.
    """

    title: list[str] = Field(
        default_factory=lambda: ["h1", "article h1", ".article-title"]
    )
    author: list[str] = Field(default_factory=list)
    content: list[str] = Field(
        default_factory=lambda: ["article p", ".article-content p", ".post-content p"]
    )
    publish_date: list[str] = Field(
        default_factory=lambda: ["time[datetime]", ".publish-date", ".article-date"]
    )
    images: list[str] = Field(
        default_factory=lambda: ["article img", "figure img", ".article-image img"]
    )
    remove: list[str] = Field(
        default_factory=lambda: list(WEBSITE_REMOVE_SELECTORS)
    )


class WebsiteSettings(_Section):
    """Where and how to find articles on a website."""

    base_url: str | None = None
    detected_framework: str = "Unknown"
    rss_feeds: list[str] = Field(default_factory=list)
    listing_path: str = "/"
    listing_selector: str = ""
    article_link_selectors: list[str] = Field(default_factory=list)
    article_selectors: ArticleSelectors = Field(default_factory=ArticleSelectors)


# ── Source configs ───────────────────────────────────────


class TelegramSourceConfig(_Section):
    platform: Literal["telegram"] = "telegram"
    common: TelegramCommonConfig = Field(default_factory=TelegramCommonConfig)
    telegram: TelegramSettings


class WebsiteSourceConfig(_Section):
    platform: Literal["website"] = "website"
    common: WebsiteCommonConfig = Field(default_factory=WebsiteCommonConfig)
    website: WebsiteSettings = Field(default_factory=WebsiteSettings)


SourceConfig = Annotated[
    TelegramSourceConfig | WebsiteSourceConfig,
    Field(discriminator="platform"),
]

_source_config_adapter: TypeAdapter[SourceConfig] = TypeAdapter(SourceConfig)


def parse_source_config(data: Any) -> SourceConfig:
    """Validate a decoded JSON object into the matching SourceConfig variant.

    Raises:
        pydantic.ValidationError: If the platform tag is unknown or a
            section has the wrong shape.
    """
    return _source_config_adapter.validate_python(data)


def to_payload(config: SourceConfig) -> dict[str, Any]:
    """Dump a config to the JSON-serializable dict handed to storage."""
    return config.model_dump(mode="json")


def summarize_config(config: SourceConfig) -> dict[str, Any]:
    """Short, log-friendly description of a config."""
    if isinstance(config, TelegramSourceConfig):
        return {
            "platform": config.platform,
            "username": config.telegram.username,
            "fetch_limit": config.common.fetch_limit,
        }
    if isinstance(config, WebsiteSourceConfig):
        return {
            "platform": config.platform,
            "framework": config.website.detected_framework,
            "link_selectors": len(config.website.article_link_selectors),
            "rss_feeds": len(config.website.rss_feeds),
            "fetch_limit": config.common.fetch_limit,
        }
    assert_never(config)


# ── Structural analysis input ────────────────────────────


class ArticleLinks(BaseModel):
    """Article links discovered on a listing page, ranked by selector."""

    count: int = Field(default=0, ge=0, description="Links matched by the top selector")
    selectors: list[str] = Field(default_factory=list)
    sample_urls: list[str] = Field(default_factory=list)


class CommonPatterns(BaseModel):
    """Selectors that matched on a sample article page."""

    titles: list[str] = Field(default_factory=list)
    content: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Output of the external structural analyzer (read-only)."""

    base_url: str | None = None
    article_links: ArticleLinks = Field(default_factory=ArticleLinks)
    detected_framework: str = "Unknown"
    rss_feeds: list[str] = Field(default_factory=list)
    has_rss: bool | None = None
    common_patterns: CommonPatterns = Field(default_factory=CommonPatterns)

    @property
    def feeds_found(self) -> bool:
        """Whether the analyzer reported usable feeds."""
        if self.has_rss is not None:
            return self.has_rss and bool(self.rss_feeds)
        return bool(self.rss_feeds)

    @property
    def is_empty(self) -> bool:
        """True when neither article-link selectors nor feeds were found."""
        return not self.article_links.selectors and not self.feeds_found


# ── Batch results ────────────────────────────────────────


@dataclass
class SynthesisOutcome:
    """Result of one item in a batch: exactly one of config/error is set."""

    identifier: str
    config: SourceConfig | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.config is not None
