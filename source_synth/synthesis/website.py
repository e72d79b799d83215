"""Turns a structural analysis of a website into a WebsiteSourceConfig."""

from urllib.parse import urlparse

from source_synth.synthesis.schemas import (
    AnalysisResult,
    ArticleSelectors,
    WebsiteCommonConfig,
    WebsiteSettings,
    WebsiteSourceConfig,
)

# Ranked selectors beyond the top few mostly match navigation links
DEFAULT_MAX_SELECTORS = 5
DEFAULT_MAX_FEEDS = 3


def _listing_path(base_url: str | None) -> str:
    if not base_url:
        return "/"
    try:
        path = urlparse(base_url).path
    except ValueError:
        # Malformed netloc, e.g. an unclosed IPv6 bracket
        return "/"
    return path or "/"


def _article_selectors(analysis: AnalysisResult) -> ArticleSelectors:
    """Use selectors seen on the sample article, generic ones otherwise."""
    patterns = analysis.common_patterns
    overrides = {
        "title": patterns.titles,
        "content": patterns.content,
        "publish_date": patterns.dates,
        "images": patterns.images,
    }
    return ArticleSelectors(**{key: value for key, value in overrides.items() if value})


def synthesize_from_analysis(
    analysis: AnalysisResult,
    max_selectors: int = DEFAULT_MAX_SELECTORS,
    max_feeds: int = DEFAULT_MAX_FEEDS,
) -> WebsiteSourceConfig:
    """Build a website config from an analysis result.

    Pure and total: an analysis with no discovered links still yields a
    well-formed config with an empty selector list. Whether such a config
    is good enough is decided by the orchestrator.

    Args:
        analysis: Result from the structural analyzer.
        max_selectors: Cap on article-link selectors copied over.
        max_feeds: Cap on RSS/Atom feeds copied over.

    Returns:
        WebsiteSourceConfig with article-oriented common defaults
        (content-hash dedup, long minimum text length).
    """
    selectors = analysis.article_links.selectors[:max_selectors]
    feeds = analysis.rss_feeds[:max_feeds] if analysis.feeds_found else []

    return WebsiteSourceConfig(
        common=WebsiteCommonConfig(),
        website=WebsiteSettings(
            base_url=analysis.base_url,
            detected_framework=analysis.detected_framework,
            rss_feeds=feeds,
            listing_path=_listing_path(analysis.base_url),
            listing_selector=", ".join(selectors),
            article_link_selectors=selectors,
            article_selectors=_article_selectors(analysis),
        ),
    )
