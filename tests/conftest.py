"""Pytest fixtures for source-synth tests."""

import pytest

from source_synth.synthesis.schemas import AnalysisResult, ArticleLinks, CommonPatterns


@pytest.fixture
def sample_analysis() -> AnalysisResult:
    """A successful analysis of a typical news homepage."""
    return AnalysisResult(
        base_url="https://www.example-news.com",
        article_links=ArticleLinks(
            count=24,
            selectors=[
                'a[data-testid="internal-link"]',
                "a.promo-link",
                'a[class*="headline"]',
                ".story-card a",
                "a.article-link",
                ".sidebar a",
            ],
            sample_urls=[
                "https://www.example-news.com/news/world-123",
                "https://www.example-news.com/news/politics-456",
            ],
        ),
        detected_framework="Next",
        rss_feeds=[
            "https://www.example-news.com/rss.xml",
            "https://www.example-news.com/rss",
            "https://www.example-news.com/feed",
            "https://www.example-news.com/atom.xml",
        ],
        has_rss=True,
        common_patterns=CommonPatterns(
            titles=['h1[itemprop="headline"]', "article h1"],
            content=["article p"],
            dates=["time[datetime]"],
            images=[],
        ),
    )


@pytest.fixture
def empty_analysis() -> AnalysisResult:
    """An analysis that found nothing usable (e.g. a JS-rendered shell)."""
    return AnalysisResult(
        base_url="https://spa.example.com",
        article_links=ArticleLinks(count=0, selectors=[], sample_urls=[]),
        detected_framework="React",
        rss_feeds=[],
        has_rss=False,
    )
