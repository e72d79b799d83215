"""Pytest fixtures for synthesis tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from source_synth.generation.config import GenerationConfig
from source_synth.generation.fallback import GenerativeFallbackClient
from source_synth.synthesis.config import SynthesisConfig
from source_synth.synthesis.schemas import AnalysisResult

GENERATED_WEBSITE_JSON = json.dumps({
    "platform": "website",
    "common": {"fetch_limit": 15, "deduplication_strategy": "url"},
    "website": {
        "base_url": "https://blocked.example.com",
        "listing_selector": "article a, main a",
    },
})


@pytest.fixture
def synthesis_config() -> SynthesisConfig:
    """Test config with short timeouts."""
    return SynthesisConfig(
        analysis_timeout=2.0,
        max_link_selectors=5,
        max_rss_feeds=3,
        escalate_empty_analysis=True,
        batch_concurrency=10,
    )


@pytest.fixture
def generation_config() -> GenerationConfig:
    return GenerationConfig(
        base_url="http://ollama.test",
        api_key="test-ollama-key",
        model="test-model",
        timeout_ms=2_000,
    )


@pytest.fixture
def mock_analyzer(sample_analysis: AnalysisResult) -> MagicMock:
    """Structural analyzer that succeeds with sample_analysis."""
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(return_value=sample_analysis)
    return analyzer


@pytest.fixture
def failing_analyzer() -> MagicMock:
    """Structural analyzer that fails like a blocked site."""
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(side_effect=ConnectionError("403 Forbidden"))
    return analyzer


@pytest.fixture
def mock_generator() -> MagicMock:
    """Text generator returning a valid website config."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value=GENERATED_WEBSITE_JSON)
    return generator


@pytest.fixture
def fallback_client(
    mock_generator: MagicMock, generation_config: GenerationConfig,
) -> GenerativeFallbackClient:
    return GenerativeFallbackClient(mock_generator, generation_config)
