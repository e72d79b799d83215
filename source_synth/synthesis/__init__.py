"""Source config synthesis for website and Telegram sources.

Classifies a raw identifier, then builds a config deterministically
(Telegram), from a structural analysis of the site (websites), or with an
LLM when the analysis fails.

Usage:
    from source_synth.synthesis import SourceConfigSynthesizer, to_payload

    synthesizer = SourceConfigSynthesizer(analyzer=html_analyzer)
    config = await synthesizer.synthesize("https://example.com/news")
    repository.save(identifier, to_payload(config))
"""

from source_synth.synthesis.analyzer import StructuralAnalyzer, StructuralAnalyzerClient
from source_synth.synthesis.classifier import classify
from source_synth.synthesis.config import SynthesisConfig
from source_synth.synthesis.errors import (
    AIGenerationError,
    StructuralAnalysisError,
    SynthesisError,
    SynthesisFailed,
    ValidationError,
)
from source_synth.synthesis.schemas import (
    AnalysisResult,
    Platform,
    SourceConfig,
    SynthesisOutcome,
    TelegramSourceConfig,
    WebsiteSourceConfig,
    parse_source_config,
    to_payload,
)
from source_synth.synthesis.service import SourceConfigSynthesizer
from source_synth.synthesis.telegram import build_telegram_config
from source_synth.synthesis.website import synthesize_from_analysis

__all__ = [
    "AIGenerationError",
    "AnalysisResult",
    "Platform",
    "SourceConfig",
    "SourceConfigSynthesizer",
    "StructuralAnalysisError",
    "StructuralAnalyzer",
    "StructuralAnalyzerClient",
    "SynthesisConfig",
    "SynthesisError",
    "SynthesisFailed",
    "SynthesisOutcome",
    "TelegramSourceConfig",
    "ValidationError",
    "WebsiteSourceConfig",
    "build_telegram_config",
    "classify",
    "parse_source_config",
    "synthesize_from_analysis",
    "to_payload",
]
