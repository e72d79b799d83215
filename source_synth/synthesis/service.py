"""Source config synthesis orchestrator.

Turns a raw source identifier into a validated SourceConfig:
  Telegram: deterministic builder (never escalated)
  Website:  structural analysis -> website synthesizer
            on analysis failure -> generative fallback (LLM)

Structural analysis is always tried first so that grounded, reproducible
configs win over generated ones. The orchestrator holds no per-call state;
concurrent calls for different identifiers are independent.

Follows the same constructor pattern as the other services:
  ``(config?, collaborators?)`` with lazy initialization of the LLM client.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, assert_never

from source_synth.observability.logging import get_logger, log_context
from source_synth.synthesis.analyzer import StructuralAnalyzer, StructuralAnalyzerClient
from source_synth.synthesis.classifier import classify
from source_synth.synthesis.config import SynthesisConfig
from source_synth.synthesis.errors import (
    AIGenerationError,
    StructuralAnalysisError,
    SynthesisFailed,
    ValidationError,
)
from source_synth.synthesis.schemas import (
    Platform,
    SourceConfig,
    SynthesisOutcome,
    summarize_config,
)
from source_synth.synthesis.telegram import build_telegram_config
from source_synth.synthesis.website import synthesize_from_analysis

if TYPE_CHECKING:
    from source_synth.generation.config import GenerationConfig
    from source_synth.generation.fallback import GenerativeFallbackClient

logger = get_logger(__name__)


class SourceConfigSynthesizer:
    """Single entry point for source config synthesis.

    Methods:
      - ``synthesize(identifier)``: one identifier, config or SynthesisFailed
      - ``synthesize_batch(identifiers)``: bounded concurrency, per-item isolation
      - ``get_stats()``: path counters
      - ``close()``: cleanup

    Args:
        config: Synthesis settings. Defaults to SynthesisConfig().
        analyzer: Structural analysis collaborator. Without one, websites
            go straight to the generative fallback.
        fallback: Generative fallback client. Defaults to one backed by
            OllamaClient, created on first use.
        generation_config: Settings for the default fallback client.
    """

    def __init__(
        self,
        config: SynthesisConfig | None = None,
        analyzer: StructuralAnalyzer | None = None,
        fallback: GenerativeFallbackClient | None = None,
        generation_config: GenerationConfig | None = None,
    ) -> None:
        self._config = config or SynthesisConfig()
        self._analyzer: StructuralAnalyzerClient | None = None
        if analyzer is not None:
            self._analyzer = StructuralAnalyzerClient(
                analyzer, timeout=self._config.analysis_timeout,
            )
        self._fallback = fallback
        self._owns_fallback = fallback is None
        self._generation_config = generation_config
        # Observational counters only; they never influence a decision
        self._stats = {
            "total": 0,
            "telegram": 0,
            "structural": 0,
            "generative": 0,
            "analysis_failures": 0,
            "empty_analyses": 0,
            "failures": 0,
        }

    def _get_fallback_client(self) -> GenerativeFallbackClient:
        """Lazy-initialize the Ollama-backed fallback client."""
        if self._fallback is None:
            from source_synth.generation.fallback import GenerativeFallbackClient
            from source_synth.generation.ollama_client import OllamaClient

            self._fallback = GenerativeFallbackClient(
                OllamaClient(self._generation_config),
                self._generation_config,
            )
        return self._fallback

    # ── Main pipeline ────────────────────────────────────

    async def synthesize(
        self,
        identifier: str,
        timeout: float | None = None,
    ) -> SourceConfig:
        """Synthesize the config for one source identifier.

        Args:
            identifier: URL, bare domain, ``t.me/...`` link or ``@handle``.
            timeout: Deadline in seconds applied to each network stage
                (structural analysis, generation). Cancellation of the
                calling task propagates into the in-flight request.

        Returns:
            A validated SourceConfig. Partial configs are never returned.

        Raises:
            SynthesisFailed: The generative fallback failed; carries the
                identifier and failing stage.
        """
        self._stats["total"] += 1
        platform = classify(identifier)
        log = logger.bind(identifier=identifier, platform=platform.value)

        if platform is Platform.TELEGRAM:
            config: SourceConfig = build_telegram_config(identifier)
            self._stats["telegram"] += 1
        elif platform is Platform.WEBSITE:
            config = await self._synthesize_website(identifier, timeout, log)
        else:
            assert_never(platform)

        log.info("Source config synthesized", **summarize_config(config))
        return config

    async def _synthesize_website(
        self,
        identifier: str,
        timeout: float | None,
        log: Any,
    ) -> SourceConfig:
        if self._analyzer is None:
            log.info("No structural analyzer configured, using generative fallback")
            return await self._generate(identifier, timeout, log)

        try:
            analysis = await self._analyzer.analyze(identifier, timeout=timeout)
        except StructuralAnalysisError as e:
            self._stats["analysis_failures"] += 1
            log.warning(
                "Structural analysis failed, falling back to generation",
                error=str(e),
            )
            return await self._generate(identifier, timeout, log)

        log.info(
            "Structural analysis complete",
            article_links=analysis.article_links.count,
            framework=analysis.detected_framework,
            rss_feeds=len(analysis.rss_feeds),
            sample_selectors=analysis.article_links.selectors[:2],
        )

        if analysis.is_empty and self._config.escalate_empty_analysis:
            self._stats["empty_analyses"] += 1
            log.warning("Analysis found no article links or feeds, falling back to generation")
            return await self._generate(identifier, timeout, log)

        try:
            config = synthesize_from_analysis(
                analysis,
                max_selectors=self._config.max_link_selectors,
                max_feeds=self._config.max_rss_feeds,
            )
        except ValueError as e:
            # Includes pydantic.ValidationError from the config models
            self._stats["analysis_failures"] += 1
            log.warning(
                "Could not build config from analysis, falling back to generation",
                error=str(e),
            )
            return await self._generate(identifier, timeout, log)

        self._stats["structural"] += 1
        return config

    async def _generate(
        self,
        identifier: str,
        timeout: float | None,
        log: Any,
    ) -> SourceConfig:
        fallback = self._get_fallback_client()
        try:
            config = await fallback.generate(identifier, timeout=timeout)
        except AIGenerationError as e:
            self._stats["failures"] += 1
            log.error(
                "Generative fallback failed",
                reason=e.reason,
                error=str(e),
                raw_response=e.raw_response,
            )
            raise SynthesisFailed(identifier, "generation", e) from e
        except ValidationError as e:
            self._stats["failures"] += 1
            log.error("Generated config rejected", reason=e.reason, error=str(e))
            raise SynthesisFailed(identifier, "validation", e) from e

        self._stats["generative"] += 1
        return config

    # ── Batch synthesis ──────────────────────────────────

    async def synthesize_batch(
        self,
        identifiers: Sequence[str],
        max_concurrency: int | None = None,
        timeout: float | None = None,
    ) -> list[SynthesisOutcome]:
        """Synthesize many identifiers with per-item error isolation.

        Concurrency is bounded by a semaphore so a burst of new sources
        doesn't overwhelm the LLM's rate limits or the target sites. A
        failure for one identifier is recorded on its outcome and never
        aborts the others.

        Args:
            identifiers: Source identifiers to synthesize.
            max_concurrency: Concurrent syntheses; defaults to
                ``config.batch_concurrency``.
            timeout: Per-stage deadline passed to ``synthesize``.

        Returns:
            One SynthesisOutcome per identifier (same order).
        """
        limit = max_concurrency or self._config.batch_concurrency
        semaphore = asyncio.Semaphore(limit)

        async def _run(identifier: str) -> SynthesisOutcome:
            async with semaphore:
                try:
                    config = await self.synthesize(identifier, timeout=timeout)
                except Exception as e:
                    logger.warning(
                        "Batch synthesis failed for identifier",
                        identifier=identifier,
                        error=str(e),
                    )
                    return SynthesisOutcome(identifier=identifier, error=e)
                return SynthesisOutcome(identifier=identifier, config=config)

        # Tasks copy the current context, so every event they log carries batch_id
        with log_context(batch_id=uuid.uuid4().hex[:12]):
            outcomes = await asyncio.gather(*(_run(i) for i in identifiers))
            failed = sum(1 for o in outcomes if not o.ok)
            logger.info(
                "Batch synthesis finished",
                total=len(outcomes),
                succeeded=len(outcomes) - failed,
                failed=failed,
            )
        return list(outcomes)

    # ── Stats & cleanup ──────────────────────────────────

    def get_stats(self) -> dict[str, Any]:
        """Return counters for each synthesis path."""
        return {
            **self._stats,
            "analyzer_configured": self._analyzer is not None,
            "fallback_initialized": self._fallback is not None,
        }

    async def close(self) -> None:
        """Close the default LLM client if this instance created it."""
        if self._owns_fallback and self._fallback is not None:
            generator = self._fallback.generator
            close = getattr(generator, "close", None)
            if close is not None:
                await close()
            self._fallback = None
