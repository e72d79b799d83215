"""Client for the external structural (HTML) analysis collaborator.

The analyzer itself fetches and inspects the site; this client only
normalizes the URL, bounds the call with a timeout and turns every failure
into a ``StructuralAnalysisError`` so the orchestrator can escalate.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import pydantic

from source_synth.synthesis.errors import StructuralAnalysisError
from source_synth.synthesis.schemas import AnalysisResult

logger = logging.getLogger(__name__)


class StructuralAnalyzer(Protocol):
    """Anything that can inspect a website's markup."""

    async def analyze(self, url: str) -> AnalysisResult | Mapping[str, Any]: ...


def normalize_url(identifier: str) -> str:
    """Prepend ``https://`` when the identifier carries no scheme."""
    url = identifier.strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return f"https://{url}"


class StructuralAnalyzerClient:
    """Timeout-bounded wrapper around a StructuralAnalyzer.

    Performs no retries: one failed call is one StructuralAnalysisError.

    Args:
        analyzer: The analysis collaborator.
        timeout: Default seconds allowed per analysis.
    """

    def __init__(self, analyzer: StructuralAnalyzer, timeout: float = 45.0) -> None:
        self._analyzer = analyzer
        self._timeout = timeout

    async def analyze(
        self,
        identifier: str,
        timeout: float | None = None,
    ) -> AnalysisResult:
        """Analyze a website.

        Args:
            identifier: URL or bare domain.
            timeout: Caller deadline in seconds, overriding the default.

        Returns:
            Validated AnalysisResult.

        Raises:
            StructuralAnalysisError: On network, parse, timeout or
                payload-shape failures.
        """
        url = normalize_url(identifier)
        limit = timeout if timeout is not None else self._timeout

        try:
            raw = await asyncio.wait_for(self._analyzer.analyze(url), timeout=limit)
        except TimeoutError as e:
            logger.warning("Structural analysis of %s timed out after %.1fs", url, limit)
            raise StructuralAnalysisError(url, e) from e
        except Exception as e:
            raise StructuralAnalysisError(url, e) from e

        if isinstance(raw, AnalysisResult):
            return raw
        try:
            return AnalysisResult.model_validate(raw)
        except pydantic.ValidationError as e:
            raise StructuralAnalysisError(url, e) from e
