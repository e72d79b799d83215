"""LLM-based source config generation, used when structural analysis fails.

Builds the prompt, calls a text generator under a timeout, recovers the JSON
object from the reply and validates it into a SourceConfig. A single attempt
is made per identifier; any failure is raised as a typed error.
"""

import asyncio
import json
import logging
from typing import Any, Protocol

import pydantic

from source_synth.generation.config import GenerationConfig
from source_synth.generation.parsing import parse_json_object
from source_synth.generation.prompts import build_source_config_prompt
from source_synth.synthesis.errors import AIGenerationError, ValidationError
from source_synth.synthesis.schemas import SourceConfig, parse_source_config

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("platform", "common")


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw model text (e.g. OllamaClient)."""

    async def generate(self, prompt: str) -> str: ...


class GenerativeFallbackClient:
    """Generates a SourceConfig for an identifier with an LLM.

    Args:
        generator: Text generation collaborator.
        config: Generation settings; only the timeout is read here, the
            sampling parameters belong to the generator.
    """

    def __init__(
        self,
        generator: TextGenerator,
        config: GenerationConfig | None = None,
    ) -> None:
        self._generator = generator
        self._config = config or GenerationConfig()

    @property
    def generator(self) -> TextGenerator:
        return self._generator

    async def generate(
        self,
        identifier: str,
        timeout: float | None = None,
    ) -> SourceConfig:
        """Generate and validate a config.

        Args:
            identifier: The raw source identifier.
            timeout: Caller deadline in seconds, overriding the configured
                request timeout.

        Returns:
            The validated SourceConfig variant.

        Raises:
            AIGenerationError: Timeout, transport failure, a reply that is
                not text, empty reply or output that is not a JSON object.
            ValidationError: JSON lacks ``platform``/``common`` or does not
                match the platform's schema.
        """
        prompt = build_source_config_prompt(identifier)
        limit = timeout if timeout is not None else self._config.timeout_seconds

        try:
            raw = await asyncio.wait_for(self._generator.generate(prompt), timeout=limit)
        except TimeoutError as e:
            raise AIGenerationError("request timeout", cause=e) from e
        except Exception as e:
            raise AIGenerationError("request failed", cause=e) from e

        if raw is not None and not isinstance(raw, str):
            raise AIGenerationError("invalid response", raw_response=repr(raw))
        if not raw or not raw.strip():
            raise AIGenerationError("empty response")

        data = self._parse(raw)
        return self._validate(data)

    def _parse(self, raw: str) -> dict[str, Any]:
        try:
            return parse_json_object(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug("Unparseable generation output: %r", raw)
            raise AIGenerationError("invalid JSON", cause=e, raw_response=raw) from e

    def _validate(self, data: dict[str, Any]) -> SourceConfig:
        if any(data.get(name) is None for name in REQUIRED_FIELDS):
            raise ValidationError("missing required fields")

        platform = data["platform"]
        if isinstance(platform, str):
            data = {**data, "platform": platform.strip().lower()}

        try:
            return parse_source_config(data)
        except pydantic.ValidationError as e:
            logger.warning(
                "Generated config failed schema validation (%d errors)",
                e.error_count(),
            )
            raise ValidationError("schema mismatch", cause=e) from e
