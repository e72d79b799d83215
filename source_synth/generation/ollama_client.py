"""
Async HTTP client for the Ollama ``/api/generate`` endpoint.

Sends a single non-streaming JSON-mode generation request and returns the
model's raw ``response`` text. Interpreting that text is the fallback
client's job, not this one's.

The underlying httpx client is created lazily on first use so that
constructing an OllamaClient never touches the network.
"""

import logging
from typing import Any

import httpx

from source_synth.generation.config import GenerationConfig

logger = logging.getLogger(__name__)


class OllamaError(Exception):
    """Raised when the Ollama request fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class OllamaClient:
    """
    Minimal Ollama generation client.

    Features:
    - Bearer-token authorization (Ollama cloud)
    - Sampling options taken from GenerationConfig
    - Client-side timeout surfaced as the builtin TimeoutError
    - Context manager for proper resource cleanup

    Example:
        async with OllamaClient(GenerationConfig()) as client:
            text = await client.generate("Return a JSON object")
    """

    def __init__(self, config: GenerationConfig | None = None) -> None:
        self._config = config or GenerationConfig()
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "OllamaClient":
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy-initialize the httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url.rstrip("/"),
                timeout=self._config.timeout_seconds,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key is not None:
            headers["Authorization"] = f"Bearer {self._config.api_key.get_secret_value()}"
        return headers

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Request body for a non-streaming JSON-mode generation."""
        return {
            "model": self._config.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
            "options": self._config.sampling_options(),
        }

    async def generate(self, prompt: str) -> str:
        """
        Run one generation request.

        Args:
            prompt: Full prompt text.

        Returns:
            The ``response`` field of the reply ("" when absent).

        Raises:
            TimeoutError: If the request exceeds the configured timeout.
            OllamaError: On transport errors, non-2xx status, a non-JSON
                reply body or a ``response`` field that is not text.
        """
        client = self._get_client()
        try:
            response = await client.post(
                "/api/generate",
                json=self.build_payload(prompt),
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Ollama request timed out after {self._config.timeout_seconds:.1f}s"
            ) from e
        except httpx.HTTPError as e:
            raise OllamaError(f"Ollama request failed: {e}") from e

        if response.status_code >= 400:
            raise OllamaError(
                f"Ollama request failed with status {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise OllamaError(
                "Ollama returned a non-JSON body",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise OllamaError(
                "Ollama returned an unexpected body",
                status_code=response.status_code,
                response_body=response.text,
            )

        text = data.get("response")
        if text is None:
            text = ""
        elif not isinstance(text, str):
            raise OllamaError(
                f"Ollama 'response' field is {type(text).__name__}, expected str",
                status_code=response.status_code,
                response_body=response.text,
            )

        logger.debug(
            "Ollama generation finished (model=%s, eval_count=%s)",
            data.get("model", self._config.model),
            data.get("eval_count"),
        )
        return text

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
